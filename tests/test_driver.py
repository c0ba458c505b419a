"""End-to-end tests for the numkit experiment driver (reduced grids)."""
import os

import pytest

from numkit import driver


SMALL = dict(export_points=64, error_multiplier=8, least_squares_points=256,
             sqrt_step=250.0, orders=(3, 5))


@pytest.fixture(scope="module")
def run(tmp_path_factory):
    output_dir = tmp_path_factory.mktemp("experiments")
    return str(output_dir), driver.run_experiments(output_dir=str(output_dir), **SMALL)


def test_root_finding_results(run):
    _, out = run
    assert len(out["bisection"]) == 4
    assert len(out["newton"]) == 4
    for bisection, newton in zip(out["bisection"], out["newton"]):
        assert not bisection.failed
        assert newton.value == pytest.approx(bisection.value, abs=1e-6)


def test_multiple_root_results(run):
    _, out = run
    assert out["newton_3"].value == pytest.approx(3.0, abs=1e-10)
    assert out["altered_newton_3"].iterations < out["newton_3"].iterations
    for plain, adjusting in out["bonus"]:
        assert adjusting.iterations < plain.iterations


def test_interpolation_results(run):
    _, out = run
    for key in ("lagrange", "piecewise_linear", "raised_cosine", "least_squares"):
        assert [order for order, _ in out[key]] == [3, 5]
    assert out["square_root_failures"] == []


def test_exported_files(run):
    output_dir, _ = run
    names = set(os.listdir(output_dir))
    assert {"1_visual_inspection.gnuplot", "1_visual_inspection___d0.csv"} <= names
    for base in ("lagrange", "piecewise_linear", "raised_cosine", "least_squares"):
        # source function plus one curve per order
        assert {f"{base}___d0.csv", f"{base}___d1.csv", f"{base}___d2.csv",
                f"{base}.gnuplot"} <= names


def test_report_text(tmp_path, capsys):
    driver.run_experiments(output_dir=str(tmp_path), **SMALL)
    out = capsys.readouterr().out
    assert "Bisection Method: e**(-x/5)-sin(x)" in out
    assert "Newton's Method: e**(-x/5)-sin(x)" in out
    assert "Altered Newton's Method (part 3): (x-3)**4*sin(x)" in out
    assert "Lagrange interpolation coefficients for 1/(1+x**2)" in out
    assert "Least squares interpolation coefficients for 1/(1+x**2)" in out
    assert "order: 5, error:" in out
    assert "Success for square root" in out
    assert "Bonus Problem 2: Adjusting Newton's Method" in out
    assert "function (x-4)**3*sin(x):" in out
    assert "result: " in out and "convergence rate: " in out


def test_main(tmp_path):
    argv = ["--output-dir", str(tmp_path), "--export-points", "32",
            "--error-multiplier", "4", "--least-squares-points", "128",
            "--sqrt-step", "500", "--orders", "3,4"]
    assert driver.main(argv) == 0
    assert (tmp_path / "raised_cosine.gnuplot").exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
