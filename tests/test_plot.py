from unittest import mock

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pytest  # noqa: E402

from quadctl.plot import Curve, Plot, PyPlot  # noqa: E402
from quadctl.timing import get_system_time  # noqa: E402


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


def test_curve_points_after():
    curve = Curve(x=[0.0, 1.0, 2.0, 3.0], y=[10.0, 11.0, 12.0, 13.0])
    assert curve.points_after(0.5, 2) == [(1.0, 11.0), (2.0, 12.0)]
    assert curve.points_after(2.5, 5) == [(3.0, 13.0)]
    assert curve.points_after(9.0, 1) == []


def test_plot_get_x():
    plot = Plot("p", 1, ["a"])
    assert plot.get_x(get_system_time() - 2_000_000) == pytest.approx(2.0, abs=0.5)


def test_plot_needs_enough_labels():
    with pytest.raises(ValueError):
        Plot("p", 3, ["a"])


def test_plot_print_xy(capsys):
    plot = Plot("speed", 2, ["vx", "vy"])
    plot.curves[1].x.extend([1.0, 2.0])
    plot.curves[1].y.extend([3.0, 4.0])
    plot.print_xy("vy", 1.5, 1)
    out = capsys.readouterr().out
    assert "[DEBUG] Plot: speed, Curve: vy" in out
    assert "  X: 2, Y: 4" in out
    with pytest.raises(KeyError):
        plot.print_xy("vz", 0.0, 1)


def test_default_labels():
    pp = PyPlot()
    pp.add_plot("p", 3)
    assert pp.plots["p"].labels == ["1", "2", "3"]


def test_duplicate_plot_raises():
    pp = PyPlot()
    pp.add_plot("p", 1)
    with pytest.raises(ValueError):
        pp.add_plot("p", 2)


def test_add_frame_scalar_and_vector():
    pp = PyPlot()
    pp.add_plot("s", 1)
    pp.add_plot("v", 3, ["x", "y", "z"])
    pp.add_frame("s", 5.0, x=0.25)
    pp.add_frame("v", np.array([1.0, 2.0, 3.0]), x=0.5)
    pp.add_frame("v", [4.0, 5.0, 6.0], x=0.75)
    assert pp.plots["s"].curves[0].x == [0.25]
    assert pp.plots["s"].curves[0].y == [5.0]
    assert [c.y for c in pp.plots["v"].curves] == [[1.0, 4.0], [2.0, 5.0], [3.0, 6.0]]
    assert pp.plots["v"].curves[2].x == [0.5, 0.75]


def test_add_frame_without_x_uses_elapsed_time():
    pp = PyPlot()
    pp.add_plot("s", 1)
    pp.add_frame("s", 1.0)
    pp.add_frame("s", 2.0)
    xs = pp.plots["s"].curves[0].x
    assert 0.0 <= xs[0] <= xs[1] < 5.0


def test_add_frame_errors():
    pp = PyPlot()
    pp.add_plot("v", 3)
    with pytest.raises(KeyError):
        pp.add_frame("missing", 1.0, x=0.0)
    with pytest.raises(ValueError):
        pp.add_frame("v", [1.0, 2.0], x=0.0)


def test_pyplot_print_xy(capsys):
    pp = PyPlot()
    pp.add_plot("p", 1, ["only"])
    pp.add_frame("p", 7.0, x=1.0)
    pp.print_xy("p", "only", 0.0)
    assert "  X: 1, Y: 7" in capsys.readouterr().out


@mock.patch("matplotlib.pyplot.show")
def test_show_plot_draws_labelled_curves(show):
    pp = PyPlot()
    pp.add_plot("p", 2, ["left", "right"])
    pp.add_frame("p", [1.0, 2.0], x=0.0)
    figures = pp.show_plot("p")
    assert show.call_count == 1
    assert len(figures) == 1
    ax = figures[0].axes[0]
    assert ax.get_title() == "p"
    assert [line.get_label() for line in ax.get_lines()] == ["left", "right"]


@mock.patch("matplotlib.pyplot.show")
def test_show_several_and_all(show):
    pp = PyPlot()
    pp.add_plot("a", 1)
    pp.add_plot("b", 1)
    assert [f.axes[0].get_title() for f in pp.show_plot(["b", "a"])] == ["b", "a"]
    assert [f.axes[0].get_title() for f in pp.show_plot_all()] == ["a", "b"]
    assert show.call_count == 2
    with pytest.raises(KeyError):
        pp.show_plot("missing")