"""Collects named time series during a run and shows them with matplotlib."""

from dataclasses import dataclass, field

import matplotlib.pyplot as plt
import numpy as np

from quadctl.timing import get_system_time


@dataclass
class Curve:
    """One series of (x, y) points."""

    x: list = field(default_factory=list)
    y: list = field(default_factory=list)

    def points_after(self, x_rough, point_num):
        """Up to ``point_num`` points starting at the first x greater than ``x_rough``."""
        for i, x in enumerate(self.x):
            if x_rough < x:
                return list(zip(self.x[i:i + point_num], self.y[i:i + point_num]))
        return []

    def print_xy(self, x_rough, point_num):
        """Print the points returned by :meth:`points_after`."""
        for x, y in self.points_after(x_rough, point_num):
            print(f"  X: {x:g}, Y: {y:g}")


class Plot:
    """A named figure holding several labelled curves."""

    def __init__(self, name, curve_count, labels):
        labels = list(labels)
        if len(labels) < curve_count:
            raise ValueError(f"plot {name!r} needs {curve_count} labels, got {len(labels)}")
        self.name = name
        self.labels = labels[:curve_count]
        self.curves = [Curve() for _ in range(curve_count)]
        self.curve_name2id = {label: i for i, label in enumerate(self.labels)}

    @property
    def curve_count(self):
        return len(self.curves)

    def get_x(self, start_t):
        """Seconds elapsed since ``start_t`` (microseconds)."""
        return (get_system_time() - start_t) * 1e-6

    def print_xy(self, curve_name, x_rough, point_num):
        """Print points of the named curve near ``x_rough``."""
        if curve_name not in self.curve_name2id:
            raise KeyError(f"plot {self.name!r} has no curve {curve_name!r}")
        print(f"[DEBUG] Plot: {self.name}, Curve: {curve_name}")
        self.curves[self.curve_name2id[curve_name]].print_xy(x_rough, point_num)


class PyPlot:
    """Registry of plots filled frame by frame."""

    def __init__(self):
        self.plots = {}
        self.start_t = None

    def _check_start(self):
        if self.start_t is None:
            self.start_t = get_system_time()

    def _plot(self, plot_name):
        try:
            return self.plots[plot_name]
        except KeyError:
            raise KeyError(f"plot {plot_name!r} does not exist") from None

    def add_plot(self, plot_name, curve_count, labels=None):
        """Register a plot; labels default to "1", "2", ..."""
        if plot_name in self.plots:
            raise ValueError(f"already has same plot: {plot_name}")
        if labels is None:
            labels = [str(i + 1) for i in range(curve_count)]
        self.plots[plot_name] = Plot(plot_name, curve_count, labels)

    def add_frame(self, plot_name, values, x=None):
        """Append one frame: a scalar goes to the first curve, a sequence to each curve.

        Without ``x`` the seconds since the first timed frame are used.
        """
        plot = self._plot(plot_name)
        if x is None:
            self._check_start()
            x = plot.get_x(self.start_t)
        if np.ndim(values) == 0:
            plot.curves[0].x.append(x)
            plot.curves[0].y.append(float(values))
            return
        flat = np.asarray(values, dtype=float).reshape(-1)
        if flat.size < plot.curve_count:
            raise ValueError(f"plot {plot_name!r} needs {plot.curve_count} values, got {flat.size}")
        for curve, value in zip(plot.curves, flat):
            curve.x.append(x)
            curve.y.append(float(value))

    def print_xy(self, plot_name, curve_name, x_rough, point_num=1):
        """Print points of one curve near ``x_rough``."""
        self._plot(plot_name).print_xy(curve_name, x_rough, point_num)

    def _draw(self, plot):
        fig = plt.figure()
        plt.title(plot.name)
        for label, curve in zip(plot.labels, plot.curves):
            plt.plot(curve.x, curve.y, label=label)
        plt.legend()
        return fig

    def show_plot(self, plot_names):
        """Show one plot by name, or several in separate figures; return the figures."""
        if isinstance(plot_names, str):
            plot_names = [plot_names]
        figures = [self._draw(self._plot(name)) for name in plot_names]
        plt.show()
        return figures

    def show_plot_all(self):
        """Show every registered plot; return the figures."""
        figures = [self._draw(plot) for plot in self.plots.values()]
        plt.show()
        return figures