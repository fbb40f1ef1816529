"""Matplotlib-based plots of precession runs."""

from __future__ import annotations

import os

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend by default

import matplotlib.pyplot as plt
import numpy as np
from numpy.typing import NDArray

from spin_precession.utils.constants import SPIN_MAGNITUDE


class PlotSuite:
    """Static figures for a recorded precession trajectory."""

    def __init__(self, save_dir: str = "~/Desktop") -> None:
        self.save_dir = os.path.expanduser(save_dir)

    def _save_or_show(
        self, fig: plt.Figure, name: str, show: bool, save: bool
    ) -> plt.Figure:
        if save:
            os.makedirs(self.save_dir, exist_ok=True)
            path = os.path.join(self.save_dir, f"sp_{name}.png")
            fig.savefig(path, dpi=150, bbox_inches="tight")
        if show:
            plt.show()
        else:
            plt.close(fig)
        return fig

    def bloch_trajectory(
        self,
        points: NDArray[np.float64],
        field_vector: NDArray[np.float64] | None = None,
        show: bool = False,
        save: bool = True,
    ) -> plt.Figure:
        """3D trace of the Bloch vector inside the unit sphere.

        Draws the coordinate axes, the field vector (yellow) and the latest
        spin vector, like the interactive view.
        """
        fig = plt.figure(figsize=(8, 8))
        ax = fig.add_subplot(111, projection="3d")

        # Unit sphere wireframe
        u = np.linspace(0, 2 * np.pi, 36)
        v = np.linspace(0, np.pi, 18)
        ax.plot_wireframe(
            np.outer(np.cos(u), np.sin(v)),
            np.outer(np.sin(u), np.sin(v)),
            np.outer(np.ones_like(u), np.cos(v)),
            color="gray", alpha=0.15, linewidth=0.5,
        )

        for axis, color, name in zip(np.eye(3), ("red", "green", "lightblue"), "XYZ"):
            ax.plot([0, axis[0]], [0, axis[1]], [0, axis[2]], color=color)
            ax.text(*(axis * 1.1), name, color=color)

        if field_vector is not None:
            f = np.asarray(field_vector, dtype=np.float64)
            ax.plot([0, f[0]], [0, f[1]], [0, f[2]], color="gold", linewidth=2, label="B")

        points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if len(points) == 0:
            ax.text(0, 0, 0, "No data")
            return self._save_or_show(fig, "bloch_trajectory", show, save)

        ax.plot(points[:, 0], points[:, 1], points[:, 2], color="purple", alpha=0.7, label="Trace")
        tip = points[-1]
        ax.plot([0, tip[0]], [0, tip[1]], [0, tip[2]], color="black", linewidth=2, label="<S>")

        ax.set_xlim(-1, 1)
        ax.set_ylim(-1, 1)
        ax.set_zlim(-1, 1)
        ax.set_xlabel("X")
        ax.set_ylabel("Y")
        ax.set_zlabel("Z")
        ax.set_title(f"Spin Precession ({len(points)} samples)")
        ax.legend(loc="upper left")

        return self._save_or_show(fig, "bloch_trajectory", show, save)

    def components_vs_time(
        self,
        history: list[dict],
        show: bool = False,
        save: bool = True,
    ) -> plt.Figure:
        """<Sx>, <Sy>, <Sz> and vector length over time."""
        if not history:
            fig, ax = plt.subplots()
            ax.text(0.5, 0.5, "No data", ha="center", va="center")
            return self._save_or_show(fig, "components_vs_time", show, save)

        times = [h["time"] for h in history]

        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 8), sharex=True)

        ax1.plot(times, [h["x"] for h in history], label="<Sx>", color="red")
        ax1.plot(times, [h["y"] for h in history], label="<Sy>", color="green")
        ax1.plot(times, [h["z"] for h in history], label="<Sz>", color="blue")
        ax1.set_ylabel("Expectation")
        ax1.set_title("Spin Components")
        ax1.legend()
        ax1.grid(True, alpha=0.3)

        ax2.plot(times, [h["magnitude"] for h in history], color="black")
        ax2.axhline(y=SPIN_MAGNITUDE, color="red", linestyle="--", alpha=0.5, label="Unit length")
        ax2.set_xlabel("Time")
        ax2.set_ylabel("|<S>|")
        ax2.set_title("Bloch Vector Length")
        ax2.legend()
        ax2.grid(True, alpha=0.3)

        fig.tight_layout()
        return self._save_or_show(fig, "components_vs_time", show, save)

    def amplitude_plane(
        self,
        history: list[dict],
        show: bool = False,
        save: bool = True,
    ) -> plt.Figure:
        """Raw amplitudes a and b traced in the complex plane."""
        fig, ax = plt.subplots(figsize=(7, 7))

        circle = plt.Circle((0, 0), SPIN_MAGNITUDE, fill=False, color="gray", alpha=0.4)
        ax.add_patch(circle)
        ax.axhline(0, color="gray", linewidth=0.5)
        ax.axvline(0, color="gray", linewidth=0.5)

        if not history:
            ax.text(0, 0, "No data", ha="center", va="center")
            return self._save_or_show(fig, "amplitude_plane", show, save)

        a = np.array([h["a"] for h in history], dtype=np.complex128)
        b = np.array([h["b"] for h in history], dtype=np.complex128)

        ax.plot(a.real, a.imag, color="tab:orange", label="a (|up>)")
        ax.plot(b.real, b.imag, color="tab:cyan", label="b (|down>)")
        ax.scatter([a[-1].real, b[-1].real], [a[-1].imag, b[-1].imag], color=["tab:orange", "tab:cyan"], zorder=3)

        ax.set_xlim(-1.2, 1.2)
        ax.set_ylim(-1.2, 1.2)
        ax.set_aspect("equal")
        ax.set_xlabel("Re")
        ax.set_ylabel("Im")
        ax.set_title("State Amplitudes")
        ax.legend()

        return self._save_or_show(fig, "amplitude_plane", show, save)
