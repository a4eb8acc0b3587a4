"""Plotting helpers (optional, matplotlib)."""

from .comparison import grid_layout, plot_comparison

__all__ = ["grid_layout", "plot_comparison"]
