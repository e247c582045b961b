"""Matplotlib views of the tunnel flow and panel results."""

from .tunnel import plot_flow_field, plot_cp_distribution

__all__ = ["plot_flow_field", "plot_cp_distribution"]
