"""component-graph: resolve and draw dependency graphs of compiled components."""

__version__ = "0.1.0"
