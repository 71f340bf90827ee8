"""JSON web API for resolving and rendering component batches."""

from component_graph.web.app import create_app

__all__ = ["create_app"]
