"""Exporter layer."""

from component_graph.exporter.csv_exporter import CSV_COLUMNS, read_edges_csv, write_edges_csv

__all__ = ["CSV_COLUMNS", "read_edges_csv", "write_edges_csv"]
