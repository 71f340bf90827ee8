"""Pipeline orchestrator: load -> resolve -> export CSV -> render diagrams."""

from __future__ import annotations

import logging
from typing import Callable

from component_graph.models import (
    ComponentBatch,
    PipelineConfig,
    PipelineResult,
    ResolutionResult,
)
from component_graph.analysis.dependency_graph import DependencyGraphResolver
from component_graph.exporter import write_edges_csv
from component_graph.provider import load_components
from component_graph.renderer import EdgeFilter, StyleLookup, render_edges

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def run_scan(config: PipelineConfig, progress: ProgressCallback | None = None) -> ComponentBatch:
    """Stage 1: Read component metadata from the configured inputs."""
    if not config.inputs:
        raise ValueError("No input paths given")
    if progress:
        progress("Loading", 0, 1)
    batch = load_components(config.inputs)
    if progress:
        progress("Loading", 1, 1)
    return batch


def run_resolve(config: PipelineConfig, progress: ProgressCallback | None = None) -> ResolutionResult:
    """Stages 1-2: load the batch and resolve its dependency graph."""
    batch = run_scan(config, progress)
    if progress:
        progress("Resolving", 0, 1)
    result = DependencyGraphResolver().resolve(batch)
    if progress:
        progress("Resolving", 1, 1)
    return result


def run_pipeline(
    config: PipelineConfig,
    progress: ProgressCallback | None = None,
) -> PipelineResult:
    """Run the full pipeline and write outputs into ``config.output_dir``."""
    result = run_resolve(config, progress)

    styles = StyleLookup.from_file(config.styles_file) if config.styles_file else StyleLookup()
    edge_filter = EdgeFilter(types=config.dependency_types, scopes=config.scopes)

    output = PipelineResult(output_dir=config.output_dir, result=result)
    config.output_dir.mkdir(parents=True, exist_ok=True)

    if config.write_csv:
        output.csv_path = write_edges_csv(result, config.output_dir / f"{config.diagram_name}.csv")
        output.files_created.append(output.csv_path)

    total = len(config.formats)
    for i, fmt in enumerate(config.formats):
        if progress:
            progress("Rendering", i, total)
        text = render_edges(fmt, result, styles=styles, edge_filter=edge_filter,
                            title=config.diagram_name)
        path = config.output_dir / f"{config.diagram_name}{fmt.extension}"
        path.write_text(text, encoding="utf-8")
        logger.info("Wrote %s diagram to %s", fmt.value, path)
        output.files_created.append(path)

    if progress:
        progress("Rendering", total, total)

    return output
