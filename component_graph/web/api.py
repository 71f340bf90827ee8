"""FastAPI routes: resolve a posted component batch and render it."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from component_graph.analysis.dependency_graph import DependencyGraphResolver
from component_graph.models import (
    ComponentBatch,
    ComponentKind,
    ComponentRecord,
    DependencyEdge,
    DependencyScope,
    DependencyType,
    DiagramFormat,
    Reference,
    ResolutionResult,
    build_batch,
)
from component_graph.renderer import EdgeFilter, NodeStyle, StyleLookup, StyleRule, render_edges
from component_graph.web.state import ResolutionSession, state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")
_resolver = DependencyGraphResolver()


# --- Request / Response models ---

class ReferenceIn(BaseModel):
    name: str
    version: str = "0"


class ComponentIn(BaseModel):
    name: str
    version: str = "0"
    kind: ComponentKind = ComponentKind.OTHER
    references: list[ReferenceIn] = Field(default_factory=list)


class ResolveRequest(BaseModel):
    components: list[ComponentIn]


class StyleRuleIn(BaseModel):
    pattern: str
    color: str = "#FFFFFF"
    shape: str | None = None


class RenderRequest(ResolveRequest):
    format: DiagramFormat = DiagramFormat.DOT
    types: list[DependencyType] = Field(default_factory=lambda: [DependencyType.DIRECT])
    scopes: list[DependencyScope] = Field(default_factory=lambda: [DependencyScope.INCLUDED])
    rules: list[StyleRuleIn] = Field(default_factory=list)
    default_color: str = "#FFFFFF"
    title: str = "dependencies"


# --- Helpers ---

def _to_batch(components: list[ComponentIn]) -> ComponentBatch:
    records = [
        ComponentRecord(
            name=c.name,
            version=c.version,
            kind=c.kind,
            references=[Reference(name=r.name, version=r.version) for r in c.references],
        )
        for c in components
    ]
    return build_batch(records)


def _resolve(components: list[ComponentIn]) -> tuple[ComponentBatch, ResolutionResult]:
    try:
        batch = _to_batch(components)
        return batch, _resolver.resolve(batch)
    except ValueError as e:
        logger.warning("Rejected batch: %s", e)
        raise HTTPException(422, str(e))


def _edge_dict(edge: DependencyEdge) -> dict:
    return {
        "root": edge.root_name,
        "root_kind": edge.root_kind.value,
        "target": edge.target_name,
        "target_version": str(edge.target_version),
        "shortest_chain": edge.shortest_chain,
        "longest_chain": edge.longest_chain,
        "dependency_type": edge.dependency_type.value,
        "scope": edge.scope.value,
    }


def _result_dict(session: ResolutionSession) -> dict:
    counts = session.result.count_by_type()
    return {
        "resolution_id": session.id,
        "components": len(session.batch),
        "edges": [_edge_dict(e) for e in session.result.edges],
        "counts": {t.value: n for t, n in counts.items()},
    }


# --- Endpoints ---

@router.get("/formats")
async def list_formats():
    return {"formats": [fmt.value for fmt in DiagramFormat]}


@router.post("/resolve")
async def resolve(req: ResolveRequest):
    batch, result = await asyncio.to_thread(_resolve, req.components)
    session = ResolutionSession(batch=batch, result=result)
    state.add_resolution(session)
    return _result_dict(session)


@router.get("/resolve/{resolution_id}")
async def get_resolution(resolution_id: str):
    session = state.get_resolution(resolution_id)
    if not session:
        raise HTTPException(404, "Resolution not found")
    return _result_dict(session)


@router.delete("/resolve/{resolution_id}")
async def delete_resolution(resolution_id: str):
    if not state.delete_resolution(resolution_id):
        raise HTTPException(404, "Resolution not found")
    return {"deleted": resolution_id}


@router.post("/render")
async def render(req: RenderRequest):
    _, result = await asyncio.to_thread(_resolve, req.components)
    default = NodeStyle(color=req.default_color)
    styles = StyleLookup(
        rules=[
            StyleRule(pattern=r.pattern, style=NodeStyle(color=r.color, shape=r.shape))
            for r in req.rules
        ],
        default=default,
    )
    diagram = render_edges(
        req.format,
        result,
        styles=styles,
        edge_filter=EdgeFilter(types=req.types, scopes=req.scopes),
        title=req.title,
    )
    return {"format": req.format.value, "diagram": diagram}
