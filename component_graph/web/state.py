"""In-memory state for the web API — no database required."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from component_graph.models import ComponentBatch, ResolutionResult


@dataclass
class ResolutionSession:
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    batch: ComponentBatch = field(default_factory=ComponentBatch)
    result: ResolutionResult = field(default_factory=ResolutionResult)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


class AppState:
    """Singleton in-memory state shared by all API routes."""

    def __init__(self):
        self.resolutions: dict[str, ResolutionSession] = {}

    def add_resolution(self, session: ResolutionSession) -> None:
        self.resolutions[session.id] = session

    def get_resolution(self, resolution_id: str) -> ResolutionSession | None:
        return self.resolutions.get(resolution_id)

    def delete_resolution(self, resolution_id: str) -> bool:
        return self.resolutions.pop(resolution_id, None) is not None


# Module-level singleton — all routers import this
state = AppState()
