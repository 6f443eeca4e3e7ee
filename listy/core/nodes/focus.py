from __future__ import annotations

from ..sync import SyncController
from ..workflow_types import SessionContext


class FocusOriginNode:
    name = "focus_origin"

    def __init__(self, sync: SyncController):
        self.sync = sync

    async def run(self, ctx: SessionContext) -> SessionContext:
        if ctx.location is not None:
            self.sync.focus_origin(ctx.location.coordinate)
        return ctx
