from __future__ import annotations

from ..sync import SyncController
from ..view_state import ListState, render_status
from ..workflow_types import SessionContext


class RenderResultsNode:
    name = "render_results"

    def __init__(self, sync: SyncController):
        self.sync = sync

    async def run(self, ctx: SessionContext) -> SessionContext:
        if ctx.places is None:
            return ctx

        self.sync.render_all(ctx.places)
        count = len(ctx.place_store)
        ctx.list_status = render_status(ListState.RESULTS if count else ListState.EMPTY, count)
        ctx.places = None
        return ctx
