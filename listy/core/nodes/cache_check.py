from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..geolocation import utcnow
from ..workflow_types import SessionContext


class CacheLookupNode:
    name = "cache_lookup"

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock

    async def run(self, ctx: SessionContext) -> SessionContext:
        ctx.places = None
        ctx.cache_hit = False
        if ctx.location is None:
            return ctx

        cached = ctx.cache.lookup(ctx.location.coordinate, self.clock())
        if cached is not None:
            ctx.places = cached
            ctx.cache_hit = True
        return ctx
