from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from ...providers.base import PlaceProvider
from ..config import settings
from ..errors import RemoteServiceError
from ..geolocation import utcnow
from ..view_state import ListState, render_status
from ..workflow_types import SessionContext

logger = logging.getLogger(__name__)


class FetchPlacesNode:
    name = "fetch_places"

    def __init__(
        self,
        provider: PlaceProvider,
        radius_m: int = settings.search_radius_m,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.provider = provider
        self.radius_m = radius_m
        self.clock = clock

    async def run(self, ctx: SessionContext) -> SessionContext:
        if ctx.location is None or ctx.cache_hit:
            return ctx

        ctx.list_status = render_status(ListState.LOADING)
        origin = ctx.location.coordinate
        try:
            places = await self.provider.fetch_nearby(origin, self.radius_m)
        except RemoteServiceError as e:
            logger.error("nearby fetch failed: %s", e)
            ctx.places = None
            ctx.list_status = render_status(ListState.ERROR)
            ctx.errors.append(str(e))
            return ctx

        ctx.cache.store(origin, self.clock(), places)
        ctx.places = places
        return ctx
