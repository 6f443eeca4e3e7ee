from __future__ import annotations

import logging
from typing import Optional

from ..errors import GeolocationErrorCode, GeolocationFailure
from ..geo_errors import classify
from ..geolocation import LocationAcquirer, PermissionQuery, is_secure_origin, query_permission_state
from ..view_state import LOCATING_MESSAGE, ListState, LocationStatus, render_status
from ..workflow_types import SessionContext

logger = logging.getLogger(__name__)


class AcquireLocationNode:
    name = "acquire_location"

    def __init__(
        self,
        acquirer: LocationAcquirer,
        permissions: Optional[PermissionQuery] = None,
        page_url: Optional[str] = None,
    ):
        self.acquirer = acquirer
        self.permissions = permissions
        self.page_url = page_url

    def _record_failure(self, ctx: SessionContext, error: BaseException, state=None, query_failed=False) -> SessionContext:
        ctx.geo_error = classify(error, state, query_failed)
        ctx.location = None
        ctx.location_status = LocationStatus(ctx.geo_error.message, is_error=True)
        ctx.list_status = render_status(ListState.UNAVAILABLE, message=ctx.geo_error.message)
        ctx.errors.append(ctx.geo_error.category.value)
        logger.warning("geolocation failed: %s (%s)", ctx.geo_error.category.value, error)
        return ctx

    async def run(self, ctx: SessionContext) -> SessionContext:
        ctx.location_status = LocationStatus(LOCATING_MESSAGE)
        ctx.geo_error = None

        if self.page_url and not is_secure_origin(self.page_url):
            # still attempted; the failure, if any, is classified below
            logger.warning("geolocation requires a secure context; page origin is %s", self.page_url)

        try:
            ctx.location = await self.acquirer.acquire()
        except GeolocationFailure as e:
            state, query_failed = (None, False)
            if e.code == GeolocationErrorCode.PERMISSION_DENIED:
                state, query_failed = await query_permission_state(self.permissions)
            return self._record_failure(ctx, e, state, query_failed)
        except Exception as e:
            logger.exception("geolocation capability raised unexpectedly")
            return self._record_failure(ctx, e)

        ctx.location_status = None
        logger.info(
            "location acquired lat=%.6f lng=%.6f",
            ctx.location.coordinate.latitude,
            ctx.location.coordinate.longitude,
        )
        return ctx
