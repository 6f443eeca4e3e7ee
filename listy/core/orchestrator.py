from __future__ import annotations

import logging
import time
import uuid
from collections import OrderedDict
from datetime import datetime
from typing import Callable, List, Optional

from ..providers.base import PlaceProvider
from .config import settings
from .cache import InMemorySessionStore, SpatialTemporalCache
from .geolocation import LocationAcquirer, PermissionQuery, utcnow
from .nodes.cache_check import CacheLookupNode
from .nodes.fetch import FetchPlacesNode
from .nodes.focus import FocusOriginNode
from .nodes.locate import AcquireLocationNode
from .nodes.render import RenderResultsNode
from .place_store import PlaceStore
from .sync import ListProjection, MapProjection, SyncController
from .workflow import WorkflowRunner
from .workflow_types import SessionContext

logger = logging.getLogger(__name__)


class DiscoverySession:
    """
    One browsing session: owns the context, the cache and the sync controller.
    Constructing it starts the session; `close()` ends it.
    """

    def __init__(
        self,
        acquirer: LocationAcquirer,
        provider: PlaceProvider,
        map_projection: MapProjection,
        list_projection: ListProjection,
        *,
        permissions: Optional[PermissionQuery] = None,
        page_url: Optional[str] = None,
        session_store: Optional[InMemorySessionStore] = None,
        clock: Callable[[], datetime] = utcnow,
        session_id: Optional[str] = None,
    ):
        store = PlaceStore()
        self.session_store = session_store if session_store is not None else InMemorySessionStore()
        self.ctx = SessionContext(
            session_id=session_id or str(uuid.uuid4()),
            place_store=store,
            cache=SpatialTemporalCache(self.session_store),
        )
        self.sync = SyncController(store, map_projection, list_projection)

        fetch_nodes = [
            CacheLookupNode(clock=clock),
            FetchPlacesNode(provider, clock=clock),
            RenderResultsNode(self.sync),
        ]
        self._discover = WorkflowRunner(
            nodes=[
                AcquireLocationNode(acquirer, permissions=permissions, page_url=page_url),
                FocusOriginNode(self.sync),
            ]
            + fetch_nodes
        )
        self._refetch = WorkflowRunner(nodes=fetch_nodes)
        self.closed = False

    @property
    def session_id(self) -> str:
        return self.ctx.session_id

    async def start(self) -> SessionContext:
        self.ctx = await self._discover.run(self.ctx)
        return self.ctx

    async def retry(self) -> SessionContext:
        """Re-issue the nearby search for the origin already acquired."""
        if self.ctx.location is None:
            logger.info("retry ignored: session %s has no location", self.session_id)
            return self.ctx
        self.ctx = await self._refetch.run(self.ctx)
        return self.ctx

    def select(self, place_id: str) -> Optional[str]:
        self.sync.select(place_id)
        return self.sync.selected_id

    def close(self) -> None:
        self.ctx.cache.clear()
        self.session_store.clear()
        self.sync.render_all([])
        self.ctx.location = None
        self.closed = True


# NOTE: sessions live in process memory only; a restart drops them.
# Ordered least recently used first.
_SESSIONS: "OrderedDict[str, DiscoverySession]" = OrderedDict()
_LAST_USED = {}

MAX_SESSIONS = settings.max_sessions
SESSION_IDLE_TTL_S = settings.session_idle_ttl_s


def _now() -> float:
    return time.monotonic()


def _touch(session_id: str) -> None:
    _SESSIONS.move_to_end(session_id)
    _LAST_USED[session_id] = _now()


def evict_sessions() -> List[str]:
    """Close sessions idle past the TTL, then the least recently used over the cap."""
    now = _now()
    evicted = [sid for sid, used in _LAST_USED.items() if now - used > SESSION_IDLE_TTL_S]
    overflow = len(_SESSIONS) - len(evicted) - MAX_SESSIONS
    for sid in _SESSIONS:
        if overflow <= 0:
            break
        if sid not in evicted:
            evicted.append(sid)
            overflow -= 1
    for sid in evicted:
        close_session(sid)
    if evicted:
        logger.info("evicted %d session(s)", len(evicted))
    return evicted


async def create_session(session: DiscoverySession) -> DiscoverySession:
    _SESSIONS[session.session_id] = session
    _touch(session.session_id)
    evict_sessions()
    await session.start()
    return session


def get_session(session_id: str) -> Optional[DiscoverySession]:
    session = _SESSIONS.get(session_id)
    if session is None:
        return None
    if _now() - _LAST_USED[session_id] > SESSION_IDLE_TTL_S:
        close_session(session_id)
        return None
    _touch(session_id)
    return session


def close_session(session_id: str) -> bool:
    session = _SESSIONS.pop(session_id, None)
    _LAST_USED.pop(session_id, None)
    if session is None:
        return False
    session.close()
    return True
