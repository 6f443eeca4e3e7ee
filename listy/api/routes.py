from fastapi import APIRouter, Depends, HTTPException, Request
from .schemas import (
    CreateSessionRequest,
    GeoErrorOut,
    PlaceOut,
    ReportedPosition,
    SelectRequest,
    SessionResponse,
    StatusOut,
)
from ..core.auth import require_api_key
from ..core.errors import GeolocationFailure, GeolocationUnsupported
from ..core.geolocation import LocationAcquirer, ReportedPermissionState, ReportedPositionCapability
from ..core.orchestrator import DiscoverySession, close_session, create_session, get_session
from ..projections.memory import MemoryListProjection, MemoryMapProjection

router = APIRouter()


def get_provider(request: Request):
    return request.app.state.provider


def _build_session(req: CreateSessionRequest, provider) -> DiscoverySession:
    permissions = None
    if req.position is not None:
        capability = ReportedPositionCapability(position=(req.position.latitude, req.position.longitude))
    else:
        err = req.error
        if err.code is None:
            capability = ReportedPositionCapability(failure=GeolocationUnsupported(err.message or "Geolocation not supported"))
        else:
            capability = ReportedPositionCapability(failure=GeolocationFailure(err.code, err.message))
        if err.permission_query_failed:
            permissions = ReportedPermissionState(query_failed=True)
        elif err.permission_state is not None:
            permissions = ReportedPermissionState(err.permission_state)

    map_projection = MemoryMapProjection()
    list_projection = MemoryListProjection()
    session = DiscoverySession(
        LocationAcquirer(capability),
        provider,
        map_projection,
        list_projection,
        permissions=permissions,
        page_url=req.page_url,
    )
    map_projection.on_marker_click = session.select
    list_projection.on_row_click = session.select
    return session


def _to_response(session: DiscoverySession) -> SessionResponse:
    ctx = session.ctx
    location = None
    if ctx.location is not None:
        c = ctx.location.coordinate
        location = ReportedPosition(latitude=c.latitude, longitude=c.longitude)
    status = ctx.list_status
    return SessionResponse(
        session_id=ctx.session_id,
        location=location,
        location_message=ctx.location_status.text if ctx.location_status else None,
        geo_error=GeoErrorOut(category=ctx.geo_error.category.value, message=ctx.geo_error.message) if ctx.geo_error else None,
        cache_hit=ctx.cache_hit,
        status=StatusOut(
            state=status.state.value,
            label=status.label,
            message=status.message,
            retry_available=status.retry_available,
        ),
        selected_id=session.sync.selected_id,
        places=[
            PlaceOut(
                id=p.id,
                latitude=p.coordinate.latitude,
                longitude=p.coordinate.longitude,
                name=p.name,
                category=p.category,
                address=p.address,
                selected=p.selected,
                tags=p.tags,
            )
            for p in ctx.place_store.all()
        ],
        map_state=session.sync.map.snapshot(),
        list_state=session.sync.list.snapshot(),
    )


def _require_session(session_id: str) -> DiscoverySession:
    session = get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="session not found")
    return session


@router.post("/sessions", response_model=SessionResponse, dependencies=[Depends(require_api_key)])
async def start_session(req: CreateSessionRequest, provider=Depends(get_provider)):
    session = await create_session(_build_session(req, provider))
    return _to_response(session)

@router.get("/sessions/{session_id}", response_model=SessionResponse, dependencies=[Depends(require_api_key)])
async def read_session(session_id: str):
    return _to_response(_require_session(session_id))

@router.post("/sessions/{session_id}/select", response_model=SessionResponse, dependencies=[Depends(require_api_key)])
async def select_place(session_id: str, req: SelectRequest):
    session = _require_session(session_id)
    session.select(req.place_id)
    return _to_response(session)

@router.post("/sessions/{session_id}/retry", response_model=SessionResponse, dependencies=[Depends(require_api_key)])
async def retry_session(session_id: str):
    session = _require_session(session_id)
    await session.retry()
    return _to_response(session)

@router.delete("/sessions/{session_id}", status_code=204, dependencies=[Depends(require_api_key)])
async def end_session(session_id: str):
    if not close_session(session_id):
        raise HTTPException(status_code=404, detail="session not found")
