from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Dict, Literal

PermissionState = Literal["granted", "denied", "prompt"]

class ReportedPosition(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

class ReportedGeolocationError(BaseModel):
    code: Optional[int] = Field(default=None, description="1 denied, 2 unavailable, 3 timeout; null when unsupported")
    message: str = ""
    permission_state: Optional[PermissionState] = None
    permission_query_failed: bool = False

class CreateSessionRequest(BaseModel):
    position: Optional[ReportedPosition] = None
    error: Optional[ReportedGeolocationError] = None
    page_url: Optional[str] = None

    @model_validator(mode="after")
    def check_position_or_error(self):
        if (self.position is None) == (self.error is None):
            raise ValueError("exactly one of 'position' or 'error' is required")
        return self

class SelectRequest(BaseModel):
    place_id: str

class PlaceOut(BaseModel):
    id: str
    latitude: float
    longitude: float
    name: Optional[str] = None
    category: Optional[str] = None
    address: str = ""
    selected: bool = False
    tags: Dict[str, str] = {}

class StatusOut(BaseModel):
    state: str
    label: str
    message: str = ""
    retry_available: bool = False

class GeoErrorOut(BaseModel):
    category: str
    message: str

class SessionResponse(BaseModel):
    session_id: str
    location: Optional[ReportedPosition] = None
    location_message: Optional[str] = None
    geo_error: Optional[GeoErrorOut] = None
    cache_hit: bool = False
    status: StatusOut
    selected_id: Optional[str] = None
    places: List[PlaceOut] = []
    map_state: Dict = {}
    list_state: Dict = {}
