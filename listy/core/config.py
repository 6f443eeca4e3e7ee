from pydantic import BaseModel
import os

class Settings(BaseModel):
    overpass_api_url: str = os.getenv("OVERPASS_API_URL", "https://overpass-api.de/api/interpreter")
    search_radius_m: int = int(os.getenv("LISTY_SEARCH_RADIUS_M", "2000"))
    http_timeout_s: float = float(os.getenv("LISTY_HTTP_TIMEOUT_S", "30"))
    cache_key: str = os.getenv("LISTY_CACHE_KEY", "listy_cache")
    cache_max_age_s: int = int(os.getenv("LISTY_CACHE_MAX_AGE_S", "600"))
    cache_max_drift_km: float = float(os.getenv("LISTY_CACHE_MAX_DRIFT_KM", "0.1"))
    max_sessions: int = int(os.getenv("LISTY_MAX_SESSIONS", "500"))
    session_idle_ttl_s: int = int(os.getenv("LISTY_SESSION_IDLE_TTL_S", "1800"))
    log_level: str = os.getenv("LISTY_LOG_LEVEL", "INFO")

settings = Settings()
