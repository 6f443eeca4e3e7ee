from __future__ import annotations

from typing import Optional

from .errors import (
    ClassifiedGeoError,
    GeoErrorCategory,
    GeolocationErrorCode,
    GeolocationUnsupported,
)

_PREFIX = "No pudimos obtener tu ubicación. "

MESSAGES = {
    GeoErrorCategory.PERMISSION_HARD_BLOCKED: (
        "⛔ Acceso denegado. Tienes bloqueada la ubicación para este sitio. "
        "Toca el candado 🔒 en la barra de dirección > Permisos > restablecer."
    ),
    GeoErrorCategory.PERMISSION_PROMPT_PENDING: "Por favor permite el acceso a la ubicación cuando el navegador lo solicite.",
    GeoErrorCategory.PERMISSION_UNKNOWN: "Permiso denegado. Revisa la configuración de tu navegador.",
    GeoErrorCategory.POSITION_UNAVAILABLE: _PREFIX + "Posición no disponible. Verifica que el GPS esté activo.",
    GeoErrorCategory.TIMEOUT: _PREFIX + "Se agotó el tiempo. Intenta de nuevo en un lugar abierto.",
    GeoErrorCategory.UNSUPPORTED: _PREFIX + "Tu navegador no soporta geolocalización.",
}

# Denied, and the permission-state query itself raised.
PERMISSION_QUERY_FAILED_MESSAGE = (
    "Por favor permite el acceso. Asegúrate de que tu navegador tenga permiso en el sistema."
)


def _permission_denied(permission_state: Optional[str], permission_query_failed: bool) -> ClassifiedGeoError:
    if permission_query_failed:
        return ClassifiedGeoError(GeoErrorCategory.PERMISSION_UNKNOWN, PERMISSION_QUERY_FAILED_MESSAGE)
    if permission_state is None:
        category = GeoErrorCategory.PERMISSION_UNKNOWN
    elif permission_state == "denied":
        category = GeoErrorCategory.PERMISSION_HARD_BLOCKED
    else:
        category = GeoErrorCategory.PERMISSION_PROMPT_PENDING
    return ClassifiedGeoError(category, MESSAGES[category])


def classify(
    failure: BaseException,
    permission_state: Optional[str] = None,
    permission_query_failed: bool = False,
) -> ClassifiedGeoError:
    """
    Map a location-acquisition failure to a user-facing category and message.

    `permission_state` is the result of the platform permission query
    ("granted" / "denied" / "prompt"), or None when that query is unsupported.
    Never raises.
    """
    code = getattr(failure, "code", None)
    try:
        code = int(code) if code is not None else None
    except (TypeError, ValueError):
        code = None

    if code == GeolocationErrorCode.PERMISSION_DENIED:
        return _permission_denied(permission_state, permission_query_failed)
    if code == GeolocationErrorCode.POSITION_UNAVAILABLE:
        return ClassifiedGeoError(
            GeoErrorCategory.POSITION_UNAVAILABLE, MESSAGES[GeoErrorCategory.POSITION_UNAVAILABLE]
        )
    if code == GeolocationErrorCode.TIMEOUT:
        return ClassifiedGeoError(GeoErrorCategory.TIMEOUT, MESSAGES[GeoErrorCategory.TIMEOUT])
    if isinstance(failure, GeolocationUnsupported):
        return ClassifiedGeoError(GeoErrorCategory.UNSUPPORTED, MESSAGES[GeoErrorCategory.UNSUPPORTED])

    try:
        raw = getattr(failure, "message", None) or str(failure)
    except Exception:
        raw = ""
    return ClassifiedGeoError(GeoErrorCategory.UNKNOWN, _PREFIX + (raw or "Error desconocido."))
