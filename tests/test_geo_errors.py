import pytest

from listy.core.errors import GeoErrorCategory, GeolocationFailure, GeolocationUnsupported
from listy.core.geo_errors import MESSAGES, PERMISSION_QUERY_FAILED_MESSAGE, classify


def test_denied_with_hard_block_state():
    result = classify(GeolocationFailure(1, "User denied Geolocation"), permission_state="denied")
    assert result.category == GeoErrorCategory.PERMISSION_HARD_BLOCKED
    assert result.message == MESSAGES[GeoErrorCategory.PERMISSION_HARD_BLOCKED]
    assert "restablecer" in result.message


@pytest.mark.parametrize("state", ["prompt", "granted"])
def test_denied_but_prompt_still_possible(state):
    result = classify(GeolocationFailure(1), permission_state=state)
    assert result.category == GeoErrorCategory.PERMISSION_PROMPT_PENDING


def test_denied_without_permission_query():
    result = classify(GeolocationFailure(1))
    assert result.category == GeoErrorCategory.PERMISSION_UNKNOWN
    assert result.message == MESSAGES[GeoErrorCategory.PERMISSION_UNKNOWN]


def test_denied_when_permission_query_raised():
    result = classify(GeolocationFailure(1), permission_query_failed=True)
    assert result.category == GeoErrorCategory.PERMISSION_UNKNOWN
    assert result.message == PERMISSION_QUERY_FAILED_MESSAGE


def test_position_unavailable_and_timeout():
    assert classify(GeolocationFailure(2)).category == GeoErrorCategory.POSITION_UNAVAILABLE
    assert classify(GeolocationFailure(3)).category == GeoErrorCategory.TIMEOUT
    assert "GPS" in classify(GeolocationFailure(2)).message


def test_unsupported():
    result = classify(GeolocationUnsupported())
    assert result.category == GeoErrorCategory.UNSUPPORTED


def test_unknown_carries_raw_message():
    result = classify(GeolocationFailure(42, "kernel panic"))
    assert result.category == GeoErrorCategory.UNKNOWN
    assert result.message.endswith("kernel panic")


def test_unknown_without_message_uses_fallback():
    result = classify(RuntimeError())
    assert result.category == GeoErrorCategory.UNKNOWN
    assert result.message.endswith("Error desconocido.")


def test_never_raises_on_odd_codes():
    class Weird(Exception):
        code = "not-a-number"

    assert classify(Weird("boom")).category == GeoErrorCategory.UNKNOWN
