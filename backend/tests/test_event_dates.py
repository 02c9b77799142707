from datetime import datetime

import pytest

from app.core.errors import MalformedInputError
from app.services.event_dates import parse_event_datetime, require_event_datetime, resolve_event_datetime

STORED = datetime(2025, 1, 10, 19, 0)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2025-03-08T18:30:00", datetime(2025, 3, 8, 18, 30)),
        ("2025-03-08T18:30:00Z", datetime(2025, 3, 8, 18, 30)),
        ("2025-03-08T20:30:00+02:00", datetime(2025, 3, 8, 18, 30)),
        ("2025-03-08T18:30:00.5+00:00", datetime(2025, 3, 8, 18, 30, 0, 500000)),
        ("20250308T183000Z", datetime(2025, 3, 8, 18, 30)),
        ("2025-03-08T18:30", datetime(2025, 3, 8, 18, 30)),
        ("08.03.2025 18:30", datetime(2025, 3, 8, 18, 30)),
        ("08.03.2025", datetime(2025, 3, 8)),
    ],
)
def test_parse_supported_formats(raw, expected):
    assert parse_event_datetime(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "next friday", "32.13.2025", None, 12])
def test_parse_returns_none_for_garbage(raw):
    assert parse_event_datetime(raw) is None


def test_resolve_keeps_current_when_missing():
    assert resolve_event_datetime(None, STORED, field="start_time") == STORED
    assert resolve_event_datetime("", STORED, field="start_time") == STORED


def test_resolve_lenient_keeps_current_and_warns(caplog):
    with caplog.at_level("WARNING", logger="app.services.event_dates"):
        assert resolve_event_datetime("soon", STORED, field="end_time") == STORED
    assert "end_time" in caplog.text


def test_resolve_strict_raises():
    with pytest.raises(MalformedInputError):
        resolve_event_datetime("soon", STORED, field="end_time", strict=True)


def test_require_raises_on_garbage():
    with pytest.raises(MalformedInputError):
        require_event_datetime("soon", field="start_time")
