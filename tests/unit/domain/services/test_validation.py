from __future__ import annotations

from datetime import datetime, timezone

import pytest

from quakecast.domain.entities.errors import InvalidQueryError
from quakecast.domain.services.validation import (
    parse_bbox,
    parse_epoch_millis,
    parse_number,
    require_number,
    validate_bbox,
    validate_cell_deg,
    validate_horizon,
    validate_latitude,
    validate_ring_points,
    validate_ring_radius,
)


def test_parse_bbox_accepts_whitespace() -> None:
    bbox = parse_bbox(" 95, -12,141 ,7 ")
    assert bbox.to_list() == [95.0, -12.0, 141.0, 7.0]


@pytest.mark.parametrize(
    "raw",
    ["1,2,3", "a,b,c,d", "0,0,nan,1", "10,0,5,1", "0,5,1,5", "-181,0,0,1"],
)
def test_parse_bbox_rejects_invalid_input(raw) -> None:
    with pytest.raises(InvalidQueryError) as excinfo:
        parse_bbox(raw)
    assert "parameter" in excinfo.value.details


def test_validate_bbox_rejects_out_of_range_latitude() -> None:
    with pytest.raises(InvalidQueryError) as excinfo:
        validate_bbox([0.0, -91.0, 1.0, 1.0])
    assert excinfo.value.details["parameter"] == "minLat"


@pytest.mark.parametrize("value", [0.0, -1.0, 10.5, float("inf"), float("nan")])
def test_cell_deg_bounds(value) -> None:
    with pytest.raises(InvalidQueryError):
        validate_cell_deg(value)


def test_cell_deg_and_horizon_accept_upper_bounds() -> None:
    assert validate_cell_deg(10.0) == 10.0
    assert validate_horizon(30.0) == 30.0
    with pytest.raises(InvalidQueryError):
        validate_horizon(30.1)


def test_latitude_and_ring_limits() -> None:
    assert validate_latitude(-90.0) == -90.0
    with pytest.raises(InvalidQueryError):
        validate_ring_radius(0.0)
    with pytest.raises(InvalidQueryError):
        validate_ring_radius(1000.5)
    assert validate_ring_points(64.0) == 64
    with pytest.raises(InvalidQueryError):
        validate_ring_points(2.5)
    with pytest.raises(InvalidQueryError):
        validate_ring_points(361)


def test_parse_number_defaults_and_errors() -> None:
    assert parse_number("m0", None, default=3.0) == 3.0
    assert parse_number("m0", "  ", default=3.0) == 3.0
    assert parse_number("m0", "4.5") == 4.5
    with pytest.raises(InvalidQueryError):
        parse_number("m0", "abc")
    with pytest.raises(InvalidQueryError):
        require_number("lat", None)


def test_parse_epoch_millis() -> None:
    moment = parse_epoch_millis("time", "1717200000000")
    assert moment == datetime(2024, 6, 1, tzinfo=timezone.utc)
    with pytest.raises(InvalidQueryError):
        parse_epoch_millis("time", "1e30")
