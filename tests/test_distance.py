import math

import pytest

from localguide.services.distance import annotate, format_distance, haversine_km, walk_time


def test_short_distances_render_in_meters() -> None:
    assert format_distance(0.5) == "500m"
    assert format_distance(0.0) == "0m"
    assert format_distance(0.9994) == "999m"


def test_long_distances_render_in_kilometers() -> None:
    assert format_distance(2.345) == "2.3km"
    assert format_distance(1.0) == "1.0km"


def test_walk_time_rounds_up_at_twelve_minutes_per_km() -> None:
    assert walk_time(2.345) == "29分"
    assert walk_time(0.5) == "6分"
    assert walk_time(0.0) == "0分"


def test_haversine_one_degree_of_latitude() -> None:
    assert haversine_km(36.0, 139.9, 37.0, 139.9) == pytest.approx(6371 * math.pi / 180)
    assert haversine_km(36.55, 139.9, 36.55, 139.9) == 0.0


def test_haversine_is_symmetric() -> None:
    forward = haversine_km(36.5579, 139.8984, 36.55, 139.90)
    backward = haversine_km(36.55, 139.90, 36.5579, 139.8984)
    assert forward == pytest.approx(backward)


def test_annotate_returns_a_copy_with_display_fields(sample_place) -> None:
    annotated = annotate(sample_place, 36.5579, 139.8984)

    expected_km = haversine_km(36.5579, 139.8984, 36.55, 139.90)
    assert expected_km < 1
    assert annotated["distance"] == format_distance(expected_km)
    assert annotated["walk_time"] == walk_time(expected_km)
    assert "distance" not in sample_place
