"""Tests for endpoint snapping."""

from flakecut.engine.snapping import find_nearest_endpoint, is_near_endpoint, snap_to_nearest_endpoint

ENDPOINTS = [(550.0, 450.0), (600.0, 480.0)]


def test_snaps_within_threshold():
    assert snap_to_nearest_endpoint((555, 455), ENDPOINTS) == (550, 450)


def test_no_snap_outside_threshold():
    assert snap_to_nearest_endpoint((580, 420), ENDPOINTS) == (580, 420)


def test_threshold_is_strict():
    assert snap_to_nearest_endpoint((570, 450), ENDPOINTS) == (570, 450)
    assert snap_to_nearest_endpoint((569.9, 450), ENDPOINTS) == (550, 450)


def test_nearest_wins():
    found = find_nearest_endpoint((590, 475), ENDPOINTS)
    assert found is not None
    point, dist = found
    assert point == (600, 480)
    assert dist < 20


def test_tie_goes_to_first():
    assert snap_to_nearest_endpoint((5, 0), [(0, 0), (10, 0)]) == (0, 0)


def test_no_endpoints():
    assert find_nearest_endpoint((1, 1), []) is None
    assert snap_to_nearest_endpoint((1, 1), []) == (1, 1)
    assert not is_near_endpoint((1, 1), [])


def test_is_near_endpoint():
    assert is_near_endpoint((600, 470), ENDPOINTS)
    assert not is_near_endpoint((600, 400), ENDPOINTS, threshold=20)


def test_candidate_beside_replica_endpoint():
    assert snap_to_nearest_endpoint((551, 451), ENDPOINTS) == (550, 450)
    assert snap_to_nearest_endpoint((580, 450), ENDPOINTS) == (580, 450)
