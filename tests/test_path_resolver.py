from conftest import make_segment, north_line, pt
from maiwayoverlay.core_path_resolver import SegmentPathResolver
from maiwayoverlay.models.route_segments import Coordinate, TransportType


def resolver():
    return SegmentPathResolver(anchor_tolerance_m=30)


def test_missing_geometry_falls_back_to_endpoints():
    segment = make_segment('s1', TransportType.BUS, pt(0, 0), pt(500, 0))
    assert resolver().resolve(segment) == [pt(0, 0), pt(500, 0)]


def test_single_point_geometry_falls_back_to_endpoints():
    segment = make_segment('s1', TransportType.BUS, pt(0, 0), pt(500, 0), [pt(200, 0)])
    assert resolver().resolve(segment) == [pt(0, 0), pt(500, 0)]


def test_overshooting_geometry_is_sliced_between_stops():
    line = north_line(0, 500)
    segment = make_segment('s1', TransportType.JEEPNEY, line[2], line[8], line)
    assert resolver().resolve(segment) == line[2:9]


def test_reversed_geometry_is_returned_in_travel_order():
    line = north_line(0, 500)
    segment = make_segment('s1', TransportType.JEEPNEY, line[2], line[8], list(reversed(line)))
    assert resolver().resolve(segment) == line[2:9]


def test_far_stops_are_anchored_onto_the_path():
    line = north_line(0, 300)
    origin = pt(0, -100)
    destination = pt(300, 100)
    segment = make_segment('s1', TransportType.BUS, origin, destination, line)

    path = resolver().resolve(segment)

    assert path[0] == origin
    assert path[-1] == destination
    assert path[1:-1] == line


def test_stops_within_tolerance_are_not_anchored():
    line = north_line(0, 300)
    segment = make_segment('s1', TransportType.BUS, pt(0, -10), pt(300, 10), line)
    assert resolver().resolve(segment) == line


def test_invalid_geometry_points_are_dropped():
    line = north_line(0, 200)
    messy = [Coordinate(0.0, 0.0)] + line[:2] + [Coordinate(float('nan'), 121.0)] + line[2:]
    segment = make_segment('s1', TransportType.BUS, line[0], line[-1], messy)
    assert resolver().resolve(segment) == line


def test_only_one_valid_geometry_point_falls_back():
    geometry = [Coordinate(0.0, 0.0), pt(100, 0), Coordinate(float('nan'), 121.0)]
    segment = make_segment('s1', TransportType.BUS, pt(0, 0), pt(200, 0), geometry)
    assert resolver().resolve(segment) == [pt(0, 0), pt(200, 0)]


def test_invalid_origin_keeps_whole_geometry():
    line = north_line(0, 500)
    segment = make_segment('s1', TransportType.BUS, Coordinate(0.0, 0.0), pt(200, 0), line)
    assert resolver().resolve(segment) == line


def test_invalid_origin_without_geometry_keeps_only_valid_endpoint():
    segment = make_segment('s1', TransportType.BUS, Coordinate(0.0, 0.0), pt(200, 0))
    assert resolver().resolve(segment) == [pt(200, 0)]


def test_collapsed_slice_falls_back_to_endpoints():
    # Both stops snap to the same geometry point and sit within tolerance of it
    origin = pt(0, 0)
    destination = pt(0, 5)
    segment = make_segment('s1', TransportType.BUS, origin, destination, [pt(0, 0), pt(200, 0)])
    assert resolver().resolve(segment) == [origin, destination]


def test_resolve_all_keeps_order():
    first = make_segment('a', TransportType.WALK, pt(0, 0), pt(100, 0))
    second = make_segment('b', TransportType.BUS, pt(100, 0), pt(400, 0), north_line(100, 400))
    paths = resolver().resolve_all([first, second])
    assert len(paths) == 2
    assert paths[0] == [pt(0, 0), pt(100, 0)]
    assert paths[1] == north_line(100, 400)
