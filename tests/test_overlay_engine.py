import pytest

from conftest import make_route, make_segment, north_line, pin, pt
from maiwayoverlay import RouteOverlayEngine, build_render_model
from maiwayoverlay.config import Config
from maiwayoverlay.exceptions import InvalidRouteError, OverlayError
from maiwayoverlay.models.route_segments import Coordinate, Route, TransportType
from maiwayoverlay.utils.geo_utils import distance_meters, is_valid_coordinate


@pytest.fixture
def engine():
    return RouteOverlayEngine(Config())


def all_coordinates(model):
    coords = [c for path in model.segment_paths for c in path]
    coords += [c for line in model.connectors for c in line]
    coords += [m.coordinate for m in model.transfer_markers]
    coords += [m.coordinate for m in model.endpoint_markers]
    coords.append(model.viewport.center)
    return coords


def test_walk_then_bus(engine):
    walk = make_segment('w', TransportType.WALK, pt(0, 0), pt(200, 0))
    bus_line = north_line(200, 1200)
    bus = make_segment('b', TransportType.BUS, bus_line[0], bus_line[-1], bus_line)

    model = engine.build_render_model(make_route(walk, bus), origin_pin=pin(pt(0, 0)))

    assert model.segment_paths[0] == (pt(0, 0), pt(200, 0))
    assert model.segment_paths[1] == tuple(bus_line)
    assert [(m.kind, m.number) for m in model.transfer_markers] == [('start', 0), ('board', 1)]
    assert model.transfer_markers[1].coordinate == bus.origin.coordinates
    assert model.connectors == ()
    assert model.segment_ids == ('w', 'b')


def test_bus_walk_bus(engine):
    first = make_segment('b1', TransportType.BUS, pt(0, 0), pt(500, 0), north_line(0, 500))
    walk = make_segment('w', TransportType.WALK, pt(500, 0), pt(600, 0))
    second = make_segment('b2', TransportType.BUS, pt(600, 0), pt(1100, 0), north_line(600, 1100))

    model = engine.build_render_model(make_route(first, walk, second))

    assert [m.label for m in model.transfer_markers] == ['1B', '2A', '2B']
    assert model.transfer_markers[1].coordinate == pt(500, 0)
    assert model.transfer_markers[2].coordinate == pt(600, 0)


def test_detour_is_trimmed_and_bridged(engine, detour_pair):
    bus, jeep = detour_pair

    model = engine.build_render_model(make_route(bus, jeep))

    assert model.segment_paths[0] == tuple(bus.geometry[:7])
    assert len(model.connectors) == 1
    start, end = model.connectors[0]
    assert start == pt(300, 0)
    assert end == jeep.origin.coordinates
    assert distance_meters(start, end) == pytest.approx(50, abs=1)


def test_segment_without_geometry(engine):
    segment = make_segment('b', TransportType.BUS, pt(0, 0), pt(800, 0))
    model = engine.build_render_model(make_route(segment))
    assert model.segment_paths == ((pt(0, 0), pt(800, 0)),)


def test_coincident_transfer(engine):
    station = pt(500, 0)
    bus = make_segment('bus', TransportType.BUS, pt(0, 0), station, north_line(0, 500))
    jeep = make_segment('jeep', TransportType.JEEPNEY, station, pt(1000, 0), north_line(500, 1000))

    model = engine.build_render_model(make_route(bus, jeep))

    alight, board = model.transfer_markers[1:]
    assert alight.coordinate.longitude < station.longitude < board.coordinate.longitude
    assert alight.number == board.number == 2


def test_empty_route(engine):
    model = engine.build_render_model(make_route(), origin_pin=pin(pt(0, 0)))
    assert model.segment_paths == ()
    assert model.transfer_markers == ()
    assert model.endpoint_markers == ()
    assert model.viewport.center == pt(0, 0)
    assert model.viewport.lat_span == 0.05

    model = engine.build_render_model(make_route())
    assert model.viewport.center == Coordinate(14.5995, 120.9842)
    assert model.viewport.lat_span == 0.1


def test_empty_route_frames_custom_path(engine):
    custom = [pt(0, 0), pt(1000, 1000)]
    model = engine.build_render_model(make_route(), custom_path=custom)
    assert all(model.viewport.contains(c) for c in custom)


def test_output_is_deterministic(engine, detour_pair):
    route = make_route(*detour_pair)
    origin, destination = pin(pt(0, -100)), pin(pt(900, 150))
    first = engine.build_render_model(route, origin, destination)
    second = RouteOverlayEngine(Config()).build_render_model(route, origin, destination)
    assert first == second


def test_only_valid_coordinates_are_emitted(engine):
    messy = [Coordinate(0.0, 0.0)] + north_line(0, 300) + [Coordinate(float('nan'), 121.0)]
    bus = make_segment('bus', TransportType.BUS, pt(0, 0), pt(300, 0), messy)
    unset = make_segment('jeep', TransportType.JEEPNEY, Coordinate(0.0, 0.0), pt(800, 0),
                         [Coordinate(float('inf'), 121.0)])

    model = engine.build_render_model(make_route(bus, unset), origin_pin=pin(Coordinate(0.0, 0.0)))

    assert all(is_valid_coordinate(c) for c in all_coordinates(model))


def test_paths_are_anchored_to_their_stops(engine):
    line = north_line(0, 600)
    origin, destination = pt(0, -120), pt(600, 150)
    bus = make_segment('bus', TransportType.BUS, origin, destination, line)

    path = engine.build_render_model(make_route(bus)).segment_paths[0]

    assert distance_meters(path[0], origin) <= 30
    assert distance_meters(path[-1], destination) <= 30


def test_viewport_contains_resolved_paths(engine, detour_pair):
    model = engine.build_render_model(make_route(*detour_pair))
    assert all(model.viewport.contains(c) for path in model.segment_paths for c in path)


def test_none_segments_are_skipped(engine):
    bus = make_segment('bus', TransportType.BUS, pt(0, 0), pt(500, 0))
    model = engine.build_render_model(Route(id='r', segments=(None, bus, None)))
    assert model.segment_ids == ('bus',)
    assert len(model.segment_paths) == 1


def test_coordinate_pins_are_accepted(engine):
    bus = make_segment('bus', TransportType.BUS, pt(0, 0), pt(500, 0))
    model = engine.build_render_model(make_route(bus), origin_pin=pt(0, -100))
    assert model.transfer_markers[0].kind == 'start'
    assert model.transfer_markers[0].location_name == 'Origin'


@pytest.mark.parametrize("route", [None, {'segments': []}, Route(id='r', segments=('not a segment',))])
def test_invalid_route_raises(engine, route):
    with pytest.raises(InvalidRouteError):
        engine.build_render_model(route)


def test_invalid_route_error_is_a_type_error(engine):
    with pytest.raises(TypeError):
        engine.build_render_model(None)
    assert issubclass(InvalidRouteError, OverlayError)


def test_invalid_pin_type_raises(engine):
    with pytest.raises(InvalidRouteError):
        engine.build_render_model(make_route(), origin_pin=(14.6, 121.0))


def test_memoized_engine_reuses_models(detour_pair):
    engine = RouteOverlayEngine(Config(), memo_size=8)
    route = make_route(*detour_pair)

    first = engine.build_render_model(route)
    second = engine.build_render_model(route)

    assert first is second
    assert engine.cache_info().hits == 1
    assert RouteOverlayEngine(Config()).cache_info() is None


def test_module_level_helper(detour_pair):
    model = build_render_model(make_route(*detour_pair))
    assert len(model.segment_paths) == 2
