import polyline
import pytest

from maiwayoverlay.exceptions import PayloadError
from maiwayoverlay.models.route_segments import Coordinate, TransportType
from maiwayoverlay.schemas import parse_render_request, parse_route

STOP_A = {'name': 'Doroteo Jose', 'coordinates': {'latitude': 14.6052, 'longitude': 120.9820}}
STOP_B = {'name': 'Carriedo', 'coordinates': {'lat': 14.5993, 'lng': 120.9813}}


def provider_route(**segment_overrides):
    segment = {
        'id': 'seg-1',
        'transportType': 'train',
        'mode': 'lrt',
        'routeName': 'LRT-1',
        'origin': STOP_A,
        'destination': STOP_B,
        'geometry': [[14.6052, 120.9820], {'lat': 14.6020, 'lon': 120.9816}, [14.5993, 120.9813]],
        'estimatedTime': 4,
        'fare': 15,
    }
    segment.update(segment_overrides)
    return {'id': 'trip', 'segments': [segment], 'totalFare': 15, 'totalTransfers': 0}


def test_parse_provider_route():
    route = parse_route(provider_route())
    segment = route.segments[0]

    assert route.id == 'trip'
    assert route.total_fare == 15
    assert segment.id == 'seg-1'
    assert segment.transport_type is TransportType.TRAIN
    assert segment.mode == 'lrt'
    assert segment.mode_key == 'lrt'
    assert segment.route_name == 'LRT-1'
    assert segment.estimated_time == 4
    assert segment.origin.coordinates == Coordinate(14.6052, 120.9820)
    assert segment.destination.coordinates == Coordinate(14.5993, 120.9813)
    assert segment.geometry[1] == Coordinate(14.6020, 120.9816)


def test_encoded_polyline_geometry_is_decoded():
    points = [(14.6052, 120.9820), (14.6020, 120.9816), (14.5993, 120.9813)]
    route = parse_route(provider_route(geometry=polyline.encode(points, 5)))
    decoded = route.segments[0].geometry
    assert len(decoded) == 3
    for coordinate, (lat, lon) in zip(decoded, points):
        assert coordinate.latitude == pytest.approx(lat, abs=1e-5)
        assert coordinate.longitude == pytest.approx(lon, abs=1e-5)


def test_backend_segment_shape():
    route = parse_route({'segments': [{
        'mode': 'Jeep',
        'route_id': 'Quiapo - Divisoria',
        'from_stop': {'name': 'Quiapo', 'lat': 14.5986, 'lon': 120.9837},
        'to_stop': {'name': 'Divisoria', 'lat': 14.6030, 'lon': 120.9730},
        'polyline': [[14.5986, 120.9837], [14.6030, 120.9730]],
    }]})
    segment = route.segments[0]

    assert route.id == 'route'
    assert segment.id == 's1'
    assert segment.transport_type is TransportType.JEEPNEY
    assert segment.mode_key == 'jeep'
    assert segment.route_name == 'Quiapo - Divisoria'
    assert segment.origin.name == 'Quiapo'
    assert segment.origin.coordinates == Coordinate(14.5986, 120.9837)


@pytest.mark.parametrize("raw, expected", [
    ('walking', TransportType.WALK),
    ('BUS', TransportType.BUS),
    ('uv', TransportType.UV_EXPRESS),
    ('mrt', TransportType.TRAIN),
    ('tricycle', TransportType.OTHER),
    (None, TransportType.OTHER),
])
def test_transport_type_from_raw(raw, expected):
    assert TransportType.from_raw(raw) is expected


def test_null_segments_survive_parsing():
    data = provider_route()
    data['segments'] = [None] + data['segments']
    route = parse_route(data)
    assert route.segments[0] is None
    assert route.segments[1].id == 'seg-1'


def test_missing_origin_is_reported():
    data = provider_route()
    del data['segments'][0]['origin']
    with pytest.raises(PayloadError) as exc_info:
        parse_route(data)
    assert exc_info.value.errors
    assert 'origin' in exc_info.value.errors[0]['loc']


def test_render_request():
    request = parse_render_request({
        'route': provider_route(),
        'origin': {'name': 'Home', 'lat': 14.6100, 'lon': 120.9850},
        'customPath': [[14.61, 120.985], [14.60, 120.982]],
        'format': 'geojson',
    })

    assert request.format == 'geojson'
    assert request.origin_location().name == 'Home'
    assert request.destination_location() is None
    assert request.custom_coordinates()[0] == Coordinate(14.61, 120.985)
    assert request.route.to_domain().segments[0].id == 'seg-1'


def test_render_request_rejects_bad_input():
    with pytest.raises(PayloadError):
        parse_render_request(['not', 'an', 'object'])
    with pytest.raises(PayloadError):
        parse_render_request({'route': provider_route(), 'format': 'svg'})
