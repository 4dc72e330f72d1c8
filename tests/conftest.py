import math

import pytest

from maiwayoverlay.models.route_segments import Coordinate, Location, Route, RouteSegment, TransportType

BASE_LAT = 14.6
BASE_LON = 121.0
M_PER_DEG_LAT = 6371000.0 * math.pi / 180
M_PER_DEG_LON = M_PER_DEG_LAT * math.cos(math.radians(BASE_LAT))


def pt(north_m: float, east_m: float) -> Coordinate:
    """Coordinate offset from a fixed point in Manila by metres north/east"""
    return Coordinate(latitude=BASE_LAT + north_m / M_PER_DEG_LAT,
                      longitude=BASE_LON + east_m / M_PER_DEG_LON)


def north_line(start_m: float, end_m: float, step_m: float = 50.0, east_m: float = 0.0):
    count = int(round((end_m - start_m) / step_m))
    return [pt(start_m + i * step_m, east_m) for i in range(count + 1)]


def make_segment(seg_id, transport_type, origin, destination, geometry=None, mode=None,
                 origin_name=None, destination_name=None):
    return RouteSegment(
        id=seg_id,
        transport_type=transport_type,
        origin=Location(name=origin_name or f"{seg_id} start", coordinates=origin),
        destination=Location(name=destination_name or f"{seg_id} end", coordinates=destination),
        geometry=tuple(geometry) if geometry is not None else None,
        mode=mode,
    )


def make_route(*segments, route_id='r1'):
    return Route(id=route_id, segments=tuple(segments))


def pin(coordinate, name='Pinned'):
    return Location(name=name, coordinates=coordinate)


@pytest.fixture
def detour_pair():
    """BUS leg running 300 m past the next jeepney stop, which is 50 m east of the road"""
    geometry = north_line(0, 450) + [pt(450, 50), pt(400, 50), pt(350, 50)]
    bus = make_segment('bus', TransportType.BUS, geometry[0], geometry[-1], geometry)
    jeep_origin = pt(300, 50)
    jeep = make_segment('jeep', TransportType.JEEPNEY, jeep_origin, pt(900, 50),
                        north_line(300, 900, east_m=50))
    return bus, jeep
