#!/usr/bin/env python3
"""
Render a provider route file into a map overlay
- Reads a route JSON (the provider's route object, or a full render request)
- Optional origin/destination pins as "LAT,LON"
- Writes the render model as JSON, GeoJSON or encoded polylines
"""

import argparse
import json
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maiwayoverlay import RouteOverlayEngine  # noqa: E402
from maiwayoverlay.exceptions import InvalidCoordinatesError, OverlayError  # noqa: E402
from maiwayoverlay.models.route_segments import Coordinate, Location  # noqa: E402
from maiwayoverlay.renderers import RENDERERS  # noqa: E402
from maiwayoverlay.schemas import parse_route  # noqa: E402


def parse_pin(text, name):
    """Parse "LAT,LON" into a Location"""
    if text is None:
        return None
    try:
        lat_text, lon_text = text.split(',')
        return Location(name=name, coordinates=Coordinate(float(lat_text), float(lon_text)))
    except ValueError as e:
        raise InvalidCoordinatesError(f"{name} must look like LAT,LON, got {text!r}") from e


def load_route(path):
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    # Accept either a bare route or a {"route": ...} request body
    if isinstance(data, dict) and 'route' in data:
        data = data['route']
    return parse_route(data)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render a route into a map overlay")
    parser.add_argument('input', help="Route JSON file")
    parser.add_argument('--origin', help="Origin pin as LAT,LON")
    parser.add_argument('--destination', help="Destination pin as LAT,LON")
    parser.add_argument('--format', choices=['json'] + sorted(RENDERERS), default='geojson')
    parser.add_argument('--output', help="Output file (stdout when omitted)")
    args = parser.parse_args(argv)

    try:
        route = load_route(args.input)
        origin = parse_pin(args.origin, 'Origin')
        destination = parse_pin(args.destination, 'Destination')
        model = RouteOverlayEngine().build_render_model(route, origin, destination)
    except OverlayError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.format == 'json':
        body = model.to_dict()
    else:
        body = RENDERERS[args.format]().render(model, route)

    text = json.dumps(body, indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(text)
        print(f"Wrote {args.format} overlay for route {route.id} to {args.output}", file=sys.stderr)
    else:
        print(text)

    transfers = max((m.number for m in model.transfer_markers), default=0)
    print(f"Segments: {len(model.segment_paths)}, connectors: {len(model.connectors)}, "
          f"transfer markers: {len(model.transfer_markers)} (last #{transfers})", file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
