#!/usr/bin/env python3
"""
MaiWay Overlay Engine - Flask Web API Blueprint
Turns provider routes into map overlays for the web and WebView renderers
"""

import math
import time
from typing import Optional

from flask import Blueprint, jsonify, request

from maiwayoverlay import RouteOverlayEngine
from maiwayoverlay.config import config
from maiwayoverlay.exceptions import OverlayError, PayloadError
from maiwayoverlay.logger import logger
from maiwayoverlay.renderers import RENDERERS
from maiwayoverlay.schemas import parse_render_request

overlay_bp = Blueprint('overlay_bp', __name__)

# Global engine instance
overlay_engine: Optional[RouteOverlayEngine] = None


def initialize_overlay_engine():
    global overlay_engine
    try:
        config.validate()
        overlay_engine = RouteOverlayEngine(config, memo_size=config.render_cache_size)
        logger.info("Overlay engine initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize overlay engine: {e}")
        raise


# Call this ONCE at startup
initialize_overlay_engine()


def clean_nan_values(obj):
    """Recursively clean NaN values from objects to make them JSON serializable"""
    if isinstance(obj, dict):
        return {k: clean_nan_values(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [clean_nan_values(item) for item in obj]
    elif isinstance(obj, float) and (math.isnan(obj) or math.isinf(obj)):
        return None
    else:
        return obj


@overlay_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    if overlay_engine is None:
        return jsonify({'status': 'error', 'message': 'Overlay engine not initialized'}), 500

    return jsonify({
        'status': 'healthy',
        'message': 'MaiWay Overlay Engine is running',
        'timestamp': time.time()
    })


@overlay_bp.route('/', methods=['GET'])
def index():
    """Root endpoint"""
    return jsonify({
        'name': 'MaiWay Overlay Engine',
        'version': '1.0.0',
        'description': 'Route geometry annotation for multi-modal trip maps',
        'formats': ['json'] + sorted(RENDERERS),
        'endpoints': {
            'health': '/overlay/health',
            'render': '/overlay/render'
        }
    })


@overlay_bp.route('/render', methods=['POST'])
def render():
    """Build the render model for a provider route"""
    started = time.perf_counter()
    route_id = None
    segment_count = 0
    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'error': 'Request body must be JSON'}), 400

        payload = parse_render_request(data)
        route = payload.route.to_domain()
        route_id = route.id
        segment_count = len(route.segments)

        model = overlay_engine.build_render_model(
            route,
            origin_pin=payload.origin_location(),
            destination_pin=payload.destination_location(),
            custom_path=payload.custom_coordinates(),
        )

        if payload.format == 'json':
            body = model.to_dict()
        else:
            body = RENDERERS[payload.format]().render(model, route)

        logger.log_render_request(route_id, segment_count,
                                  (time.perf_counter() - started) * 1000, True)
        return jsonify(clean_nan_values(body))
    except PayloadError as e:
        logger.warning(f"/render: {e}")
        return jsonify({'error': str(e), 'details': clean_nan_values(e.errors)}), 400
    except OverlayError as e:
        logger.warning(f"/render: {e}")
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.log_render_request(str(route_id), segment_count,
                                  (time.perf_counter() - started) * 1000, False)
        logger.error(f"/render error: {e}")
        return jsonify({'error': 'Internal server error'}), 500
