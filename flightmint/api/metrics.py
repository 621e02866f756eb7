"""
Metrics API endpoints.

Provides endpoints for:
- GET /api/metrics/cache - Upstream response cache statistics
"""

from datetime import datetime, timezone

from flask import Blueprint, jsonify, current_app

metrics_bp = Blueprint('metrics', __name__, url_prefix='/api/metrics')


@metrics_bp.route('/cache', methods=['GET'])
def get_cache_metrics():
    """
    Get statistics for the OpenSky response cache.

    Returns entry count, hits, misses, hit rate and the freshness window.
    """
    service = current_app.config['FLIGHT_SEARCH_SERVICE']

    return jsonify({
        'cache': service.client.cache.stats,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })
