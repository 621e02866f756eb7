"""
FlightMint Flask Application.

Main entry point for the web application. Initializes:
- Flight search service (OpenSky client with response cache)
- API routes
- Error handlers

Usage:
    python -m flightmint.app

Or with gunicorn:
    gunicorn 'flightmint.app:create_app()'
"""

import logging
import os
from typing import Optional

from flask import Flask
from flask_cors import CORS

from flightmint.config import config
from flightmint.api import flight_bp, metrics_bp
from flightmint.errors import FlightMintError
from flightmint.services import FlightSearchService

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(search_service: Optional[FlightSearchService] = None) -> Flask:
    """
    Application factory for Flask.

    Args:
        search_service: Service used to answer flight searches. Defaults
                        to one built from configuration. Tests pass a
                        service wired to a fake HTTP session.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key
    app.config['FLIGHT_SEARCH_SERVICE'] = search_service or FlightSearchService()

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    # Register API blueprints
    app.register_blueprint(flight_bp)
    app.register_blueprint(metrics_bp)

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {'status': 'ok'}

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(FlightMintError)
    def flight_error(e: FlightMintError):
        if e.status_code >= 500:
            logger.error(f'Flight lookup failed: {e}')
        else:
            logger.info(f'Flight lookup rejected: {e}')
        return e.to_dict(), e.status_code

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    port = int(os.environ.get('PORT', 5000))

    logger.info(f'Starting FlightMint on http://localhost:{port}')
    logger.info(f'Flight search: http://localhost:{port}/api/flight?flightNumber=HA92')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.debug,
    )


if __name__ == '__main__':
    run_development_server()
