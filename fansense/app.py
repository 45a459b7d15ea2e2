"""
FanSense Flask Application.

Main entry point for the web application. Initializes:
- Database schema
- Latest reading cache
- API routes

Usage:
    python -m fansense.app

Or with gunicorn:
    gunicorn 'fansense.app:create_app()'
"""

import logging
import os

from flask import Flask
from flask_cors import CORS

from fansense.config import config
from fansense.models import init_db
from fansense.api import sensor_data_bp, historical_data_bp, analytics_bp
from fansense.cache import LatestReadingCache

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app() -> Flask:
    """
    Application factory for Flask.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key

    # The dashboard front end is served from another origin
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    # Initialize database
    logger.info('Initializing database...')
    init_db()

    # One cache per app; the sensor POST handler is its only writer
    app.extensions['latest_reading'] = LatestReadingCache()

    # Register API blueprints
    app.register_blueprint(sensor_data_bp)
    app.register_blueprint(historical_data_bp)
    app.register_blueprint(analytics_bp)

    @app.route('/health')
    def health():
        """Health check with live reading cache statistics."""
        return {
            'status': 'ok',
            'cache': app.extensions['latest_reading'].stats,
        }

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

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

    logger.info(f'Starting FanSense on http://localhost:{port}')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.debug,
    )


if __name__ == '__main__':
    run_development_server()
