"""
SignFlow Service
Text-to-sign translation and gesture stream aggregation over HTTP and Socket.IO
"""

import logging
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS
from flask_socketio import SocketIO

from .api import SignService, register_socketio_handlers, signflow_api
from .shared.config import LOGGING, SERVICE_CONFIG
from .shared.gesture import GestureAggregator
from .translator import SignTranslator

# Configure logging
logging.basicConfig(
    level=LOGGING['level'],
    format=LOGGING['format'],
    datefmt=LOGGING['date_format']
)
logger = logging.getLogger(__name__)


def create_app(translator: Optional[SignTranslator] = None,
               aggregator: Optional[GestureAggregator] = None,
               load_dictionaries: bool = True) -> Flask:
    """
    Build the Flask app with its SocketIO server.

    Args:
        translator: Translator to serve. None = default translator
        aggregator: Gesture aggregator. None = a fresh one
        load_dictionaries: Load the configured dictionary CSVs at startup
    """
    app = Flask(__name__)
    app.config['SECRET_KEY'] = SERVICE_CONFIG['secret_key']

    # CORS - allow the web client to call us
    CORS(app, resources={r"/*": {"origins": SERVICE_CONFIG['cors_origins']}})

    if translator is None:
        translator = SignTranslator()
    if aggregator is None:
        aggregator = GestureAggregator()

    service = SignService(translator, aggregator)
    app.extensions['signflow'] = service

    if load_dictionaries:
        try:
            if SERVICE_CONFIG['background_load']:
                translator.load_default_dictionaries(background=True)
                logger.info("✓ Dictionary load started")
            else:
                report = translator.load_default_dictionaries()
                logger.info(f"✓ Dictionaries loaded: {report.to_dict()}")
        except OSError as e:
            logger.error(f"✗ Dictionary load failed: {e}")

    app.register_blueprint(signflow_api, url_prefix='/signflow')

    socketio = SocketIO(app, cors_allowed_origins="*")
    register_socketio_handlers(socketio)

    @app.route('/health', methods=['GET'])
    def health():
        """Health check for monitoring"""
        return jsonify({
            'status': 'healthy',
            'service': 'signflow',
            'version': '1.0.0'
        })

    @app.route('/status', methods=['GET'])
    def status():
        """Detailed status"""
        store = service.translator.store
        return jsonify({
            'status': 'operational' if store.is_ready else 'loading',
            'service': 'signflow',
            'dictionaries': store.get_stats(),
            'load_error': str(store.load_error) if store.load_error else None,
            'gesture': service.gesture_state(),
            'endpoints': {
                'signflow': '/signflow',
                'health': '/health'
            }
        })

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal error: {error}")
        return jsonify({'error': 'Internal server error'}), 500

    return app


def main():
    app = create_app()
    socketio = app.extensions['socketio']
    port = SERVICE_CONFIG['port']

    logger.info("=" * 60)
    logger.info("Starting SignFlow Service")
    logger.info("=" * 60)
    logger.info(f"Port: {port}")
    logger.info(f"Endpoints:")
    logger.info(f"  Health:    http://localhost:{port}/health")
    logger.info(f"  Status:    http://localhost:{port}/status")
    logger.info(f"  SignFlow:  http://localhost:{port}/signflow/*")
    logger.info("=" * 60)

    socketio.run(
        app,
        host='0.0.0.0',
        port=port,
        allow_unsafe_werkzeug=True
    )


if __name__ == '__main__':
    main()
