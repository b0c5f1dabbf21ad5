"""
SignFlow API endpoints.

REST endpoints for text-to-sign translation and the gesture stream, plus
Socket.IO handlers for pushing classifier predictions.
"""

import logging
import threading
from typing import Dict

from flask import Blueprint, current_app, jsonify, request
from flask_socketio import emit

from .shared.classifier import ClassifierAdapter, now_ms
from .shared.gesture import GestureAggregator, GestureEvent
from .translator import DictionaryNotReady, SignTranslator

logger = logging.getLogger(__name__)

signflow_api = Blueprint('signflow_api', __name__)


class SignService:
    """Per-process service state shared by HTTP and Socket.IO handlers."""

    def __init__(self, translator: SignTranslator, aggregator: GestureAggregator):
        self.translator = translator
        self.aggregator = aggregator
        # The aggregator is single-context; requests arrive on many threads
        self.gesture_lock = threading.Lock()

    def observe(self, data: Dict) -> Dict:
        """
        Feed one gesture payload into the aggregator.

        Accepts {label, confidence, timestamp} or a recognition engine
        prediction {predicted_sign, confidence (0-100)}.

        Raises:
            ValueError: for malformed payloads
        """
        event = parse_gesture_event(data)
        with self.gesture_lock:
            if event is not None:
                self.aggregator.observe(event)
            snapshot = self.aggregator.snapshot()
        snapshot['observed'] = event is not None
        return snapshot

    def start_gestures(self) -> Dict:
        with self.gesture_lock:
            self.aggregator.start()
            return self.aggregator.snapshot()

    def stop_gestures(self) -> Dict:
        with self.gesture_lock:
            self.aggregator.stop()
            return self.aggregator.snapshot()

    def gesture_state(self) -> Dict:
        with self.gesture_lock:
            return self.aggregator.snapshot()


def parse_gesture_event(data: Dict):
    """Build a GestureEvent from a request payload (None for unusable predictions)."""
    if not isinstance(data, dict):
        raise ValueError('JSON object required')

    timestamp = data.get('timestamp')
    if timestamp is None:
        timestamp = now_ms()
    try:
        timestamp = int(timestamp)
    except (TypeError, ValueError):
        raise ValueError('timestamp must be an integer (milliseconds)')

    if 'predicted_sign' in data:
        return ClassifierAdapter.from_prediction(data, timestamp)

    label = data.get('label')
    if not label or not isinstance(label, str):
        raise ValueError('label required')

    try:
        confidence = float(data.get('confidence'))
    except (TypeError, ValueError):
        raise ValueError('confidence must be a number')

    return GestureEvent(label=label, confidence=confidence, timestamp_ms=timestamp)


def get_service() -> SignService:
    return current_app.extensions['signflow']


def _error(message: str, status: int):
    return jsonify({'success': False, 'error': message}), status


@signflow_api.errorhandler(DictionaryNotReady)
def dictionary_not_ready(error):
    return _error(str(error), 503)


# ========== TEXT TO SIGN ENDPOINTS ==========

@signflow_api.route('/simplify', methods=['POST'])
def simplify_text():
    """
    Simplify a sentence to sign tokens.

    Request body:
        {'text': 'The cat chases the mouse'}

    Returns:
        {'success': True, 'tokens': ['cat', 'mouse', 'chase']}
    """
    data = request.get_json(silent=True) or {}
    text = data.get('text')
    if not isinstance(text, str):
        return _error('text required', 400)

    tokens = get_service().translator.simplify(text)
    return jsonify({'success': True, 'tokens': tokens})


@signflow_api.route('/translate', methods=['POST'])
def translate_text():
    """
    Translate a sentence to sign assets.

    Request body:
        {'text': 'I am not happy'}

    Returns:
        {'success': True, 'translation': {...}}
    """
    data = request.get_json(silent=True) or {}
    text = data.get('text')
    if not isinstance(text, str):
        return _error('text required', 400)

    try:
        translation = get_service().translator.translate(text)
    except DictionaryNotReady:
        raise
    except Exception as e:
        logger.exception(f"Translation failed: {e}")
        return _error(str(e), 500)

    return jsonify({'success': True, 'translation': translation})


@signflow_api.route('/translate/batch', methods=['POST'])
def translate_batch():
    """Translate a list of sentences: {'texts': [...]}."""
    data = request.get_json(silent=True) or {}
    texts = data.get('texts')
    if not isinstance(texts, list) or not all(isinstance(t, str) for t in texts):
        return _error('texts must be a list of strings', 400)

    translations = get_service().translator.translate_batch(texts)
    return jsonify({'success': True, 'translations': translations, 'count': len(translations)})


@signflow_api.route('/signs', methods=['GET'])
def list_signs():
    """List all phrase and word keys."""
    signs = get_service().translator.get_available_signs()
    return jsonify({'success': True, 'signs': signs})


@signflow_api.route('/signs/search', methods=['GET'])
def search_signs():
    """
    Search signs by fuzzy match.

    Query parameters:
        - q: Search text (required)
        - limit: Maximum results
    """
    query = request.args.get('q')
    if not query:
        return _error('q required', 400)
    limit = request.args.get('limit', type=int)

    results = get_service().translator.store.search(query, limit)
    return jsonify({'success': True, 'results': results, 'count': len(results)})


# ========== GESTURE STREAM ENDPOINTS ==========

@signflow_api.route('/gesture', methods=['GET'])
def gesture_state():
    """Current recognised gesture and recent history."""
    return jsonify({'success': True, 'gesture': get_service().gesture_state()})


@signflow_api.route('/gesture/start', methods=['POST'])
def gesture_start():
    return jsonify({'success': True, 'gesture': get_service().start_gestures()})


@signflow_api.route('/gesture/stop', methods=['POST'])
def gesture_stop():
    return jsonify({'success': True, 'gesture': get_service().stop_gestures()})


@signflow_api.route('/gesture/observe', methods=['POST'])
def gesture_observe():
    """
    Push one classifier prediction.

    Request body:
        {'label': 'wave', 'confidence': 0.92, 'timestamp': 1700000000000}
    """
    data = request.get_json(silent=True)
    try:
        snapshot = get_service().observe(data)
    except ValueError as e:
        return _error(str(e), 400)

    return jsonify({'success': True, 'gesture': snapshot})


def register_socketio_handlers(socketio):
    """Register gesture stream handlers on a SocketIO server."""

    @socketio.on('gesture')
    def handle_gesture(data):
        try:
            snapshot = get_service().observe(data)
        except ValueError as e:
            emit('gesture_error', {'success': False, 'error': str(e)})
            return
        emit('gesture_state', snapshot)

    @socketio.on('gesture_stop')
    def handle_gesture_stop(data=None):
        emit('gesture_state', get_service().stop_gestures())
