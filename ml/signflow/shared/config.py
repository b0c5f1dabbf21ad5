"""
Shared configuration for the sign translation service.

This module contains centralized configuration used by both the text-to-sign
translator and the gesture stream aggregator so thresholds and paths stay
consistent across the service.
"""

import os
from pathlib import Path

_package_dir = Path(__file__).parent.parent

# Dictionary Matching Configuration
MATCHING_CONFIG = {
    # Fuzzy phrase candidates are accepted only below this distance (0 = exact)
    'phrase_threshold': 0.4,

    # Fuzzy word candidates are accepted only below this distance
    'word_threshold': 0.5,

    # Default number of candidates returned by sign search
    'search_limit': 10,
}

# Sentence Simplifier Configuration
SIMPLIFIER_CONFIG = {
    # Words dropped by the rule-based fallback (no direct sign)
    'stop_words': [
        'is', 'am', 'are', 'the', 'a', 'an', 'of', 'to', 'and',
        'in', 'on', 'do', 'does', 'did', 'have', 'has',
    ],

    # Lexical negation markers
    'negation_words': [
        'not', 'never', "don't", "doesn't", "didn't", "can't", "won't",
    ],

    # Question words recognised only at the start of a sentence
    'question_words': ['what', 'where', 'who', 'when', 'why', 'how'],

    # Punctuation stripped before the fallback split
    'strip_punctuation': '.,!?',

    # Linguistic analyzer: 'nltk' (falls back to rules if unavailable) or 'rules'
    'analyzer': os.getenv('SIGNFLOW_ANALYZER', 'nltk'),
}

# Gesture Stream Configuration
GESTURE_CONFIG = {
    # Events at or below this confidence clear the current label
    'confidence_threshold': 0.7,

    # Maximum number of distinct labels kept in history
    'history_size': 5,

    # Polling cadence of the external gesture source (milliseconds)
    'poll_interval_ms': 300,
}

# Directory Paths
PATHS = {
    'data_dir': str(_package_dir / 'data'),
    'phrases_csv': os.getenv('SIGNFLOW_PHRASES_CSV', str(_package_dir / 'data' / 'phrases.csv')),
    'words_csv': os.getenv('SIGNFLOW_WORDS_CSV', str(_package_dir / 'data' / 'words.csv')),
}

# Service Configuration
SERVICE_CONFIG = {
    'port': int(os.getenv('SIGNFLOW_PORT', 8000)),
    'secret_key': os.getenv('SECRET_KEY', 'dev-secret-key'),
    'cors_origins': [
        'http://localhost:3000',  # Express API
        'http://localhost:5173',  # Vite dev (for direct testing)
    ],
    # Load dictionaries on a background thread at startup
    'background_load': os.getenv('SIGNFLOW_BACKGROUND_LOAD', '1') != '0',
}

# Logging Configuration
LOGGING = {
    'level': os.getenv('SIGNFLOW_LOG_LEVEL', 'INFO'),  # DEBUG, INFO, WARNING, ERROR
    'format': '[signflow] %(asctime)s [%(levelname)s] %(name)s: %(message)s',
    'date_format': '%Y-%m-%d %H:%M:%S',
}
