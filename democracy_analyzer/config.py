"""
Democracy Analyzer Configuration Module
Centralized configuration for the analyzer.
"""

import os
from pathlib import Path

import yaml

# Debug Mode Configuration
DEBUG_MODE = os.environ.get('DEBUG', 'false').lower() == 'true'

# Application Paths
APP_NAME = "DemocracyAnalyzer"
APPDATA_DIR = Path(os.environ.get('APPDATA', os.path.expanduser('~/.config'))) / APP_NAME
MODELS_DIR = APPDATA_DIR / "models"
LOGS_DIR = APPDATA_DIR / "logs"

# Logging Configuration (must precede load_classifier_settings below)
LOG_FILE = LOGS_DIR / "analyzer.log"
LOG_FORMAT = "[%(levelname)s %(asctime)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# Data directory for ML training data
DATA_DIR = APPDATA_DIR / "data"

# Local persistence (directories are created on first write, not at import)
TRAINING_DATA_CSV = DATA_DIR / "training_data.csv"
MODEL_WEIGHTS_PATH = MODELS_DIR / "indicator_classifier.pkl"
TRAINING_DATA_LOAD_LIMIT = 5000  # Rows read back on startup

# Indicator Scoring
CONTEXT_WINDOW = 30           # Characters of context on each side of a match
POINTS_PER_MATCH = 2
MAX_SCORE = 10
NEGATIVE_SENTIMENT_THRESHOLD = -0.2
NEGATIVE_SENTIMENT_BOOST = 1

# Overall risk (mean indicator score), upper bounds are exclusive
RISK_LEVELS = ((2, "Low"), (5, "Moderate"), (8, "High"))
RISK_LEVEL_MAX = "Extreme"

# Sentiment
SENTIMENT_STEP = 0.1

# Training Example Labeling
MIN_PARAGRAPH_LENGTH = 50     # Paragraphs this short are skipped
MIN_SENTENCE_LENGTH = 20      # Sentences shorter than this are skipped
NEGATIVE_SAMPLE_RATE = 0.1    # Chance an unmatched sentence becomes a label-0 example
LABELING_CHUNK_SIZE = 25      # Paragraphs processed between async yield points

# Synthetic training data
SYNTHETIC_SCORE_THRESHOLD = 3
SYNTHETIC_DEFAULT_COUNT = 100

# Vectorizer
VECTOR_SIZE = 50
MIN_TOKEN_LENGTH = 3          # Tokens of length <= 2 are discarded

# Classifier Training
NUM_CLASSES = 5               # 0 = not authoritarian, 1-4 = indicator id
MIN_TRAINING_EXAMPLES = 10
DEFAULT_EPOCHS = 3
DEFAULT_BATCH_SIZE = 8
MAX_EPOCHS = 5                # Caller values are clamped down to this
MAX_BATCH_SIZE = 4
VALIDATION_SPLIT = 0.1

# Key phrase extraction
KEY_PHRASE_MIN_LENGTH = 4
KEY_PHRASE_DEFAULT_COUNT = 5

# --- Classifier Architecture Configuration ---
CLASSIFIER_CONFIG_FILE = Path(__file__).parent / "settings" / "classifier.yaml"

_DEFAULT_CLASSIFIER_SETTINGS = {
    'primary': {
        'hidden_layer_sizes': [32, 16],
        'activation': 'relu',
        'alpha': 0.0001,
    },
    'fallback': {
        'hidden_layer_sizes': [10],
        'activation': 'relu',
        'alpha': 0.0001,
    },
    'learning_rate': 0.001,
}

CLASSIFIER_SETTINGS: dict = {}


def load_classifier_settings(path: Path | None = None) -> dict:
    """
    Load classifier architecture settings from YAML.

    Missing keys fall back to the built-in defaults, and a missing or
    malformed file yields the defaults unchanged.

    Args:
        path: YAML file to read. Defaults to settings/classifier.yaml.

    Returns:
        Dictionary with 'primary', 'fallback' and 'learning_rate' keys.
    """
    path = Path(path) if path else CLASSIFIER_CONFIG_FILE
    settings = {
        'primary': dict(_DEFAULT_CLASSIFIER_SETTINGS['primary']),
        'fallback': dict(_DEFAULT_CLASSIFIER_SETTINGS['fallback']),
        'learning_rate': _DEFAULT_CLASSIFIER_SETTINGS['learning_rate'],
    }
    try:
        with open(path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        loaded = data.get('classifier', {})
        for key in ('primary', 'fallback'):
            settings[key].update(loaded.get(key) or {})
        if 'learning_rate' in loaded:
            settings['learning_rate'] = float(loaded['learning_rate'])
        if DEBUG_MODE:
            from democracy_analyzer.logging_config import debug_log
            debug_log(f"[Config] Loaded classifier settings from {path}")
    except FileNotFoundError:
        if DEBUG_MODE:
            from democracy_analyzer.logging_config import debug_log
            debug_log(f"[Config] WARNING: Classifier config not found at {path}. Using fallback values.")
    except (yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
        from democracy_analyzer.logging_config import debug_log
        debug_log(f"[Config] ERROR: Failed to load or parse classifier config: {e}")

    # Updated in place so modules holding a reference see reloads
    CLASSIFIER_SETTINGS.clear()
    CLASSIFIER_SETTINGS.update(settings)
    return settings


# Load settings on module import
load_classifier_settings()
# --- End Classifier Architecture Configuration ---
