"""
JSON file helpers used by the configuration layer.
"""

import json
import os
from typing import Any

from stat_engine.utils.logging_config import get_logger

logger = get_logger(__name__)


def save_json(obj: Any, file_path: str, pretty: bool = True) -> None:
    """Save an object to a JSON file, creating parent directories as needed."""
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    try:
        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(obj, f, indent=2 if pretty else None, sort_keys=pretty)
    except (OSError, TypeError) as e:
        logger.error(f"Error saving JSON to {file_path}: {e}")
        raise


def load_json(file_path: str) -> Any:
    """Load an object from a JSON file."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading JSON from {file_path}: {e}")
        raise
