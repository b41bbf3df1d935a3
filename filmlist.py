#!/usr/bin/env python3
"""
FilmList - shared configuration and logging helpers.

Used by both ``film_server.py`` and ``film_cli.py``.
"""

import json
import logging
import os
from typing import Dict, Optional

from dotenv import load_dotenv

DEFAULT_CONFIG: Dict = {
    'host': '127.0.0.1',
    'port': 8001,
    'log_level': 'INFO',
    'log_file': 'logs/film_server.log',
    'api_url': 'http://localhost:8001',
}

# Environment variable -> config key
_ENV_OVERRIDES = {
    'FILMS_HOST': 'host',
    'FILMS_PORT': 'port',
    'FILMS_LOG_LEVEL': 'log_level',
    'FILMS_API_URL': 'api_url',
}


class ConfigError(Exception):
    """Raised when the config file or an override cannot be used."""


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(level: str = 'WARNING') -> logging.Logger:
    """Configure the root FilmList logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to WARNING so normal use is quiet.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, level.upper(), logging.WARNING)
    logger = logging.getLogger('filmlist')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

def load_config(config_path: Optional[str] = 'config.json') -> Dict:
    """Load configuration from a JSON file with environment variable support.

    A missing file is not an error: defaults are used.  Values from ``.env``
    and the process environment take precedence over the file:

    - FILMS_HOST overrides host
    - FILMS_PORT overrides port
    - FILMS_LOG_LEVEL overrides log_level
    - FILMS_API_URL overrides api_url

    Raises:
        ConfigError: The file is not valid JSON, is not an object, or the
            port is not an integer.
    """
    load_dotenv()
    config = dict(DEFAULT_CONFIG)

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Error reading config file '{config_path}': {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file '{config_path}' must contain a JSON object")
        config.update(loaded)

    for env_name, key in _ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            config[key] = value

    try:
        config['port'] = int(config['port'])
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid port: {config['port']!r}") from None
    return config
