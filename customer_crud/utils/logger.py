"""
Logging utilities for the customer service

Provides centralized logging configuration.
"""

import copy
import logging
import logging.config
import os
from typing import Optional

import yaml

# Default logging configuration
DEFAULT_LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'detailed': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'json': {
            'format': '{"timestamp": "%(asctime)s", "logger": "%(name)s", "level": "%(levelname)s", "module": "%(module)s", "function": "%(funcName)s", "line": %(lineno)d, "message": "%(message)s"}',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'default',
            'stream': 'ext://sys.stdout'
        }
    },
    'loggers': {
        'customer_crud': {
            'level': 'INFO',
            'handlers': ['console'],
            'propagate': False
        },
        'uvicorn': {
            'level': 'INFO',
            'handlers': ['console'],
            'propagate': False
        }
    },
    'root': {
        'level': 'INFO',
        'handlers': ['console']
    }
}


def load_logging_config(config_path: Optional[str]) -> Optional[dict]:
    """Load a dictConfig mapping from a YAML file, or None if unusable"""
    if not config_path or not os.path.exists(config_path):
        return None

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        print(f"Failed to load logging config from {config_path}: {e}")
        return None

    if not isinstance(config, dict):
        print(f"Ignoring logging config {config_path}: not a mapping")
        return None
    return config


def setup_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None
) -> dict:
    """
    Setup logging configuration

    Args:
        config_path: Path to a YAML logging configuration file
        log_level: Override log level
        log_format: Override log format ('default', 'detailed', 'json')

    Returns:
        The configuration that was applied
    """
    config = load_logging_config(config_path)
    if not config:
        config = copy.deepcopy(DEFAULT_LOGGING_CONFIG)

    if log_level:
        log_level = log_level.upper()
        for logger_config in config.get('loggers', {}).values():
            logger_config['level'] = log_level
        for handler_config in config.get('handlers', {}).values():
            handler_config['level'] = log_level
        if 'root' in config:
            config['root']['level'] = log_level

    if log_format and log_format in config.get('formatters', {}):
        for handler_config in config.get('handlers', {}).values():
            handler_config['formatter'] = log_format

    try:
        logging.config.dictConfig(config)
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        print(f"Failed to configure logging: {e}")
        logging.basicConfig(
            level=getattr(logging, log_level or 'INFO', logging.INFO),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    return config
