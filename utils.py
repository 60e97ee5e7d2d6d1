# utils.py
"""
Utility functions for the simulation framework.

Logging setup and configuration loading: helpers used by the entry point
that do not belong to the physics or the rendering.
"""
import logging
import logging.handlers
import json
import os
from typing import Any, Dict, List

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary with an optional "logging" key holding "level",
#       "format", "log_file" (null disables the file), "console", "max_bytes"
#       and "backup_count".
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates the log
#     directory if needed. Replaces any existing root handlers with the
#     console and/or rotating file handlers the config enables.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The parsed JSON object.
#   - Side Effects: Logs and re-raises FileNotFoundError, JSONDecodeError,
#     and ValueError if the top level is not an object.
#
# config_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
#   - Outputs: The named section, or {} if absent.
#   - Invariants: Raises ValueError if the section is not an object.

DEFAULT_LOG_LEVEL = 'INFO'
# Module names tell physics (forces, particle) apart from the window code.
DEFAULT_LOG_FORMAT = '%(asctime)s [%(levelname)s] %(module)s: %(message)s'
DEFAULT_LOG_FILE = 'logs/particle_sim.log'
DEFAULT_LOG_MAX_BYTES = 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 5


def _build_handlers(log_config: Dict[str, Any]) -> List[logging.Handler]:
    """Creates the console and rotating file handlers the config asks for."""
    handlers: List[logging.Handler] = []
    if log_config.get('console', True):
        handlers.append(logging.StreamHandler())

    # A null log_file keeps the simulation from writing to disk.
    log_file_path = log_config.get('log_file', DEFAULT_LOG_FILE)
    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file_path,
            maxBytes=log_config.get('max_bytes', DEFAULT_LOG_MAX_BYTES),
            backupCount=log_config.get('backup_count', DEFAULT_LOG_BACKUP_COUNT)
        ))
    return handlers


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the root logger from the "logging" section of the config.

    Every frame of the simulation runs through the same process, so a single
    root configuration covers the physics modules and the window alike.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', DEFAULT_LOG_LEVEL).upper()
    formatter = logging.Formatter(log_config.get('format', DEFAULT_LOG_FORMAT))

    logger = logging.getLogger()
    logger.setLevel(log_level)
    # Clear existing handlers to avoid duplication
    logger.handlers.clear()

    handlers = _build_handlers(log_config)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logging.info(f"Logging system initialized with {len(handlers)} handler(s).")
    logging.debug(f"Log level set to {log_level}.")


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

    if not isinstance(config, dict):
        msg = f"Configuration in {path} must be a JSON object, got {type(config).__name__}."
        logging.error(msg)
        raise ValueError(msg)

    logging.info("Configuration loaded successfully.")
    return config


def config_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Returns one section of the config, empty if it is missing."""
    section = config.get(name, {})
    if not isinstance(section, dict):
        msg = f"Configuration section '{name}' must be a JSON object."
        logging.critical(msg)
        raise ValueError(msg)
    return section
