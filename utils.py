# utils.py
"""
Utility functions for the particle ring application.

This module provides helpers that are used across the application but do
not belong to the physics or rendering code: logging setup, configuration
loading, and the clamping applied to control values before they reach
the simulation.
"""
import logging
import logging.handlers
import json
import math
import os
from typing import Dict, Any

from constants import MIN_PARTICLES, MAX_PARTICLES, MIN_REPULSE_FORCE, MAX_REPULSE_FORCE

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys. All are optional.
#   - Side Effects: Configures the root Python logger with a console
#     handler and a rotating file handler. Creates the log directory.
#
# clamp_particle_count(value) -> int:
#   - Never raises. Non-numeric input maps to MIN_PARTICLES.
#   - Output is always within [MIN_PARTICLES, MAX_PARTICLES].
#
# clamp_repulse_force(value) -> float:
#   - Never raises. Non-numeric input and NaN map to MIN_REPULSE_FORCE.
#   - Output is always within [MIN_REPULSE_FORCE, MAX_REPULSE_FORCE].

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/particle_ring.log')

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotates when the log reaches 1MB, keeps 5 backup logs.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")

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

def clamp_particle_count(value: Any) -> int:
    """
    Coerces a requested particle count into the allowed range.

    Accepts ints, floats and numeric strings; anything unparseable counts
    as the minimum.
    """
    try:
        count = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return MIN_PARTICLES
    return max(MIN_PARTICLES, min(MAX_PARTICLES, count))

def clamp_repulse_force(value: Any) -> float:
    """Coerces a requested repulsion multiplier into the allowed range."""
    try:
        force = float(value)
    except (TypeError, ValueError):
        return MIN_REPULSE_FORCE
    if math.isnan(force):
        return MIN_REPULSE_FORCE
    return max(MIN_REPULSE_FORCE, min(MAX_REPULSE_FORCE, force))
