# logger_setup.py

import logging
import os
import json

LOGGER_NAME = "fireworks"


def setup_logging(config_path='config.json', log_root='runs'):
    """
    Configures the "fireworks" logger from the 'logging' section of a config file.

    Output always goes to the console. Unless the section sets "to_file" to
    false, it is also written to <log_root>/<run_id>/fireworks.log. The root
    logger is left alone, so pygame's own output never lands in the run log.

    Data Contract:
    - Inputs:
        - config_path (str) - Path to the configuration file.
        - log_root (str) - Directory holding one sub-directory per run.
    - Outputs: logging.Logger - the configured application logger.
    - Side Effects: Replaces the logger's handlers; may create the run directory.
    - Invariants: The config file holds 'run_id' and a 'logging' dictionary
      with 'level' and 'format'.
    """
    with open(config_path, 'r') as f:
        config = json.load(f)

    run_id = config['run_id']
    log_config = config['logging']

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_config['level'])
    logger.propagate = False

    # Re-entry replaces handlers instead of stacking them
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_config['format'])
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = None
    if log_config.get('to_file', True):
        log_dir = os.path.join(log_root, run_id)
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, 'fireworks.log')
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized. Run ID: {run_id}. Log file: {log_file or 'disabled'}")
    return logger
