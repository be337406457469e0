# logger_setup.py

import json
import logging
import os

LOGGER_NAME = "fireworks"


def load_config(config_path='config.json') -> dict:
    """Reads the run configuration; the single place config.json is parsed."""
    with open(config_path, 'r') as f:
        return json.load(f)


def setup_logging(config: dict, log_root='runs') -> logging.Logger:
    """
    Configures the show's dedicated logger from the run configuration.

    Output goes to the console and to <log_root>/<run_id>/show.log. The
    logger does not propagate, so pygame and anything else logging through
    the root logger stays out of the show log.

    Data Contract:
    - Inputs:
        - config (dict): The loaded run configuration. Needs 'run_id' and a
          'logging' dictionary with 'level' and 'format'.
        - log_root (str): Directory that holds one folder per run.
    - Outputs: logging.Logger - The configured "fireworks" logger.
    - Side Effects: Creates the run's log directory.
    - Invariants: Calling it again replaces the handlers instead of adding more.
    """
    run_id = config['run_id']
    log_config = config['logging']

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_config['level'])
    logger.propagate = False

    log_dir = os.path.join(log_root, run_id)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'show.log')

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_config['format'])
    for handler in (logging.FileHandler(log_file), logging.StreamHandler()):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized. Run ID: {run_id}. Log file: {log_file}")
    return logger
