import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: Optional[str] = None, level: Optional[str] = None, default: str = "WARNING") -> logging.Logger:
	"""
	Configure a logger from LOG_LEVEL (or ``level`` when given). Falls back to ``default``.
	"""
	level_name = (level or os.getenv("LOG_LEVEL") or default).upper()
	log_level = getattr(logging, level_name, logging.WARNING)

	handler = logging.StreamHandler(sys.stderr)
	handler.setFormatter(logging.Formatter(LOG_FORMAT))

	logger = logging.getLogger(name)
	logger.setLevel(log_level)
	logger.handlers = []  # Clear existing handlers
	logger.addHandler(handler)
	return logger
