import logging
import os
import sys
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(level: str = "INFO", log_file: Optional[str] = None, name: str = "relay") -> logging.Logger:
	"""Attach stdout (and optionally file) handlers to the `relay` logger once."""
	logger = logging.getLogger(name)
	logger.setLevel(level)
	if not logger.handlers:
		sh = logging.StreamHandler(sys.stdout)
		sh.setFormatter(logging.Formatter(LOG_FORMAT))
		logger.addHandler(sh)
		if log_file:
			folder = os.path.dirname(log_file)
			if folder:
				os.makedirs(folder, exist_ok=True)
			fh = logging.FileHandler(log_file)
			fh.setFormatter(logging.Formatter(LOG_FORMAT))
			logger.addHandler(fh)
	return logger
