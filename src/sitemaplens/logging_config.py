# SitemapLens — Logging configuration (rotating file + stdout)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import logging.handlers
import os

NOISY_LOGGERS = ("urllib3", "requests")


def configure_logging(level: str = "INFO", log_dir: str = "logs") -> None:
	"""Configure the sitemaplens logger with a rotating file handler and stdout.

	One line per record: time, level, logger and message, tab separated.
	HTTP library loggers stay at WARNING unless ``level`` is DEBUG.
	"""
	os.makedirs(log_dir, exist_ok=True)
	log_path = os.path.join(log_dir, "sitemaplens.log")
	numeric = getattr(logging, level.upper(), logging.INFO)

	fmt = logging.Formatter("%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s")

	logger = logging.getLogger("sitemaplens")
	logger.setLevel(numeric)
	logger.propagate = False

	# Clear existing handlers in case of re-init
	for h in list(logger.handlers):
		logger.removeHandler(h)
		h.close()

	stream = logging.StreamHandler()
	stream.setFormatter(fmt)
	logger.addHandler(stream)

	file_handler = logging.handlers.RotatingFileHandler(
		log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
	)
	file_handler.setFormatter(fmt)
	logger.addHandler(file_handler)

	for name in NOISY_LOGGERS:
		logging.getLogger(name).setLevel(logging.DEBUG if numeric <= logging.DEBUG else logging.WARNING)
