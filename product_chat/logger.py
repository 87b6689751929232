# product_chat/logger.py

import logging
from logging.handlers import RotatingFileHandler
import os
import sys
import json
from datetime import datetime, timezone
from typing import Optional

# env -> (root level, log file name, file level, max bytes, backups)
LOG_PROFILES = {
  "testing": (logging.DEBUG, "test.log", logging.DEBUG, 1*1024*1024, 1),
  "development": (logging.DEBUG, "app.log", logging.INFO, 5*1024*1024, 3),
  "production": (logging.INFO, "app.log", logging.INFO, 5*1024*1024, 3),
}


class JsonFormatter(logging.Formatter):
  """One JSON object per line, with the call site and any traceback."""
  def format(self, record):
    log_record = {
      "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
      "level": record.levelname,
      "logger": record.name,
      "message": record.getMessage(),
      "module": record.module,
      "line": record.lineno,
      "function": record.funcName,
      "thread": record.threadName,
    }

    if record.exc_info:
      log_record["exception"] = self.formatException(record.exc_info)

    return json.dumps(log_record)


json_formatter = JsonFormatter()

def configure_logging(env: Optional[str] = None, log_dir: Optional[str] = None):
  """
  Install the JSON handlers on the root logger, replacing any present.

  ERROR and above also go to stdout. The file handler depends on APP_ENV:
  test.log at DEBUG while testing, app.log at INFO otherwise.
  """
  env = env or os.getenv("APP_ENV", "development")
  log_dir = log_dir or os.getenv("LOG_DIR", "logs")
  root_level, file_name, file_level, max_bytes, backups = LOG_PROFILES.get(env, LOG_PROFILES["production"])

  os.makedirs(log_dir, exist_ok=True)

  logger = logging.getLogger()
  logger.setLevel(root_level)
  if logger.hasHandlers():
    logger.handlers.clear()

  console_handler = logging.StreamHandler(sys.stdout)
  console_handler.setFormatter(json_formatter)
  console_handler.setLevel(logging.ERROR)
  logger.addHandler(console_handler)

  file_handler = RotatingFileHandler(os.path.join(log_dir, file_name), maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
  file_handler.setFormatter(json_formatter)
  file_handler.setLevel(file_level)
  logger.addHandler(file_handler)

  # requests/openai are chatty at DEBUG
  for noisy in ("urllib3", "httpx", "openai"):
    logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name):
  """Module logger; configure_logging() should have run first."""
  return logging.getLogger(name)
