# logging_config.py
"""
Logging setup for the places backend.

One stdout handler on the root logger; uvicorn's loggers propagate to it so
request logs and application logs share a format.
"""
import logging
import sys


def setup_logging(level: str = "INFO") -> None:
     numeric_level = getattr(logging, level.upper(), logging.INFO)

     root_logger = logging.getLogger()
     while root_logger.handlers:
          root_logger.removeHandler(root_logger.handlers[0])
     root_logger.setLevel(numeric_level)

     handler = logging.StreamHandler(sys.stdout)
     handler.setFormatter(
          logging.Formatter(
               fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
               datefmt="%Y-%m-%d %H:%M:%S",
          )
     )
     root_logger.addHandler(handler)

     for logger_name in ["uvicorn", "uvicorn.error", "uvicorn.access"]:
          log = logging.getLogger(logger_name)
          log.handlers = []
          log.propagate = True

     logging.getLogger("azure").setLevel(logging.WARNING)
     logging.getLogger("urllib3").setLevel(logging.WARNING)
