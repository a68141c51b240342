"""
Structured logging setup.
"""
import logging
import sys
import json
from datetime import datetime, timezone

from ecs_catalog.config import config


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter."""
    
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }
        
        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        
        # Add extra fields from record
        if hasattr(record, "extra"):
            log_data.update(record.extra)
        
        return json.dumps(log_data)


def setup_logger(name: str = "ecs_catalog") -> logging.Logger:
    """
    Attach JSON output on stdout to a logger.
    Called by the embedding application; importing the package adds no output.
    """
    logger = logging.getLogger(name)
    logger.setLevel(config.LOG_LEVEL.upper())
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter())
    
    # Replace handlers so repeated setup does not duplicate output
    logger.handlers.clear()
    logger.addHandler(console_handler)
    
    return logger


# Package logger; silent until the application configures logging
logger = logging.getLogger("ecs_catalog")
logger.addHandler(logging.NullHandler())
