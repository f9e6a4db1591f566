"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from attend75.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_projection(
    request_id: str,
    action: str,
    classes: int,
    raw_percentage: float,
    effective_percentage: float,
    leaves_applied: int,
    duration_ms: float,
) -> None:
    """Log structured projection outcome for analysis"""
    logging.info(
        "Projection completed",
        extra={
            "request_id": request_id,
            "step": "projection_complete",
            "action": action,
            "classes": classes,
            "raw_percentage": round(raw_percentage, 2),
            "effective_percentage": round(effective_percentage, 2),
            "leaves_applied": leaves_applied,
            "duration_ms": duration_ms,
        },
    )
