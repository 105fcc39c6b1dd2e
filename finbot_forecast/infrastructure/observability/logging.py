"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = "finbot-forecast", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "finbot-forecast") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_scenario_analysis(
    request_id: str,
    scenario: str,
    risk_level: str,
    projected_balance: float,
    months_to_project: int,
    duration_ms: float,
) -> None:
    """Log structured scenario analysis outcome"""
    logging.info(
        "Scenario analysis completed",
        extra={
            "request_id": request_id,
            "scenario": scenario,
            "step": "scenario_analysis_complete",
            "risk_level": risk_level,
            "projected_balance": projected_balance,
            "months_to_project": months_to_project,
            "duration_ms": duration_ms,
        },
    )
