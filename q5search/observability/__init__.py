"""
Observability module.

Provides logging configuration, safe structured logging helpers and
correlation ID tracking.
"""

from q5search.observability.correlation import get_correlation_id, set_correlation_id
from q5search.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
