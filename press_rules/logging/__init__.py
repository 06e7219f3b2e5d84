"""
Logging configuration and utilities for the press rules engine.
"""
from .config import configure_logging, get_logger, get_settlement_logger

__all__ = ["configure_logging", "get_logger", "get_settlement_logger"]
