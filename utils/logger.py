"""
Logging for rircheck
Console output through Rich, plus an optional plain log file
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional
from rich.logging import RichHandler


class RirLogger:
    """Logger with helpers for RIPEstat calls and check steps"""

    def __init__(self, log_path: Optional[str] = None, level: str = "INFO"):
        self.logger = logging.getLogger("rircheck")
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))

        # get_logger may be reset in tests; never stack handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        console_handler = RichHandler(rich_tracebacks=True, markup=False, show_path=False)
        console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.addHandler(console_handler)

        self.log_path = Path(log_path) if log_path else None
        if self.log_path:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.log_path)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            self.logger.addHandler(file_handler)

    def log_api_call(self, endpoint: str, url: str, outcome: Any):
        """Log the classified outcome of a data call"""
        kind = type(outcome).__name__
        call = getattr(outcome, "call", None)
        if kind == "Success":
            self.logger.debug(f"API {endpoint}: ok ({getattr(call, 'http_status', None)})")
            if getattr(call, "status", None) == "maintenance":
                self.logger.warning(f"API {endpoint} is under maintenance")
            if getattr(call, "maturity", None) in ("deprecated", "development"):
                self.logger.warning(f"API {endpoint} is {call.maturity}")
        else:
            self.logger.warning(f"API {endpoint}: {getattr(outcome, 'reason', kind)}")
        self.logger.debug(f"API url: {url}")

    def log_resolution(self, token: str, asn: str):
        """Log how a user supplied resource mapped onto an ASN"""
        if token == asn:
            self.logger.debug(f"Resource {token} is an AS number")
        else:
            self.logger.info(f"Resolved {token} to AS{asn}")

    def log_check_step(self, step: str, resource: Any):
        self.logger.info(f"Check [{step}]: {resource}")

    def info(self, message: str, *args):
        """Standard info logging"""
        self.logger.info(message, *args)

    def warning(self, message: str, *args):
        """Standard warning logging"""
        self.logger.warning(message, *args)

    def error(self, message: str, *args):
        """Standard error logging"""
        self.logger.error(message, *args)

    def exception(self, message: str, *args):
        """Log an exception with traceback (mirrors logging.Logger.exception)."""
        self.logger.exception(message, *args)

    def debug(self, message: str, *args):
        """Standard debug logging"""
        self.logger.debug(message, *args)


# Global logger instance
_logger: Optional[RirLogger] = None


def get_logger(config: Optional[Dict[str, Any]] = None) -> RirLogger:
    """Get or create the global logger instance"""
    global _logger

    if _logger is None:
        if config and "logging" in config:
            log_config = config["logging"] or {}
            _logger = RirLogger(
                log_path=log_config.get("path"),
                level=log_config.get("level", "INFO"),
            )
        else:
            _logger = RirLogger()

    return _logger


def reset_logger():
    """Drop the global logger so the next get_logger call reads the config again"""
    global _logger
    _logger = None
