"""
Error handling for rircheck

Call failures against RIPEstat are data: they are stored in the context
as error records. Only failures that stop a run altogether are exceptions.
"""

import traceback
from typing import Dict, Any
from datetime import datetime
from pathlib import Path

from utils.logger import get_logger


class RircheckError(Exception):
    """Base exception for rircheck errors"""
    def __init__(self, message: str, error_code: str = None, context: Dict[str, Any] = None):
        super().__init__(message)
        self.error_code = error_code or "RIRCHECK_ERROR"
        self.context = context or {}
        self.timestamp = datetime.now().isoformat()


class InvalidArgument(RircheckError):
    """A resource could not be resolved to an AS number"""
    def __init__(self, token: str, reason: str, **kwargs):
        super().__init__(reason, "INVALID_ARGUMENT", kwargs)
        self.token = token
        self.reason = reason


class ConfigurationError(RircheckError):
    """Invalid configuration or command line values"""
    def __init__(self, key: str, message: str, **kwargs):
        super().__init__(f"{key}: {message}", "CONFIG_ERROR", kwargs)
        self.key = key


class ErrorHandler:
    """Log run-stopping errors and explain what to do about them"""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.logger = get_logger(config)
        save_path = (config.get("output", {}) or {}).get("save_path")
        self.error_log_path = Path(save_path) / "errors.log" if save_path else None

        self.recovery_strategies = {
            InvalidArgument: self._recover_invalid_argument,
            ConfigurationError: self._recover_config_error,
        }

    def handle_error(self, error: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        """Handle and log error with recovery attempt"""
        context = context or {}

        error_info = {
            "type": type(error).__name__,
            "message": str(error),
            "timestamp": datetime.now().isoformat(),
            "context": context,
            "traceback": traceback.format_exc()
        }

        self.logger.error(f"Error occurred: {error_info['type']} - {error_info['message']}")
        self._log_error_to_file(error_info)

        recovery_result = self._attempt_recovery(error, context)

        return {
            "error": error_info,
            "recovery": recovery_result,
            "can_continue": recovery_result.get("success", False)
        }

    def _attempt_recovery(self, error: Exception, context: Dict[str, Any]) -> Dict[str, Any]:
        for exc_type, strategy in self.recovery_strategies.items():
            if isinstance(error, exc_type):
                return strategy(error, context)
        return {"success": False, "reason": "No recovery strategy available"}

    def _recover_invalid_argument(self, error: InvalidArgument, context: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "success": False,
            "reason": f"Cannot resolve {error.token!r}: {error.reason}",
            "suggestion": "Use an AS number (3333 or AS3333), an IP address or an announced prefix"
        }

    def _recover_config_error(self, error: ConfigurationError, context: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "success": False,
            "reason": f"Invalid setting {error.key}",
            "suggestion": "Fix the value in the config file or on the command line"
        }

    def _log_error_to_file(self, error_info: Dict[str, Any]):
        """Append error to the errors log, if an output directory is configured"""
        if not self.error_log_path:
            return
        try:
            self.error_log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.error_log_path, 'a', encoding='utf-8') as f:
                f.write(f"{error_info['timestamp']}: {error_info['type']} - {error_info['message']}\n")
                if error_info.get('context'):
                    f.write(f"Context: {error_info['context']}\n")
                f.write("---\n")
        except OSError as log_error:
            self.logger.warning(f"Failed to log error to file: {log_error}")
