"""
Core module - Contains configuration, logging, errors and base components.
"""

from ecvault.core.config import SecureConfig
from ecvault.core.logging import get_secure_logger, SecureLogFilter

__all__ = ["SecureConfig", "get_secure_logger", "SecureLogFilter"]
