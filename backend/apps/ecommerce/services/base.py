"""
Base service class for storefront functionality
"""

import logging
from typing import Dict, Optional


class BaseEcommerceService:
    """Base service class for all e-commerce services"""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__)

    def log_info(self, message: str, context: Optional[Dict] = None):
        """Log informational message with context"""
        self.logger.info(message, extra={'context': context or {}})

    def log_warning(self, message: str, context: Optional[Dict] = None):
        """Log warning message with context"""
        self.logger.warning(message, extra={'context': context or {}})

    def log_error(self, message: str, error: Optional[Exception] = None, context: Optional[Dict] = None):
        """Log error message with context"""
        self.logger.error(
            message,
            extra={
                'context': context or {},
                'error': str(error) if error else None
            },
            exc_info=bool(error)
        )
