"""
Exceptions raised while configuring or rendering a detail view.
"""

import logging
from typing import Optional

from .const import LOGMSG_ERR_CONFIG

log = logging.getLogger(__name__)


class DetailViewError(Exception):
    """Base exception for the detail view extension."""


class ConfigurationError(DetailViewError):
    """
    Raised when an attribute specification, a widget option or an
    input kind is invalid.

    The whole render is aborted, nothing is emitted for the widget.
    """

    def __init__(self, message: str, attribute: Optional[str] = None):
        """
        Args:
            message: Human readable description of the problem
            attribute: Name of the offending attribute, when known
        """
        super().__init__(message)
        self.message = message
        self.attribute = attribute
        log.debug(LOGMSG_ERR_CONFIG.format(message))

    def __str__(self):
        return self.message
