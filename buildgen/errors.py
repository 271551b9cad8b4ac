"""
Exception hierarchy for structure generation.

Configuration errors mean the model path is unavailable and the caller should
use the fallback structure. Upstream errors mean the single model call failed.
Validation errors mean the structure itself is unusable.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class BuildGenError(Exception):
    """Base exception for all generation errors"""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ConfigurationError(BuildGenError):
    """Service is misconfigured (unknown profile, unreadable block list, ...)"""


class ModelNotConfiguredError(ConfigurationError):
    """No credential for the model API; use the fallback generator instead"""


class UpstreamError(BuildGenError):
    """The model API call did not produce a usable payload"""


class UpstreamRequestError(UpstreamError):
    """Transport failure, non-200 status or an unexpected response envelope"""


class ModelOutputError(UpstreamError):
    """Model text could not be parsed as JSON"""


class StructureValidationError(BuildGenError):
    """Structure is missing required fields or breaks a strict content rule"""

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.errors = errors or []
