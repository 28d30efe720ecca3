"""
Service package for the configuration layer.

This package contains the HTTP service components.
"""

from .app import app
from .configuration_service import ConfigurationService

__all__ = ["app", "ConfigurationService"]
