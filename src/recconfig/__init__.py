"""
Recommender algorithm configuration package.

This package loads configuration scripts that name a recommender module and
tune its parameters, and validates them against the host's component catalog.
"""

from utils.common_utils import get_logger

logger = get_logger(__name__)

from recconfig.core import ConfigurationError, ConfigurationRecord, ComponentReference
from recconfig.components import ComponentRegistry, default_registry
from recconfig.algorithm import AlgorithmInstance
from recconfig.loader import load_algorithm, load_algorithms, parse_script, render_script

__version__ = "0.1.0"

__all__ = [
    "AlgorithmInstance",
    "ComponentReference",
    "ComponentRegistry",
    "ConfigurationError",
    "ConfigurationRecord",
    "default_registry",
    "load_algorithm",
    "load_algorithms",
    "parse_script",
    "render_script",
]
