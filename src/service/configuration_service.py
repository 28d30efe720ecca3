"""
Configuration service layer.

This module provides a service layer that interfaces with the configuration loader.
"""

from typing import Dict, List, Optional

from utils.common_utils import get_logger
from recconfig.algorithm import AlgorithmInstance
from recconfig.core.config import LoaderConfig
from recconfig.core.errors import ConfigurationError
from recconfig.components.registry import default_registry
from recconfig.loader.loader import find_configurations, load_algorithm
from recconfig.loader.script import parse_script, render_script

logger = get_logger(__name__)


class ConfigurationService:
    """Service for handling configuration requests."""

    _instance = None

    def __init__(self, config: Optional[LoaderConfig] = None):
        self.config = config or LoaderConfig()
        self.registry = default_registry(self.config.catalog_path)
        self._algorithms: Optional[Dict[str, AlgorithmInstance]] = None

    @classmethod
    def get_instance(cls):
        """Get singleton instance of ConfigurationService."""
        if cls._instance is None:
            logger.info("Creating new ConfigurationService instance")
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Drop the singleton so the next get_instance() re-reads the environment."""
        cls._instance = None

    def list_components(self, kind: Optional[str] = None):
        if kind:
            return self.registry.by_kind(kind)
        return list(self.registry)

    def _load_available(self) -> Dict[str, AlgorithmInstance]:
        """Load every configuration in the search directories; earlier directories win."""
        algorithms: Dict[str, AlgorithmInstance] = {}
        for directory in self.config.search_dirs():
            if not directory.is_dir():
                continue
            for path in find_configurations(directory, self.config):
                try:
                    algo = load_algorithm(path, registry=self.registry, config=self.config)
                except ConfigurationError as e:
                    logger.error(f"Skipping {path}: {e}")
                    continue
                key = algo.name.lower()
                if key in algorithms:
                    logger.warning(
                        f"Skipping {path}: {algo.name} already defined by "
                        f"{algorithms[key].source}"
                    )
                    continue
                algorithms[key] = algo
        logger.info(f"Loaded {len(algorithms)} algorithm configurations")
        return algorithms

    def list_algorithms(self) -> List[AlgorithmInstance]:
        if self._algorithms is None:
            self._algorithms = self._load_available()
        return list(self._algorithms.values())

    def get_algorithm(self, name: str) -> Optional[AlgorithmInstance]:
        """Get a configured algorithm by name (case-insensitive)."""
        if self._algorithms is None:
            self._algorithms = self._load_available()
        return self._algorithms.get(name.lower())

    def parse(self, script: str, name: Optional[str] = None, strict: bool = True) -> AlgorithmInstance:
        """
        Parse and validate a configuration script.

        Args:
            script: Configuration script text
            name: Name used when the script does not assign one
            strict: Whether unknown properties are errors

        Returns:
            AlgorithmInstance: configured algorithm
        """
        record = parse_script(script, source="<request>", root=self.config.root_name)
        return AlgorithmInstance.from_record(
            record, registry=self.registry, name=name, strict=strict, source="<request>"
        )

    def to_response(self, algo: AlgorithmInstance) -> dict:
        payload = algo.to_dict()
        payload["script"] = render_script(algo.record, root=self.config.root_name)
        return payload
