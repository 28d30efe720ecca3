"""
Configuration module for the configuration loader.

This module handles the settings that control how algorithm configuration
scripts are found, parsed and validated.
"""

import os
import pathlib

from utils.common_utils import get_logger

logger = get_logger(__name__)

# Extensions handled by the assignment-script parser
DEFAULT_SCRIPT_EXTENSIONS = ("rec", "js", "groovy")

# Extensions handled by the JSON loader
DEFAULT_JSON_EXTENSIONS = ("json",)

# Directory holding the bundled reference scripts
BUNDLED_SCRIPT_DIR = pathlib.Path(__file__).resolve().parent.parent / "scripts"


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


class LoaderConfig:
    """Configuration class for loading algorithm configurations."""

    # Root object name scripts assign to (rec.name = ...)
    ROOT_NAME = "rec"
    # Unknown module paths are errors when strict, warnings otherwise
    STRICT = True

    def __init__(
        self,
        root_name=None,
        strict=None,
        script_dirs=None,
        catalog_path=None,
    ):
        """
        Initialize loader configuration.

        Args:
            root_name: Root object name used by scripts (default "rec")
            strict: Whether unknown module paths are errors
            script_dirs: Extra directories searched for named configurations
            catalog_path: JSON file with extra component definitions
        """
        self.root_name = root_name or os.environ.get(
            "RECCONFIG_ROOT_NAME", self.ROOT_NAME
        )
        self.strict = (
            strict if strict is not None else _env_flag("RECCONFIG_STRICT", self.STRICT)
        )
        self.script_dirs = (
            list(script_dirs) if script_dirs is not None else self._env_script_dirs()
        )
        self.catalog_path = catalog_path or os.environ.get("RECCONFIG_CATALOG")
        self.script_extensions = DEFAULT_SCRIPT_EXTENSIONS
        self.json_extensions = DEFAULT_JSON_EXTENSIONS

    def _env_script_dirs(self):
        """Read RECCONFIG_SCRIPT_DIRS (os.pathsep separated)."""
        raw = os.environ.get("RECCONFIG_SCRIPT_DIRS", "")
        dirs = []
        for entry in raw.split(os.pathsep):
            entry = entry.strip()
            if not entry:
                continue
            path = pathlib.Path(entry)
            if not path.is_dir():
                logger.warning(f"Ignoring script directory {entry}: not a directory")
                continue
            dirs.append(path)
        return dirs

    def search_dirs(self):
        """Directories searched for named configurations, bundled scripts last."""
        return [pathlib.Path(d) for d in self.script_dirs] + [BUNDLED_SCRIPT_DIR]

    def supported_extensions(self):
        return tuple(self.script_extensions) + tuple(self.json_extensions)

    def get_root_name(self):
        """Get the script root object name."""
        return self.root_name

    def is_strict(self):
        """Get whether validation is strict."""
        return self.strict


def create_config(root_name=None, strict=None, script_dirs=None, catalog_path=None):
    """
    Create a loader configuration.

    Args:
        root_name: Root object name used by scripts
        strict: Whether unknown module paths are errors
        script_dirs: Extra directories searched for named configurations
        catalog_path: JSON file with extra component definitions

    Returns:
        LoaderConfig: Initialized configuration object
    """
    config = LoaderConfig(
        root_name=root_name,
        strict=strict,
        script_dirs=script_dirs,
        catalog_path=catalog_path,
    )
    return config
