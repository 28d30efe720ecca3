"""
Configuration file loading.

This module loads algorithm configurations from files: assignment scripts
(``.rec``, ``.js``, ``.groovy``) and JSON documents (``.json``). The loader is
chosen by file extension.
"""

import json
import pathlib
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from utils.common_utils import get_logger, path_exists, time_execution
from recconfig.algorithm import AlgorithmInstance
from recconfig.core.config import BUNDLED_SCRIPT_DIR, LoaderConfig
from recconfig.core.errors import ConfigurationError, InvalidRecommenderError
from recconfig.core.reference import ComponentReference
from recconfig.core.record import ConfigurationRecord, join_path
from recconfig.components.registry import default_registry
from recconfig.loader.script import parse_script

logger = get_logger(__name__)

PathLike = Union[str, pathlib.Path]

# JSON strings starting with this marker are component references
REFERENCE_MARKER = "@"


def file_extension(name: PathLike) -> str:
    """
    Get the extension of a file name (text after the last dot).

    Args:
        name: File name or path

    Returns:
        The extension without the dot, or "" if there is none
    """
    name = pathlib.Path(name).name
    idx = name.rfind(".")
    if idx < 0:
        return ""
    return name[idx + 1 :]


def file_base_name(path: PathLike, extension: Optional[str] = None) -> str:
    """
    Get a file's name with ``extension`` stripped, if it is the file's extension.

    Args:
        path: File path
        extension: Extension to strip (None strips nothing)

    Returns:
        The base name
    """
    name = pathlib.Path(path).name
    if extension is not None and name.endswith("." + extension):
        name = name[: -len(extension) - 1]
    return name


def _json_value(value, path: str, source):
    if isinstance(value, str) and value.startswith(REFERENCE_MARKER):
        name = value[len(REFERENCE_MARKER) :]
        if not ComponentReference.is_valid_name(name):
            raise InvalidRecommenderError(source, f"Invalid component name for {path}: {name!r}")
        return ComponentReference(name)
    if isinstance(value, (bool, int, float, str)):
        return value
    raise InvalidRecommenderError(
        source, f"Unsupported value for {path}: {type(value).__name__}"
    )


def flatten_mapping(data: Dict[str, Any], prefix: str = "", source=None) -> List[Tuple[str, Any]]:
    """
    Flatten nested JSON objects into ``(dotted path, value)`` pairs.

    ``{"module": {"knn": {"similarityDamping": 50}}}`` yields
    ``("module.knn.similarityDamping", 50)``.
    """
    pairs = []
    for key, value in data.items():
        path = join_path(prefix, key)
        if isinstance(value, dict):
            pairs.extend(flatten_mapping(value, path, source))
        elif value is None:
            continue
        else:
            pairs.append((path, _json_value(value, path, source)))
    return pairs


def parse_json(text: str, source=None) -> ConfigurationRecord:
    """
    Parse a JSON configuration into a ConfigurationRecord.

    Args:
        text: JSON document whose top level is an object
        source: File name or label for error messages

    Returns:
        ConfigurationRecord: the populated record
    """
    def reject_constant(name):
        raise InvalidRecommenderError(source, f"Non-finite number {name} is not allowed")

    try:
        data = json.loads(text, parse_constant=reject_constant)
    except json.JSONDecodeError as e:
        raise InvalidRecommenderError(source, f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InvalidRecommenderError(source, "JSON configuration must be an object")

    record = ConfigurationRecord()
    for path, value in flatten_mapping(data, source=source):
        try:
            record.set(path, value)
        except (ConfigurationError, ValueError) as e:
            raise InvalidRecommenderError(source, str(e)) from e
    return record


@time_execution
def load_record(path: PathLike, config: Optional[LoaderConfig] = None) -> ConfigurationRecord:
    """
    Load a configuration record from a file, choosing the parser by extension.

    Args:
        path: Configuration file
        config: LoaderConfig (environment defaults when None)

    Returns:
        ConfigurationRecord: the populated record
    """
    config = config or LoaderConfig()
    path = pathlib.Path(path)
    xtn = file_extension(path)
    logger.debug(f"Loading configuration from {path} with extension {xtn}")

    if xtn not in config.supported_extensions():
        raise InvalidRecommenderError(str(path), f"Cannot find loader for extension {xtn!r}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidRecommenderError(str(path), f"Cannot read configuration: {e}") from e

    if xtn in config.json_extensions:
        return parse_json(text, source=str(path))
    return parse_script(text, source=str(path), root=config.root_name)


def load_algorithm(
    path: PathLike,
    registry=None,
    strict: Optional[bool] = None,
    config: Optional[LoaderConfig] = None,
) -> AlgorithmInstance:
    """
    Load an algorithm configuration file.

    Args:
        path: Configuration file
        registry: ComponentRegistry (built-in catalog when None)
        strict: Whether unknown paths are errors (config default when None)
        config: LoaderConfig (environment defaults when None)

    Returns:
        AlgorithmInstance: configured algorithm; named after the file when the
        script does not assign a name
    """
    config = config or LoaderConfig()
    path = pathlib.Path(path)
    logger.info(f"Loading recommender definition from {path}")
    if registry is None:
        registry = default_registry(config.catalog_path)
    record = load_record(path, config)
    return AlgorithmInstance.from_record(
        record,
        registry=registry,
        name=file_base_name(path, file_extension(path)),
        strict=config.strict if strict is None else strict,
        source=str(path),
    )


def find_configurations(directory: PathLike, config: Optional[LoaderConfig] = None) -> List[pathlib.Path]:
    """List configuration files in a directory, sorted by name."""
    config = config or LoaderConfig()
    directory = pathlib.Path(directory)
    extensions = config.supported_extensions()
    return sorted(
        p for p in directory.iterdir() if p.is_file() and file_extension(p) in extensions
    )


def load_algorithms(
    paths: Union[PathLike, Iterable[PathLike]],
    registry=None,
    strict: Optional[bool] = None,
    config: Optional[LoaderConfig] = None,
) -> Dict[str, AlgorithmInstance]:
    """
    Load several algorithm configurations.

    Directories are scanned for supported files. When two configurations share
    a name the later one wins and a warning is logged.

    Args:
        paths: A file or directory, or an iterable of them
        registry: ComponentRegistry shared by every configuration
        strict: Whether unknown paths are errors
        config: LoaderConfig (environment defaults when None)

    Returns:
        Dictionary of algorithm name to AlgorithmInstance, in load order
    """
    config = config or LoaderConfig()
    if isinstance(paths, (str, pathlib.Path)):
        paths = [paths]
    if registry is None:
        registry = default_registry(config.catalog_path)

    files = []
    for entry in paths:
        entry = pathlib.Path(entry)
        if not path_exists(entry):
            raise InvalidRecommenderError(str(entry), "No such file or directory")
        if entry.is_dir():
            files.extend(find_configurations(entry, config))
        else:
            files.append(entry)

    algorithms: Dict[str, AlgorithmInstance] = {}
    for file in files:
        algo = load_algorithm(file, registry=registry, strict=strict, config=config)
        if algo.name in algorithms:
            logger.warning(
                f"Algorithm {algo.name} from {file} replaces the one from "
                f"{algorithms[algo.name].source}"
            )
        algorithms[algo.name] = algo
    return algorithms


def bundled_scripts() -> List[pathlib.Path]:
    """Reference configuration scripts shipped with the package."""
    return find_configurations(BUNDLED_SCRIPT_DIR)


def find_configuration(name: str, config: Optional[LoaderConfig] = None) -> pathlib.Path:
    """
    Find a configuration file by base name in the configured search directories.

    Matching ignores case, so ``ItemItem`` finds ``itemitem.rec``.
    """
    config = config or LoaderConfig()
    wanted = name.lower()
    for directory in config.search_dirs():
        if not path_exists(directory):
            continue
        for candidate in find_configurations(directory, config):
            if file_base_name(candidate, file_extension(candidate)).lower() == wanted:
                return candidate
    raise InvalidRecommenderError(name, "No configuration with this name")


def load_named(
    name: str, registry=None, strict: Optional[bool] = None, config: Optional[LoaderConfig] = None
) -> AlgorithmInstance:
    """Load a configuration found by name (see find_configuration)."""
    config = config or LoaderConfig()
    return load_algorithm(
        find_configuration(name, config), registry=registry, strict=strict, config=config
    )
