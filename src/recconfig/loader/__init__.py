"""
Loading components of the configuration layer.

This submodule contains the script parser, the JSON loader and file loading
helpers.
"""

from recconfig.loader.script import parse_script, parse_value, render_script
from recconfig.loader.loader import (
    bundled_scripts,
    file_base_name,
    file_extension,
    find_configuration,
    load_algorithm,
    load_algorithms,
    load_named,
    load_record,
    parse_json,
)

__all__ = [
    "bundled_scripts",
    "file_base_name",
    "file_extension",
    "find_configuration",
    "load_algorithm",
    "load_algorithms",
    "load_named",
    "load_record",
    "parse_json",
    "parse_script",
    "parse_value",
    "render_script",
]
