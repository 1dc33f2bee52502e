"""Configuration file loading and validation.

This module handles loading configuration from JSON and YAML files, merging
command-line options with file-based configuration (with the command line
taking precedence), and validating the structure of the loaded settings.

Configuration files can specify:
- makefile: Makefile to update instead of searching for one
- compiler: Compiler command, as a string ("ccache gcc") or a list
- prefixes: List of prefixes applied to every generated rule
- options: List of compiler options placed before the passthrough arguments

Example (YAML):

    makefile: GNUmakefile
    compiler: clang
    prefixes: [build/debug/, build/release/]
    options: [-Iinclude, -DNDEBUG]
"""

import json
from pathlib import Path
from typing import Any

import yaml

KNOWN_KEYS = ("makefile", "compiler", "prefixes", "options")


class ConfigError(Exception):
    """Configuration file error.

    Raised when configuration files cannot be loaded, parsed, or validated.
    This includes file not found errors, syntax errors in JSON/YAML, and
    settings with unknown names or of the wrong type.
    """
    pass


def load_config(path: Path) -> dict[str, Any]:
    """Load configuration from JSON or YAML file.

    Format is determined by file extension (.json, .yaml, .yml) or
    auto-detected if the extension is anything else. An empty file yields
    an empty configuration.

    Args:
        path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If file cannot be loaded, parsed, or is not a mapping

    Example:
        >>> from pathlib import Path
        >>> from gccmakedepend.cli.config import load_config
        >>>
        >>> config = load_config(Path("makedepend.yaml"))
        >>> print(config["prefixes"])  # ["build/"]
    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")

        if path.suffix == ".json":
            data = json.loads(content)
        elif path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            # Try to auto-detect format
            try:
                data = json.loads(content)
            except json.JSONDecodeError:
                data = yaml.safe_load(content)

    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration in {path} must be a mapping, not {type(data).__name__}"
        )
    return data


def merge_config(
    base: dict[str, Any],
    **overrides: Any
) -> dict[str, Any]:
    """Merge command-line options into base configuration.

    Command-line values take precedence over config file values. Only
    non-None override values are applied, and an empty prefix list from the
    command line leaves configured prefixes in place, since "no -p given"
    cannot be told apart from "-p given zero times".

    Args:
        base: Base configuration from file
        **overrides: Command-line overrides (makefile, compiler, prefixes)

    Returns:
        Merged configuration dictionary

    Example:
        >>> from gccmakedepend.cli.config import merge_config
        >>>
        >>> file_config = {"makefile": "GNUmakefile", "prefixes": ["obj/"]}
        >>> merged = merge_config(file_config, makefile="Makefile", prefixes=[])
        >>> print(merged)  # {"makefile": "Makefile", "prefixes": ["obj/"]}
    """
    merged = base.copy()

    for key, value in overrides.items():
        if value is None:
            continue
        if key == "prefixes" and not value:
            continue
        merged[key] = value
    return merged


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def validate_config(config: dict[str, Any]) -> list[str]:
    """Validate configuration structure.

    Checks that:
    - Only known settings are present
    - makefile is a string
    - compiler is a non-empty string or a non-empty list of strings
    - prefixes and options are lists of strings

    Args:
        config: Configuration dictionary to validate

    Returns:
        List of validation error messages (empty list if valid)

    Example:
        >>> from gccmakedepend.cli.config import validate_config
        >>>
        >>> errors = validate_config({"prefixes": "obj/"})
        >>> print(errors)  # ["prefixes must be a list of strings"]
    """
    errors = []

    for key in config:
        if key not in KNOWN_KEYS:
            errors.append(f"Unknown configuration setting: {key}")

    if "makefile" in config and not isinstance(config["makefile"], str):
        errors.append("makefile must be a string")

    if "compiler" in config:
        compiler = config["compiler"]
        if isinstance(compiler, str):
            if not compiler.strip():
                errors.append("compiler must not be empty")
        elif not (_is_string_list(compiler) and compiler):
            errors.append("compiler must be a string or a non-empty list of strings")

    for key in ("prefixes", "options"):
        if key in config and not _is_string_list(config[key]):
            errors.append(f"{key} must be a list of strings")

    return errors
