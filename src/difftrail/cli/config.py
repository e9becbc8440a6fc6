#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Where difftrail settings come from and how they become option objects.

Settings live in one TOML, YAML or JSON file, or in the ``[tool.difftrail]``
table of a ``pyproject.toml``. The file is named with ``--config``, named by
``DIFFTRAIL_CONFIG``, or found by searching upward from the working directory
and then in the home directory.

Both tables are optional::

    [highlight]
    byte_granularity = 3
    tab_width = 4
    markers = { begin = "\\u001b[7m", end = "\\u001b[0m" }

    [session]
    pager_command = "less -R"
    build_command = ["make"]
    run_command = ["./app"]
    artifact = "app"
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from difftrail.constants import CONFIG_DIR_FILENAMES, PYPROJECT_FILENAME, PYPROJECT_TOOL_SECTION
from difftrail.exceptions import ConfigError
from difftrail.options.highlight import HighlightOptions
from difftrail.options.session import SessionOptions

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = ("highlight", "session")


def _parse_toml(data: bytes) -> Any:
    return tomllib.loads(data.decode("utf-8"))


def _parse_yaml(data: bytes) -> Any:
    # An empty document is an empty config, not an error
    loaded = yaml.safe_load(data)
    return {} if loaded is None else loaded


# format name, parser, what the top level must be, errors meaning "bad syntax"
_FORMATS: Dict[str, tuple[str, Callable[[bytes], Any], str, tuple[type[Exception], ...]]] = {
    ".toml": ("TOML", _parse_toml, "a table", (tomllib.TOMLDecodeError, UnicodeDecodeError)),
    ".yaml": ("YAML", _parse_yaml, "a mapping", (yaml.YAMLError,)),
    ".yml": ("YAML", _parse_yaml, "a mapping", (yaml.YAMLError,)),
    ".json": ("JSON", json.loads, "an object", (json.JSONDecodeError, UnicodeDecodeError)),
}


def _parse_file(path: Path, suffix: str) -> Dict[str, Any]:
    kind, parse, shape, syntax_errors = _FORMATS[suffix]
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ConfigError(f"Error reading {kind} config {path}: {e}", str(path), e) from e
    try:
        config = parse(data)
    except syntax_errors as e:
        raise ConfigError(f"Invalid {kind} in config file {path}: {e}", str(path), e) from e

    if not isinstance(config, dict):
        raise ConfigError(f"{kind} config file must contain {shape}, got {type(config).__name__}", str(path))
    return config


def _pyproject_table(path: Path) -> Dict[str, Any]:
    """Return the ``[tool.difftrail]`` table of a pyproject.toml, or ``{}`` when it has none."""
    tool = _parse_file(path, ".toml").get("tool", {})
    if not isinstance(tool, dict):
        raise ConfigError(f"[tool] in {path} must be a table, got {type(tool).__name__}", str(path))
    section = tool.get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] in {path} must be a table, got {type(section).__name__}",
            str(path),
        )
    return section


def _candidates(directory: Path) -> Iterator[Path]:
    for filename in CONFIG_DIR_FILENAMES:
        yield directory / filename


def _usable_pyproject(directory: Path) -> Optional[Path]:
    path = directory / PYPROJECT_FILENAME
    if not path.is_file():
        return None
    try:
        return path if _pyproject_table(path) else None
    except ConfigError as e:
        logger.debug("Skipping %s: %s", path, e)
        return None


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Search ``start_dir`` and each of its ancestors for a config file.

    In every directory the dedicated files are tried in the order
    ``.difftrail.toml``, ``.difftrail.yaml``, ``.difftrail.yml``,
    ``.difftrail.json``; after them comes ``pyproject.toml``, which only
    counts when it has a non-empty ``[tool.difftrail]`` table. An unreadable
    pyproject.toml is passed over.

    Parameters
    ----------
    start_dir : Path, optional
        Where the search begins (the working directory when omitted)

    Returns
    -------
    Path or None
        The nearest config file, if any

    """
    directory = (start_dir or Path.cwd()).resolve()
    for folder in (directory, *directory.parents):
        for path in _candidates(folder):
            if path.is_file():
                return path
        pyproject = _usable_pyproject(folder)
        if pyproject is not None:
            return pyproject
    return None


def discover_config_file() -> Optional[Path]:
    """Find the config file to use when none was named.

    The working directory and its ancestors come first, then the home
    directory (dedicated files only there).
    """
    found = find_config_in_parents()
    if found is not None:
        return found
    return next((path for path in _candidates(Path.home()) if path.is_file()), None)


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Read one config file.

    The format follows from the name: ``pyproject.toml`` contributes its
    ``[tool.difftrail]`` table, otherwise ``.toml``, ``.yaml``/``.yml`` and
    ``.json`` are parsed whole.

    Parameters
    ----------
    config_path : Path or str
        File to read

    Returns
    -------
    dict
        The top-level table of the file

    Raises
    ------
    ConfigError
        When the path is missing or not a file, the suffix is not recognised,
        or the content does not parse into a table

    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"Configuration file does not exist: {path}", str(path))
    if not path.is_file():
        raise ConfigError(f"Configuration path is not a file: {path}", str(path))

    if path.name.lower() == PYPROJECT_FILENAME:
        return _pyproject_table(path)

    suffix = path.suffix.lower()
    if suffix not in _FORMATS:
        raise ConfigError(f"Unsupported config file format: {suffix}. Use .toml, .yaml or .json", str(path))
    return _parse_file(path, suffix)


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load the first config source that applies.

    ``--config`` beats ``DIFFTRAIL_CONFIG``, which beats discovery. A file
    that is named but cannot be loaded is an error; finding nothing is not.

    Parameters
    ----------
    explicit_path : str, optional
        Value of ``--config``
    env_var_path : str, optional
        Value of ``DIFFTRAIL_CONFIG``

    Returns
    -------
    dict
        The loaded configuration, ``{}`` when there is none

    """
    named = explicit_path or env_var_path
    if named:
        return load_config_file(named)

    found = discover_config_file()
    if found is None:
        return {}
    logger.debug("Using configuration file %s", found)
    return load_config_file(found)


def build_options(config: Dict[str, Any]) -> tuple[HighlightOptions, SessionOptions]:
    """Build the highlight and session options from a loaded configuration.

    Unknown top-level sections are reported and ignored; invalid values
    raise :class:`~difftrail.exceptions.ValidationError`.
    """
    for key in config:
        if key not in KNOWN_SECTIONS:
            logger.warning("Ignoring unknown configuration section: %s", key)
    return (
        HighlightOptions.from_mapping(config.get("highlight")),
        SessionOptions.from_mapping(config.get("session")),
    )
