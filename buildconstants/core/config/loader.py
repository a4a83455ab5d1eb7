"""
Configuration loader — reads build-constants.yml into settings models.

The file has two sections: ``project`` carries the host defaults (what a
build tool would know about the enclosing project) and ``constants``
carries the explicit generation settings. Resolution into a validated
``BuildConstantsConfig`` happens in ``resolver.resolve()``.

YAML reads an unquoted ``version: 1.10`` as the float 1.1, and numeric
project metadata is turned back into text from that float. Quote versions
(``version: "1.10"``) to keep them exactly as written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from buildconstants.core.models import ConstantsSettings, ConstantValue, HostDefaults

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "build-constants.yml"

# Same layout a Gradle build uses for generated sources of the main source set
DEFAULT_OUTPUT_DIR = "build/generated-src/build-constants/main"

_TOP_LEVEL_KEYS = frozenset({"project", "constants"})
_PROJECT_KEYS = {"name": "project_name", "version": "project_version", "group": "project_group"}


class ConfigError(Exception):
    """Raised when build constants configuration is invalid or missing.

    ``errors`` holds each individual problem; the message joins them.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors) if errors else [message]

    @classmethod
    def from_errors(cls, errors: list[str]) -> ConfigError:
        if len(errors) == 1:
            return cls(errors[0], errors)
        message = "Invalid build constants configuration:\n" + "\n".join(f"  - {e}" for e in errors)
        return cls(message, errors)


def validation_messages(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into "location: message" strings."""
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        msg = err["msg"].removeprefix("Value error, ")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return messages


@dataclass
class LoadedConfig:
    """Settings and host defaults read from one config file."""

    path: Path
    settings: ConstantsSettings
    defaults: HostDefaults

    @property
    def root(self) -> Path:
        """Directory holding the config file; relative paths resolve against it."""
        return self.path.parent.resolve()

    @property
    def output_dir(self) -> Path:
        return self.root / (self.settings.output_directory or DEFAULT_OUTPUT_DIR)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for build-constants.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to build-constants.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> LoadedConfig:
    """Load and validate a build constants config file.

    Args:
        path: Explicit path to build-constants.yml. If None, searches upward.

    Returns:
        LoadedConfig with the parsed settings and host defaults.

    Raises:
        ConfigError: If the file is missing, unreadable or malformed.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(f"No {CONFIG_FILE} found. Create one, or specify --config.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading build constants config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    unknown = sorted(str(k) for k in data if k not in _TOP_LEVEL_KEYS)
    if unknown:
        raise ConfigError(f"Unknown top-level keys in {path}: {', '.join(unknown)}")

    defaults = _parse_project(data.get("project"), fallback_name=path.parent.resolve().name)
    settings = parse_settings(data.get("constants"))

    logger.info(
        "Loaded build constants config for '%s' with %d additional constants",
        defaults.project_name,
        len(settings.additional_constants),
    )
    return LoadedConfig(path=path, settings=settings, defaults=defaults)


def parse_settings(section: Any) -> ConstantsSettings:
    """Validate the ``constants`` section into ConstantsSettings.

    Additional constants written as ``{type: ..., value: ...}`` become
    explicitly tagged ConstantValues. Every other value is passed through
    untouched for ``resolve()`` to type-check.
    """
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ConfigError(f"'constants' must be a mapping, got {type(section).__name__}")

    section = dict(section)
    raw_constants = section.get("additionalConstants", section.get("additional_constants"))
    if raw_constants is not None:
        if not isinstance(raw_constants, dict):
            raise ConfigError(
                f"'additionalConstants' must be a mapping, got {type(raw_constants).__name__}"
            )
        key = "additionalConstants" if "additionalConstants" in section else "additional_constants"
        section[key] = {name: _parse_constant(name, value) for name, value in raw_constants.items()}

    try:
        return ConstantsSettings.model_validate(section)
    except ValidationError as e:
        raise ConfigError.from_errors(validation_messages(e)) from e


def _parse_constant(name: Any, value: Any) -> Any:
    """Turn a tagged ``{type, value}`` mapping into a ConstantValue."""
    if not (isinstance(value, dict) and set(value) == {"type", "value"}):
        return value
    try:
        return ConstantValue.model_validate(value)
    except ValidationError as e:
        details = "; ".join(validation_messages(e))
        raise ConfigError(f"additionalConstants.{name}: {details}") from e


def _parse_project(section: Any, fallback_name: str) -> HostDefaults:
    """Validate the ``project`` section into HostDefaults."""
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ConfigError(f"'project' must be a mapping, got {type(section).__name__}")

    unknown = sorted(str(k) for k in section if k not in _PROJECT_KEYS)
    if unknown:
        raise ConfigError(f"Unknown keys in 'project': {', '.join(unknown)}")

    fields = {_PROJECT_KEYS[k]: v for k, v in section.items()}
    fields.setdefault("project_name", fallback_name)

    try:
        return HostDefaults.model_validate(fields)
    except ValidationError as e:
        raise ConfigError.from_errors(validation_messages(e)) from e
