"""
Generate use case — settings + host defaults → constants class on disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from buildconstants.core.config.loader import ConfigError, load_config
from buildconstants.core.config.resolver import resolve
from buildconstants.core.models import BuildConstantsConfig, ConstantsSettings, HostDefaults
from buildconstants.core.persistence.generated_files import OutputError
from buildconstants.core.services.generators.constants_class import emit

logger = logging.getLogger(__name__)


def generate(settings: ConstantsSettings, defaults: HostDefaults, output_dir: Path) -> Path:
    """Resolve, render and write the constants class.

    Validation happens before anything touches the filesystem.

    Returns:
        Absolute path of the written file.

    Raises:
        ConfigError: The settings are invalid.
        OutputError: The file could not be written.
    """
    config = resolve(settings, defaults)
    return emit(config, output_dir)


@dataclass
class GenerateResult:
    """Outcome of a generate run driven by a config file."""

    config: BuildConstantsConfig | None = None
    config_path: Path | None = None
    path: Path | None = None
    error: str | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        if self.error:
            return {"ok": False, "error": self.error, "errors": self.errors}

        result: dict[str, Any] = {
            "ok": True,
            "config_path": str(self.config_path) if self.config_path else None,
            "path": str(self.path) if self.path else None,
        }
        if self.config:
            result["classname"] = self.config.classname
            result["build_time"] = self.config.build_time
            result["constants"] = list(self.config.additional_constants)
        return result


def run_generate(
    config_path: Path | None = None,
    output_dir: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> GenerateResult:
    """Load build-constants.yml, apply overrides and generate.

    Args:
        config_path: Explicit config file. If None, searches upward.
        output_dir: Destination root. Defaults to the one the config names.
        overrides: ConstantsSettings field values that replace the file's.

    Returns:
        GenerateResult; ``error`` is set instead of raising.
    """
    result = GenerateResult()

    try:
        loaded = load_config(config_path)
        result.config_path = loaded.path

        settings = loaded.settings
        if overrides:
            settings = settings.model_copy(update=overrides)

        result.config = resolve(settings, loaded.defaults)
        result.path = emit(result.config, output_dir or loaded.output_dir)
    except ConfigError as e:
        result.error = str(e)
        result.errors = e.errors
    except OutputError as e:
        result.error = str(e)
        result.errors = [str(e)]

    if result.ok:
        logger.info("Generated %s", result.path)
    return result
