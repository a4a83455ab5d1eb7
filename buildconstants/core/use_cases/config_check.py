"""
Config check use case — validate build-constants.yml without writing anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from buildconstants.core.config.loader import ConfigError, load_config
from buildconstants.core.config.resolver import resolve
from buildconstants.core.models import BuildConstantsConfig
from buildconstants.core.services.generators.constants_class import constants_file_path


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: BuildConstantsConfig | None = None
    config_path: Path | None = None
    output_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "output_path": str(self.output_path) if self.output_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "classname": self.config.classname if self.config else None,
            "constant_count": len(self.config.additional_constants) if self.config else 0,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate build constants configuration and report issues.

    Args:
        config_path: Optional explicit path to build-constants.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    try:
        loaded = load_config(config_path)
    except ConfigError as e:
        result.errors.extend(e.errors)
        return result

    result.config_path = loaded.path

    try:
        result.config = resolve(loaded.settings, loaded.defaults)
    except ConfigError as e:
        result.errors.extend(e.errors)
        return result

    result.output_path = loaded.output_dir / constants_file_path(result.config.classname)

    # Semantic checks
    if loaded.settings.build_time is None:
        result.warnings.append(
            "buildTime is not set; the generated class changes on every run."
        )

    if result.config.project_version == "unspecified":
        result.warnings.append("No project version set; VERSION will be \"unspecified\".")

    result.valid = len(result.errors) == 0
    return result
