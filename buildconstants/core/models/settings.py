"""
Generation settings — what the user asked for, what the host supplies,
and the resolved configuration the emitter consumes.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from buildconstants.core.models.constants import ConstantValue, SourceAccess

# Names always emitted ahead of any additional constants
BUILTIN_CONSTANT_NAMES: tuple[str, ...] = ("NAME", "VERSION", "GROUP", "BUILD_TIME")


def current_time_millis() -> int:
    """Current UTC time as milliseconds since the Unix epoch."""
    return int(datetime.now(UTC).timestamp() * 1000)


def _as_text(value: Any) -> Any:
    """Render numeric project metadata as text (``version: 1.2`` in YAML is a float)."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class HostDefaults(BaseModel):
    """Fallback values supplied by the host build.

    These stand in for whatever the user leaves unset. A build tool fills
    them from its own project model; the CLI fills them from the
    ``project:`` section of build-constants.yml.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str
    project_version: str = "unspecified"
    project_group: str = ""
    build_time: int = Field(default_factory=current_time_millis)

    @field_validator("project_name", "project_version", "project_group", mode="before")
    @classmethod
    def _metadata_as_text(cls, value: Any) -> Any:
        return _as_text(value)


class ConstantsSettings(BaseModel):
    """Explicit user settings. Every field is optional here; ``resolve()``
    decides what is actually required.

    Aliases match the camelCase names used in build-constants.yml.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    classname: str | None = None
    source_access: SourceAccess | None = Field(default=None, alias="sourceAccess")
    project_name: str | None = Field(default=None, alias="projectName")
    project_version: str | None = Field(default=None, alias="projectVersion")
    project_group: str | None = Field(default=None, alias="projectGroup")
    build_time: StrictInt | None = Field(default=None, alias="buildTime")
    output_directory: str | None = Field(default=None, alias="outputDirectory")
    additional_constants: dict[str, Any] = Field(
        default_factory=dict, alias="additionalConstants"
    )

    @field_validator("source_access", mode="before")
    @classmethod
    def _access_by_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return SourceAccess(value)
        return value

    @field_validator("project_name", "project_version", "project_group", mode="before")
    @classmethod
    def _metadata_as_text(cls, value: Any) -> Any:
        return _as_text(value)


class BuildConstantsConfig(BaseModel):
    """Fully resolved, validated input to the emitter.

    Built by ``resolve()``; do not construct directly unless the values are
    already known to be valid. The renderer re-checks names anyway.
    ``additional_constants`` is a read-only view over a private copy.
    """

    model_config = ConfigDict(frozen=True)

    classname: str
    source_access: SourceAccess = SourceAccess.PUBLIC
    project_name: str
    project_version: str
    project_group: str
    build_time: int
    additional_constants: Mapping[str, ConstantValue] = Field(
        default_factory=dict, validate_default=True
    )

    @field_validator("additional_constants", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping[str, ConstantValue]) -> Mapping[str, ConstantValue]:
        return MappingProxyType(dict(value))

    @property
    def package_name(self) -> str:
        """Package part of the class name, or "" for the default package."""
        return self.classname.rpartition(".")[0]

    @property
    def simple_name(self) -> str:
        return self.classname.rpartition(".")[2]
