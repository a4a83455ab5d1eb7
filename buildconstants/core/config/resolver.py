"""
Configuration resolution — explicit settings + host defaults → validated config.

Pure: no filesystem access, no clock reads beyond what HostDefaults
already carries. Every problem found is collected and reported together
in one ConfigError.
"""

from __future__ import annotations

import logging
from typing import Any

from buildconstants.core.config.loader import ConfigError
from buildconstants.core.models import (
    INT64_MAX,
    INT64_MIN,
    BuildConstantsConfig,
    ConstantsSettings,
    ConstantValue,
    HostDefaults,
    SourceAccess,
)
from buildconstants.core.services.generators.java_syntax import (
    class_name_problems,
    constant_name_problem,
)

logger = logging.getLogger(__name__)


def resolve(settings: ConstantsSettings, defaults: HostDefaults) -> BuildConstantsConfig:
    """Validate explicit settings and fill the gaps from host defaults.

    Args:
        settings: What the user configured. Unset fields are None.
        defaults: Project name, version, group and build time from the host.

    Returns:
        An immutable BuildConstantsConfig.

    Raises:
        ConfigError: On any invalid field. ``errors`` lists every problem.
    """
    errors: list[str] = []

    classname = settings.classname
    if classname is None:
        errors.append("classname is required")
    else:
        errors.extend(class_name_problems(classname))

    build_time = defaults.build_time if settings.build_time is None else settings.build_time
    if not INT64_MIN <= build_time <= INT64_MAX:
        errors.append(f"buildTime out of 64-bit range: {build_time}")

    constants = _resolve_constants(settings.additional_constants, errors)

    if errors:
        raise ConfigError.from_errors(errors)

    config = BuildConstantsConfig(
        classname=classname,
        source_access=settings.source_access or SourceAccess.PUBLIC,
        project_name=_pick(settings.project_name, defaults.project_name),
        project_version=_pick(settings.project_version, defaults.project_version),
        project_group=_pick(settings.project_group, defaults.project_group),
        build_time=build_time,
        additional_constants=constants,
    )
    logger.debug(
        "Resolved %s (%s access, %d additional constants)",
        config.classname,
        config.source_access.value,
        len(constants),
    )
    return config


def _pick(explicit: str | None, fallback: str) -> str:
    return fallback if explicit is None else explicit


def _resolve_constants(raw: dict[str, Any], errors: list[str]) -> dict[str, ConstantValue]:
    """Type each additional constant, appending problems to ``errors``.

    Insertion order of ``raw`` is kept; a key written twice keeps its
    first position and its last value, as with any dict.
    """
    resolved: dict[str, ConstantValue] = {}
    for name, value in raw.items():
        problem = constant_name_problem(name)
        if problem:
            errors.append(problem)

        try:
            resolved[name] = ConstantValue.infer(value)
        except TypeError:
            errors.append(
                f"additional constant {name!r} has unsupported type {type(value).__name__}"
            )
        except ValueError as e:
            errors.append(f"additional constant {name!r}: {e}")
    return resolved
