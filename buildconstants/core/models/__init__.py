"""
Domain models — Pydantic types for build constants generation.

All models are re-exported here for convenient access:

    from buildconstants.core.models import BuildConstantsConfig, ConstantValue, HostDefaults
"""

from buildconstants.core.models.constants import (
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    ConstantType,
    ConstantValue,
    SourceAccess,
)
from buildconstants.core.models.settings import (
    BUILTIN_CONSTANT_NAMES,
    BuildConstantsConfig,
    ConstantsSettings,
    HostDefaults,
    current_time_millis,
)
from buildconstants.core.models.template import GeneratedFile

__all__ = [
    "BUILTIN_CONSTANT_NAMES",
    # settings.py
    "BuildConstantsConfig",
    # constants.py
    "ConstantType",
    "ConstantValue",
    "ConstantsSettings",
    # template.py
    "GeneratedFile",
    "HostDefaults",
    "INT32_MAX",
    "INT32_MIN",
    "INT64_MAX",
    "INT64_MIN",
    "SourceAccess",
    "current_time_millis",
]
