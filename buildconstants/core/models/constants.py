"""
Constant value model — the closed set of types a generated constant can have.

A ``ConstantValue`` is a tagged union: the ``type`` tag names the Java type
the constant is declared with and ``value`` holds a Python value that fits
it. Construction validates the pairing, so a value that cannot be emitted
is rejected when configuration is built rather than halfway through
rendering.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class SourceAccess(str, Enum):
    """Visibility of the generated class and its constants."""

    PUBLIC = "PUBLIC"
    PACKAGE = "PACKAGE"

    @property
    def modifier(self) -> str:
        """Java modifier prefix, including the trailing space when non-empty."""
        return "public " if self is SourceAccess.PUBLIC else ""

    @classmethod
    def _missing_(cls, value: object) -> SourceAccess | None:
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        return None


class ConstantType(str, Enum):
    """Supported constant types. Each value is the Java type keyword."""

    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    DOUBLE = "double"
    STRING = "String"

    @classmethod
    def _missing_(cls, value: object) -> ConstantType | None:
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class ConstantValue(BaseModel):
    """A typed constant value.

    Use the named constructors rather than building one by hand:

        ConstantValue.int64(2300)
        ConstantValue.infer(17)    # -> int
    """

    model_config = ConfigDict(frozen=True)

    type: ConstantType
    value: StrictBool | StrictInt | StrictFloat | StrictStr

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        """Look the tag up case-insensitively; widen integral doubles to float."""
        if not isinstance(data, dict):
            return data
        try:
            tag = ConstantType(data.get("type"))
        except ValueError:
            return data
        value = data.get("value")
        if tag is ConstantType.DOUBLE and isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        return {**data, "type": tag, "value": value}

    @model_validator(mode="after")
    def _check_value(self) -> ConstantValue:
        problem = _check(self.type, self.value)
        if problem:
            raise ValueError(problem)
        return self

    # ── Constructors ────────────────────────────────────────────

    @classmethod
    def boolean(cls, value: bool) -> ConstantValue:
        return cls(type=ConstantType.BOOLEAN, value=value)

    @classmethod
    def int32(cls, value: int) -> ConstantValue:
        return cls(type=ConstantType.INT, value=value)

    @classmethod
    def int64(cls, value: int) -> ConstantValue:
        return cls(type=ConstantType.LONG, value=value)

    @classmethod
    def double(cls, value: float) -> ConstantValue:
        return cls(type=ConstantType.DOUBLE, value=value)

    @classmethod
    def string(cls, value: str) -> ConstantValue:
        return cls(type=ConstantType.STRING, value=value)

    @classmethod
    def infer(cls, value: Any) -> ConstantValue:
        """Wrap a plain Python value in the narrowest matching constant type.

        ``int`` becomes a 32-bit ``int`` when it fits and a ``long``
        otherwise.

        Raises:
            TypeError: The value's type is not supported.
            ValueError: An integer does not fit in 64 bits.
        """
        if isinstance(value, ConstantValue):
            return value
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, int):
            if INT32_MIN <= value <= INT32_MAX:
                return cls.int32(value)
            if INT64_MIN <= value <= INT64_MAX:
                return cls.int64(value)
            raise ValueError(f"integer {value} does not fit in a 64-bit long")
        if isinstance(value, float):
            return cls.double(value)
        if isinstance(value, str):
            return cls.string(value)
        raise TypeError(f"unsupported constant type {type(value).__name__}")


def _check(tag: ConstantType, value: Any) -> str | None:
    """Return a description of why ``value`` cannot be a ``tag`` constant, or None."""
    if tag is ConstantType.BOOLEAN:
        ok = isinstance(value, bool)
    elif tag in (ConstantType.INT, ConstantType.LONG):
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif tag is ConstantType.DOUBLE:
        ok = isinstance(value, float)
    else:
        ok = isinstance(value, str)

    if not ok:
        return f"{tag.value} constant cannot hold {type(value).__name__} value {value!r}"

    if tag is ConstantType.INT and not INT32_MIN <= value <= INT32_MAX:
        return f"int constant out of 32-bit range: {value}"
    if tag is ConstantType.LONG and not INT64_MIN <= value <= INT64_MAX:
        return f"long constant out of 64-bit range: {value}"
    return None
