"""
Java lexical rules — identifiers, keywords and literals.

Shared by configuration resolution (to reject bad names early) and by the
class generator (to re-check names and render values). Everything emitted
here is plain ASCII, so the generated file is valid whatever encoding the
compiler assumes.
"""

from __future__ import annotations

import math
import unicodedata

from buildconstants.core.models.constants import ConstantType, ConstantValue
from buildconstants.core.models.settings import BUILTIN_CONSTANT_NAMES

# ── Names ───────────────────────────────────────────────────────

JAVA_KEYWORDS = frozenset({
    "abstract", "assert", "boolean", "break", "byte", "case", "catch",
    "char", "class", "const", "continue", "default", "do", "double",
    "else", "enum", "extends", "final", "finally", "float", "for", "goto",
    "if", "implements", "import", "instanceof", "int", "interface", "long",
    "native", "new", "package", "private", "protected", "public", "return",
    "short", "static", "strictfp", "super", "switch", "synchronized",
    "this", "throw", "throws", "transient", "try", "void", "volatile",
    "while", "_",
    # Literals, reserved in identifier position
    "true", "false", "null",
})

# Contextual keywords that may name a variable but not a type
RESTRICTED_TYPE_IDENTIFIERS = frozenset({"var", "yield", "record", "sealed", "permits"})

_START_CATEGORIES = frozenset({"Lu", "Ll", "Lt", "Lm", "Lo", "Nl", "Sc", "Pc"})
_PART_CATEGORIES = _START_CATEGORIES | {"Nd", "Mn", "Mc"}


def is_java_identifier(name: str) -> bool:
    """True if ``name`` is lexically a Java identifier (keywords not considered)."""
    if not name:
        return False
    if unicodedata.category(name[0]) not in _START_CATEGORIES:
        return False
    return all(unicodedata.category(ch) in _PART_CATEGORIES for ch in name[1:])


def identifier_problem(name: str) -> str | None:
    """Describe why ``name`` cannot be used as a Java identifier, or None if it can."""
    if not is_java_identifier(name):
        return f"{name!r} is not a valid Java identifier"
    if name in JAVA_KEYWORDS:
        return f"{name!r} is a reserved Java keyword"
    return None


def constant_name_problem(name: str) -> str | None:
    """Describe why ``name`` cannot name an additional constant, or None if it can."""
    if name in BUILTIN_CONSTANT_NAMES:
        return f"additional constant {name!r} collides with a built-in constant name"
    problem = identifier_problem(name)
    if problem:
        return f"additional constant {problem}"
    return None


def class_name_problems(classname: str) -> list[str]:
    """Check a fully qualified class name, one message per bad segment."""
    if not classname or not classname.strip():
        return ["classname must not be blank"]

    problems = []
    segments = classname.split(".")
    for segment in segments:
        problem = identifier_problem(segment)
        if problem:
            problems.append(f"classname {classname!r}: {problem}")

    simple_name = segments[-1]
    if simple_name in RESTRICTED_TYPE_IDENTIFIERS:
        problems.append(f"classname {classname!r}: {simple_name!r} cannot name a Java class")
    return problems


def java_identifier(name: str) -> str:
    """Spell a validated identifier in ASCII.

    Non-ASCII characters become unicode escapes, which javac decodes before
    lexing, so the escaped form names the same identifier.
    """
    return "".join(ch if ord(ch) < 0x80 else _unicode_escape(ord(ch)) for ch in name)


def java_qualified_name(name: str) -> str:
    return ".".join(java_identifier(segment) for segment in name.split("."))


def _unicode_escape(code: int) -> str:
    """UTF-16 code unit escapes for one code point."""
    if code <= 0xFFFF:
        return f"\\u{code:04X}"
    code -= 0x10000
    return f"\\u{0xD800 + (code >> 10):04X}\\u{0xDC00 + (code & 0x3FF):04X}"


# ── Literals ────────────────────────────────────────────────────

_SHORT_ESCAPES = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    '"': '\\"',
    "\\": "\\\\",
}


def java_string_literal(text: str) -> str:
    """Quote ``text`` as a Java string literal.

    Controls use short or octal escapes, never ``\\uXXXX``: the compiler
    translates unicode escapes before lexing, so ``\\u000a`` would end the
    line inside the literal. Everything outside printable ASCII becomes
    UTF-16 code unit escapes, which also carries lone surrogates through.
    """
    out = ['"']
    for ch in text:
        code = ord(ch)
        if ch in _SHORT_ESCAPES:
            out.append(_SHORT_ESCAPES[ch])
        elif code < 0x20 or code == 0x7F:
            out.append(f"\\{code:03o}")
        elif code < 0x7F:
            out.append(ch)
        else:
            out.append(_unicode_escape(code))
    out.append('"')
    return "".join(out)


def java_double_literal(value: float) -> str:
    """Render a double so that Java parses it back to the same bits.

    ``repr`` gives the shortest decimal that round-trips, and Java's
    decimal conversion is correctly rounded, so the two agree.
    """
    if math.isnan(value):
        return "Double.NaN"
    if math.isinf(value):
        return "Double.POSITIVE_INFINITY" if value > 0 else "Double.NEGATIVE_INFINITY"
    return f"{value!r}D"


def java_literal(constant: ConstantValue) -> str:
    """Render a constant's value as a Java literal of its declared type."""
    tag, value = constant.type, constant.value
    if tag is ConstantType.BOOLEAN:
        return "true" if value else "false"
    if tag is ConstantType.INT:
        return str(value)
    if tag is ConstantType.LONG:
        return f"{value}L"
    if tag is ConstantType.DOUBLE:
        return java_double_literal(value)
    return java_string_literal(value)
