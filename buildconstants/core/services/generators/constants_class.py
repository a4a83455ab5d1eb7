"""
Build constants class generator — render the Java constant holder.

Rendering is pure (config in → GeneratedFile out); writing the file is
the persistence layer's job. ``emit()`` chains the two for callers that
just want the file on disk.

Generated layout:

    //
    // DO NOT EDIT - File generated by buildconstants.
    //

    package org.example;

    @SuppressWarnings("all")
    public final class Constants {

        public static final String NAME = "proj";
        public static final String VERSION = "1.2.3";
        public static final String GROUP = "org.example";
        public static final long BUILD_TIME = 1718946725000L;
        public static final int xyz = 17;

        private Constants() { }
    }
"""

from __future__ import annotations

import logging
from pathlib import Path

from buildconstants.core.config.loader import ConfigError
from buildconstants.core.models import BuildConstantsConfig, ConstantValue, GeneratedFile
from buildconstants.core.persistence.generated_files import write_generated_file
from buildconstants.core.services.generators.java_syntax import (
    class_name_problems,
    constant_name_problem,
    java_identifier,
    java_literal,
    java_qualified_name,
    java_string_literal,
)

logger = logging.getLogger(__name__)

JAVA_EXTENSION = ".java"

_HEADER = """\
//
// DO NOT EDIT - File generated by buildconstants.
//
"""


def constants_file_path(classname: str) -> str:
    """Relative path of the source file for a fully qualified class name.

    org.cthing.test.Constants → org/cthing/test/Constants.java
    """
    return classname.replace(".", "/") + JAVA_EXTENSION


def render_constants_class(config: BuildConstantsConfig) -> str:
    """Render the full Java source text for ``config``.

    Raises:
        ConfigError: If the class name or a constant name is not a legal
            Java identifier, or a constant reuses a built-in name. ``resolve()`` already rejects these; this
            catches configs built by hand.
    """
    _check_names(config)

    modifier = config.source_access.modifier
    simple_name = java_identifier(config.simple_name)

    lines = [_HEADER]
    if config.package_name:
        lines.append(f"package {java_qualified_name(config.package_name)};\n")
    lines.append('@SuppressWarnings("all")')
    lines.append(f"{modifier}final class {simple_name} {{")
    lines.append("")

    builtins = [
        ("String", "NAME", java_string_literal(config.project_name)),
        ("String", "VERSION", java_string_literal(config.project_version)),
        ("String", "GROUP", java_string_literal(config.project_group)),
        ("long", "BUILD_TIME", f"{config.build_time}L"),
    ]
    for java_type, name, literal in builtins:
        lines.append(f"    {modifier}static final {java_type} {name} = {literal};")

    for name, constant in config.additional_constants.items():
        lines.append(_render_constant(modifier, name, constant))

    lines.append("")
    lines.append(f"    private {simple_name}() {{ }}")
    lines.append("}")
    return "\n".join(lines) + "\n"


def _render_constant(modifier: str, name: str, constant: ConstantValue) -> str:
    declaration = f"{constant.type.value} {java_identifier(name)}"
    return f"    {modifier}static final {declaration} = {java_literal(constant)};"


def _check_names(config: BuildConstantsConfig) -> None:
    problems = class_name_problems(config.classname)
    for name in config.additional_constants:
        problem = constant_name_problem(name)
        if problem:
            problems.append(problem)
    if problems:
        raise ConfigError.from_errors(problems)


def generate_constants_class(config: BuildConstantsConfig) -> GeneratedFile:
    """Generate the constants class for ``config``.

    Returns:
        GeneratedFile whose path is relative to the output directory.
    """
    return GeneratedFile(
        path=constants_file_path(config.classname),
        content=render_constants_class(config),
        reason=f"Build constants for {config.project_name} {config.project_version}",
    )


def emit(config: BuildConstantsConfig, output_dir: Path) -> Path:
    """Render the constants class and write it under ``output_dir``.

    Returns:
        Absolute path of the written file.

    Raises:
        ConfigError: A name in ``config`` is not a legal identifier.
        OutputError: The file could not be written.
    """
    generated = generate_constants_class(config)
    logger.info("Writing constants class %s", config.classname)
    return write_generated_file(generated, output_dir)
