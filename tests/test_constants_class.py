"""
Tests for the constants class generator — rendering and emission.

Pure rendering tests: BuildConstantsConfig in → Java source out. The
emission tests write into tmp_path.
"""

import textwrap
from pathlib import Path

import pytest

from buildconstants.core.config.loader import ConfigError
from buildconstants.core.config.resolver import resolve
from buildconstants.core.models import (
    BuildConstantsConfig,
    ConstantsSettings,
    ConstantValue,
    SourceAccess,
)
from buildconstants.core.services.generators.constants_class import (
    constants_file_path,
    emit,
    generate_constants_class,
    render_constants_class,
)

SCENARIO_CONSTANTS = {
    "xyz": 17,
    "tuv": ConstantValue.int64(2300),
    "CUSTOM3": True,
    "CUSTOM2": "World",
    "CUSTOM1": "Hello",
    "ABC": "def",
}


def _config(host_defaults, **fields) -> BuildConstantsConfig:
    fields.setdefault("classname", "org.cthing.test.Constants")
    fields.setdefault("build_time", 1718946725000)
    return resolve(ConstantsSettings(**fields), host_defaults)


# ═══════════════════════════════════════════════════════════════════
#  File path
# ═══════════════════════════════════════════════════════════════════


class TestConstantsFilePath:
    def test_package_becomes_directories(self):
        assert constants_file_path("org.cthing.test.Constants") == "org/cthing/test/Constants.java"

    def test_default_package(self):
        assert constants_file_path("Constants") == "Constants.java"


# ═══════════════════════════════════════════════════════════════════
#  Rendering
# ═══════════════════════════════════════════════════════════════════


class TestRender:
    def test_builtins_only(self, host_defaults):
        """No additional constants → exactly the four built-ins."""
        source = render_constants_class(_config(host_defaults))
        assert source == textwrap.dedent("""\
            //
            // DO NOT EDIT - File generated by buildconstants.
            //

            package org.cthing.test;

            @SuppressWarnings("all")
            public final class Constants {

                public static final String NAME = "proj";
                public static final String VERSION = "1.2.3";
                public static final String GROUP = "org.cthing";
                public static final long BUILD_TIME = 1718946725000L;

                private Constants() { }
            }
        """)

    def test_additional_constants_in_insertion_order(self, host_defaults):
        source = render_constants_class(
            _config(host_defaults, additional_constants=SCENARIO_CONSTANTS)
        )
        expected_members = textwrap.dedent("""\
                public static final long BUILD_TIME = 1718946725000L;
                public static final int xyz = 17;
                public static final long tuv = 2300L;
                public static final boolean CUSTOM3 = true;
                public static final String CUSTOM2 = "World";
                public static final String CUSTOM1 = "Hello";
                public static final String ABC = "def";

                private Constants() { }
        """)
        assert textwrap.indent(expected_members, "    ") in source

    def test_package_access(self, host_defaults):
        source = render_constants_class(
            _config(host_defaults, source_access=SourceAccess.PACKAGE, additional_constants={"x": 1})
        )
        assert "public" not in source
        assert "\nfinal class Constants {" in source
        assert '    static final String NAME = "proj";' in source
        assert "    static final long BUILD_TIME = 1718946725000L;" in source
        assert "    static final int x = 1;" in source
        assert "    private Constants() { }" in source

    def test_configured_project_values(self, host_defaults):
        source = render_constants_class(_config(
            host_defaults,
            project_name="MyProject",
            project_version="4.3.2",
            project_group="com.cthing",
        ))
        assert 'NAME = "MyProject";' in source
        assert 'VERSION = "4.3.2";' in source
        assert 'GROUP = "com.cthing";' in source

    def test_string_escaping(self, host_defaults):
        source = render_constants_class(
            _config(host_defaults, additional_constants={"TRICKY": 'a "quote", a \\ and a\nnewline'})
        )
        assert 'static final String TRICKY = "a \\"quote\\", a \\\\ and a\\nnewline";' in source

    def test_builtin_strings_are_escaped(self, host_defaults):
        source = render_constants_class(_config(host_defaults, project_name='My "Project"'))
        assert 'NAME = "My \\"Project\\"";' in source

    def test_double_constant(self, host_defaults):
        source = render_constants_class(
            _config(host_defaults, additional_constants={"RATIO": 0.1, "NEG_ZERO": -0.0})
        )
        assert "static final double RATIO = 0.1D;" in source
        assert "static final double NEG_ZERO = -0.0D;" in source

    def test_default_package_has_no_package_line(self, host_defaults):
        source = render_constants_class(_config(host_defaults, classname="Constants"))
        assert "package" not in source
        assert '//\n\n@SuppressWarnings("all")\npublic final class Constants {' in source

    def test_output_is_ascii_with_lf(self, host_defaults):
        source = render_constants_class(_config(
            host_defaults,
            classname="org.café.Données",
            project_name="naïve",
            additional_constants={"S": "\r\n☃", "名前": 1},
        ))
        source.encode("ascii")
        assert "\r" not in source
        assert "package org.caf\\u00E9;" in source
        assert "final class Donn\\u00E9es {" in source
        assert "private Donn\\u00E9es() { }" in source
        assert "static final int \\u540D\\u524D = 1;" in source

    def test_non_ascii_class_keeps_real_file_name(self, host_defaults):
        generated = generate_constants_class(_config(host_defaults, classname="org.café.Données"))
        assert generated.path == "org/café/Données.java"

    def test_rechecks_names_of_hand_built_config(self):
        config = BuildConstantsConfig(
            classname="org.cthing.Constants",
            project_name="p",
            project_version="1",
            project_group="g",
            build_time=0,
            additional_constants={"not valid": ConstantValue.int32(1)},
        )
        with pytest.raises(ConfigError, match="not valid"):
            render_constants_class(config)

    def test_rejects_builtin_name_in_hand_built_config(self):
        config = BuildConstantsConfig(
            classname="org.cthing.Constants",
            project_name="p",
            project_version="1",
            project_group="g",
            build_time=0,
            additional_constants={"NAME": ConstantValue.string("x")},
        )
        with pytest.raises(ConfigError, match="'NAME' collides with a built-in"):
            render_constants_class(config)

    def test_rechecks_class_name(self):
        config = BuildConstantsConfig(
            classname="org.cthing.class",
            project_name="p",
            project_version="1",
            project_group="g",
            build_time=0,
        )
        with pytest.raises(ConfigError, match="reserved"):
            render_constants_class(config)


class TestGenerateConstantsClass:
    def test_generated_file(self, host_defaults):
        generated = generate_constants_class(_config(host_defaults))
        assert generated.path == "org/cthing/test/Constants.java"
        assert generated.content.startswith("//\n// DO NOT EDIT")
        assert "proj 1.2.3" in generated.reason


# ═══════════════════════════════════════════════════════════════════
#  Emission
# ═══════════════════════════════════════════════════════════════════


class TestEmit:
    def test_writes_to_package_path(self, host_defaults, tmp_path: Path):
        out = tmp_path / "generated-src"
        path = emit(_config(host_defaults), out)
        assert path == (out / "org" / "cthing" / "test" / "Constants.java").resolve()
        assert path.is_absolute()
        assert path.read_text(encoding="utf-8") == render_constants_class(_config(host_defaults))

    def test_idempotent(self, host_defaults, tmp_path: Path):
        config = _config(host_defaults, additional_constants=SCENARIO_CONSTANTS)
        first = emit(config, tmp_path).read_bytes()
        second = emit(config, tmp_path).read_bytes()
        assert first == second

    def test_overwrites_previous_file(self, host_defaults, tmp_path: Path):
        path = emit(_config(host_defaults, additional_constants={"OLD": 1}), tmp_path)
        emit(_config(host_defaults), tmp_path)
        assert "OLD" not in path.read_text(encoding="utf-8")

    def test_invalid_name_writes_nothing(self, tmp_path: Path):
        config = BuildConstantsConfig(
            classname="org.cthing.Constants",
            project_name="p",
            project_version="1",
            project_group="g",
            build_time=0,
            additional_constants={"GROUP-X": ConstantValue.int32(1)},
        )
        with pytest.raises(ConfigError):
            emit(config, tmp_path / "out")
        assert not (tmp_path / "out").exists()
