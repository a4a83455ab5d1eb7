"""
Shared test fixtures and configuration.
"""

import logging
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from buildconstants.core.models import ConstantsSettings, HostDefaults

BUILD_TIME = 1718946725000


@pytest.fixture
def host_defaults() -> HostDefaults:
    """Host project metadata: name=proj, version=1.2.3, group=org.cthing."""
    return HostDefaults(
        project_name="proj",
        project_version="1.2.3",
        project_group="org.cthing",
        build_time=BUILD_TIME,
    )


@pytest.fixture
def settings() -> ConstantsSettings:
    """Minimal settings naming org.cthing.test.Constants with a fixed build time."""
    return ConstantsSettings(classname="org.cthing.test.Constants", build_time=BUILD_TIME)


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes build-constants.yml into a project dir."""

    def _write(content: str) -> Path:
        project_dir = tmp_path / "proj"
        project_dir.mkdir(exist_ok=True)
        path = project_dir / "build-constants.yml"
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was after setup_logging() runs."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
