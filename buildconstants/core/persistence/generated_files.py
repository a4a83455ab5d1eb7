"""
Generated file persistence — atomic write of generator output.

Writes go to a temp file in the destination directory, then replace the
target with a rename. A failed write leaves the previous file (if any)
in place and no stray temp file behind.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from buildconstants.core.models import GeneratedFile

logger = logging.getLogger(__name__)


class OutputError(OSError):
    """Raised when a generated file cannot be written.

    ``path`` is the intended target; the underlying OSError is chained as
    ``__cause__``.
    """

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path


def write_generated_file(generated: GeneratedFile, output_dir: Path) -> Path:
    """Write ``generated`` under ``output_dir``, replacing any previous file.

    Args:
        generated: File to write; its path is relative to ``output_dir``.
        output_dir: Root directory for generated sources.

    Returns:
        Absolute path of the written file.

    Raises:
        OutputError: If a directory cannot be created or the file cannot
            be written or moved into place.
    """
    target = (output_dir / generated.path).resolve()

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(target, f"cannot create directory {target.parent}: {e}") from e

    if target.is_dir():
        raise OutputError(target, "path exists and is a directory")

    # Atomic write: temp file in same directory, then rename
    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
        )
    except OSError as e:
        raise OutputError(target, str(e)) from e

    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(generated.content)
        tmp.chmod(0o644)
        os.replace(tmp, target)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to write %s: %s", target, e)
        raise OutputError(target, str(e)) from e

    logger.debug("Wrote %s (%d bytes)", target, len(generated.content))
    return target
