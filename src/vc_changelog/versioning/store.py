"""
Persistence of the current version number.

The version file holds a single ``major.minor.patch`` string. Reading never
fails: a missing, unreadable, empty or malformed file counts as ``0.0.0``.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from vc_changelog.versioning.semver import SemanticVersion


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def read_version(path: Path) -> SemanticVersion:
    """Read the version stored in ``path``, defaulting to ``0.0.0``."""
    try:
        content = path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read version file %s (%s); starting from 0.0.0", path, exc)
        return SemanticVersion()

    if not content:
        return SemanticVersion()

    parts = content.split(".")
    try:
        numbers = [int(part) for part in parts]
    except ValueError:
        numbers = []
    if len(numbers) != 3 or any(n < 0 for n in numbers):
        logger.warning("Ignoring malformed version %r in %s; starting from 0.0.0", content, path)
        return SemanticVersion()
    return SemanticVersion(*numbers)


def _current_umask() -> int:
    # The umask can only be read by setting it.
    umask = os.umask(0)
    os.umask(umask)
    return umask


def write_text_atomic(path: Path, text: str) -> None:
    """Replace the contents of ``path`` with ``text`` in one step.

    The text goes to a temporary file in the same directory which is then
    renamed over ``path``, so readers see either the old or the new file.
    Line endings are written as given. The file keeps its permission bits;
    a new file gets the default mode for the current umask.
    """
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = 0o666 & ~_current_umask()

    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def write_version(path: Path, version: SemanticVersion) -> None:
    """Overwrite ``path`` with the dotted version, without a trailing newline."""
    write_text_atomic(path, str(version))
    logger.debug("Wrote version %s to %s", version, path)
