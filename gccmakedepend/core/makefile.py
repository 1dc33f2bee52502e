"""Makefile discovery, marker scanning and atomic rewrite.

A makefile maintained by gcc-makedepend consists of two parts separated by
the marker line:

    <hand-written content, preserved byte for byte>
    # DO NOT DELETE
    <generated dependencies, replaced on every run>

Files are read as bytes and split on LF only, then decoded with
``surrogateescape``; they are written without newline translation. Bytes
that are not valid UTF-8 and CRLF line endings in the hand-written part
survive the round trip unchanged, and a bare CR never ends a line.
"""

import logging
import os
import stat
from pathlib import Path

from gccmakedepend.core.exceptions import MakefileError, WriteError

logger = logging.getLogger(__name__)

MARKER = "# DO NOT DELETE"
MARKER_LINES = frozenset({MARKER, MARKER + "\n", MARKER + "\r\n"})
DEFAULT_NAMES = ("makefile", "Makefile")
TMP_SUFFIX = ".TMP"

ENCODING = "utf-8"
ERRORS = "surrogateescape"


def find_makefile(name: Path | str | None = None, directory: Path | None = None) -> Path:
    """Locate the makefile to update.

    Args:
        name: Makefile named on the command line or in the configuration
        directory: Directory to search when no name is given (defaults to
                   the current directory)

    Returns:
        Path to an existing regular file

    Raises:
        MakefileError: If the named file does not exist, or no ``makefile``
                      or ``Makefile`` is present in the directory
    """
    if name is not None:
        path = Path(name)
        if not path.is_file():
            raise MakefileError(f"no {path} found", file_path=str(path))
        return path

    directory = directory if directory is not None else Path()
    for candidate in DEFAULT_NAMES:
        path = directory / candidate
        if path.is_file():
            logger.debug("Using %s", path)
            return path

    raise MakefileError(
        "no makefile found in the current directory", file_path=str(directory)
    )


def scan_makefile(path: Path) -> str:
    """Return the content up to and including the marker line.

    Everything before the first marker line is returned unchanged. The marker
    line itself is always appended, whether or not the file had one, so the
    result can be followed directly by the generated dependencies.

    Args:
        path: Makefile to read

    Returns:
        Preserved content followed by ``# DO NOT DELETE\\n``

    Raises:
        MakefileError: If the file cannot be opened or read

    Example:
        >>> path.write_text("all: prog\\n# DO NOT DELETE\\nprog.o: prog.c\\n")
        >>> scan_makefile(path)
        'all: prog\\n# DO NOT DELETE\\n'
    """
    parts: list[str] = []
    try:
        with open(path, "rb") as infile:
            for raw in infile:
                line = raw.decode(ENCODING, ERRORS)
                if line in MARKER_LINES:
                    break
                parts.append(line)
    except OSError as e:
        raise MakefileError(
            f"unable to open {path} for reading: {e.strerror or e}",
            file_path=str(path),
            reason=str(e),
        ) from e

    contents = "".join(parts)
    if contents and not contents.endswith("\n"):
        contents += "\n"
    logger.debug("Preserving %d characters of %s", len(contents), path)
    return contents + MARKER + "\n"


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove %s: %s", path, e)


def write_makefile(path: Path, contents: str, dependencies: str) -> None:
    """Atomically replace the makefile with new content.

    The new content is written to ``<path>.TMP`` which is then renamed over
    the makefile. A stale temporary file from an earlier run is removed
    first; the temporary file is created exclusively, so a concurrent run
    causes a failure instead of interleaved output. The permission bits of
    the existing makefile are carried over.

    On failure the temporary file is removed and the makefile is left as it
    was.

    Args:
        path: Makefile to replace
        contents: Preserved content including the marker line
        dependencies: Generated dependency rules

    Raises:
        WriteError: If the temporary file cannot be created, written or
                   renamed over the makefile
    """
    path = Path(path)
    tmp_path = path.with_name(path.name + TMP_SUFFIX)

    if tmp_path.is_file():
        logger.info("Removing stale %s", tmp_path)
        _remove_quietly(tmp_path)

    try:
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
    except OSError as e:
        raise WriteError(
            f"unable to create {tmp_path}: {e.strerror or e}",
            file_path=str(tmp_path),
            reason=str(e),
        ) from e

    try:
        with os.fdopen(fd, "w", encoding=ENCODING, errors=ERRORS, newline="") as out:
            out.write(contents)
            out.write(dependencies)
        try:
            mode = stat.S_IMODE(os.stat(path).st_mode)
        except FileNotFoundError:
            mode = None
        if mode is not None:
            os.chmod(tmp_path, mode)
    except OSError as e:
        _remove_quietly(tmp_path)
        raise WriteError(
            f"write error on {tmp_path}: {e.strerror or e}",
            file_path=str(tmp_path),
            reason=str(e),
        ) from e

    try:
        os.replace(tmp_path, path)
    except OSError as e:
        _remove_quietly(tmp_path)
        raise WriteError(
            f"unable to rename {tmp_path} to {path}: {e.strerror or e}",
            file_path=str(path),
            reason=str(e),
        ) from e

    logger.info("Updated %s", path)
