"""
Output file persistence — atomic write of generated sources.

Writes go to a temp file in the target directory and are renamed into
place, so a failed or interrupted run never leaves a partial output
file for the build system to pick up.
"""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path

from codegen_factory.core.errors import OutputError

logger = logging.getLogger(__name__)

_TEMP_ATTEMPTS = 10


def write_output(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` atomically, UTF-8 encoded.

    Missing parent directories are created and an existing file at
    ``path`` is replaced. The temp file is created with mode 0666 so
    the process umask applies as for any new file; the umask itself is
    never modified.

    Raises:
        OutputError: If the content cannot be encoded, or the directory
            or file cannot be written. No temp file is left behind.
    """
    try:
        data = content.encode("utf-8")
    except UnicodeEncodeError as e:
        raise OutputError(f"Cannot encode output {path} as UTF-8: {e}") from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"Cannot create output directory {path.parent}: {e.strerror or e}") from e

    tmp, fd = _create_temp(path)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp, path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise OutputError(f"Cannot write output {path}: {e.strerror or e}") from e

    logger.debug("Wrote %d bytes to %s", len(data), path)


def _create_temp(path: Path) -> tuple[Path, int]:
    """Exclusively create a hidden sibling temp file of ``path``."""
    flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)
    for _ in range(_TEMP_ATTEMPTS):
        tmp = path.with_name(f".{path.name}.{uuid.uuid4().hex[:8]}.tmp")
        try:
            return tmp, os.open(tmp, flags, 0o666)
        except FileExistsError:
            continue
        except OSError as e:
            raise OutputError(f"Cannot create output {path}: {e.strerror or e}") from e
    raise OutputError(f"Cannot create output {path}: no free temp file name")
