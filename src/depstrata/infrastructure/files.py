"""Writing report files as a set."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


def write_together(files: Mapping[Path, str]) -> None:
    """Write every ``path -> text`` pair, or none of them.

    Each text is first staged in a temp file beside its target. Only once
    all of them are staged are they renamed into place, so a failed write
    never leaves a fresh file next to a stale sibling.

    Raises:
        OSError: a file could not be staged. No target has been touched.
    """
    staged: list[tuple[str, Path]] = []
    try:
        for path, text in files.items():
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            staged.append((tmp, path))
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
    except OSError:
        for tmp, _ in staged:
            Path(tmp).unlink(missing_ok=True)
        raise

    for tmp, path in staged:
        os.replace(tmp, path)
        logger.debug("wrote %s", path)
