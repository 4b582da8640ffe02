"""
Atomic file writes — write to a temp file, then rename over the target.

Readers of the target only ever see the old content or the new
content, never a truncated file. The temp file lives in the target's
directory so the final ``os.replace`` never crosses filesystems.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def atomic_write_text(path: Path, content: str, prefix: str = ".rancherctx_") -> None:
    """Replace ``path`` with ``content`` atomically.

    Args:
        path: Target file. Its parent directory is created if missing.
        content: Full new file content.
        prefix: Temp file name prefix (suffix is always ``.tmp``).

    Raises:
        OSError: If any step fails. The target is left untouched and
            the temp file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=prefix, suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        if path.exists():
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
        logger.debug("Wrote %s", path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
