"""
Temporary upload files.

Each analysis owns exactly one temporary file holding the uploaded bytes;
`temporary_upload` deletes it on every exit path, cancellation included.
"""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from jobtracker.utils.logger import get_logger

logger = get_logger(__name__)


def remove_file(path: Path) -> bool:
    """Delete `path`. Failures are logged, never raised."""
    try:
        os.remove(path)
        logger.debug(f"[TempFiles] Deleted temporary file: {path}")
        return True
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.error(f"[TempFiles] ⚠️ Failed to delete temporary file {path}: {e}")
        return False


@contextmanager
def temporary_upload(content: bytes, suffix: str = "", directory: Optional[str] = None) -> Iterator[Path]:
    """Write `content` to a fresh temporary file and yield its path."""
    if directory:
        os.makedirs(directory, exist_ok=True)
    fd, name = tempfile.mkstemp(prefix="resume_", suffix=suffix, dir=directory)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        yield path
    finally:
        remove_file(path)
