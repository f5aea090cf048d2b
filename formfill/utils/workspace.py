from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from typing import Iterator, Optional

from ..errors import TempResourceError

logger = logging.getLogger(__name__)


@contextmanager
def transient_dir(prefix: str = "fillpdf-", parent: Optional[str] = None) -> Iterator[str]:
    """Yield a fresh uniquely named directory and remove it on exit.

    Removal failures are logged and never replace the block's own outcome.
    """
    try:
        path = tempfile.mkdtemp(prefix=prefix, dir=parent)
    except OSError as exc:
        raise TempResourceError(f"failed to create temporary directory: {exc}") from exc
    logger.debug("Created transient directory %s", path)
    try:
        yield path
    finally:
        try:
            shutil.rmtree(path)
        except OSError as exc:
            logger.warning("Failed to remove temporary directory '%s' again: %s", path, exc)


@contextmanager
def transient_file(
    prefix: str = "fillpdf-", suffix: str = "", parent: Optional[str] = None
) -> Iterator[str]:
    """Yield the path of a fresh, empty, uniquely named file and remove it on exit."""
    try:
        fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=parent)
    except OSError as exc:
        raise TempResourceError(f"failed to create temporary file: {exc}") from exc
    os.close(fd)
    logger.debug("Created transient file %s", path)
    try:
        yield path
    finally:
        try:
            os.remove(path)
        except OSError as exc:
            logger.warning("Failed to remove temporary file '%s' again: %s", path, exc)
