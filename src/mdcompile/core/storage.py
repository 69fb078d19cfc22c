"""Artifact persistence: non-blocking text writes that report their outcome"""

import logging
from pathlib import Path

import aiofiles

from mdcompile.core.models import WriteResult


logger = logging.getLogger(__name__)


async def write_artifact(path: Path, text: str) -> WriteResult:
    """Write text to path as UTF-8. OS errors are captured in the result, not raised.

    The destination directory must already exist.
    """
    try:
        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(text)
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        return WriteResult(path=path, error=e)
    logger.debug("Wrote %s", path)
    return WriteResult(path=path)
