"""Disk-backed staging files for streaming uploads."""

import asyncio
import logging
import re
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, BinaryIO, Union

from momentvault.upload.exceptions import UploadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 65536  # 64KB


def sanitize_filename(filename: str) -> str:
    """Remove path traversal and dangerous characters."""
    safe = filename.replace("../", "").replace("..\\", "")
    safe = safe.replace("/", "_").replace("\\", "_")
    safe = re.sub(r"[^a-zA-Z0-9._-]", "_", safe)
    return safe[:200] or "unnamed"


def staging_name(filename: str) -> str:
    """Build a collision-resistant staging file name."""
    return f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}_{sanitize_filename(filename)}"


def _write_staging_file(source: Union[bytes, BinaryIO], target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "wb") as f:
        if isinstance(source, (bytes, bytearray, memoryview)):
            view = memoryview(source)
            for offset in range(0, len(view), CHUNK_SIZE):
                f.write(view[offset:offset + CHUNK_SIZE])
        else:
            source.seek(0)
            while chunk := source.read(CHUNK_SIZE):
                f.write(chunk)


def _remove_staging_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(
            f"Failed to remove staging file {path}: {e}",
            extra={"staging_path": str(path), "error": str(e)},
        )


@asynccontextmanager
async def staged_copy(
    source: Union[bytes, BinaryIO], filename: str, staging_dir: Union[str, Path]
) -> AsyncIterator[Path]:
    """Copy a payload into the scratch directory for the duration of the block.

    The staging file is removed on exit whatever the outcome, including
    a failed or cancelled write. A failed removal is logged, never raised.

    Raises:
        UploadError: If the payload cannot be written to the scratch directory
    """
    path = Path(staging_dir) / staging_name(filename)
    write = asyncio.create_task(asyncio.to_thread(_write_staging_file, source, path))
    try:
        try:
            await asyncio.shield(write)
        except OSError as e:
            raise UploadError(
                f"Staging {filename} failed (staging file cleanup attempted): {e}"
            ) from e
        logger.debug(f"Staged {filename} at {path}", extra={"staging_path": str(path)})
        yield path
    finally:
        if not write.done():
            # The worker thread cannot be interrupted; let it finish before unlinking
            await asyncio.wait([write])
        _remove_staging_file(path)
