"""File sink for rendered diagram images."""

import os
from collections.abc import Iterable
from pathlib import Path

import structlog

logger = structlog.get_logger()


def write_stream(chunks: Iterable[bytes], path: str | Path) -> int:
    """Write a stream of byte chunks to a file.

    The bytes go to a sibling '.part' file first, which replaces the
    destination only once the whole stream has been written.

    Args:
        chunks: Byte chunks to write, in order
        path: Destination file

    Returns:
        Number of bytes written

    Raises:
        OSError: If the file cannot be written
    """
    destination = Path(path)
    partial = destination.with_name(destination.name + ".part")
    destination.parent.mkdir(parents=True, exist_ok=True)

    written = 0
    try:
        with open(partial, "wb") as f:
            for chunk in chunks:
                f.write(chunk)
                written += len(chunk)
        os.replace(partial, destination)
    except OSError as e:
        logger.error("Failed to write diagram", path=str(destination), error=str(e))
        raise
    finally:
        # No-op after a successful replace
        partial.unlink(missing_ok=True)

    logger.info("Diagram written", path=str(destination), size=written)
    return written
