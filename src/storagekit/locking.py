"""Advisory write locks.

Locks are taken with flock(2) on the open handle, so they serialize writers
in this process and in any other process that locks the same file. Readers
that do not lock are not excluded.
"""

from __future__ import annotations

import fcntl
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO


@contextmanager
def exclusive_lock(handle: IO[bytes]) -> Iterator[IO[bytes]]:
    """Hold an exclusive lock on an open file for the duration of the block.

    Blocks until the lock is available. Buffered data is flushed before the
    lock is released.

    Args:
        handle: Open binary file object.

    Yields:
        The same handle, locked.
    """
    fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
    try:
        yield handle
    finally:
        handle.flush()
        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
