"""Non-blocking advisory locking of the clipboard file."""

import errno
import sys
from typing import IO

from loguru import logger

from .models import LockAttempt, LockStatus

log = logger.bind(stage="concurrency")

# errno values meaning "someone else holds it" rather than "locking is broken"
_BUSY_ERRNOS = frozenset(
    {errno.EAGAIN, errno.EWOULDBLOCK, errno.EACCES, errno.EDEADLK}
)


def try_lock(fh: IO) -> LockAttempt:
    """Try to take an exclusive lock on an open file without waiting.

    The lock lives as long as the file handle; closing the handle releases
    it. Never raises for lock failures: the outcome is returned as a
    LockAttempt so callers can tell a busy clipboard from an I/O problem.
    """
    try:
        if sys.platform == "win32":
            import msvcrt

            fh.seek(0)
            msvcrt.locking(fh.fileno(), msvcrt.LK_NBLCK, 1)
        else:
            import fcntl

            fcntl.flock(fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
    except OSError as e:
        if e.errno in _BUSY_ERRNOS:
            log.debug(f"Lock on {fh.name} held by another process")
            return LockAttempt(LockStatus.HELD_BY_OTHER, e)
        log.warning(f"Failed to lock {fh.name}: {e}")
        return LockAttempt(LockStatus.IO_ERROR, e)

    log.debug(f"Lock acquired on {fh.name}")
    return LockAttempt(LockStatus.ACQUIRED)
