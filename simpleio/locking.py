"""Advisory record locks on regions of file streams."""

from __future__ import annotations

from typing import Any

from simpleio.enums import StreamType
from simpleio.errors import ErrorCode, SioError, error_from_os_error
from simpleio.file import FileStream

try:
    import fcntl as _fcntl
except ImportError:  # pragma: no cover - platforms without fcntl
    _fcntl = None


def _file_descriptor(stream: Any) -> int:
    if not isinstance(stream, FileStream) or stream.stream_type is not StreamType.FILE:
        raise SioError(ErrorCode.PARAM)
    return stream.fileno()


def _check_range(offset: int, size: int) -> None:
    for value in (offset, size):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise SioError(ErrorCode.PARAM)


def _apply(fd: int, command: int, offset: int, size: int) -> None:
    if _fcntl is None:
        raise SioError(ErrorCode.UNSUPPORTED)
    try:
        _fcntl.lockf(fd, command, size, offset, 0)
    except OSError as exc:
        raise error_from_os_error(exc) from exc
    except (ValueError, OverflowError) as exc:
        raise SioError(ErrorCode.PARAM) from exc


def lock_file(
    stream: FileStream,
    offset: int = 0,
    size: int = 0,
    exclusive: bool = True,
    wait: bool = True,
) -> None:
    """Lock ``size`` bytes of the file from ``offset``; a size of 0 locks to the end.

    An exclusive lock needs the file open for writing, a shared lock needs it
    open for reading. Without ``wait`` a conflicting lock raises at once
    instead of blocking.
    """
    fd = _file_descriptor(stream)
    _check_range(offset, size)
    if _fcntl is None:
        raise SioError(ErrorCode.UNSUPPORTED)
    command = _fcntl.LOCK_EX if exclusive else _fcntl.LOCK_SH
    if not wait:
        command |= _fcntl.LOCK_NB
    _apply(fd, command, offset, size)


def unlock_file(stream: FileStream, offset: int = 0, size: int = 0) -> None:
    """Release a lock on ``size`` bytes from ``offset``; a size of 0 means to the end."""
    fd = _file_descriptor(stream)
    _check_range(offset, size)
    if _fcntl is None:
        raise SioError(ErrorCode.UNSUPPORTED)
    _apply(fd, _fcntl.LOCK_UN, offset, size)