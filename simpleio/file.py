"""File streams over operating-system file descriptors."""

from __future__ import annotations

import os
from typing import Any

from simpleio.enums import IoFlag, SeekOrigin, StreamFlag, StreamOption, StreamType
from simpleio.errors import ErrorCode, SioError, error_from_os_error
from simpleio.stream import Stream

try:
    import fcntl as _fcntl
except ImportError:  # pragma: no cover - platforms without fcntl
    _fcntl = None

DEFAULT_MODE = 0o666
"""Permission bits used for new files when none are given (before umask)."""

_O_NONBLOCK = os.O_NONBLOCK if hasattr(os, "O_NONBLOCK") else 0
_O_DIRECT = os.O_DIRECT if hasattr(os, "O_DIRECT") else 0
_O_SYNC = os.O_SYNC if hasattr(os, "O_SYNC") else 0
_O_BINARY = os.O_BINARY if hasattr(os, "O_BINARY") else 0
_HAS_BLOCKING = hasattr(os, "get_blocking") and hasattr(os, "set_blocking")

_OPTIONAL_OPEN_FLAGS = (
    (StreamFlag.CREATE, os.O_CREAT),
    (StreamFlag.EXCL, os.O_EXCL),
    (StreamFlag.TRUNC, os.O_TRUNC),
    (StreamFlag.APPEND, os.O_APPEND),
    (StreamFlag.NONBLOCK, _O_NONBLOCK),
    (StreamFlag.DIRECT, _O_DIRECT),
    (StreamFlag.SYNC, _O_SYNC),
)


def _os_call(func, *args):
    try:
        return func(*args)
    except OSError as exc:
        raise error_from_os_error(exc) from exc


def _as_flag_value(value: Any) -> bool:
    if value is None or not isinstance(value, int):
        raise SioError(ErrorCode.PARAM)
    return bool(value)


def _open_flags(flags: StreamFlag) -> int:
    """Translate stream flags into os.open() flags."""
    result = 0
    if flags & StreamFlag.READ and flags & StreamFlag.WRITE:
        result |= os.O_RDWR
    elif flags & StreamFlag.READ:
        result |= os.O_RDONLY
    elif flags & StreamFlag.WRITE:
        result |= os.O_WRONLY

    for flag, os_flag in _OPTIONAL_OPEN_FLAGS:
        if flags & flag:
            result |= os_flag
    return result | _O_BINARY


class FileStream(Stream):
    """A stream reading and writing an open file descriptor."""

    def __init__(self, fd: int, flags: StreamFlag = StreamFlag.NONE) -> None:
        if isinstance(fd, bool) or not isinstance(fd, int):
            raise SioError(ErrorCode.PARAM)
        super().__init__(StreamType.FILE, flags)
        self._fd = fd

    def fileno(self) -> int:
        """The underlying descriptor; -1 once the stream is closed."""
        return self._fd

    @property
    def closed(self) -> bool:
        return self._fd < 0

    # Stream hooks.

    def _close(self) -> None:
        if self._fd >= 0:
            _os_call(os.close, self._fd)
            self._fd = -1

    def _read(self, size: int, flags: IoFlag) -> bytes:
        return _os_call(os.read, self._fd, size)

    def _write(self, data: memoryview, flags: IoFlag) -> int:
        return _os_call(os.write, self._fd, data)

    def _flush(self) -> None:
        _os_call(os.fsync, self._fd)

    def _seek(self, offset: int, origin: SeekOrigin) -> int:
        return _os_call(os.lseek, self._fd, offset, int(origin))

    def _tell(self) -> int:
        return _os_call(os.lseek, self._fd, 0, os.SEEK_CUR)

    def _truncate(self, size: int) -> None:
        _os_call(os.ftruncate, self._fd, size)

    def _size(self) -> int:
        return _os_call(os.fstat, self._fd).st_size

    # Options.

    def _at_end(self) -> bool:
        try:
            return self._tell() >= self._size()
        except SioError:
            return False

    def get_option(self, option: StreamOption) -> Any:
        """Return an option or information item of the file."""
        try:
            option = StreamOption(option)
        except ValueError as exc:
            raise SioError(ErrorCode.UNSUPPORTED) from exc

        if option is StreamOption.INFO_TYPE:
            return self.stream_type
        if option is StreamOption.INFO_FLAGS:
            return self.flags
        if option is StreamOption.INFO_POSITION:
            return self._tell()
        if option is StreamOption.INFO_SIZE:
            return self._size()
        if option is StreamOption.INFO_READABLE:
            return bool(self.flags & StreamFlag.READ)
        if option is StreamOption.INFO_WRITABLE:
            return bool(self.flags & StreamFlag.WRITE)
        if option is StreamOption.INFO_SEEKABLE:
            return True
        if option is StreamOption.INFO_EOF:
            return self._at_end()
        if option is StreamOption.INFO_HANDLE:
            return self._fd
        if option is StreamOption.BLOCKING:
            if not _HAS_BLOCKING:
                return True
            return _os_call(os.get_blocking, self._fd)
        if option is StreamOption.CLOSE_ON_EXEC:
            return not _os_call(os.get_inheritable, self._fd)
        if option is StreamOption.FILE_APPEND:
            return bool(self.flags & StreamFlag.APPEND)
        if option is StreamOption.FILE_SYNC:
            return bool(self.flags & StreamFlag.SYNC)
        if option is StreamOption.FILE_DIRECT:
            return bool(self.flags & StreamFlag.DIRECT)
        raise SioError(ErrorCode.UNSUPPORTED)

    def set_option(self, option: StreamOption, value: Any) -> None:
        """Change the blocking, close-on-exec or synchronous-write setting."""
        try:
            option = StreamOption(option)
        except ValueError as exc:
            raise SioError(ErrorCode.UNSUPPORTED) from exc

        if option is StreamOption.BLOCKING:
            blocking = _as_flag_value(value)
            if not _HAS_BLOCKING:
                if not blocking:
                    raise SioError(ErrorCode.UNSUPPORTED)
                return
            _os_call(os.set_blocking, self._fd, blocking)
            if blocking:
                self.flags &= ~StreamFlag.NONBLOCK
            else:
                self.flags |= StreamFlag.NONBLOCK
        elif option is StreamOption.CLOSE_ON_EXEC:
            close_on_exec = _as_flag_value(value)
            _os_call(os.set_inheritable, self._fd, not close_on_exec)
        elif option is StreamOption.FILE_SYNC:
            sync = _as_flag_value(value)
            if sync:
                self.flags |= StreamFlag.SYNC
            else:
                self.flags &= ~StreamFlag.SYNC
            if _fcntl is not None and _O_SYNC:
                current = _os_call(_fcntl.fcntl, self._fd, _fcntl.F_GETFL)
                updated = current | _O_SYNC if sync else current & ~_O_SYNC
                _os_call(_fcntl.fcntl, self._fd, _fcntl.F_SETFL, updated)
        else:
            raise SioError(ErrorCode.UNSUPPORTED)


def open_file(
    path: str | os.PathLike[str],
    flags: StreamFlag = StreamFlag.READ,
    mode: int = 0,
) -> FileStream:
    """Open ``path`` as a file stream; ``mode`` 0 means DEFAULT_MODE.

    The descriptor is not inherited by child processes.
    """
    if path is None:
        raise SioError(ErrorCode.PARAM)
    flags = StreamFlag(flags)
    fd = _os_call(os.open, path, _open_flags(flags), mode or DEFAULT_MODE)
    return FileStream(fd, flags)


def from_handle(
    handle: int,
    stream_type: StreamType = StreamType.FILE,
    flags: StreamFlag = StreamFlag.NONE,
) -> Stream:
    """Wrap an existing descriptor in a stream of the given type."""
    try:
        stream_type = StreamType(stream_type)
    except ValueError as exc:
        raise SioError(ErrorCode.UNSUPPORTED) from exc
    if stream_type is StreamType.FILE:
        return FileStream(handle, StreamFlag(flags))
    raise SioError(ErrorCode.UNSUPPORTED)


_standard_streams: dict[int, FileStream] = {}


def _standard(fd: int, flags: StreamFlag) -> FileStream:
    stream = _standard_streams.get(fd)
    if stream is None:
        stream = FileStream(fd, flags)
        _standard_streams[fd] = stream
    return stream


def standard_input() -> FileStream:
    """The shared stream for standard input."""
    return _standard(0, StreamFlag.READ)


def standard_output() -> FileStream:
    """The shared stream for standard output."""
    return _standard(1, StreamFlag.WRITE)


def standard_error() -> FileStream:
    """The shared stream for standard error."""
    return _standard(2, StreamFlag.WRITE)