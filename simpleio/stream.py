"""The stream base class: dispatching, whole-transfer loops and vector I/O."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Union

from simpleio.enums import IoFlag, SeekOrigin, StreamFlag, StreamOption, StreamType
from simpleio.errors import ErrorCode, SioError

_Bytes = Union[bytes, bytearray, memoryview]


def _check_count(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SioError(ErrorCode.PARAM)
    return value


def _incomplete(code: ErrorCode, partial: Any, cause: BaseException | None) -> SioError:
    """Build an error for a transfer that stopped part way.

    ``partial`` holds what was transferred before the stop: the bytes read,
    or the number of bytes written.
    """
    error = SioError(code)
    error.partial = partial  # type: ignore[attr-defined]
    error.__cause__ = cause
    return error


class Stream:
    """A stream of bytes.

    Concrete streams override the hooks ``_close``, ``_read``, ``_write``,
    ``_readv``, ``_writev``, ``_flush``, ``_seek``, ``_tell``, ``_truncate``
    and ``_size``, and the ``get_option``/``set_option`` methods. Operations
    whose hook is not provided raise SioError(UNSUPPORTED).
    """

    def __init__(
        self,
        stream_type: StreamType = StreamType.UNKNOWN,
        flags: StreamFlag = StreamFlag.NONE,
    ) -> None:
        self.stream_type = StreamType(stream_type)
        self.flags = StreamFlag(flags)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self.stream_type.name}, flags={self.flags!r})"

    def __enter__(self) -> Stream:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # Hooks for concrete streams.

    def _close(self) -> None:
        raise SioError(ErrorCode.UNSUPPORTED)

    def _read(self, size: int, flags: IoFlag) -> bytes:
        """Read at most ``size`` bytes; an empty result means end of stream."""
        raise SioError(ErrorCode.UNSUPPORTED)

    def _write(self, data: memoryview, flags: IoFlag) -> int:
        """Write some of ``data`` and return how many bytes were written."""
        raise SioError(ErrorCode.UNSUPPORTED)

    def _readv(self, buffers: list[memoryview], flags: IoFlag) -> int:
        raise SioError(ErrorCode.UNSUPPORTED)

    def _writev(self, buffers: list[memoryview], flags: IoFlag) -> int:
        raise SioError(ErrorCode.UNSUPPORTED)

    def _flush(self) -> None:
        raise SioError(ErrorCode.UNSUPPORTED)

    def _seek(self, offset: int, origin: SeekOrigin) -> int:
        raise SioError(ErrorCode.UNSUPPORTED)

    def _tell(self) -> int:
        raise SioError(ErrorCode.UNSUPPORTED)

    def _truncate(self, size: int) -> None:
        raise SioError(ErrorCode.UNSUPPORTED)

    def _size(self) -> int:
        raise SioError(ErrorCode.UNSUPPORTED)

    def _provides(self, name: str) -> bool:
        return getattr(type(self), name) is not getattr(Stream, name)

    # Core operations.

    def close(self) -> None:
        """Close the stream and release its resources."""
        self._close()

    def read(self, size: int, flags: IoFlag = IoFlag.NONE) -> bytes:
        """Read up to ``size`` bytes.

        With IoFlag.DOALL the read is repeated until ``size`` bytes arrive;
        if the stream ends or fails first after some data, SioError(EOF) is
        raised with the data received in its ``partial`` attribute.
        """
        size = _check_count(size)
        flags = IoFlag(flags)
        if not self._provides("_read"):
            raise SioError(ErrorCode.UNSUPPORTED)
        if size == 0:
            return b""
        if not flags & IoFlag.DOALL:
            return bytes(self._read(size, flags))

        inner = flags & ~IoFlag.DOALL
        chunks: list[bytes] = []
        total = 0
        failure: SioError | None = None
        while total < size:
            try:
                chunk = bytes(self._read(size - total, inner))
            except SioError as exc:
                failure = exc
                break
            if not chunk:
                break
            chunks.append(chunk)
            total += len(chunk)
            if flags & IoFlag.DOALL_NONBLOCK:
                break

        data = b"".join(chunks)
        if total < size:
            if total > 0:
                raise _incomplete(ErrorCode.EOF, data, failure)
            if failure is not None:
                raise failure
        return data

    def write(self, data: _Bytes, flags: IoFlag = IoFlag.NONE) -> int:
        """Write ``data`` and return the number of bytes written.

        With IoFlag.DOALL the write is repeated until everything is written;
        if it stops short after some progress, SioError(IO) is raised with
        the number of bytes written in its ``partial`` attribute.
        """
        if data is None:
            raise SioError(ErrorCode.PARAM)
        try:
            view = memoryview(data).cast("B")
        except TypeError as exc:
            raise SioError(ErrorCode.PARAM) from exc
        flags = IoFlag(flags)
        if not self._provides("_write"):
            raise SioError(ErrorCode.UNSUPPORTED)
        size = len(view)
        if size == 0:
            return 0
        if not flags & IoFlag.DOALL:
            return self._write(view, flags)

        inner = flags & ~IoFlag.DOALL
        total = 0
        failure: SioError | None = None
        while total < size:
            try:
                written = self._write(view[total:], inner)
            except SioError as exc:
                failure = exc
                break
            total += written
            if written == 0:
                break
            if flags & IoFlag.DOALL_NONBLOCK:
                break

        if total < size:
            if total > 0:
                raise _incomplete(ErrorCode.IO, total, failure)
            if failure is not None:
                raise failure
        return total

    def readv(self, buffers: Iterable[bytearray | memoryview], flags: IoFlag = IoFlag.NONE) -> int:
        """Fill the writable ``buffers`` in order and return the bytes read.

        Stops at the first buffer that is not filled completely.
        """
        if buffers is None:
            raise SioError(ErrorCode.PARAM)
        views: list[memoryview] = []
        for buffer in buffers:
            try:
                view = memoryview(buffer).cast("B")
            except TypeError as exc:
                raise SioError(ErrorCode.PARAM) from exc
            if view.readonly:
                raise SioError(ErrorCode.PARAM)
            views.append(view)
        flags = IoFlag(flags)
        if self._provides("_readv"):
            return self._readv(views, flags)

        total = 0
        for view in views:
            try:
                chunk = self.read(len(view), flags)
            except SioError as exc:
                if exc.code != ErrorCode.EOF:
                    raise _incomplete(ErrorCode(exc.code), total, exc) from exc
                chunk = getattr(exc, "partial", b"")
            view[: len(chunk)] = chunk
            total += len(chunk)
            if len(chunk) < len(view):
                break
        return total

    def writev(self, buffers: Iterable[_Bytes], flags: IoFlag = IoFlag.NONE) -> int:
        """Write ``buffers`` in order and return the bytes written.

        Stops at the first buffer that is not written completely.
        """
        if buffers is None:
            raise SioError(ErrorCode.PARAM)
        try:
            views = [memoryview(buffer).cast("B") for buffer in buffers]
        except TypeError as exc:
            raise SioError(ErrorCode.PARAM) from exc
        flags = IoFlag(flags)
        if self._provides("_writev"):
            return self._writev(views, flags)

        total = 0
        for view in views:
            try:
                written = self.write(view, flags)
            except SioError as exc:
                raise _incomplete(ErrorCode(exc.code), total, exc) from exc
            total += written
            if written < len(view):
                break
        return total

    def flush(self) -> None:
        """Push buffered data to the underlying device."""
        self._flush()

    # Extended operations.

    def seek(self, offset: int, origin: SeekOrigin = SeekOrigin.SET) -> int:
        """Move the position and return the new one."""
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise SioError(ErrorCode.PARAM)
        try:
            origin = SeekOrigin(origin)
        except ValueError as exc:
            raise SioError(ErrorCode.PARAM) from exc
        return self._seek(offset, origin)

    def tell(self) -> int:
        """Return the current position."""
        return self._tell()

    def truncate(self, size: int) -> None:
        """Cut or extend the stream to ``size`` bytes."""
        self._truncate(_check_count(size))

    def size(self) -> int:
        """Return the total size of the stream, where it has one."""
        return self._size()

    # Options and state.

    def get_option(self, option: StreamOption) -> Any:
        """Return the value of an option or information item."""
        raise SioError(ErrorCode.UNSUPPORTED)

    def set_option(self, option: StreamOption, value: Any) -> None:
        """Change an option."""
        raise SioError(ErrorCode.UNSUPPORTED)

    def eof(self) -> bool:
        """True when the stream reports that it is at its end.

        A stream that cannot tell is assumed not to be at its end.
        """
        try:
            return bool(self.get_option(StreamOption.INFO_EOF))
        except SioError:
            return False

    def last_error(self) -> ErrorCode:
        """The last error the stream recorded; GENERIC if it cannot tell."""
        try:
            value = self.get_option(StreamOption.INFO_ERROR)
        except SioError:
            return ErrorCode.GENERIC
        try:
            return ErrorCode(value)
        except ValueError:
            return ErrorCode.GENERIC

    def set_buffer(self, buffer_size: int = 0, mode: int = 0) -> None:
        """Attach an I/O buffer to the stream; not supported."""
        raise SioError(ErrorCode.UNSUPPORTED)