"""Growable byte buffers with a read/write cursor, and pools of them."""

from __future__ import annotations

import mmap
import struct
import sys
from enum import IntEnum
from os import PathLike
from typing import Union

from simpleio.errors import ErrorCode, SioError, error_from_os_error

ALIGNMENT = 16
"""Every capacity an owned buffer allocates is a multiple of this."""

DEFAULT_SIZE = 4096
"""Capacity used when a buffer is created with an initial capacity of zero."""

MAX_SIZE = sys.maxsize
"""Largest capacity the growth strategies will compute."""

_OPTIMAL_DOUBLING_LIMIT = 65536

_Memory = Union[bytearray, memoryview]


class GrowthStrategy(IntEnum):
    """How a buffer grows when a write needs more room."""

    FIXED = 0
    DOUBLE = 1
    LINEAR = 2
    OPTIMAL = 3


def align_size(size: int) -> int:
    """Round ``size`` up to the next multiple of ALIGNMENT."""
    return (size + ALIGNMENT - 1) & ~(ALIGNMENT - 1)


def grow_capacity(
    current: int,
    min_capacity: int,
    strategy: GrowthStrategy = GrowthStrategy.OPTIMAL,
    growth_factor: int = 0,
) -> int:
    """Compute the capacity to grow to so that at least ``min_capacity`` fits."""
    strategy = GrowthStrategy(strategy)
    new_capacity = current

    if strategy is GrowthStrategy.FIXED:
        new_capacity = min_capacity
    elif strategy is GrowthStrategy.DOUBLE:
        while new_capacity < min_capacity:
            if new_capacity == 0 or new_capacity > MAX_SIZE // 2:
                new_capacity = min_capacity
                break
            new_capacity *= 2
    elif strategy is GrowthStrategy.LINEAR:
        while new_capacity < min_capacity:
            if growth_factor <= 0 or new_capacity > MAX_SIZE - growth_factor:
                new_capacity = min_capacity
                break
            new_capacity += growth_factor
    else:
        # Double while small, then grow by half to limit over-allocation.
        while new_capacity < min_capacity:
            if new_capacity < _OPTIMAL_DOUBLING_LIMIT:
                if new_capacity == 0 or new_capacity > MAX_SIZE // 2:
                    new_capacity = min_capacity
                    break
                new_capacity *= 2
            else:
                if new_capacity > MAX_SIZE - new_capacity // 2:
                    new_capacity = min_capacity
                    break
                new_capacity += new_capacity // 2

    return max(new_capacity, min_capacity)


def _check_size(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SioError(ErrorCode.PARAM)
    return value


class Buffer:
    """A byte buffer with a size, a capacity and a read/write position."""

    def __init__(
        self,
        initial_capacity: int = 0,
        growth_strategy: GrowthStrategy = GrowthStrategy.OPTIMAL,
        growth_factor: int = 0,
    ) -> None:
        initial_capacity = _check_size(initial_capacity) or DEFAULT_SIZE
        self._setup(
            bytearray(align_size(initial_capacity)),
            size=0,
            owns_memory=True,
            growth_strategy=GrowthStrategy(growth_strategy),
            growth_factor=growth_factor,
        )

    def _setup(
        self,
        memory: _Memory,
        *,
        size: int,
        owns_memory: bool,
        growth_strategy: GrowthStrategy,
        growth_factor: int = 0,
        mapping: mmap.mmap | None = None,
    ) -> None:
        self._mem: _Memory = memory
        self._size = size
        self._position = 0
        self._owns_memory = owns_memory
        self._growth_strategy = growth_strategy
        self._growth_factor = growth_factor
        self._mapping = mapping

    @classmethod
    def from_memory(cls, data: bytearray | memoryview | bytes) -> Buffer:
        """Wrap existing memory without copying it; the buffer cannot grow."""
        if data is None:
            raise SioError(ErrorCode.PARAM)
        try:
            view = memoryview(data).cast("B")
        except TypeError as exc:
            raise SioError(ErrorCode.PARAM) from exc
        buffer = cls.__new__(cls)
        buffer._setup(
            view,
            size=len(view),
            owns_memory=False,
            growth_strategy=GrowthStrategy.FIXED,
        )
        return buffer

    @classmethod
    def mmap_file(cls, path: str | PathLike[str], read_only: bool = True) -> Buffer:
        """Map a whole file into a fixed-size buffer."""
        if path is None:
            raise SioError(ErrorCode.PARAM)
        mode = "rb" if read_only else "r+b"
        access = mmap.ACCESS_READ if read_only else mmap.ACCESS_WRITE
        try:
            with open(path, mode) as handle:
                mapping = mmap.mmap(handle.fileno(), 0, access=access)
        except OSError as exc:
            raise error_from_os_error(exc) from exc
        except ValueError as exc:
            # An empty file cannot be mapped.
            raise SioError(ErrorCode.PARAM) from exc
        view = memoryview(mapping)
        buffer = cls.__new__(cls)
        buffer._setup(
            view,
            size=len(view),
            owns_memory=True,
            growth_strategy=GrowthStrategy.FIXED,
            mapping=mapping,
        )
        return buffer

    def close(self) -> None:
        """Release the memory; the buffer is left empty and cannot grow."""
        if self._mapping is not None:
            if isinstance(self._mem, memoryview):
                self._mem.release()
            self._mapping.close()
        elif isinstance(self._mem, memoryview) and not self._owns_memory:
            self._mem.release()
        self._setup(
            bytearray(),
            size=0,
            owns_memory=False,
            growth_strategy=GrowthStrategy.FIXED,
        )

    def __enter__(self) -> Buffer:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Buffer(size={self._size}, capacity={self.capacity}, "
            f"position={self._position})"
        )

    @property
    def size(self) -> int:
        """Number of valid bytes held."""
        return self._size

    @property
    def capacity(self) -> int:
        """Number of bytes the current storage can hold."""
        return len(self._mem)

    @property
    def position(self) -> int:
        """Current read/write position."""
        return self._position

    @property
    def data(self) -> bytes:
        """A copy of the valid bytes."""
        return bytes(self._mem[: self._size])

    @property
    def remaining(self) -> int:
        """Bytes left between the position and the end of the data."""
        return self._size - self._position

    @property
    def at_end(self) -> bool:
        """True when the position has reached the end of the data."""
        return self._position >= self._size

    @property
    def growth_strategy(self) -> GrowthStrategy:
        return self._growth_strategy

    @property
    def _resizable(self) -> bool:
        return self._owns_memory and self._mapping is None

    def reserve(self, additional_capacity: int) -> None:
        """Make room for ``additional_capacity`` bytes beyond the current size."""
        additional_capacity = _check_size(additional_capacity)
        if self.capacity - self._size >= additional_capacity:
            return
        self.resize(self._size + additional_capacity)

    def ensure_capacity(self, min_capacity: int) -> None:
        """Grow so that the capacity is at least ``min_capacity``."""
        min_capacity = _check_size(min_capacity)
        if self.capacity >= min_capacity:
            return
        self.resize(min_capacity)

    def resize(self, new_capacity: int) -> None:
        """Reallocate to ``new_capacity`` (aligned), truncating data if smaller."""
        new_capacity = _check_size(new_capacity)
        if not self._resizable:
            raise SioError(ErrorCode.FILE_READONLY)
        new_capacity = align_size(new_capacity)
        memory = self._mem
        assert isinstance(memory, bytearray)
        if new_capacity < len(memory):
            del memory[new_capacity:]
        else:
            memory.extend(bytes(new_capacity - len(memory)))
        if new_capacity < self._size:
            self._size = new_capacity
            self._position = min(self._position, self._size)

    def shrink_to_fit(self) -> None:
        """Reduce the capacity to the aligned size of the data."""
        if not self._resizable:
            raise SioError(ErrorCode.FILE_READONLY)
        if self._size == self.capacity:
            return
        self.resize(self._size)

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Write bytes at the position, growing as needed; return the count."""
        if data is None:
            raise SioError(ErrorCode.PARAM)
        chunk = memoryview(data).cast("B")
        count = len(chunk)
        if isinstance(self._mem, memoryview) and self._mem.readonly and count:
            raise SioError(ErrorCode.FILE_READONLY)
        new_size = self._position + count
        if new_size > self.capacity:
            self.resize(
                grow_capacity(
                    self.capacity,
                    new_size,
                    self._growth_strategy,
                    self._growth_factor,
                )
            )
        if count:
            self._mem[self._position : new_size] = chunk
            self._position = new_size
        self._size = max(self._size, self._position)
        return count

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes from the position; fewer at the end."""
        size = _check_size(size)
        end = self._position + min(size, self.remaining)
        chunk = bytes(self._mem[self._position : end])
        self._position = end
        return chunk

    def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` bytes.

        Raises SioError(EOF) when fewer are available; the bytes that were
        available are still consumed.
        """
        chunk = self.read(size)
        if len(chunk) < size:
            raise SioError(ErrorCode.EOF)
        return chunk

    def seek(self, position: int) -> None:
        """Move the position to an absolute offset within the data."""
        position = _check_size(position)
        if position > self._size:
            raise SioError(ErrorCode.PARAM)
        self._position = position

    def seek_relative(self, offset: int) -> None:
        """Move the position by ``offset``, staying within the data."""
        new_position = self._position + offset
        if new_position < 0 or new_position > self._size:
            raise SioError(ErrorCode.PARAM)
        self._position = new_position

    def tell(self) -> int:
        """Return the current position."""
        return self._position

    def clear(self) -> None:
        """Discard the data and rewind; the capacity is kept."""
        self._size = 0
        self._position = 0

    def copy(self) -> Buffer:
        """Return a new owned buffer holding a copy of the data, positioned at 0."""
        duplicate = Buffer(self._size)
        duplicate._mem[: self._size] = self._mem[: self._size]
        duplicate._size = self._size
        return duplicate

    def _write_packed(self, fmt: str, value: int) -> None:
        try:
            packed = struct.pack(fmt, value)
        except struct.error as exc:
            raise SioError(ErrorCode.PARAM) from exc
        self.write(packed)

    def _read_packed(self, fmt: str) -> int:
        return struct.unpack(fmt, self.read_exact(struct.calcsize(fmt)))[0]

    def write_uint8(self, value: int) -> None:
        self._write_packed("=B", value)

    def write_uint16(self, value: int) -> None:
        self._write_packed("=H", value)

    def write_uint32(self, value: int) -> None:
        self._write_packed("=I", value)

    def write_uint64(self, value: int) -> None:
        self._write_packed("=Q", value)

    def read_uint8(self) -> int:
        return self._read_packed("=B")

    def read_uint16(self) -> int:
        return self._read_packed("=H")

    def read_uint32(self) -> int:
        return self._read_packed("=I")

    def read_uint64(self) -> int:
        return self._read_packed("=Q")


class BufferPool:
    """A fixed set of equally sized buffers handed out and taken back."""

    def __init__(self, buffer_count: int, buffer_size: int) -> None:
        if _check_size(buffer_count) == 0 or _check_size(buffer_size) == 0:
            raise SioError(ErrorCode.PARAM)
        self._buffer_size = buffer_size
        self._buffers: list[Buffer] = [Buffer(buffer_size) for _ in range(buffer_count)]
        self._used: list[bool] = [False] * buffer_count

    def __len__(self) -> int:
        return len(self._buffers)

    def __enter__(self) -> BufferPool:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def capacity(self) -> int:
        """Total number of buffers in the pool."""
        return len(self._buffers)

    @property
    def in_use(self) -> int:
        """Number of buffers currently handed out."""
        return sum(self._used)

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    def acquire(self) -> Buffer:
        """Hand out the first free buffer, cleared; SioError(BUSY) if none."""
        for index, used in enumerate(self._used):
            if not used:
                self._used[index] = True
                buffer = self._buffers[index]
                buffer.clear()
                return buffer
        raise SioError(ErrorCode.BUSY)

    def release(self, buffer: Buffer) -> None:
        """Return a buffer obtained from acquire()."""
        for index, candidate in enumerate(self._buffers):
            if candidate is buffer:
                if not self._used[index]:
                    raise SioError(ErrorCode.FILE_CLOSED)
                self._used[index] = False
                return
        raise SioError(ErrorCode.PARAM)

    def resize(self, new_buffer_count: int) -> None:
        """Change the number of buffers, keeping the first ones as they are."""
        new_buffer_count = _check_size(new_buffer_count)
        if new_buffer_count < self.in_use:
            raise SioError(ErrorCode.BUSY)
        current = len(self._buffers)
        if new_buffer_count == current:
            return
        if new_buffer_count > current:
            extra = [Buffer(self._buffer_size) for _ in range(new_buffer_count - current)]
            self._buffers.extend(extra)
            self._used.extend([False] * len(extra))
            return
        for buffer in self._buffers[new_buffer_count:]:
            buffer.close()
        del self._buffers[new_buffer_count:]
        del self._used[new_buffer_count:]

    def close(self) -> None:
        """Close every buffer and empty the pool."""
        for buffer in self._buffers:
            buffer.close()
        self._buffers = []
        self._used = []