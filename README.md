# simpleio

Small I/O building blocks with no third-party dependencies:

- `simpleio.buffer`: `Buffer`, a growable, seekable byte buffer with
  selectable growth strategies (`GrowthStrategy`), fixed-width unsigned
  integer helpers, wrapping of existing memory and memory-mapping of files;
  `BufferPool`, a set of equally sized buffers to acquire and release.
- `simpleio.stream`: `Stream`, the common stream base class with read,
  write, vectored I/O, seek, tell, truncate, size and options.
- `simpleio.file`: `FileStream` over an operating-system file descriptor,
  and `open_file`, `from_handle`, `standard_input`, `standard_output`,
  `standard_error`.
- `simpleio.locking`: byte-range locks on file streams (`lock_file`,
  `unlock_file`).
- `simpleio.enums`: `StreamType`, `StreamFlag`, `StreamOption`,
  `SeekOrigin` and `IoFlag`.
- `simpleio.errors`: the `ErrorCode` enumeration, the `SioError` exception
  every failure raises, `strerror`, `error_from_errno` and
  `error_from_os_error`.
- `simpleio.runtime`: `initialize(conf)` and `cleanup()` for library-wide
  settings.

## Installation

```
pip install simpleio
```

## Buffers

```python
from simpleio.buffer import Buffer, BufferPool, GrowthStrategy

with Buffer() as buf:
    buf.write(b"hello")
    buf.write_uint32(42)
    buf.seek(0)
    assert buf.read(5) == b"hello"
    assert buf.read_uint32() == 42
```

A new buffer gets a capacity of 4096 bytes when given 0, and every capacity
it allocates is rounded up to a multiple of 16. When a write needs more room
the buffer grows by its strategy: `FIXED` (exactly what is needed), `DOUBLE`,
`LINEAR` (by `growth_factor` bytes) or `OPTIMAL` (the default: doubling up to
64 KiB, then growing by half). `grow_capacity` and `align_size` expose those
calculations.

- `read(size)` returns up to `size` bytes; `read_exact(size)` raises
  `SioError` with code `EOF` when fewer are available.
- `seek`, `seek_relative`, `tell`, `remaining`, `at_end`, `clear`,
  `reserve`, `ensure_capacity`, `resize`, `shrink_to_fit` and `copy` work on
  the cursor and storage.
- The `write_uintN` / `read_uintN` helpers (8, 16, 32, 64 bits) use the
  machine's native byte order.
- `Buffer.from_memory(data)` wraps existing memory without copying; such a
  buffer cannot grow, and writing into read-only memory raises `SioError`
  with code `FILE_READONLY`.
- `Buffer.mmap_file(path, read_only=True)` maps a whole file; the mapping has
  a fixed size, and an empty file cannot be mapped.

```python
pool = BufferPool(4, 1024)
b = pool.acquire()          # cleared buffer; SioError(BUSY) when none is free
b.write(b"payload")
pool.release(b)             # releasing twice raises SioError(FILE_CLOSED)
pool.resize(8)              # cannot shrink below the buffers in use
pool.close()
```

## File streams

```python
from simpleio.enums import SeekOrigin, StreamFlag, StreamOption
from simpleio.file import open_file

flags = StreamFlag.READ | StreamFlag.WRITE | StreamFlag.CREATE | StreamFlag.TRUNC
with open_file("data.bin", flags, 0o644) as stream:
    stream.write(b"abcdef")
    stream.seek(0, SeekOrigin.SET)
    print(stream.read(3))                               # b"abc"
    print(stream.size())                                # 6
    print(stream.get_option(StreamOption.INFO_POSITION))  # 3
```

A `mode` of 0 means `0o666` (before the umask). Passing `IoFlag.DOALL` to
`read` or `write` repeats the call until the whole amount is transferred; a
transfer that stops part way raises `SioError` (`EOF` for reads, `IO` for
writes) whose `partial` attribute holds what was transferred. `readv` and
`writev` handle a list of buffers in order and stop at the first one that is
not transferred completely.

File streams answer the `INFO_*` options and `BLOCKING`, `CLOSE_ON_EXEC`,
`FILE_APPEND`, `FILE_SYNC` and `FILE_DIRECT`; `set_option` changes
`BLOCKING`, `CLOSE_ON_EXEC` and `FILE_SYNC`.

## Locking

```python
from simpleio.locking import lock_file, unlock_file

lock_file(stream, offset=0, size=0, exclusive=True, wait=False)  # size 0: to the end
unlock_file(stream)
```

Locks rely on the `fcntl` module; where it is missing they raise `SioError`
with code `UNSUPPORTED`.

## Errors

Operations raise `simpleio.errors.SioError`. Its `code` attribute holds an
`ErrorCode`, and `strerror(code)` gives the matching message:

```python
from simpleio.errors import ErrorCode, strerror

strerror(ErrorCode.EOF)   # "End of file or stream"
```

## What it does not do

Only file streams are provided. `StreamType` names sockets, pipes, timers,
signals, message queues, shared memory, terminals and others, but
`from_handle` builds a stream for `StreamType.FILE` alone and raises
`SioError(UNSUPPORTED)` for every other type. `Stream.set_buffer` always
raises `SioError(UNSUPPORTED)`: there is no buffered stream wrapper.