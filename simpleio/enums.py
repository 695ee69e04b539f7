"""Stream types, open flags, option identifiers, seek origins and I/O flags."""

from __future__ import annotations

import os
import socket
from enum import IntEnum, IntFlag


class StreamType(IntEnum):
    """Kind of resource a stream is attached to."""

    UNKNOWN = 0
    FILE = 1
    SOCKET = 2
    PSEUDO_SOCKET = 3
    PIPE = 4
    TIMER = 5
    SIGNAL = 6
    MSGQUEUE = 7
    SHMEM = 8
    BUFFER = 9
    RAWMEM = 10
    TERMINAL = 11
    CUSTOM = 12


class StreamFlag(IntFlag):
    """Flags used when opening a stream and describing its mode."""

    NONE = 0

    # Access modes
    READ = 1 << 0
    WRITE = 1 << 1
    RDWR = READ | WRITE

    # Creation modes
    CREATE = 1 << 2
    EXCL = 1 << 3
    TRUNC = 1 << 4
    APPEND = 1 << 5

    # Blocking modes
    NONBLOCK = 1 << 6
    ASYNC = 1 << 7

    # Caching modes
    UNBUFFERED = 1 << 8
    SYNC = 1 << 9

    # Special modes
    TEMP = 1 << 10
    BINARY = 1 << 11
    MMAP = 1 << 12
    DIRECT = 1 << 13
    SERVER = 1 << 14
    TCP = 1 << 15


class StreamOption(IntEnum):
    """Identifiers for stream options and read-only stream information."""

    # General options
    TIMEOUT = 1
    BUFFER_SIZE = 2
    BLOCKING = 3
    CLOSE_ON_EXEC = 4
    AUTOCLOSE = 5

    # File options
    FILE_APPEND = 100
    FILE_SYNC = 101
    FILE_DIRECT = 102
    FILE_SPARSE = 103
    FILE_MMAP = 104

    # Socket options
    SOCK_NODELAY = 200
    SOCK_KEEPALIVE = 201
    SOCK_REUSEADDR = 202
    SOCK_BROADCAST = 203
    SOCK_RCVBUF = 204
    SOCK_SNDBUF = 205
    SOCK_LINGER = 206
    SOCK_OOBINLINE = 207
    SOCK_DONTROUTE = 208
    SOCK_RCVTIMEO = 209
    SOCK_SNDTIMEO = 210
    SOCK_RCVLOWAT = 211
    SOCK_SNDLOWAT = 212

    # Timer options
    TIMER_INTERVAL = 300
    TIMER_ONESHOT = 301

    # Terminal options
    TERM_ECHO = 400
    TERM_CANONICAL = 401
    TERM_RAW = 402
    TERM_COLOR = 403

    # Stream information (read-only)
    INFO_TYPE = 1000
    INFO_FLAGS = 1001
    INFO_POSITION = 1002
    INFO_SIZE = 1003
    INFO_READABLE = 1004
    INFO_WRITABLE = 1005
    INFO_SEEKABLE = 1006
    INFO_EOF = 1007
    INFO_ERROR = 1008
    INFO_HANDLE = 1009
    INFO_BUFFER_SIZE = 1010

    @property
    def read_only(self) -> bool:
        """True for information identifiers that cannot be set."""
        return self.value >= StreamOption.INFO_TYPE.value


class SeekOrigin(IntEnum):
    """Reference point for a seek."""

    SET = os.SEEK_SET
    CUR = os.SEEK_CUR
    END = os.SEEK_END


# Socket message flags fall back to the Linux values where the platform
# does not define them.
_MSG_DEFAULTS = {
    "MSG_OOB": 0x1,
    "MSG_DONTROUTE": 0x4,
    "MSG_DONTWAIT": 0x40,
    "MSG_EOR": 0x80,
    "MSG_CONFIRM": 0x800,
    "MSG_NOSIGNAL": 0x4000,
    "MSG_MORE": 0x8000,
    "MSG_FASTOPEN": 0x20000000,
}


def _msg(name: str) -> int:
    return getattr(socket, name, _MSG_DEFAULTS[name])


class IoFlag(IntFlag):
    """Per-call flags for reads and writes.

    DOALL repeats the operation until everything is transferred;
    DOALL_NONBLOCK, together with DOALL, stops after the first transfer.
    The MSG_* members are passed through to socket calls.
    """

    NONE = 0
    DOALL = 1 << 30
    DOALL_NONBLOCK = 1 << 31
    MSG_CONFIRM = _msg("MSG_CONFIRM")
    MSG_DONTROUTE = _msg("MSG_DONTROUTE")
    MSG_DONTWAIT = _msg("MSG_DONTWAIT")
    MSG_EOR = _msg("MSG_EOR")
    MSG_MORE = _msg("MSG_MORE")
    MSG_NOSIGNAL = _msg("MSG_NOSIGNAL")
    MSG_OOB = _msg("MSG_OOB")
    MSG_FASTOPEN = _msg("MSG_FASTOPEN")

    @property
    def socket_flags(self) -> int:
        """The bits meant for the operating system's socket calls."""
        return int(self) & ~int(IoFlag.DOALL | IoFlag.DOALL_NONBLOCK)