"""Error codes, their messages and conversion from operating-system errors."""

from __future__ import annotations

import errno as _errno
from enum import IntEnum, auto


class ErrorCode(IntEnum):
    """Library error codes."""

    SUCCESS = 0
    GENERIC = auto()
    PARAM = auto()
    MEM = auto()
    IO = auto()
    EOF = auto()
    NET = auto()
    DNS = auto()
    TIMEOUT = auto()
    BUSY = auto()
    PERM = auto()
    EXISTS = auto()
    NOTFOUND = auto()
    BUFFER_TOO_SMALL = auto()
    BAD_PATH = auto()
    INTERRUPTED = auto()
    WOULDBLOCK = auto()
    SYSTEM = auto()
    UNSUPPORTED = auto()

    FILE_ISDIR = auto()
    FILE_NOT_DIR = auto()
    FILE_READONLY = auto()
    FILE_TOO_LARGE = auto()
    FILE_NOSPACE = auto()
    FILE_CLOSED = auto()
    FILE_OPEN = auto()
    FILE_LOCKED = auto()
    FILE_CORRUPT = auto()
    FILE_SEEK = auto()
    FILE_NAME_TOO_LONG = auto()
    FILE_MMAP = auto()
    FILE_FORMAT = auto()
    FILE_LOOP = auto()

    NET_CONN_REFUSED = auto()
    NET_CONN_ABORTED = auto()
    NET_CONN_RESET = auto()
    NET_HOST_UNREACHABLE = auto()
    NET_HOST_DOWN = auto()
    NET_UNKNOWN_HOST = auto()
    NET_ADDR_IN_USE = auto()
    NET_NOT_CONN = auto()
    NET_SHUTDOWN = auto()
    NET_MSG_TOO_LARGE = auto()
    NET_CONN_TIMEOUT = auto()
    NET_PROTO = auto()
    NET_INVALID_ADDR = auto()
    NET_ADDR_REQUIRED = auto()
    NET_INPROGRESS = auto()
    NET_ALREADY = auto()
    NET_NOT_SOCK = auto()
    NET_NO_PROTO_OPT = auto()

    THREAD_CREATE = auto()
    MUTEX_INIT = auto()
    MUTEX_LOCK = auto()
    MUTEX_UNLOCK = auto()
    COND_INIT = auto()
    COND_WAIT = auto()
    COND_SIGNAL = auto()
    THREAD_JOIN = auto()
    THREAD_DETACH = auto()
    DEADLOCK = auto()

    SEC_CERT = auto()
    SEC_AUTH = auto()
    SEC_VERIFICATION = auto()
    SEC_ENCRYPTION = auto()
    SEC_DECRYPTION = auto()
    SEC_BAD_KEY = auto()
    SEC_BAD_SIGNATURE = auto()
    SEC_KEY_EXPIRED = auto()
    SEC_REVOKED = auto()
    SEC_UNTRUSTED = auto()

    PROC_FORK = auto()
    PROC_EXEC = auto()
    PROC_PIPE = auto()
    PROC_WAITPID = auto()
    PROC_KILL = auto()
    PROC_SIGNAL = auto()
    PROC_NOTFOUND = auto()
    PROC_PERM = auto()
    PROC_RESOURCES = auto()
    PROC_ZOMBIE = auto()

    SYS_LIMIT = auto()
    SYS_RESOURCES = auto()
    SYS_NOSUPPORT = auto()
    SYS_NOTIMPLEMENTED = auto()
    SYS_CALL = auto()
    SYS_OVERFLOW = auto()
    SYS_NOPROC = auto()
    SYS_INVALID = auto()
    SYS_DEVICE = auto()
    SYS_NOTSUP = auto()


_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.SUCCESS: "Success",
    ErrorCode.GENERIC: "Generic error",
    ErrorCode.PARAM: "Invalid parameter",
    ErrorCode.MEM: "Memory allocation failure",
    ErrorCode.IO: "I/O error",
    ErrorCode.EOF: "End of file or stream",
    ErrorCode.NET: "Network error",
    ErrorCode.DNS: "DNS resolution error",
    ErrorCode.TIMEOUT: "Operation timed out",
    ErrorCode.BUSY: "Resource busy",
    ErrorCode.PERM: "Permission denied",
    ErrorCode.EXISTS: "Resource already exists",
    ErrorCode.NOTFOUND: "Resource not found",
    ErrorCode.BUFFER_TOO_SMALL: "Destination buffer too small",
    ErrorCode.BAD_PATH: "Invalid path format",
    ErrorCode.INTERRUPTED: "Operation interrupted",
    ErrorCode.WOULDBLOCK: "Operation would block",
    ErrorCode.SYSTEM: "System error",
    ErrorCode.UNSUPPORTED: "Unsupported operation",
    ErrorCode.FILE_ISDIR: "File is a directory",
    ErrorCode.FILE_NOT_DIR: "Path is not a directory",
    ErrorCode.FILE_READONLY: "File is read-only",
    ErrorCode.FILE_TOO_LARGE: "File too large",
    ErrorCode.FILE_NOSPACE: "No space left on device",
    ErrorCode.FILE_CLOSED: "File is already closed",
    ErrorCode.FILE_OPEN: "File already open",
    ErrorCode.FILE_LOCKED: "File is locked",
    ErrorCode.FILE_CORRUPT: "File is corrupted",
    ErrorCode.FILE_SEEK: "File seek error",
    ErrorCode.FILE_NAME_TOO_LONG: "Filename too long",
    ErrorCode.FILE_MMAP: "Memory mapping error",
    ErrorCode.FILE_FORMAT: "Invalid file format",
    ErrorCode.FILE_LOOP: "Too many symbolic links",
    ErrorCode.NET_CONN_REFUSED: "Connection refused",
    ErrorCode.NET_CONN_ABORTED: "Connection aborted",
    ErrorCode.NET_CONN_RESET: "Connection reset",
    ErrorCode.NET_HOST_UNREACHABLE: "Host unreachable",
    ErrorCode.NET_HOST_DOWN: "Host is down",
    ErrorCode.NET_UNKNOWN_HOST: "Unknown host",
    ErrorCode.NET_ADDR_IN_USE: "Address already in use",
    ErrorCode.NET_NOT_CONN: "Socket not connected",
    ErrorCode.NET_SHUTDOWN: "Socket shutdown",
    ErrorCode.NET_MSG_TOO_LARGE: "Message too large",
    ErrorCode.NET_CONN_TIMEOUT: "Connection timeout",
    ErrorCode.NET_PROTO: "Protocol error",
    ErrorCode.NET_INVALID_ADDR: "Invalid address",
    ErrorCode.NET_ADDR_REQUIRED: "Destination address required",
    ErrorCode.NET_INPROGRESS: "Operation now in progress",
    ErrorCode.NET_ALREADY: "Operation already in progress",
    ErrorCode.NET_NOT_SOCK: "Socket operation on non-socket",
    ErrorCode.NET_NO_PROTO_OPT: "Protocol not available",
    ErrorCode.THREAD_CREATE: "Cannot create thread",
    ErrorCode.MUTEX_INIT: "Cannot initialize mutex",
    ErrorCode.MUTEX_LOCK: "Cannot lock mutex",
    ErrorCode.MUTEX_UNLOCK: "Cannot unlock mutex",
    ErrorCode.COND_INIT: "Cannot initialize condition",
    ErrorCode.COND_WAIT: "Error in condition wait",
    ErrorCode.COND_SIGNAL: "Error in condition signal",
    ErrorCode.THREAD_JOIN: "Error in thread join",
    ErrorCode.THREAD_DETACH: "Error in thread detach",
    ErrorCode.DEADLOCK: "Resource deadlock would occur",
    ErrorCode.SEC_CERT: "Certificate error",
    ErrorCode.SEC_AUTH: "Authentication error",
    ErrorCode.SEC_VERIFICATION: "Verification failed",
    ErrorCode.SEC_ENCRYPTION: "Encryption error",
    ErrorCode.SEC_DECRYPTION: "Decryption error",
    ErrorCode.SEC_BAD_KEY: "Bad key",
    ErrorCode.SEC_BAD_SIGNATURE: "Bad signature",
    ErrorCode.SEC_KEY_EXPIRED: "Key expired",
    ErrorCode.SEC_REVOKED: "Certificate revoked",
    ErrorCode.SEC_UNTRUSTED: "Untrusted certificate",
    ErrorCode.PROC_FORK: "Fork error",
    ErrorCode.PROC_EXEC: "Exec error",
    ErrorCode.PROC_PIPE: "Pipe error",
    ErrorCode.PROC_WAITPID: "Wait error",
    ErrorCode.PROC_KILL: "Kill error",
    ErrorCode.PROC_SIGNAL: "Signal error",
    ErrorCode.PROC_NOTFOUND: "Process not found",
    ErrorCode.PROC_PERM: "Process permission denied",
    ErrorCode.PROC_RESOURCES: "Insufficient resources",
    ErrorCode.PROC_ZOMBIE: "Zombie process",
    ErrorCode.SYS_LIMIT: "System limit reached",
    ErrorCode.SYS_RESOURCES: "System resources exhausted",
    ErrorCode.SYS_NOSUPPORT: "System does not support",
    ErrorCode.SYS_NOTIMPLEMENTED: "Not implemented on this system",
    ErrorCode.SYS_CALL: "System call error",
    ErrorCode.SYS_OVERFLOW: "Value too large for system",
    ErrorCode.SYS_NOPROC: "No such process",
    ErrorCode.SYS_INVALID: "Invalid system state",
    ErrorCode.SYS_DEVICE: "Device error",
    ErrorCode.SYS_NOTSUP: "Not supported",
}

_UNKNOWN_MESSAGE = "Unknown error"

# Ordered: where two errno names share a number, the first listed wins.
_ERRNO_TABLE: tuple[tuple[str, ErrorCode], ...] = (
    ("EPERM", ErrorCode.PERM),
    ("ENOENT", ErrorCode.NOTFOUND),
    ("ESRCH", ErrorCode.PROC_NOTFOUND),
    ("EINTR", ErrorCode.INTERRUPTED),
    ("EIO", ErrorCode.IO),
    ("ENXIO", ErrorCode.SYS_DEVICE),
    ("E2BIG", ErrorCode.PARAM),
    ("ENOEXEC", ErrorCode.PROC_EXEC),
    ("EBADF", ErrorCode.PARAM),
    ("ECHILD", ErrorCode.PROC_WAITPID),
    ("EAGAIN", ErrorCode.WOULDBLOCK),
    ("EWOULDBLOCK", ErrorCode.WOULDBLOCK),
    ("ENOMEM", ErrorCode.MEM),
    ("EACCES", ErrorCode.PERM),
    ("EFAULT", ErrorCode.PARAM),
    ("EBUSY", ErrorCode.BUSY),
    ("EEXIST", ErrorCode.EXISTS),
    ("EXDEV", ErrorCode.PARAM),
    ("ENODEV", ErrorCode.SYS_DEVICE),
    ("ENOTDIR", ErrorCode.FILE_NOT_DIR),
    ("EISDIR", ErrorCode.FILE_ISDIR),
    ("EINVAL", ErrorCode.PARAM),
    ("ENFILE", ErrorCode.SYS_LIMIT),
    ("EMFILE", ErrorCode.SYS_LIMIT),
    ("ENOTTY", ErrorCode.PARAM),
    ("ETXTBSY", ErrorCode.BUSY),
    ("EFBIG", ErrorCode.FILE_TOO_LARGE),
    ("ENOSPC", ErrorCode.FILE_NOSPACE),
    ("ESPIPE", ErrorCode.FILE_SEEK),
    ("EROFS", ErrorCode.FILE_READONLY),
    ("EMLINK", ErrorCode.SYS_LIMIT),
    ("EPIPE", ErrorCode.IO),
    ("EDOM", ErrorCode.PARAM),
    ("ERANGE", ErrorCode.PARAM),
    ("EDEADLK", ErrorCode.DEADLOCK),
    ("ENAMETOOLONG", ErrorCode.FILE_NAME_TOO_LONG),
    ("ENOTEMPTY", ErrorCode.EXISTS),
    ("ELOOP", ErrorCode.FILE_LOOP),
    ("EOVERFLOW", ErrorCode.SYS_OVERFLOW),
    ("ENOSYS", ErrorCode.SYS_NOTIMPLEMENTED),
    ("ETIMEDOUT", ErrorCode.TIMEOUT),
    ("ECANCELED", ErrorCode.INTERRUPTED),
    ("EOWNERDEAD", ErrorCode.SYS_INVALID),
    ("ENOTRECOVERABLE", ErrorCode.SYS_INVALID),
    ("ENOTSUP", ErrorCode.UNSUPPORTED),
    ("EBADMSG", ErrorCode.NET_PROTO),
    ("EPROTO", ErrorCode.NET_PROTO),
    ("EADDRNOTAVAIL", ErrorCode.NET_INVALID_ADDR),
    ("EADDRINUSE", ErrorCode.NET_ADDR_IN_USE),
    ("ECONNREFUSED", ErrorCode.NET_CONN_REFUSED),
    ("ECONNRESET", ErrorCode.NET_CONN_RESET),
    ("ECONNABORTED", ErrorCode.NET_CONN_ABORTED),
    ("EISCONN", ErrorCode.NET),
    ("ENOTCONN", ErrorCode.NET_NOT_CONN),
    ("EHOSTUNREACH", ErrorCode.NET_HOST_UNREACHABLE),
    ("EHOSTDOWN", ErrorCode.NET_HOST_DOWN),
    ("EMSGSIZE", ErrorCode.NET_MSG_TOO_LARGE),
    ("ENOPROTOOPT", ErrorCode.NET_NO_PROTO_OPT),
    ("EDESTADDRREQ", ErrorCode.NET_ADDR_REQUIRED),
    ("EALREADY", ErrorCode.NET_ALREADY),
    ("EINPROGRESS", ErrorCode.NET_INPROGRESS),
)


def _build_errno_map() -> dict[int, ErrorCode]:
    mapping: dict[int, ErrorCode] = {0: ErrorCode.SUCCESS}
    for name, code in _ERRNO_TABLE:
        number = getattr(_errno, name, None)
        if number is not None:
            mapping.setdefault(number, code)
    return mapping


_ERRNO_MAP = _build_errno_map()


def strerror(code: int) -> str:
    """Return the human-readable message for an error code."""
    try:
        return _MESSAGES[ErrorCode(code)]
    except (ValueError, KeyError):
        return _UNKNOWN_MESSAGE


class SioError(Exception):
    """Exception carrying a library error code."""

    def __init__(self, code: int, message: str | None = None) -> None:
        try:
            self.code: ErrorCode | int = ErrorCode(code)
        except ValueError:
            self.code = code
        self.message = message if message is not None else strerror(code)
        super().__init__(self.message)

    def __repr__(self) -> str:
        name = self.code.name if isinstance(self.code, ErrorCode) else self.code
        return f"SioError({name}, {self.message!r})"


def error_from_errno(error: int) -> ErrorCode:
    """Translate an operating-system errno value into an ErrorCode."""
    return _ERRNO_MAP.get(error, ErrorCode.GENERIC)


def error_from_os_error(exc: OSError) -> SioError:
    """Build a SioError describing an OSError."""
    number = exc.errno
    code = ErrorCode.GENERIC if number is None else error_from_errno(number)
    error = SioError(code)
    error.__cause__ = exc
    return error