import errno

import pytest

from simpleio.errors import (
    ErrorCode,
    SioError,
    error_from_errno,
    error_from_os_error,
    strerror,
)


def test_strerror_known_messages():
    assert strerror(ErrorCode.SUCCESS) == "Success"
    assert strerror(ErrorCode.PARAM) == "Invalid parameter"
    assert strerror(ErrorCode.EOF) == "End of file or stream"
    assert strerror(ErrorCode.FILE_READONLY) == "File is read-only"


def test_strerror_unknown_code():
    assert strerror(123456) == "Unknown error"
    assert strerror(-7) == "Unknown error"


def test_every_code_has_its_own_message():
    messages = [strerror(code) for code in ErrorCode]
    assert "Unknown error" not in messages
    assert len(set(messages)) == len(messages)


def test_strerror_accepts_plain_int():
    assert strerror(int(ErrorCode.BUSY)) == strerror(ErrorCode.BUSY)


@pytest.mark.parametrize(
    "number, expected",
    [
        (0, ErrorCode.SUCCESS),
        (errno.ENOENT, ErrorCode.NOTFOUND),
        (errno.EACCES, ErrorCode.PERM),
        (errno.EINTR, ErrorCode.INTERRUPTED),
        (errno.EEXIST, ErrorCode.EXISTS),
        (errno.EISDIR, ErrorCode.FILE_ISDIR),
        (errno.ENOTDIR, ErrorCode.FILE_NOT_DIR),
        (errno.EINVAL, ErrorCode.PARAM),
        (errno.ENOMEM, ErrorCode.MEM),
        (errno.EAGAIN, ErrorCode.WOULDBLOCK),
        (errno.ENOSPC, ErrorCode.FILE_NOSPACE),
        (errno.ECONNREFUSED, ErrorCode.NET_CONN_REFUSED),
        (errno.ETIMEDOUT, ErrorCode.TIMEOUT),
    ],
)
def test_error_from_errno(number, expected):
    assert error_from_errno(number) == expected


def test_error_from_errno_unknown_is_generic():
    assert error_from_errno(987654) == ErrorCode.GENERIC


def test_sio_error_default_message():
    err = SioError(ErrorCode.NOTFOUND)
    assert err.code == ErrorCode.NOTFOUND
    assert err.message == "Resource not found"
    assert str(err) == "Resource not found"


def test_sio_error_custom_message():
    err = SioError(ErrorCode.BUSY, "pool exhausted")
    assert err.code == ErrorCode.BUSY
    assert err.message == "pool exhausted"
    assert str(err) == "pool exhausted"
    assert isinstance(err, Exception)


def test_error_from_os_error():
    exc = FileNotFoundError(errno.ENOENT, "missing")
    err = error_from_os_error(exc)
    assert err.code == ErrorCode.NOTFOUND
    assert err.__cause__ is exc


def test_error_from_os_error_without_errno():
    err = error_from_os_error(OSError("no number"))
    assert err.code == ErrorCode.GENERIC
    assert err.message == "Generic error"


def test_error_from_real_failure(tmp_path):
    try:
        open(tmp_path / "absent" / "file.txt")
    except OSError as exc:
        err = error_from_os_error(exc)
    assert err.code == ErrorCode.NOTFOUND