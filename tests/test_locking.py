import pytest

from simpleio.enums import SeekOrigin, StreamFlag, StreamType
from simpleio.errors import ErrorCode, SioError
from simpleio.file import FileStream, open_file
from simpleio.locking import lock_file, unlock_file
from simpleio.stream import Stream


@pytest.fixture
def data_path(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"0123456789abcdef")
    return path


def test_exclusive_lock_keeps_file_usable(data_path):
    with open_file(data_path, StreamFlag.RDWR) as stream:
        lock_file(stream, 0, 8, exclusive=True, wait=False)
        stream.seek(0, SeekOrigin.SET)
        assert stream.write(b"XY") == 2
        unlock_file(stream, 0, 8)
        stream.seek(0, SeekOrigin.SET)
        assert stream.read(4) == b"XY23"


def test_shared_lock_on_read_only_file(data_path):
    with open_file(data_path, StreamFlag.READ) as stream:
        lock_file(stream, 0, 0, exclusive=False, wait=True)
        assert stream.read(16) == b"0123456789abcdef"
        unlock_file(stream)
        assert stream.tell() == 16


def test_relocking_same_region_in_one_process(data_path):
    with open_file(data_path, StreamFlag.RDWR) as stream:
        lock_file(stream, 4, 4, exclusive=True, wait=False)
        lock_file(stream, 4, 4, exclusive=False, wait=False)
        unlock_file(stream, 4, 4)
        assert stream.size() == 16


def test_exclusive_lock_needs_write_access(data_path):
    with open_file(data_path, StreamFlag.READ) as stream:
        with pytest.raises(SioError) as info:
            lock_file(stream, 0, 4, exclusive=True, wait=False)
        assert info.value.code == ErrorCode.PARAM


def test_shared_lock_needs_read_access(data_path):
    with open_file(data_path, StreamFlag.WRITE) as stream:
        with pytest.raises(SioError) as info:
            lock_file(stream, 0, 4, exclusive=False, wait=False)
        assert info.value.code == ErrorCode.PARAM


def test_lock_on_closed_stream_fails(data_path):
    stream = open_file(data_path, StreamFlag.RDWR)
    stream.close()
    with pytest.raises(SioError) as info:
        lock_file(stream)
    assert info.value.code == ErrorCode.PARAM


def test_non_file_stream_rejected():
    stream = Stream(StreamType.UNKNOWN)
    with pytest.raises(SioError) as info:
        lock_file(stream)
    assert info.value.code == ErrorCode.PARAM
    with pytest.raises(SioError) as info:
        unlock_file(stream)
    assert info.value.code == ErrorCode.PARAM


def test_none_stream_rejected():
    with pytest.raises(SioError) as info:
        lock_file(None)
    assert info.value.code == ErrorCode.PARAM


@pytest.mark.parametrize("offset, size", [(-1, 4), (0, -4), (1.5, 2)])
def test_invalid_range_rejected(data_path, offset, size):
    with open_file(data_path, StreamFlag.RDWR) as stream:
        with pytest.raises(SioError) as info:
            lock_file(stream, offset, size)
        assert info.value.code == ErrorCode.PARAM
        with pytest.raises(SioError) as info:
            unlock_file(stream, offset, size)
        assert info.value.code == ErrorCode.PARAM


def test_wrapped_descriptor_can_be_locked(data_path):
    with open_file(data_path, StreamFlag.RDWR) as opened:
        wrapped = FileStream(opened.fileno(), StreamFlag.RDWR)
        lock_file(wrapped, 0, 2, exclusive=True, wait=True)
        unlock_file(wrapped, 0, 2)
        assert wrapped.read(2) == b"01"
        assert opened.tell() == 2