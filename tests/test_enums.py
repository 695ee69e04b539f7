import os
import socket

import pytest

from simpleio.enums import IoFlag, SeekOrigin, StreamFlag, StreamOption, StreamType


def test_stream_type_order_is_consecutive_from_unknown():
    values = [member.value for member in StreamType]
    assert values == list(range(len(values)))
    assert StreamType(0) is StreamType.UNKNOWN
    assert StreamType(len(values) - 1) is StreamType.CUSTOM


def test_stream_type_relative_positions():
    assert StreamType(int(StreamType.SOCKET) + 1) is StreamType.PSEUDO_SOCKET
    assert StreamType(int(StreamType.BUFFER) + 1) is StreamType.RAWMEM


def test_stream_flag_access_bits():
    assert StreamFlag(1) is StreamFlag.READ
    assert StreamFlag(2) is StreamFlag.WRITE
    assert StreamFlag(3) == StreamFlag.READ | StreamFlag.WRITE
    assert StreamFlag.READ in StreamFlag(3)
    assert StreamFlag.WRITE in StreamFlag(3)


def test_stream_flags_are_distinct_single_bits():
    singles = [m for m in StreamFlag if m not in (StreamFlag.NONE, StreamFlag.RDWR)]
    combined = 0
    for member in singles:
        value = int(member)
        assert value & (value - 1) == 0
        assert combined & value == 0
        combined |= value
    assert StreamFlag(1 << 15) is StreamFlag.TCP


def test_stream_flag_combination_and_removal():
    flags = StreamFlag(int(StreamFlag.READ) | int(StreamFlag.NONBLOCK))
    assert StreamFlag.NONBLOCK in flags
    cleared = flags & ~StreamFlag.NONBLOCK
    assert cleared == StreamFlag(1)


def test_stream_option_group_starts():
    assert StreamOption(1) is StreamOption.TIMEOUT
    assert StreamOption(100) is StreamOption.FILE_APPEND
    assert StreamOption(200) is StreamOption.SOCK_NODELAY
    assert StreamOption(300) is StreamOption.TIMER_INTERVAL
    assert StreamOption(400) is StreamOption.TERM_ECHO
    assert StreamOption(1000) is StreamOption.INFO_TYPE


@pytest.mark.parametrize(
    "first, last",
    [
        (StreamOption.TIMEOUT, StreamOption.AUTOCLOSE),
        (StreamOption.FILE_APPEND, StreamOption.FILE_MMAP),
        (StreamOption.SOCK_NODELAY, StreamOption.SOCK_SNDLOWAT),
        (StreamOption.TIMER_INTERVAL, StreamOption.TIMER_ONESHOT),
        (StreamOption.TERM_ECHO, StreamOption.TERM_COLOR),
        (StreamOption.INFO_TYPE, StreamOption.INFO_BUFFER_SIZE),
    ],
)
def test_stream_option_groups_are_consecutive(first, last):
    group = [m for m in StreamOption if first <= m <= last]
    assert [m.value for m in group] == list(range(first, last + 1))
    assert [StreamOption(v) for v in range(first, last + 1)] == group


def test_stream_option_read_only():
    assert StreamOption(int(StreamOption.INFO_EOF)).read_only
    assert StreamOption(int(StreamOption.INFO_HANDLE)).read_only
    assert not StreamOption(int(StreamOption.BLOCKING)).read_only
    assert not StreamOption(int(StreamOption.TERM_COLOR)).read_only


def test_stream_option_lookup_by_value():
    assert StreamOption(StreamOption.FILE_SYNC.value) is StreamOption.FILE_SYNC
    with pytest.raises(ValueError):
        StreamOption(99)


def test_seek_origin_matches_os():
    assert SeekOrigin(os.SEEK_SET) is SeekOrigin.SET
    assert SeekOrigin(os.SEEK_CUR) is SeekOrigin.CUR
    assert SeekOrigin(os.SEEK_END) is SeekOrigin.END
    assert SeekOrigin(0) is SeekOrigin.SET


def test_io_flag_doall_bits_do_not_overlap_socket_flags():
    msg_members = [m for m in IoFlag if m.name and m.name.startswith("MSG_")]
    special = int(IoFlag(int(IoFlag.DOALL) | int(IoFlag.DOALL_NONBLOCK)))
    for member in msg_members:
        assert int(member) & special == 0
    assert IoFlag.DOALL & IoFlag.DOALL_NONBLOCK == 0


def test_io_flag_matches_platform_constants():
    assert IoFlag(socket.MSG_OOB) is IoFlag.MSG_OOB
    assert IoFlag(socket.MSG_DONTROUTE) is IoFlag.MSG_DONTROUTE


def test_io_flag_socket_flags_strips_doall():
    flags = IoFlag(int(IoFlag.DOALL) | int(IoFlag.DOALL_NONBLOCK) | int(IoFlag.MSG_OOB))
    assert flags.socket_flags == int(IoFlag.MSG_OOB)
    assert IoFlag(int(IoFlag.DOALL)).socket_flags == 0
    assert IoFlag.DOALL in flags
    assert IoFlag.DOALL not in IoFlag.MSG_OOB