import struct

import pytest

from kafkit.errors import InvalidSnappyError, UnexpectedEOFError
from kafkit.snappy_codec import MAGIC, SnappyReader, compress, uncompress, validate_stream

THIS_IS_TEST = bytes([12, 44, 84, 104, 105, 115, 32, 105, 115, 32, 116, 101, 115, 116])


def _header(version=1, compat=1):
    return MAGIC + struct.pack(">ii", version, compat)


def _chunked(data, chunk_size=4096):
    parts = [_header()]
    for start in range(0, len(data), chunk_size):
        block = compress(data[start : start + chunk_size])
        parts.append(struct.pack(">i", len(block)) + block)
    return b"".join(parts)


ORIGINAL = "".join(
    f"line {i}: the quick brown fox jumps over the lazy dog {i * 7 % 13}\n"
    for i in range(600)
).encode("utf-8")


def test_compress():
    assert compress(b"This is test") == THIS_IS_TEST


def test_uncompress():
    assert uncompress(THIS_IS_TEST).decode("utf-8") == "This is test"


def test_uncompress_invalid_input():
    broken = bytes([12, 42, 84, 104, 105, 115, 32, 105, 115, 32, 116, 101, 115, 116])
    with pytest.raises(InvalidSnappyError):
        uncompress(broken)


def test_uncompress_copy_element():
    block = bytes([12, 12]) + b"abcd" + bytes([17, 4])
    assert uncompress(block) == b"abcdabcdabcd"


def test_uncompress_length_mismatch():
    with pytest.raises(InvalidSnappyError):
        uncompress(bytes([13]) + THIS_IS_TEST[1:])


def test_uncompress_empty_input():
    with pytest.raises(InvalidSnappyError):
        uncompress(b"")


def test_uncompress_zero_length():
    assert uncompress(b"\x00") == b""


@pytest.mark.parametrize(
    "payload",
    [b"", b"a", b"This is test", b"abc" * 10000, bytes(range(256)) * 300, ORIGINAL],
)
def test_round_trip(payload):
    assert uncompress(compress(payload)) == payload


def test_repetitive_data_shrinks():
    payload = b"0123456789" * 2000
    assert len(compress(payload)) < len(payload) // 10


def test_validate_stream():
    header = bytes(
        [0x82, 0x53, 0x4E, 0x41, 0x50, 0x50, 0x59, 0x00, 0, 0, 0, 1, 0, 0, 0, 1, 0x56]
    )
    assert validate_stream(header) == bytes([0x56])


def test_validate_stream_short_magic():
    with pytest.raises(UnexpectedEOFError):
        validate_stream(MAGIC[:5])


def test_validate_stream_bad_magic():
    with pytest.raises(InvalidSnappyError):
        validate_stream(b"\x82SNAPPX\x00" + struct.pack(">ii", 1, 1))


def test_validate_stream_missing_version():
    with pytest.raises(UnexpectedEOFError):
        validate_stream(MAGIC + b"\x00\x00")


@pytest.mark.parametrize("version,compat", [(2, 1), (1, 2)])
def test_validate_stream_unsupported_version(version, compat):
    with pytest.raises(InvalidSnappyError):
        validate_stream(_header(version, compat))


def test_snappy_reader_read():
    reader = SnappyReader(_chunked(ORIGINAL))
    buf = bytearray()
    while True:
        piece = reader.read(1024)
        if not piece:
            break
        assert len(piece) <= 1024
        buf += piece
    assert bytes(buf).decode("utf-8") == ORIGINAL.decode("utf-8")


def test_snappy_reader_readall():
    reader = SnappyReader(_chunked(ORIGINAL))
    assert reader.readall() == ORIGINAL


def test_snappy_reader_partial_then_readall():
    reader = SnappyReader(_chunked(ORIGINAL))
    head = reader.read(100)
    assert head + reader.readall() == ORIGINAL
    assert reader.read(10) == b""


def test_snappy_reader_empty_stream():
    assert SnappyReader(_header()).read(10) == b""


def test_snappy_reader_invalid_chunk_length():
    reader = SnappyReader(_header() + struct.pack(">i", 0))
    with pytest.raises(InvalidSnappyError):
        reader.readall()


def test_snappy_reader_truncated_chunk():
    reader = SnappyReader(_header() + struct.pack(">i", 100) + THIS_IS_TEST)
    with pytest.raises(UnexpectedEOFError):
        reader.read(10)