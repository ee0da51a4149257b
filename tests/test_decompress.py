import pytest

from apicula.decompress import DecompressError, decompress


def _header(kind, size):
    return bytes([kind]) + size.to_bytes(3, "little")


def _literal_stream(kind, payload):
    out = bytearray(_header(kind, len(payload)))
    for start in range(0, len(payload), 8):
        out.append(0x00)
        out.extend(payload[start:start + 8])
    return bytes(out)


def test_lz10_literals_round_trip():
    payload = bytes(range(48))
    stream = _literal_stream(0x10, payload)
    result = decompress(stream)
    assert result.data == payload
    assert result.end == len(stream)


def test_lz11_literals_round_trip():
    payload = bytes(range(100, 150))
    stream = _literal_stream(0x11, payload)
    result = decompress(stream)
    assert result.data == payload
    assert result.end == len(stream)


def test_lz10_backreferences():
    stream = _header(0x10, 40) + bytes([0x70]) + b"a" + b"\xf0\x00" + b"\xf0\x00" + b"\x00\x00"
    result = decompress(stream)
    assert result.data == b"a" * 40
    assert result.end == len(stream)


def test_lz10_offset_and_trailing_data():
    stream = _header(0x10, 40) + bytes([0x70]) + b"a" + b"\xf0\x00" + b"\xf0\x00" + b"\x00\x00"
    data = b"\xff\xff" + stream + b"junk"
    result = decompress(data, 2)
    assert result.data == b"a" * 40
    assert result.end == 2 + len(stream)


def test_lz11_short_form_backreferences():
    stream = _header(0x11, 40) + bytes([0x70]) + b"x" + b"\xf0\x00" + b"\xf0\x00" + b"\x50\x00"
    assert decompress(stream).data == b"x" * 40


def test_lz11_medium_form_backreference():
    stream = _header(0x11, 40) + bytes([0x40]) + b"x" + b"\x01\x60\x00"
    assert decompress(stream).data == b"x" * 40


def test_lz11_long_form_backreference():
    stream = _header(0x11, 300) + bytes([0x40]) + b"y" + b"\x10\x01\xa0\x00"
    assert decompress(stream).data == b"y" * 300


def test_extended_size_field():
    payload = bytes(range(40))
    body = _literal_stream(0x10, payload)[4:]
    stream = b"\x10\x00\x00\x00" + (40).to_bytes(4, "little") + body
    assert decompress(stream).data == payload


def test_unknown_type_byte():
    with pytest.raises(DecompressError):
        decompress(b"\x12" + b"\x00" * 60)


def test_too_small_size():
    with pytest.raises(DecompressError):
        decompress(_literal_stream(0x10, bytes(39)))


def test_too_large_size():
    with pytest.raises(DecompressError):
        decompress(_header(0x10, (1 << 19) * 4 + 1) + bytes(64))


def test_truncated_stream():
    with pytest.raises(DecompressError):
        decompress(_header(0x10, 40) + b"\x00abc")


def test_backreference_before_start():
    with pytest.raises(DecompressError):
        decompress(_header(0x10, 40) + bytes([0x80]) + b"\x00\x00" + bytes(40))


def test_backreference_past_end():
    stream = _header(0x10, 40) + bytes([0x00]) + b"abcdefgh"
    stream += bytes([0x00]) + b"abcdefgh" * 1
    stream += bytes([0x00]) + b"abcdefgh"
    stream += bytes([0x00]) + b"abcdefgh"
    stream += bytes([0x80]) + b"\xf0\x00"
    with pytest.raises(DecompressError):
        decompress(stream)


def test_offset_out_of_range():
    with pytest.raises(DecompressError):
        decompress(b"\x10", 5)


def test_error_message():
    with pytest.raises(DecompressError, match="DecompressFailed"):
        decompress(b"")