import pytest

from h264nal.nalu import (
    H264FileReader,
    Nalu,
    NaluType,
    split_nalus,
    strip_start_code,
)

SPS_PAYLOAD = b"\x67\x42\xc0\x1e\xda\x02\x80"
PPS_PAYLOAD = b"\x68\xce\x3c\x80"
IDR_PAYLOAD = b"\x65\x88\x84" + bytes(range(5, 60))
SLICE_PAYLOAD = b"\x41\x9a\x21"

STREAM = (
    b"\x00\x00\x00\x01" + SPS_PAYLOAD
    + b"\x00\x00\x00\x01" + PPS_PAYLOAD
    + b"\x00\x00\x01" + IDR_PAYLOAD
    + b"\x00\x00\x01" + SLICE_PAYLOAD
)


@pytest.mark.parametrize(
    "header, expected, value",
    [
        (0x65, NaluType.IDR, 5),
        (0x67, NaluType.SPS, 7),
        (0x68, NaluType.PPS, 8),
        (0x06, NaluType.SEI, 6),
        (0x09, NaluType.AUD, 9),
    ],
)
def test_nalu_type_from_header_byte(header, expected, value):
    nalu = Nalu(bytes([header, 0x00]))
    assert nalu.nalu_type == expected
    assert nalu.nalu_type == value


def test_header_fields():
    nalu = Nalu(b"\x67\x42")
    assert nalu.nalu_type == NaluType.SPS
    assert nalu.nal_ref_idc == 3
    assert nalu.forbidden_bit == 0
    assert len(nalu) == 2


def test_forbidden_bit_set():
    nalu = Nalu(b"\x81")
    assert nalu.forbidden_bit == 1
    assert nalu.nal_ref_idc == 0
    assert nalu.nalu_type == NaluType.SLICE


def test_empty_nalu_header_fields_are_zero():
    nalu = Nalu(b"")
    assert (nalu.nalu_type, nalu.forbidden_bit, nalu.nal_ref_idc) == (0, 0, 0)


def test_split_nalus_mixed_start_codes():
    nalus = split_nalus(STREAM)
    assert [n.data for n in nalus] == [SPS_PAYLOAD, PPS_PAYLOAD, IDR_PAYLOAD, SLICE_PAYLOAD]
    assert [n.nalu_type for n in nalus] == [
        NaluType.SPS,
        NaluType.PPS,
        NaluType.IDR,
        NaluType.SLICE,
    ]


def test_split_nalus_discards_leading_bytes():
    nalus = split_nalus(b"\xaa\xbb" + STREAM)
    assert nalus[0].data == SPS_PAYLOAD


def test_split_nalus_short_input_is_empty():
    assert split_nalus(b"\x00\x00\x01") == []


def test_split_nalus_without_start_code_is_empty():
    assert split_nalus(b"\x11\x22\x33\x44\x55\x66") == []


def test_split_nalus_ignores_start_code_in_last_four_bytes():
    data = b"\x00\x00\x01\x65\x00\x00\x01"
    assert [n.data for n in split_nalus(data)] == [b"\x65\x00\x00\x01"]


def test_split_nalus_adjacent_start_codes_give_empty_unit():
    data = b"\x00\x00\x01\x00\x00\x01\x65\x11\x22"
    nalus = split_nalus(data)
    assert [n.data for n in nalus] == [b"", b"\x65\x11\x22"]


def test_strip_start_code_variants():
    assert strip_start_code(b"\x00\x00\x01" + SPS_PAYLOAD) == SPS_PAYLOAD
    assert strip_start_code(b"\x00\x00\x00\x01" + SPS_PAYLOAD) == SPS_PAYLOAD
    assert strip_start_code(SPS_PAYLOAD) == SPS_PAYLOAD


def test_strip_start_code_short_input_unchanged():
    assert strip_start_code(b"\x00\x00\x01") == b"\x00\x00\x01"


def test_rbsp_removes_emulation_prevention_byte():
    nalu = Nalu(b"\x65\x11\x00\x00\x03\x01\x22")
    assert nalu.rbsp() == b"\x65\x11\x00\x00\x01\x22"


def test_rbsp_keeps_three_followed_by_large_byte():
    data = b"\x65\x11\x00\x00\x03\x04\x22"
    assert Nalu(data).rbsp() == data


def test_rbsp_keeps_trailing_three():
    data = b"\x65\x11\x00\x00\x03"
    assert Nalu(data).rbsp() == data


def test_rbsp_keeps_three_at_index_two():
    data = b"\x00\x00\x03\x01"
    assert Nalu(data).rbsp() == data


def test_rbsp_without_escapes_is_identity():
    assert Nalu(IDR_PAYLOAD).rbsp() == IDR_PAYLOAD


def test_rbsp_too_short_raises():
    with pytest.raises(ValueError):
        Nalu(b"\x65\x00\x00").rbsp()


@pytest.fixture
def stream_file(tmp_path):
    path = tmp_path / "sample.h264"
    path.write_bytes(STREAM)
    return path


@pytest.mark.parametrize("buffer_size", [1, 2, 5, 7, 13, 64, 4096])
def test_file_reader_matches_split(stream_file, buffer_size):
    with H264FileReader(stream_file, buffer_size) as reader:
        got = [n.data for n in reader]
    assert got == [n.data for n in split_nalus(STREAM)]


def test_file_reader_default_buffer(stream_file):
    with H264FileReader(stream_file) as reader:
        types = [n.nalu_type for n in reader]
    assert types == [NaluType.SPS, NaluType.PPS, NaluType.IDR, NaluType.SLICE]


def test_file_reader_unit_larger_than_buffer(tmp_path):
    big = b"\x65" + bytes(range(4, 250)) * 4
    data = b"\x00\x00\x00\x01" + big + b"\x00\x00\x01" + SLICE_PAYLOAD
    path = tmp_path / "big.h264"
    path.write_bytes(data)
    with H264FileReader(path, 16) as reader:
        assert [n.data for n in reader] == [big, SLICE_PAYLOAD]


def test_file_reader_garbage_before_first_start_code(tmp_path):
    data = bytes(range(10, 60)) + STREAM
    path = tmp_path / "junk.h264"
    path.write_bytes(data)
    with H264FileReader(path, 8) as reader:
        assert [n.data for n in reader] == [n.data for n in split_nalus(data)]


def test_file_reader_empty_file(tmp_path):
    path = tmp_path / "empty.h264"
    path.write_bytes(b"")
    with H264FileReader(path) as reader:
        assert list(reader) == []


def test_file_reader_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        H264FileReader(tmp_path / "absent.h264")


def test_file_reader_rejects_bad_buffer_size(stream_file):
    with pytest.raises(ValueError):
        H264FileReader(stream_file, 0)


def test_file_reader_stops_after_close(stream_file):
    reader = H264FileReader(stream_file, 4)
    first = next(reader)
    reader.close()
    assert first.data == SPS_PAYLOAD
    with pytest.raises(StopIteration):
        next(reader)