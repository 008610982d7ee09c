"""Splitting an H.264 Annex B byte stream into NAL units."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from itertools import pairwise
from os import PathLike
from typing import BinaryIO, Iterator

READ_BUFFER_SIZE = 512 * 1024


class NaluType(IntEnum):
    """NAL unit types of interest."""

    SLICE = 1
    DPA = 2
    DPB = 3
    DPC = 4
    IDR = 5
    SEI = 6
    SPS = 7
    PPS = 8
    AUD = 9
    EOSEQ = 10
    EOSTREAM = 11
    FILL = 12


@dataclass(frozen=True)
class Nalu:
    """One NAL unit without its start code (the EBSP)."""

    data: bytes

    def __len__(self) -> int:
        return len(self.data)

    @property
    def nalu_type(self) -> int:
        """The five-bit nal_unit_type, or 0 for an empty unit."""
        return self.data[0] & 0x1F if self.data else 0

    @property
    def forbidden_bit(self) -> int:
        """The forbidden_zero_bit of the header byte."""
        return (self.data[0] >> 7) & 0x1 if self.data else 0

    @property
    def nal_ref_idc(self) -> int:
        """The two-bit nal_ref_idc of the header byte."""
        return (self.data[0] >> 5) & 0x3 if self.data else 0

    def rbsp(self) -> bytes:
        """Return the payload with emulation prevention bytes removed."""
        data = self.data
        if len(data) <= 3:
            raise ValueError("NAL unit too short to extract an RBSP")
        last = len(data) - 1
        return bytes(
            byte
            for i, byte in enumerate(data)
            if not (
                byte == 0x03
                and 2 < i < last
                and data[i - 1] == 0x00
                and data[i - 2] == 0x00
                and data[i + 1] <= 0x03
            )
        )


def strip_start_code(data: bytes) -> bytes:
    """Drop a leading three- or four-byte start code, if present."""
    data = bytes(data)
    if len(data) > 3:
        if data.startswith(b"\x00\x00\x01"):
            return data[3:]
        if data.startswith(b"\x00\x00\x00\x01"):
            return data[4:]
    return data


def _find_start_codes(data: bytes | bytearray) -> list[tuple[int, int]]:
    """Return (index, length) of every start code found in ``data``."""
    codes: list[tuple[int, int]] = []
    size = len(data)
    if size <= 3:
        return codes
    i = 0
    while i < size - 4:
        if data[i] == 0 and data[i + 1] == 0 and data[i + 2] == 1:
            codes.append((i, 3))
            i += 3
        elif data[i] == 0 and data[i + 1] == 0 and data[i + 2] == 0 and data[i + 3] == 1:
            codes.append((i, 4))
            i += 4
        else:
            i += 1
    return codes


def _nalus_between(
    data: bytes | bytearray, codes: list[tuple[int, int]], end: int
) -> Iterator[Nalu]:
    bounds = [index for index, _ in codes[1:]] + [end]
    for (index, length), stop in zip(codes, bounds):
        yield Nalu(bytes(data[index + length : stop]))


def split_nalus(data: bytes) -> list[Nalu]:
    """Split an Annex B byte stream into its NAL units.

    Bytes before the first start code are discarded.
    """
    codes = _find_start_codes(data)
    return list(_nalus_between(data, codes, len(data)))


class H264FileReader:
    """Iterates over the NAL units of an Annex B file, reading it in chunks."""

    def __init__(
        self, path: str | PathLike[str], buffer_size: int = READ_BUFFER_SIZE
    ) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer size must be positive")
        self._buffer_size = buffer_size
        self._file: BinaryIO = open(path, "rb")
        self._closed = False
        self._nalus = self._generate()

    def _generate(self) -> Iterator[Nalu]:
        buffer = bytearray()
        while True:
            chunk = self._file.read(self._buffer_size)
            at_end = len(chunk) < self._buffer_size
            buffer += chunk
            codes = _find_start_codes(buffer)
            if at_end:
                yield from _nalus_between(buffer, codes, len(buffer))
                return
            if not codes:
                # Nothing before the unscanned tail can start a unit.
                del buffer[: max(len(buffer) - 4, 0)]
                continue
            last_index = codes[-1][0]
            yield from _nalus_between(buffer, codes[:-1], last_index)
            del buffer[:last_index]

    def __iter__(self) -> H264FileReader:
        return self

    def __next__(self) -> Nalu:
        if self._closed:
            raise StopIteration
        return next(self._nalus)

    def close(self) -> None:
        """Close the underlying file; iteration stops afterwards."""
        if not self._closed:
            self._closed = True
            self._nalus.close()
            self._file.close()

    def __enter__(self) -> H264FileReader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()