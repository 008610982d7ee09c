# h264nal

A small pure-Python toolkit for H.264 (AVC) elementary streams in Annex B
format. It finds the three- and four-byte start codes in a stream and hands
out the NAL units between them. It also decodes the leading fields of
sequence parameter sets (SPS) and picture parameter sets (PPS), including the
picture size.

## Installation

```
pip install .
```

The package has no dependencies outside the standard library and needs
Python 3.10 or later.

## Command line

```
h264nal input.h264
```

The command first reads the whole file, prints its size, the number of NAL
units and the offset of the last start code (`-1` when there is none), and
lists every NAL unit with its index, type (in hexadecimal) and size. It then
reads the same file again with the buffered streaming reader and lists the NAL
units a second time under the heading `=====H264FileParse result=====`. Each
line is prefixed with a timestamp. If the file cannot be read, a message goes
to standard error and the exit status is 1.

## Library use

### Splitting a stream

```python
from h264nal.nalu import split_nalus, NaluType

with open("input.h264", "rb") as fh:
    data = fh.read()

for nalu in split_nalus(data):
    if nalu.nalu_type == NaluType.SPS:
        print("SPS of", len(nalu), "bytes")
```

Bytes before the first start code are discarded. Each `Nalu` holds its bytes
without the start code in `data` and offers the header fields as the
properties `nalu_type`, `forbidden_bit` and `nal_ref_idc`. `Nalu.rbsp()`
returns the payload with the emulation-prevention bytes removed; it raises
`ValueError` for units of three bytes or fewer.

`strip_start_code(data)` drops a leading start code if there is one.

### Streaming from a file

```python
from h264nal.nalu import H264FileReader

with H264FileReader("input.h264") as reader:
    for nalu in reader:
        print(nalu.nalu_type, nalu.nal_ref_idc)
```

The reader reads the file in chunks (512 KiB by default; pass `buffer_size`
to change it) and yields the same units as `split_nalus` would for the whole
file. After `close()` iteration stops.

### Parameter sets

```python
from h264nal.sps import parse_sps
from h264nal.pps import parse_pps

sps = parse_sps(sps_nalu.data)
print(sps.profile_idc, sps.level_idc, sps.chroma_format_idc)
print(sps.size())        # coded size in whole macroblocks
print(sps.real_size())   # display size after field coding and frame cropping

pps = parse_pps(pps_nalu.data)
print(pps.pic_parameter_set_id, pps.entropy_coding_mode_flag)
```

Both parsers accept a NAL unit with or without a leading start code and
return frozen dataclasses (`SequenceParameterSet`, `PictureParameterSet`).
They raise `ValueError` for data of three bytes or fewer. `parse_sps` raises
`h264nal.bitstream.BitStreamError` when its fields run past the end of the
data; `parse_pps` does the same, except that it reads the trailing deblocking
filter fields only as far as the data reaches.

### Bit reading

`h264nal.bitstream.BitStream` reads bits most-significant first from a byte
string: `read_bit()`, `read_bits(n)` for fixed-width fields, and `read_ue()`
and `read_se()` for unsigned and signed Exp-Golomb codes. Reading past the end
raises `BitStreamError`, a subclass of `ValueError`.

## What it does not do

The SPS parser stops at `vui_parameters_present_flag`: VUI parameters (frame
rate, aspect ratio, colour information) are not decoded, and neither are
scaling lists. Slice headers, SEI messages and picture data are not decoded
at all, and the package does not write or modify streams.

## Running the tests

```
pip install .[test]
pytest
```