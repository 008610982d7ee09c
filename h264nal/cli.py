"""Command line tool listing the NAL units of an H.264 Annex B file."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from .nalu import H264FileReader, Nalu, _find_start_codes, split_nalus


def _log(message: str) -> None:
    now = time.time()
    print(f"[{int(now)}.{int(now * 1000) % 1000:03d}] {message}")


def _log_nalu(index: int, nalu: Nalu) -> None:
    _log(f"idx: {index}, type: 0x{nalu.nalu_type:x}, Size: {len(nalu)}")


def main(argv: Sequence[str] | None = None) -> int:
    """List the NAL units of a file, once from memory and once streamed."""
    parser = argparse.ArgumentParser(
        prog="h264nal", description="List the NAL units of an H.264 Annex B file."
    )
    parser.add_argument("input", help="path of the .h264 file")
    args = parser.parse_args(argv)
    path = args.input

    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        print(f"cannot read {path}: {exc}", file=sys.stderr)
        return 1

    _log(f"{path} Size = {len(data)}")
    if data:
        nalus = split_nalus(data)
        codes = _find_start_codes(data)
        last_pos = codes[-1][0] if codes else -1
        _log(f"frame count: {len(nalus)}, last_pos: {last_pos}\n")
        for index, nalu in enumerate(nalus):
            _log_nalu(index, nalu)

    print("\n=====H264FileParse result=====\n")

    try:
        with H264FileReader(path) as reader:
            for index, nalu in enumerate(reader):
                _log_nalu(index, nalu)
    except OSError as exc:
        print(f"cannot read {path}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())