"""Split H.264 Annex B streams into NAL units and decode SPS and PPS headers."""

__version__ = "0.1.0"
__all__ = ["bitstream", "nalu", "sps", "pps", "cli"]