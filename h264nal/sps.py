"""Parsing of H.264 sequence parameter sets (SPS)."""

from __future__ import annotations

from dataclasses import dataclass

from .bitstream import BitStream
from .nalu import strip_start_code

# Profiles whose SPS carries chroma format and bit depth information.
_CHROMA_INFO_PROFILES = frozenset(
    {100, 110, 122, 244, 44, 83, 86, 118, 128, 138, 139, 134, 135}
)

_CHROMA_SUBSAMPLING = {1: (2, 2), 2: (2, 1), 3: (1, 1)}


@dataclass(frozen=True)
class SequenceParameterSet:
    """The fields of a sequence parameter set, up to the VUI flag."""

    profile_idc: int = 0
    constraint_set_flags: int = 0
    level_idc: int = 0
    seq_parameter_set_id: int = 0
    chroma_format_idc: int = 1
    separate_colour_plane_flag: int = 0
    bit_depth_luma_minus8: int = 0
    bit_depth_chroma_minus8: int = 0
    qpprime_y_zero_transform_bypass_flag: int = 0
    seq_scaling_matrix_present_flag: int = 0
    seq_scaling_list_present_flag: tuple[int, ...] = ()
    log2_max_frame_num_minus4: int = 0
    pic_order_cnt_type: int = 0
    log2_max_pic_order_cnt_lsb_minus4: int = 0
    delta_pic_order_always_zero_flag: int = 0
    offset_for_non_ref_pic: int = 0
    offset_for_top_to_bottom_field: int = 0
    num_ref_frames_in_pic_order_cnt_cycle: int = 0
    offset_for_ref_frame: tuple[int, ...] = ()
    max_num_ref_frames: int = 0
    gaps_in_frame_num_value_allowed_flag: int = 0
    pic_width_in_mbs_minus1: int = -1
    pic_height_in_map_units_minus1: int = -1
    frame_mbs_only_flag: int = 1
    mb_adaptive_frame_field_flag: int = 0
    direct_8x8_inference_flag: int = 0
    frame_cropping_flag: int = 0
    frame_crop_left_offset: int = 0
    frame_crop_right_offset: int = 0
    frame_crop_top_offset: int = 0
    frame_crop_bottom_offset: int = 0
    vui_parameters_present_flag: int = 0
    chroma_array_type: int = 0

    @property
    def sub_width_c(self) -> int:
        """Horizontal luma-to-chroma sampling ratio."""
        return _CHROMA_SUBSAMPLING.get(self.chroma_array_type, (2, 2))[0]

    @property
    def sub_height_c(self) -> int:
        """Vertical luma-to-chroma sampling ratio."""
        return _CHROMA_SUBSAMPLING.get(self.chroma_array_type, (2, 2))[1]

    def size(self) -> tuple[int, int]:
        """Width and height in whole macroblocks, without cropping."""
        return (
            (self.pic_width_in_mbs_minus1 + 1) * 16,
            (self.pic_height_in_map_units_minus1 + 1) * 16,
        )

    def real_size(self) -> tuple[int, int]:
        """Display width and height, accounting for field coding and cropping."""
        field_factor = 2 - self.frame_mbs_only_flag
        width = (self.pic_width_in_mbs_minus1 + 1) * 16
        height = field_factor * (self.pic_height_in_map_units_minus1 + 1) * 16
        if self.frame_cropping_flag:
            if self.chroma_array_type == 0:
                crop_x, crop_y = 1, field_factor
            else:
                crop_x, crop_y = self.sub_width_c, self.sub_height_c * field_factor
            width -= crop_x * (self.frame_crop_left_offset + self.frame_crop_right_offset)
            height -= crop_y * (self.frame_crop_top_offset + self.frame_crop_bottom_offset)
        return width, height


def parse_sps(data: bytes) -> SequenceParameterSet:
    """Parse an SPS NAL unit, with or without its start code.

    Raises ValueError for data too short to hold an SPS and
    BitStreamError when the fields run past the end of the data.
    """
    data = bytes(data)
    if len(data) <= 3:
        raise ValueError("SPS data too short")
    bs = BitStream(strip_start_code(data)[1:])

    fields: dict[str, object] = {
        "profile_idc": bs.read_bits(8),
        "constraint_set_flags": bs.read_bits(8),
        "level_idc": bs.read_bits(8),
        "seq_parameter_set_id": bs.read_ue(),
    }

    if fields["profile_idc"] in _CHROMA_INFO_PROFILES:
        chroma_format_idc = bs.read_ue()
        fields["chroma_format_idc"] = chroma_format_idc
        if chroma_format_idc == 3:
            separate = bs.read_bit()
            fields["separate_colour_plane_flag"] = separate
            if separate == 0:
                fields["chroma_array_type"] = chroma_format_idc
        fields["bit_depth_luma_minus8"] = bs.read_ue()
        fields["bit_depth_chroma_minus8"] = bs.read_ue()
        fields["qpprime_y_zero_transform_bypass_flag"] = bs.read_bit()
        scaling_present = bs.read_bit()
        fields["seq_scaling_matrix_present_flag"] = scaling_present
        if scaling_present:
            count = 8 if chroma_format_idc != 3 else 12
            fields["seq_scaling_list_present_flag"] = tuple(
                bs.read_bit() for _ in range(count)
            )

    fields["log2_max_frame_num_minus4"] = bs.read_ue()
    poc_type = bs.read_ue()
    fields["pic_order_cnt_type"] = poc_type
    if poc_type == 0:
        fields["log2_max_pic_order_cnt_lsb_minus4"] = bs.read_ue()
    elif poc_type == 1:
        fields["delta_pic_order_always_zero_flag"] = bs.read_bit()
        fields["offset_for_non_ref_pic"] = bs.read_se()
        fields["offset_for_top_to_bottom_field"] = bs.read_se()
        cycle = bs.read_ue()
        fields["num_ref_frames_in_pic_order_cnt_cycle"] = cycle
        fields["offset_for_ref_frame"] = tuple(bs.read_se() for _ in range(cycle))

    fields["max_num_ref_frames"] = bs.read_ue()
    fields["gaps_in_frame_num_value_allowed_flag"] = bs.read_bit()
    fields["pic_width_in_mbs_minus1"] = bs.read_ue()
    fields["pic_height_in_map_units_minus1"] = bs.read_ue()

    frame_mbs_only = bs.read_bit()
    fields["frame_mbs_only_flag"] = frame_mbs_only
    if frame_mbs_only == 0:
        fields["mb_adaptive_frame_field_flag"] = bs.read_bit()

    fields["direct_8x8_inference_flag"] = bs.read_bit()
    cropping = bs.read_bit()
    fields["frame_cropping_flag"] = cropping
    if cropping:
        fields["frame_crop_left_offset"] = bs.read_ue()
        fields["frame_crop_right_offset"] = bs.read_ue()
        fields["frame_crop_top_offset"] = bs.read_ue()
        fields["frame_crop_bottom_offset"] = bs.read_ue()

    fields["vui_parameters_present_flag"] = bs.read_bit()
    return SequenceParameterSet(**fields)  # type: ignore[arg-type]