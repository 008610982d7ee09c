"""Parsing of H.264 picture parameter sets (PPS)."""

from __future__ import annotations

from dataclasses import dataclass

from .bitstream import BitStream, BitStreamError
from .nalu import strip_start_code


@dataclass(frozen=True)
class PictureParameterSet:
    """The fields of a picture parameter set."""

    pic_parameter_set_id: int = 0
    seq_parameter_set_id: int = 0
    entropy_coding_mode_flag: bool = False
    bottom_field_pic_order_in_frame_present_flag: bool = False
    num_slice_groups_minus1: int = 0
    slice_group_map_type: int = 0
    run_length_minus1: tuple[int, ...] = ()
    top_left: tuple[int, ...] = ()
    bottom_right: tuple[int, ...] = ()
    slice_group_change_direction_flag: int = 0
    slice_group_change_rate_minus1: int = 0
    pic_size_in_map_units_minus1: int = 0
    slice_group_id: tuple[int, ...] = ()
    num_ref_idx_l0_default_active_minus1: int = 0
    num_ref_idx_l1_default_active_minus1: int = 0
    weighted_pred_flag: bool = False
    weighted_bipred_idc: int = 0
    pic_init_qp_minus26: int = 0
    pic_init_qs_minus26: int = 0
    chroma_qp_index_offset: int = 0
    deblocking_filter_control_present_flag: bool = False
    constrained_intra_pred_flag: bool = False
    redundant_pic_cnt_present_flag: bool = False
    disable_deblocking_filter_idc: int = 0
    slice_alpha_c0_offset_div2: int = 0
    slice_beta_offset_div2: int = 0


def _read_slice_groups(bs: BitStream, groups_minus1: int) -> dict[str, object]:
    fields: dict[str, object] = {}
    map_type = bs.read_ue()
    fields["slice_group_map_type"] = map_type
    if map_type == 0:
        fields["run_length_minus1"] = tuple(
            bs.read_ue() for _ in range(groups_minus1 + 1)
        )
    elif map_type == 2:
        corners = [(bs.read_ue(), bs.read_ue()) for _ in range(groups_minus1)]
        fields["top_left"] = tuple(tl for tl, _ in corners)
        fields["bottom_right"] = tuple(br for _, br in corners)
    elif map_type in (3, 4, 5):
        fields["slice_group_change_direction_flag"] = bs.read_bit()
        fields["slice_group_change_rate_minus1"] = bs.read_ue()
    elif map_type == 6:
        size_minus1 = bs.read_ue()
        fields["pic_size_in_map_units_minus1"] = size_minus1
        fields["slice_group_id"] = tuple(
            bs.read_bits(16) for _ in range(size_minus1 + 1)
        )
    return fields


def parse_pps(data: bytes) -> PictureParameterSet:
    """Parse a PPS NAL unit, with or without its start code.

    The deblocking filter fields that follow the flags are read only as far
    as the data reaches; everything before them must be present.
    """
    data = bytes(data)
    if len(data) <= 3:
        raise ValueError("PPS data too short")
    bs = BitStream(strip_start_code(data)[1:])

    fields: dict[str, object] = {
        "pic_parameter_set_id": bs.read_ue(),
        "seq_parameter_set_id": bs.read_ue(),
        "entropy_coding_mode_flag": bool(bs.read_bit()),
        "bottom_field_pic_order_in_frame_present_flag": bool(bs.read_bit()),
    }
    groups_minus1 = bs.read_ue()
    fields["num_slice_groups_minus1"] = groups_minus1
    if groups_minus1 > 0:
        fields.update(_read_slice_groups(bs, groups_minus1))

    fields["num_ref_idx_l0_default_active_minus1"] = bs.read_ue()
    fields["num_ref_idx_l1_default_active_minus1"] = bs.read_ue()
    fields["weighted_pred_flag"] = bool(bs.read_bit())
    fields["weighted_bipred_idc"] = bs.read_bits(2)
    fields["pic_init_qp_minus26"] = bs.read_se()
    fields["pic_init_qs_minus26"] = bs.read_se()
    fields["chroma_qp_index_offset"] = bs.read_se()
    deblocking = bool(bs.read_bit())
    fields["deblocking_filter_control_present_flag"] = deblocking
    fields["constrained_intra_pred_flag"] = bool(bs.read_bit())
    fields["redundant_pic_cnt_present_flag"] = bool(bs.read_bit())

    if deblocking:
        try:
            idc = bs.read_ue()
            fields["disable_deblocking_filter_idc"] = idc
            if idc != 1:
                fields["slice_alpha_c0_offset_div2"] = bs.read_se()
                fields["slice_beta_offset_div2"] = bs.read_se()
        except BitStreamError:
            pass
    return PictureParameterSet(**fields)  # type: ignore[arg-type]