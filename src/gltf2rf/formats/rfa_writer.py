"""
RFA Writer

Serializes AnimationFile records to the version 8 RFA layout
(little-endian).

Layout:
    header
    morph_vert_mappings_offset, morph_vert_data_offset   (int32)
    bone_offsets[num_bones]                              (int32)
    bones: weight, num_rot_keys, num_pos_keys, rotation keys, position keys
"""

import struct
from pathlib import Path
from typing import Union

from ..animation.rfa import AnimationFile, BoneAnimation
from ..core.errors import DataMismatch
from .io_utils import write_atomic

HEADER = struct.Struct('<Iiff7i4f3f')
OFFSET = struct.Struct('<i')
BONE_HEADER = struct.Struct('<fhh')
ROTATION_KEY = struct.Struct('<i4hbb2x')
TRANSLATION_KEY = struct.Struct('<i3f3f3f')

INT16_MAX = 0x7FFF


def _bone_size(bone: BoneAnimation) -> int:
    return (BONE_HEADER.size
            + len(bone.rotation_keys) * ROTATION_KEY.size
            + len(bone.translation_keys) * TRANSLATION_KEY.size)


def _encode_bone(index: int, bone: BoneAnimation) -> bytes:
    for kind, keys in (("rotation", bone.rotation_keys), ("translation", bone.translation_keys)):
        if len(keys) > INT16_MAX:
            raise DataMismatch(f"bone {index} has {len(keys)} {kind} keys, at most {INT16_MAX} fit")

    out = bytearray(BONE_HEADER.pack(bone.weight, len(bone.rotation_keys), len(bone.translation_keys)))
    for key in bone.rotation_keys:
        out += ROTATION_KEY.pack(key.time, *key.rotation, key.ease_in, key.ease_out)
    for key in bone.translation_keys:
        out += TRANSLATION_KEY.pack(key.time, *key.in_tangent, *key.translation, *key.out_tangent)
    return bytes(out)


def encode_rfa(rfa: AnimationFile) -> bytes:
    """Serialize an AnimationFile to bytes."""
    header = rfa.header
    if header.num_bones != len(rfa.bones):
        raise DataMismatch(f"header declares {header.num_bones} bones but {len(rfa.bones)} are present")

    out = bytearray(HEADER.pack(
        header.signature,
        header.version,
        header.pos_reduction,
        header.rot_reduction,
        header.start_time,
        header.end_time,
        header.num_bones,
        header.num_morph_vertices,
        header.num_morph_keyframes,
        header.ramp_in_time,
        header.ramp_out_time,
        *header.total_rotation,
        *header.total_translation,
    ))

    # Offset table: two morph offsets followed by one offset per bone
    bone_offset = len(out) + OFFSET.size * (2 + len(rfa.bones))
    bone_offsets = []
    for bone in rfa.bones:
        bone_offsets.append(bone_offset)
        bone_offset += _bone_size(bone)

    # No morph data; both morph sections start (empty) after the last bone
    out += OFFSET.pack(bone_offset)
    out += OFFSET.pack(bone_offset)
    for offset in bone_offsets:
        out += OFFSET.pack(offset)

    for index, bone in enumerate(rfa.bones):
        out += _encode_bone(index, bone)

    return bytes(out)


def write_rfa(rfa: AnimationFile, path: Union[str, Path]) -> Path:
    """Write an AnimationFile to ``path`` atomically."""
    return write_atomic(path, encode_rfa(rfa))
