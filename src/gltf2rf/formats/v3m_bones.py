"""
V3M/V3C Bone Chunk

Encodes the bone list of a character mesh file. The chunk is embedded
by the mesh writer; it can also be written on its own for inspection.
"""

import struct
from pathlib import Path
from typing import List, Union

from ..animation.skeleton import SkeletonBone
from ..config.settings import BONE_NAME_LENGTH, V3M_BONE_CHUNK
from ..core.errors import DataMismatch
from .io_utils import write_atomic

CHUNK_HEADER = struct.Struct('<II')
BONE_COUNT = struct.Struct('<i')
BONE = struct.Struct(f'<{BONE_NAME_LENGTH}s4f3fi')


def _encode_name(name: str) -> bytes:
    try:
        raw = name.encode('ascii')
    except UnicodeEncodeError:
        raise DataMismatch(f"bone name {name!r} is not ASCII") from None
    if len(raw) >= BONE_NAME_LENGTH:
        raise DataMismatch(f"bone name {name!r} is longer than {BONE_NAME_LENGTH - 1} characters")
    # struct pads the fixed-size field with NUL bytes
    return raw


def encode_bone_chunk(bones: List[SkeletonBone]) -> bytes:
    """Serialize a bone list as a complete chunk (header included)."""
    body = bytearray(BONE_COUNT.pack(len(bones)))
    for bone in bones:
        body += BONE.pack(
            _encode_name(bone.name),
            *bone.base_rotation,
            *bone.base_translation,
            bone.parent_index,
        )
    return CHUNK_HEADER.pack(V3M_BONE_CHUNK, len(body)) + bytes(body)


def write_bone_chunk(bones: List[SkeletonBone], path: Union[str, Path]) -> Path:
    """Write the encoded bone chunk to ``path`` atomically."""
    return write_atomic(path, encode_bone_chunk(bones))
