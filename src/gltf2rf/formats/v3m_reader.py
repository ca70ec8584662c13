"""
V3M/V3C Reader

Reads the file header and walks the chunk list of RF mesh files.
Chunks are kept as raw bytes; only the bone chunk is decoded.

Bare chunk streams (the ``.bones`` files written by this tool) have no
file header and are read from offset 0.
"""

import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from ..animation.skeleton import SkeletonBone
from ..config.settings import V3M_SIGNATURE, V3C_SIGNATURE, V3M_END_CHUNK, V3M_BONE_CHUNK
from ..core.errors import FormatError
from .v3m_bones import BONE, BONE_COUNT, CHUNK_HEADER

FILE_HEADER = struct.Struct('<10I')

SIGNATURE_NAMES = {
    V3M_SIGNATURE: "V3M",
    V3C_SIGNATURE: "V3C",
}


@dataclass
class V3mHeader:
    signature: int
    version: int
    num_submeshes: int
    num_all_vertices: int
    num_all_triangles: int
    num_all_vertex_normals: int
    num_all_materials: int
    num_all_lods: int
    num_dumbs: int
    num_colspheres: int

    @property
    def kind(self) -> str:
        return SIGNATURE_NAMES[self.signature]


@dataclass
class V3mChunk:
    chunk_type: int
    offset: int
    data: bytes

    @property
    def name(self) -> str:
        """Four character chunk id, e.g. 'BONE'."""
        raw = self.chunk_type.to_bytes(4, 'little')
        if all(0x20 <= c < 0x7F for c in raw):
            return raw.decode('ascii')
        return f"0x{self.chunk_type:08X}"


@dataclass
class V3mFile:
    size: int
    header: Optional[V3mHeader]
    chunks: List[V3mChunk] = field(default_factory=list)

    def find_chunk(self, chunk_type: int) -> Optional[V3mChunk]:
        for chunk in self.chunks:
            if chunk.chunk_type == chunk_type:
                return chunk
        return None


def _read_chunks(data: bytes, offset: int) -> List[V3mChunk]:
    chunks = []
    while offset < len(data):
        if offset + CHUNK_HEADER.size > len(data):
            raise FormatError(f"Unexpected EOF at {offset}, need {CHUNK_HEADER.size} for chunk header")
        chunk_type, size = CHUNK_HEADER.unpack_from(data, offset)
        offset += CHUNK_HEADER.size
        if chunk_type == V3M_END_CHUNK:
            break
        if offset + size > len(data):
            raise FormatError(f"Bad chunk length {size} at offset {offset - CHUNK_HEADER.size}")
        chunks.append(V3mChunk(chunk_type, offset - CHUNK_HEADER.size, data[offset:offset + size]))
        offset += size
    return chunks


def read_v3m(data: bytes) -> V3mFile:
    """
    Parse mesh file bytes.

    Args:
        data: Complete V3M/V3C file, or a bare chunk stream

    Returns:
        V3mFile; ``header`` is None for bare chunk streams
    """
    header = None
    offset = 0
    if len(data) >= 4 and struct.unpack_from('<I', data, 0)[0] in SIGNATURE_NAMES:
        if len(data) < FILE_HEADER.size:
            raise FormatError(f"Unexpected EOF in file header, need {FILE_HEADER.size} bytes")
        header = V3mHeader(*FILE_HEADER.unpack_from(data, 0))
        offset = FILE_HEADER.size

    return V3mFile(size=len(data), header=header, chunks=_read_chunks(data, offset))


def read_v3m_file(path: Union[str, Path]) -> V3mFile:
    """Read and parse a mesh file or ``.bones`` file from disk."""
    return read_v3m(Path(path).read_bytes())


def decode_bone_chunk(data: bytes) -> List[SkeletonBone]:
    """Decode the body of a bone chunk (without the chunk header)."""
    if len(data) < BONE_COUNT.size:
        raise FormatError("Bone chunk too short for bone count")
    (num_bones,) = BONE_COUNT.unpack_from(data, 0)
    expected = BONE_COUNT.size + num_bones * BONE.size
    if num_bones < 0 or len(data) != expected:
        raise FormatError(f"Bone chunk holds {len(data)} bytes, {num_bones} bones need {expected}")

    bones = []
    for i in range(num_bones):
        raw_name, *values = BONE.unpack_from(data, BONE_COUNT.size + i * BONE.size)
        bones.append(SkeletonBone(
            name=raw_name.split(b'\0', 1)[0].decode('ascii', errors='replace'),
            base_rotation=tuple(values[0:4]),
            base_translation=tuple(values[4:7]),
            parent_index=values[7],
        ))
    return bones


def read_bones(v3m: V3mFile) -> Optional[List[SkeletonBone]]:
    """Bones of a parsed file, or None when it has no bone chunk."""
    chunk = v3m.find_chunk(V3M_BONE_CHUNK)
    if chunk is None:
        return None
    return decode_bone_chunk(chunk.data)
