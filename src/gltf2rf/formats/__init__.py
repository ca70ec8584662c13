"""Binary readers and writers for RF asset formats."""

from .rfa_writer import encode_rfa, write_rfa
from .v3m_bones import encode_bone_chunk, write_bone_chunk
from .v3m_reader import V3mFile, V3mHeader, V3mChunk, read_v3m, read_v3m_file, decode_bone_chunk, read_bones
from .io_utils import write_atomic

__all__ = [
    'encode_rfa',
    'write_rfa',
    'encode_bone_chunk',
    'write_bone_chunk',
    'V3mFile',
    'V3mHeader',
    'V3mChunk',
    'read_v3m',
    'read_v3m_file',
    'decode_bone_chunk',
    'read_bones',
    'write_atomic',
]
