"""
Core conversion primitives: coordinate adapter, quantizers and errors.
"""

from .coords import gltf_to_rf_vec, gltf_to_rf_quat, quat_to_array
from .quantize import quantize_time, quantize_times, quantize_quat, quantize_quats
from .errors import ConversionError, CapacityExceeded, DataMismatch, UnsupportedTransform, FormatError

__all__ = [
    'gltf_to_rf_vec',
    'gltf_to_rf_quat',
    'quat_to_array',
    'quantize_time',
    'quantize_times',
    'quantize_quat',
    'quantize_quats',
    'ConversionError',
    'CapacityExceeded',
    'DataMismatch',
    'UnsupportedTransform',
    'FormatError',
]
