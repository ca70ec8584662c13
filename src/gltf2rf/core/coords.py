"""
Coordinate Conversion

glTF is right-handed (+Y up, +Z forward out of the screen). Red Faction is
left-handed with the same up axis, so the Z axis is mirrored.

Mirroring Z on a vector negates z. For a rotation quaternion (x, y, z, w) the
same reflection negates the x and y components.
"""

from typing import Sequence, Union

import numpy as np
from pyrr import Quaternion

VEC_SIGNS = np.array([1.0, 1.0, -1.0], dtype='f4')
QUAT_SIGNS = np.array([-1.0, -1.0, 1.0, 1.0], dtype='f4')

QuatLike = Union[Quaternion, Sequence[float], np.ndarray]


def quat_to_array(quat: QuatLike) -> np.ndarray:
    """Return quaternion components as a float32 (x, y, z, w) array."""
    # pyrr stores quaternions as (x, y, z, w), same as glTF
    return np.asarray(quat, dtype='f4').reshape(4)


def gltf_to_rf_vec(vec) -> np.ndarray:
    """Convert a glTF vector (or N x 3 array of vectors) to RF space."""
    return np.asarray(vec, dtype='f4') * VEC_SIGNS


def gltf_to_rf_quat(quat) -> np.ndarray:
    """Convert a glTF (x, y, z, w) quaternion (or N x 4 array) to RF space."""
    return np.asarray(quat, dtype='f4') * QUAT_SIGNS
