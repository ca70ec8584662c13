"""
Skeleton

Converts a glTF skin into the bone list stored in RF mesh files.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np
from pyrr import Matrix44

from ..config.settings import MAX_BONES, SCALE_TOLERANCE
from ..core.coords import gltf_to_rf_quat, gltf_to_rf_vec
from ..core.errors import CapacityExceeded, DataMismatch, UnsupportedTransform
from ..scene import Joint, Skin


@dataclass
class SkeletonBone:
    """Bone record of the V3C bone chunk (RF coordinate space)."""
    name: str
    base_rotation: Tuple[float, float, float, float]  # (x, y, z, w)
    base_translation: Tuple[float, float, float]
    parent_index: int  # -1 for root bones


def _rotation_to_quat(rot: np.ndarray) -> np.ndarray:
    """Unit quaternion (x, y, z, w) from a 3x3 rotation matrix acting on column vectors."""
    trace = rot[0, 0] + rot[1, 1] + rot[2, 2]
    if trace > 0.0:
        s = np.sqrt(trace + 1.0) * 2.0
        w = 0.25 * s
        x = (rot[2, 1] - rot[1, 2]) / s
        y = (rot[0, 2] - rot[2, 0]) / s
        z = (rot[1, 0] - rot[0, 1]) / s
    elif rot[0, 0] > rot[1, 1] and rot[0, 0] > rot[2, 2]:
        s = np.sqrt(1.0 + rot[0, 0] - rot[1, 1] - rot[2, 2]) * 2.0
        w = (rot[2, 1] - rot[1, 2]) / s
        x = 0.25 * s
        y = (rot[0, 1] + rot[1, 0]) / s
        z = (rot[0, 2] + rot[2, 0]) / s
    elif rot[1, 1] > rot[2, 2]:
        s = np.sqrt(1.0 + rot[1, 1] - rot[0, 0] - rot[2, 2]) * 2.0
        w = (rot[0, 2] - rot[2, 0]) / s
        x = (rot[0, 1] + rot[1, 0]) / s
        y = 0.25 * s
        z = (rot[1, 2] + rot[2, 1]) / s
    else:
        s = np.sqrt(1.0 + rot[2, 2] - rot[0, 0] - rot[1, 1]) * 2.0
        w = (rot[1, 0] - rot[0, 1]) / s
        x = (rot[0, 2] + rot[2, 0]) / s
        y = (rot[1, 2] + rot[2, 1]) / s
        z = 0.25 * s
    quat = np.array([x, y, z, w], dtype=np.float64)
    return quat / np.linalg.norm(quat)


def decompose_matrix(matrix: Matrix44) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Split an affine transform into scale, rotation and translation.

    Args:
        matrix: Row-major pyrr matrix (translation in the last row)

    Returns:
        (scale, rotation as (x, y, z, w), translation). A negative
        determinant is folded into the X scale.
    """
    m = np.asarray(matrix, dtype=np.float64).reshape(4, 4)
    basis = m[:3, :3]  # Row i is the image of axis i

    scale = np.linalg.norm(basis, axis=1)
    if np.linalg.det(basis) < 0.0:
        scale[0] = -scale[0]

    rotation = _rotation_to_quat((basis / scale[:, None]).T)
    translation = m[3, :3].copy()
    return scale, rotation, translation


def joint_parent_indices(skin: Skin) -> List[int]:
    """
    Parent position of every skin joint, -1 for roots.

    Only joints of this skin are considered as parents; a node outside
    the skin never is, even if it is an ancestor in the scene graph.
    """
    parent_of: Dict[int, int] = {}
    for position, joint in enumerate(skin.joints):
        for child in joint.children:
            # First listing joint wins
            parent_of.setdefault(child, position)
    return [parent_of.get(joint.index, -1) for joint in skin.joints]


def convert_bone(joint: Joint, inverse_bind_matrix: Matrix44, index: int, parent_index: int) -> SkeletonBone:
    name = joint.name if joint.name else f"bone_{index}"

    scale, rotation, translation = decompose_matrix(inverse_bind_matrix)
    if np.max(np.abs(scale - 1.0)) >= SCALE_TOLERANCE:
        raise UnsupportedTransform(
            f"bone {name!r} has unsupported bind pose scale {tuple(float(s) for s in scale)}"
        )

    base_rotation = gltf_to_rf_quat(rotation)
    base_translation = gltf_to_rf_vec(translation)
    return SkeletonBone(
        name=name,
        base_rotation=tuple(float(c) for c in base_rotation),
        base_translation=tuple(float(c) for c in base_translation),
        parent_index=parent_index,
    )


def convert_bones(skin: Skin) -> List[SkeletonBone]:
    """
    Convert a skin into the RF bone list.

    Args:
        skin: Source skin

    Returns:
        Bones in skin joint order

    Raises:
        CapacityExceeded: more joints than MAX_BONES
        DataMismatch: inverse bind matrices missing or not one per joint
        UnsupportedTransform: a bind pose is scaled
    """
    num_joints = len(skin.joints)
    if num_joints > MAX_BONES:
        raise CapacityExceeded(
            f"too many bones: found {num_joints} but only {MAX_BONES} are supported"
        )

    if skin.inverse_bind_matrices is None:
        raise DataMismatch(f"skin {skin.name!r} has no inverse bind matrices")

    inverse_bind_matrices = skin.inverse_bind_matrices
    if len(inverse_bind_matrices) != num_joints:
        raise DataMismatch(
            f"invalid number of inverse bind matrices: expected {num_joints}, "
            f"got {len(inverse_bind_matrices)}"
        )

    parent_indices = joint_parent_indices(skin)
    return [
        convert_bone(joint, inverse_bind_matrices[i], i, parent_indices[i])
        for i, joint in enumerate(skin.joints)
    ]
