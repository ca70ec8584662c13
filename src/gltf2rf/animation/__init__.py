"""
Animation System

Converts glTF skeletal animation and skins into RF records.
"""

from .keyframes import RotationKey, TranslationKey, node_channels, convert_rotation_keys, convert_translation_keys
from .rfa import (
    BoneAnimation, AnimationFileHeader, AnimationFile,
    animation_name, determine_anim_time_range, make_rfa,
)
from .skeleton import SkeletonBone, decompose_matrix, joint_parent_indices, convert_bone, convert_bones

__all__ = [
    'RotationKey',
    'TranslationKey',
    'node_channels',
    'convert_rotation_keys',
    'convert_translation_keys',
    'BoneAnimation',
    'AnimationFileHeader',
    'AnimationFile',
    'animation_name',
    'determine_anim_time_range',
    'make_rfa',
    'SkeletonBone',
    'decompose_matrix',
    'joint_parent_indices',
    'convert_bone',
    'convert_bones',
]
