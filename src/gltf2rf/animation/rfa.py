"""
RFA Assembly

Builds the in-memory Red Faction animation record for one glTF animation
played on one skin.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config.settings import (
    RFA_SIGNATURE, RFA_VERSION, RAMP_IN_TIME, RAMP_OUT_TIME, BONE_WEIGHT,
    ConversionSettings,
)
from ..scene import Animation, Skin
from .keyframes import RotationKey, TranslationKey, convert_rotation_keys, convert_translation_keys


@dataclass
class BoneAnimation:
    """Keys for one bone; list order matches the skin's joint order."""
    weight: float = BONE_WEIGHT
    rotation_keys: List[RotationKey] = field(default_factory=list)
    translation_keys: List[TranslationKey] = field(default_factory=list)


@dataclass
class AnimationFileHeader:
    """
    RFA file header.

    ``total_rotation``/``total_translation`` describe root motion and are
    always identity here.
    """
    num_bones: int = 0
    start_time: int = 0
    end_time: int = 0
    ramp_in_time: int = RAMP_IN_TIME
    ramp_out_time: int = RAMP_OUT_TIME
    total_rotation: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
    total_translation: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    signature: int = RFA_SIGNATURE
    version: int = RFA_VERSION
    pos_reduction: float = 0.0
    rot_reduction: float = 0.0
    num_morph_vertices: int = 0
    num_morph_keyframes: int = 0


@dataclass
class AnimationFile:
    header: AnimationFileHeader
    bones: List[BoneAnimation]


def animation_name(animation: Animation, index: int) -> str:
    """Declared animation name, or ``anim_<index>`` when unnamed."""
    return animation.name if animation.name else f"anim_{index}"


def determine_anim_time_range(bones: List[BoneAnimation]) -> Tuple[int, int]:
    """
    Find the first and last key time over all bones.

    Returns:
        (start_time, end_time) in ticks, or (0, 0) when no bone has keys
    """
    times = [
        key.time
        for bone in bones
        for keys in (bone.rotation_keys, bone.translation_keys)
        for key in keys
    ]
    if not times:
        return 0, 0
    return min(times), max(times)


def make_rfa(animation: Animation, skin: Skin, settings: Optional[ConversionSettings] = None) -> AnimationFile:
    """
    Assemble an RFA record.

    Args:
        animation: Source animation
        skin: Skin whose joint order defines bone indices
        settings: Overrides for ramp times

    Returns:
        AnimationFile with one BoneAnimation per skin joint
    """
    settings = settings or ConversionSettings()

    bones = []
    for joint in skin.joints:
        bones.append(BoneAnimation(
            weight=BONE_WEIGHT,
            rotation_keys=convert_rotation_keys(joint, animation),
            translation_keys=convert_translation_keys(joint, animation),
        ))

    start_time, end_time = determine_anim_time_range(bones)
    header = AnimationFileHeader(
        num_bones=len(bones),
        start_time=start_time,
        end_time=end_time,
        ramp_in_time=settings.ramp_in_time,
        ramp_out_time=settings.ramp_out_time,
    )
    return AnimationFile(header=header, bones=bones)
