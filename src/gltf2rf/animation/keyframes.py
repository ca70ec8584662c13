"""
Keyframe Extraction

Turns the glTF channels that target one joint into RFA rotation and
translation keys. Each conversion runs in stages: select the channel,
decode its samples, convert and quantize values, then pair them with
quantized timestamps.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from ..core.coords import gltf_to_rf_quat, gltf_to_rf_vec
from ..core.errors import DataMismatch
from ..core.quantize import quantize_quats, quantize_times
from ..scene import Animation, AnimationChannel, AnimationTarget, InterpolationType, Joint


@dataclass(frozen=True)
class RotationKey:
    """Rotation keyframe. ``ease_in``/``ease_out`` are always written as 0."""
    time: int
    rotation: Tuple[int, int, int, int]
    ease_in: int = 0
    ease_out: int = 0


@dataclass(frozen=True)
class TranslationKey:
    """Translation keyframe with Bezier tangents."""
    time: int
    in_tangent: Tuple[float, float, float]
    translation: Tuple[float, float, float]
    out_tangent: Tuple[float, float, float]


def node_channels(joint: Joint, animation: Animation) -> Iterator[AnimationChannel]:
    """Yield every channel of ``animation`` that targets ``joint``."""
    for channel in animation.channels:
        if channel.target_node == joint.index:
            yield channel


def _find_channel(joint: Joint, animation: Animation, target: AnimationTarget) -> Optional[AnimationChannel]:
    # Several channels for the same joint and property is malformed input;
    # the first one in channel order is used.
    for channel in node_channels(joint, animation):
        if channel.target_property == target:
            return channel
    return None


def _split_triplets(channel: AnimationChannel, values: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Split converted outputs into (in_tangent, value, out_tangent) arrays.

    CUBICSPLINE outputs are stored as consecutive triplets per timestamp.
    Other modes store one value per timestamp, which is used for all three.
    """
    num_times = len(channel.times)
    if channel.interpolation == InterpolationType.CUBICSPLINE:
        if len(values) != num_times * 3:
            raise DataMismatch(
                f"cubic spline channel on node {channel.target_node} has {len(values)} outputs "
                f"for {num_times} timestamps (expected {num_times * 3})"
            )
        grouped = values.reshape(num_times, 3, values.shape[1])
        return grouped[:, 0], grouped[:, 1], grouped[:, 2]

    if len(values) != num_times:
        raise DataMismatch(
            f"channel on node {channel.target_node} has {len(values)} outputs "
            f"for {num_times} timestamps"
        )
    return values, values, values


def convert_rotation_keys(joint: Joint, animation: Animation) -> List[RotationKey]:
    """
    Build RFA rotation keys for a joint.

    Args:
        joint: Skin joint
        animation: Source animation

    Returns:
        Keys in source sample order; empty when no rotation channel targets the joint
    """
    channel = _find_channel(joint, animation, AnimationTarget.ROTATION)
    if channel is None:
        return []

    rotations = quantize_quats(gltf_to_rf_quat(channel.values.reshape(-1, 4)))
    # Rotation tangents have no RFA counterpart, only the values are kept
    _, values, _ = _split_triplets(channel, rotations)
    times = quantize_times(channel.times)

    return [
        RotationKey(time=int(time), rotation=tuple(int(c) for c in rotation))
        for time, rotation in zip(times, values)
    ]


def convert_translation_keys(joint: Joint, animation: Animation) -> List[TranslationKey]:
    """
    Build RFA translation keys for a joint.

    Cubic spline tangents are copied as they are; for STEP and LINEAR
    channels both tangents equal the translation itself.
    """
    channel = _find_channel(joint, animation, AnimationTarget.TRANSLATION)
    if channel is None:
        return []

    translations = gltf_to_rf_vec(channel.values.reshape(-1, 3))
    in_tangents, values, out_tangents = _split_triplets(channel, translations)
    times = quantize_times(channel.times)

    return [
        TranslationKey(
            time=int(time),
            in_tangent=_vec_tuple(in_tangent),
            translation=_vec_tuple(value),
            out_tangent=_vec_tuple(out_tangent),
        )
        for time, in_tangent, value, out_tangent in zip(times, in_tangents, values, out_tangents)
    ]


def _vec_tuple(vec: np.ndarray) -> Tuple[float, float, float]:
    return tuple(float(c) for c in vec)
