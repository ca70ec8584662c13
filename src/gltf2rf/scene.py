"""
Scene

Read-only view of the glTF data the converter consumes: joints, skins and
animation channels. Built once by the loader and shared by every
conversion step.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np
from pyrr import Matrix44


class InterpolationType(Enum):
    """Animation interpolation types."""
    LINEAR = "LINEAR"
    STEP = "STEP"
    CUBICSPLINE = "CUBICSPLINE"

    @classmethod
    def from_gltf(cls, value: Optional[str]) -> 'InterpolationType':
        """Map a glTF sampler interpolation string (default LINEAR)."""
        if not value:
            return cls.LINEAR
        return cls(value)


class AnimationTarget(Enum):
    """Animation target properties."""
    TRANSLATION = "translation"
    ROTATION = "rotation"
    SCALE = "scale"
    WEIGHTS = "weights"  # Morph target weights


class Joint:
    """
    A scene node referenced by a skin.

    Only identity and the direct-children relation are kept; the converter
    derives hierarchy from ``children`` alone.
    """

    def __init__(self, index: int, name: Optional[str] = None, children: Sequence[int] = ()):
        """
        Initialize a joint.

        Args:
            index: Node index in the glTF scene
            name: Node name (None when unnamed)
            children: Node indices of direct children
        """
        self.index = index
        self.name = name
        self.children: List[int] = list(children)

    def __repr__(self):
        return f"Joint(index={self.index}, name={self.name!r}, children={self.children})"


class Skin:
    """
    Ordered joint list plus one inverse bind matrix per joint.

    Joint order defines bone indices in both the mesh bone chunk and every
    animation file converted against this skin.
    """

    def __init__(
        self,
        joints: Sequence[Joint],
        inverse_bind_matrices: Optional[Sequence[Matrix44]] = None,
        name: Optional[str] = None
    ):
        self.name = name
        self.joints: List[Joint] = list(joints)
        self.inverse_bind_matrices: Optional[List[Matrix44]] = (
            None if inverse_bind_matrices is None
            else [Matrix44(np.asarray(m, dtype='f4').reshape(4, 4)) for m in inverse_bind_matrices]
        )

    def __repr__(self):
        return f"Skin(name={self.name!r}, joints={len(self.joints)})"


class AnimationChannel:
    """
    Sampled data stream targeting one property of one node.

    ``values`` holds one row per output element. For CUBICSPLINE
    interpolation there are three rows per timestamp:
    in-tangent, value, out-tangent.
    """

    def __init__(
        self,
        target_node: int,
        target_property: AnimationTarget,
        times,
        values,
        interpolation: InterpolationType = InterpolationType.LINEAR
    ):
        """
        Initialize animation channel.

        Args:
            target_node: Node index of the animated joint
            target_property: Property to animate (translation/rotation/scale/weights)
            times: Timestamps in seconds
            values: Output values, one row per output element
            interpolation: Interpolation method
        """
        self.target_node = target_node
        self.target_property = target_property
        self.interpolation = interpolation
        self.times = np.asarray(times, dtype='f4').reshape(-1)
        values = np.asarray(values, dtype='f4')
        if values.ndim == 1:
            values = values.reshape(-1, 1)
        self.values = values

    def __repr__(self):
        return (f"AnimationChannel(node={self.target_node}, property={self.target_property.value}, "
                f"interpolation={self.interpolation.value}, samples={len(self.times)})")


class Animation:
    """Named collection of channels played together."""

    def __init__(self, name: Optional[str] = None, channels: Sequence[AnimationChannel] = ()):
        self.name = name
        self.channels: List[AnimationChannel] = list(channels)

    def add_channel(self, channel: AnimationChannel):
        """Add an animation channel."""
        self.channels.append(channel)

    def __repr__(self):
        return f"Animation(name={self.name!r}, channels={len(self.channels)})"


class SceneData:
    """
    Everything the converter reads from one glTF file.

    Passed explicitly to each conversion step; nothing here is modified
    after loading.
    """

    def __init__(
        self,
        nodes: Dict[int, Joint],
        skins: Sequence[Skin] = (),
        animations: Sequence[Animation] = (),
        source: Optional[Path] = None
    ):
        self.nodes = nodes
        self.skins: List[Skin] = list(skins)
        self.animations: List[Animation] = list(animations)
        self.source = source

    def __repr__(self):
        return (f"SceneData(source={self.source}, nodes={len(self.nodes)}, "
                f"skins={len(self.skins)}, animations={len(self.animations)})")
