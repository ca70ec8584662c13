"""
gltf2rf - glTF to Red Faction animation converter

Converts glTF skins and skeletal animations into RFA animation files and
V3C bone lists.
"""

# Configuration
from .config.settings import ConversionSettings, load_settings

# Scene data
from .scene import SceneData, Joint, Skin, Animation, AnimationChannel, AnimationTarget, InterpolationType
from .loaders import GltfLoader, load_scene

# Conversion
from .core.errors import ConversionError, CapacityExceeded, DataMismatch, UnsupportedTransform
from .animation import AnimationFile, SkeletonBone, make_rfa, convert_bones
from .converter import ConversionResult, convert_animation_to_rfa, convert_scene

# Formats
from .formats import encode_rfa, write_rfa, encode_bone_chunk, write_bone_chunk

__version__ = "0.1.0"
__all__ = [
    # Config
    "ConversionSettings",
    "load_settings",
    # Scene
    "SceneData",
    "Joint",
    "Skin",
    "Animation",
    "AnimationChannel",
    "AnimationTarget",
    "InterpolationType",
    "GltfLoader",
    "load_scene",
    # Conversion
    "ConversionError",
    "CapacityExceeded",
    "DataMismatch",
    "UnsupportedTransform",
    "AnimationFile",
    "SkeletonBone",
    "make_rfa",
    "convert_bones",
    "ConversionResult",
    "convert_animation_to_rfa",
    "convert_scene",
    # Formats
    "encode_rfa",
    "write_rfa",
    "encode_bone_chunk",
    "write_bone_chunk",
]
