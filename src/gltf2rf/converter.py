"""
Converter

Entry points that turn loaded scene data into RF files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .animation.rfa import animation_name, make_rfa
from .animation.skeleton import SkeletonBone, convert_bones
from .config.settings import ConversionSettings, DEFAULT_SETTINGS
from .core.errors import DataMismatch
from .formats.rfa_writer import write_rfa
from .formats.v3m_bones import write_bone_chunk
from .scene import Animation, SceneData, Skin


@dataclass
class ConversionResult:
    """Files written by convert_scene."""
    bones: List[SkeletonBone]
    bones_file: Path
    animation_files: List[Path] = field(default_factory=list)


def output_file_name(name: str, extension: str) -> str:
    """File name for an animation or skin; path separators become underscores."""
    for separator in ("/", "\\"):
        name = name.replace(separator, "_")
    return f"{name}{extension}"


def convert_animation_to_rfa(
    animation: Animation,
    index: int,
    skin: Skin,
    output_dir: Union[str, Path],
    settings: Optional[ConversionSettings] = None,
    verbose: bool = True
) -> Path:
    """
    Convert one animation and write it as ``<name>.rfa``.

    Args:
        animation: Source animation
        index: Position of the animation in the scene (used for default names)
        skin: Skin the animation drives
        output_dir: Existing directory for the output file
        settings: Conversion overrides
        verbose: Print progress

    Returns:
        Path of the written file
    """
    settings = settings or DEFAULT_SETTINGS
    name = animation_name(animation, index)
    if verbose:
        print(f"Processing animation {name}")

    file_path = Path(output_dir) / output_file_name(name, settings.rfa_extension)
    rfa = make_rfa(animation, skin, settings)
    return write_rfa(rfa, file_path)


def skin_name(skin: Skin, index: int) -> str:
    return skin.name if skin.name else f"skin_{index}"


def convert_scene(
    scene: SceneData,
    output_dir: Union[str, Path],
    skin_index: int = 0,
    settings: Optional[ConversionSettings] = None,
    verbose: bool = True
) -> ConversionResult:
    """
    Convert the bones of one skin and every animation of the scene.

    The bone list is resolved first, so a skin the format cannot represent
    fails before any animation file is written.

    Args:
        scene: Loaded scene
        output_dir: Existing directory for output files
        skin_index: Skin whose joints define bone order
        settings: Conversion overrides
        verbose: Print progress

    Returns:
        ConversionResult listing the written files
    """
    settings = settings or DEFAULT_SETTINGS
    output_dir = Path(output_dir)

    if not 0 <= skin_index < len(scene.skins):
        raise DataMismatch(f"skin index {skin_index} out of range, scene has {len(scene.skins)} skins")
    skin = scene.skins[skin_index]

    bones = convert_bones(skin)
    name = skin_name(skin, skin_index)
    if verbose:
        print(f"Processing skin {name}")
        for i, bone in enumerate(bones):
            print(f"  Bone {i}: {bone.name} (parent {bone.parent_index})")

    bones_file = write_bone_chunk(bones, output_dir / output_file_name(name, settings.bones_extension))
    result = ConversionResult(bones=bones, bones_file=bones_file)

    for index, animation in enumerate(scene.animations):
        result.animation_files.append(
            convert_animation_to_rfa(animation, index, skin, output_dir, settings, verbose)
        )

    return result
