"""
Conversion Configuration Settings

All format constants used by the glTF to Red Faction converter.
Modify these values to change converter behavior.
"""

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional, Union

# ============================================================================
# Configuration File
# ============================================================================

DEFAULT_CONFIG_NAME = "gltf2rf.json"  # Looked up in the working directory

# ============================================================================
# Time Quantization
# ============================================================================

FRAMES_PER_SECOND = 30
TICKS_PER_FRAME = 160
TICKS_PER_SECOND = FRAMES_PER_SECOND * TICKS_PER_FRAME  # 4800

# ============================================================================
# Rotation Quantization
# ============================================================================

QUAT_SCALE = 16383.0  # Unit quaternion component -> int16

# ============================================================================
# Skeleton Limits
# ============================================================================

MAX_BONES = 50          # Hard limit of the V3C bone chunk
SCALE_TOLERANCE = 0.01  # Allowed deviation of bind pose scale from 1.0
BONE_NAME_LENGTH = 24   # Fixed size of the bone name field (NUL included)

# ============================================================================
# RFA (animation) Format
# ============================================================================

RFA_SIGNATURE = 0x46564D56  # 'VMVF'
RFA_VERSION = 8
RFA_EXTENSION = ".rfa"

RAMP_IN_TIME = 480   # Ticks
RAMP_OUT_TIME = 480  # Ticks

BONE_WEIGHT = 1.0

# ============================================================================
# V3M/V3C (mesh) Format
# ============================================================================

V3M_SIGNATURE = 0x52463344  # 'D3FR', static mesh
V3C_SIGNATURE = 0x5246434D  # 'MCFR', character mesh
V3M_END_CHUNK = 0x00000000
V3M_BONE_CHUNK = 0x454E4F42  # 'BONE'
BONES_EXTENSION = ".bones"


@dataclass(frozen=True)
class ConversionSettings:
    """Values a user may override without touching the format constants."""
    ramp_in_time: int = RAMP_IN_TIME
    ramp_out_time: int = RAMP_OUT_TIME
    rfa_extension: str = RFA_EXTENSION
    bones_extension: str = BONES_EXTENSION


DEFAULT_SETTINGS = ConversionSettings()


def load_settings(config_path: Optional[Union[str, Path]] = None) -> ConversionSettings:
    """
    Load conversion setting overrides from a JSON configuration file.

    Args:
        config_path: Path to a JSON object whose keys match ConversionSettings
            fields. Defaults to DEFAULT_CONFIG_NAME in the working
            directory, which is optional.

    Returns:
        ConversionSettings with overrides applied
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME
        if not config_path.exists():
            return DEFAULT_SETTINGS
    config_path = Path(config_path)

    if not config_path.exists():
        print(f"Warning: Conversion config not found at {config_path}")
        return DEFAULT_SETTINGS

    with open(config_path, 'r') as f:
        config = json.load(f)

    known = {field.name for field in fields(ConversionSettings)}
    overrides = {}
    for key, value in config.items():
        if key not in known:
            print(f"Warning: Ignoring unknown setting '{key}'")
            continue
        overrides[key] = value

    return replace(DEFAULT_SETTINGS, **overrides)
