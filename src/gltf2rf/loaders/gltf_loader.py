"""
GLTF/GLB Loader

Loads the skin and animation data of GLTF and GLB files into SceneData.
"""

import numpy as np
from pathlib import Path
from typing import Dict, List, Optional, Union
import pygltflib
from pyrr import Matrix44

from ..core.errors import DataMismatch, FormatError
from ..scene import (
    SceneData, Joint, Skin, Animation, AnimationChannel,
    AnimationTarget, InterpolationType
)

COMPONENT_TYPE_SIZES = {
    5120: 1,  # BYTE
    5121: 1,  # UNSIGNED_BYTE
    5122: 2,  # SHORT
    5123: 2,  # UNSIGNED_SHORT
    5125: 4,  # UNSIGNED_INT
    5126: 4,  # FLOAT
}

COMPONENT_DTYPES = {
    5120: np.int8,
    5121: np.uint8,
    5122: np.int16,
    5123: np.uint16,
    5125: np.uint32,
    5126: np.float32,
}

# Divisors for normalized integer accessors (glTF 2.0, section 3.11)
NORMALIZED_DIVISORS = {
    5120: 127.0,
    5121: 255.0,
    5122: 32767.0,
    5123: 65535.0,
}

COMPONENT_COUNTS = {
    'SCALAR': 1,
    'VEC2': 2,
    'VEC3': 3,
    'VEC4': 4,
    'MAT2': 4,
    'MAT3': 9,
    'MAT4': 16,
}


class GltfLoader:
    """
    Reads joints, skins and animations from a GLTF/GLB file.

    Meshes, materials and textures are ignored.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize loader.

        Args:
            verbose: Print progress while loading
        """
        self.verbose = verbose

    def _log(self, message: str):
        if self.verbose:
            print(message)

    def load(self, filepath: Union[str, Path]) -> SceneData:
        """
        Load a GLTF or GLB file.

        Args:
            filepath: Path to .gltf or .glb file

        Returns:
            SceneData with every node, skin and animation
        """
        filepath = Path(filepath)
        self._log(f"Loading scene: {filepath}")
        if not filepath.is_file():
            raise FileNotFoundError(f"No such glTF file: '{filepath}'")

        try:
            gltf = pygltflib.GLTF2().load(str(filepath))
        except ValueError as e:
            # JSON syntax errors and bad GLB chunks
            raise FormatError(f"cannot parse {filepath}: {e}") from e
        if gltf is None:
            raise FormatError(f"cannot parse {filepath}")
        scene = self.load_gltf(gltf)
        scene.source = filepath
        return scene

    def load_gltf(self, gltf: pygltflib.GLTF2) -> SceneData:
        """Build SceneData from an already parsed GLTF2 document."""
        try:
            nodes = self._load_nodes(gltf)

            skins = []
            if gltf.skins:
                skins = self._load_skins(gltf, nodes)
                self._log(f"  Loaded {len(skins)} skins")

            animations = []
            if gltf.animations:
                animations = self._load_animations(gltf)
                self._log(f"  Loaded {len(animations)} animations")
        except (KeyError, IndexError, ValueError) as e:
            # Dangling indices, unknown enum strings, truncated buffers
            raise DataMismatch(f"malformed glTF data: {e!r}") from e

        return SceneData(nodes=nodes, skins=skins, animations=animations)

    def _get_accessor_data(self, gltf: pygltflib.GLTF2, accessor_idx: int) -> np.ndarray:
        """
        Get data from an accessor.

        Args:
            gltf: GLTF data
            accessor_idx: Accessor index

        Returns:
            float32 array of shape (count, components); normalized integer
            accessors are mapped to [-1, 1] / [0, 1]
        """
        accessor = gltf.accessors[accessor_idx]
        component_count = COMPONENT_COUNTS[accessor.type]

        if accessor.bufferView is None:
            # No buffer view means all zeros (sparse accessors are not supported)
            return np.zeros((accessor.count, component_count), dtype='f4')

        buffer_view = gltf.bufferViews[accessor.bufferView]
        buffer = gltf.buffers[buffer_view.buffer]

        # Get buffer data
        if buffer.uri:
            # External buffer file or data URI
            buffer_data = gltf.get_data_from_buffer_uri(buffer.uri)
        else:
            # Embedded buffer (GLB)
            buffer_data = gltf.binary_blob()

        # Calculate offset and stride
        offset = (buffer_view.byteOffset or 0) + (accessor.byteOffset or 0)
        stride = buffer_view.byteStride or 0

        component_size = COMPONENT_TYPE_SIZES[accessor.componentType]
        element_size = component_size * component_count

        # Extract data
        if stride == 0 or stride == element_size:
            # Tightly packed
            end_offset = offset + accessor.count * element_size
            data = buffer_data[offset:end_offset]
        else:
            # Strided data
            data = bytearray()
            for i in range(accessor.count):
                element_offset = offset + i * stride
                data.extend(buffer_data[element_offset:element_offset + element_size])

        dtype = np.dtype(COMPONENT_DTYPES[accessor.componentType]).newbyteorder('<')
        array = np.frombuffer(bytes(data), dtype=dtype).astype('f4')

        if accessor.normalized and accessor.componentType in NORMALIZED_DIVISORS:
            array = np.maximum(array / NORMALIZED_DIVISORS[accessor.componentType], -1.0)

        return array.reshape(accessor.count, component_count).astype('f4')

    def _load_nodes(self, gltf: pygltflib.GLTF2) -> Dict[int, Joint]:
        """Create a Joint for every node; only skins decide which are bones."""
        nodes = {}
        for idx, node in enumerate(gltf.nodes):
            nodes[idx] = Joint(index=idx, name=node.name or None, children=node.children or [])
        return nodes

    def _load_skins(self, gltf: pygltflib.GLTF2, nodes: Dict[int, Joint]) -> List[Skin]:
        """
        Load skins from GLTF.

        Args:
            gltf: GLTF data
            nodes: Joints keyed by node index

        Returns:
            List of Skin objects in file order
        """
        skins = []

        for skin_idx, gltf_skin in enumerate(gltf.skins):
            joints = [nodes[joint_idx] for joint_idx in gltf_skin.joints]

            # Get inverse bind matrices
            inv_bind_matrices: Optional[List[Matrix44]] = None
            if gltf_skin.inverseBindMatrices is not None:
                inv_bind_data = self._get_accessor_data(gltf, gltf_skin.inverseBindMatrices)
                # Column-major glTF data read row by row is pyrr's row-major layout
                inv_bind_matrices = [Matrix44(m.reshape(4, 4)) for m in inv_bind_data]
            else:
                self._log(f"  Warning: Skin {skin_idx} has no inverse bind matrices")

            skins.append(Skin(joints, inv_bind_matrices, name=gltf_skin.name or None))

        return skins

    def _load_animations(self, gltf: pygltflib.GLTF2) -> List[Animation]:
        """
        Load animations from GLTF.

        Args:
            gltf: GLTF data

        Returns:
            List of Animation objects in file order (index defines default names)
        """
        animations = []

        for anim_idx, gltf_anim in enumerate(gltf.animations):
            animation = Animation(gltf_anim.name or None)

            # Process each channel in the animation
            for channel in gltf_anim.channels:
                sampler = gltf_anim.samplers[channel.sampler]
                target_node_idx = channel.target.node
                target_path = channel.target.path

                if target_node_idx is None:
                    # Channels targeting extensions (KHR_animation_pointer) have no node
                    self._log(f"  Warning: Skipping channel without target node in animation {anim_idx}")
                    continue

                try:
                    target_property = AnimationTarget(target_path)
                except ValueError:
                    self._log(f"  Warning: Unknown animation target path: {target_path}")
                    continue

                times = self._get_accessor_data(gltf, sampler.input)
                values = self._get_accessor_data(gltf, sampler.output)

                animation.add_channel(AnimationChannel(
                    target_node=target_node_idx,
                    target_property=target_property,
                    times=times,
                    values=values,
                    interpolation=InterpolationType.from_gltf(sampler.interpolation)
                ))

            animations.append(animation)

        return animations


def load_scene(filepath: Union[str, Path], verbose: bool = True) -> SceneData:
    """Load a GLTF/GLB file into SceneData."""
    return GltfLoader(verbose=verbose).load(filepath)
