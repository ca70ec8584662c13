"""Loader utilities for glTF scenes."""

from .gltf_loader import GltfLoader, load_scene

__all__ = ['GltfLoader', 'load_scene']
