"""Shared fixtures for converter tests"""

import base64

import numpy as np
import pygltflib
import pytest
from pyrr import Matrix44

from gltf2rf.scene import Joint, Skin

DATA_URI_HEADER = "data:application/octet-stream;base64,"


def make_chain_skin(num_joints, first_index=0):
    """Skin whose joints form a single chain, all with identity bind poses."""
    joints = []
    for i in range(num_joints):
        index = first_index + i
        children = [index + 1] if i + 1 < num_joints else []
        joints.append(Joint(index=index, name=f"joint{i}", children=children))
    return Skin(joints, [Matrix44.identity() for _ in joints], name="chain")


@pytest.fixture
def chain_skin():
    return make_chain_skin(4)


class GltfBuilder:
    """Builds a small in-memory glTF document with a single data URI buffer."""

    def __init__(self):
        self.blob = bytearray()
        self.gltf = pygltflib.GLTF2(
            scene=0,
            scenes=[pygltflib.Scene(nodes=[0])],
            nodes=[],
            skins=[],
            animations=[],
            accessors=[],
            bufferViews=[],
            buffers=[],
        )

    def add_accessor(self, data, accessor_type, component_type=pygltflib.FLOAT, normalized=False):
        array = np.asarray(data)
        raw = array.tobytes()
        view_idx = len(self.gltf.bufferViews)
        self.gltf.bufferViews.append(pygltflib.BufferView(
            buffer=0, byteOffset=len(self.blob), byteLength=len(raw)))
        self.blob.extend(raw)
        # Keep every view 4-byte aligned
        while len(self.blob) % 4:
            self.blob.append(0)

        count = array.shape[0]
        self.gltf.accessors.append(pygltflib.Accessor(
            bufferView=view_idx,
            componentType=component_type,
            count=count,
            type=accessor_type,
            normalized=normalized,
        ))
        return len(self.gltf.accessors) - 1

    def add_node(self, name=None, children=None):
        self.gltf.nodes.append(pygltflib.Node(name=name, children=children or []))
        return len(self.gltf.nodes) - 1

    def add_skin(self, joints, matrices=None, name=None):
        inverse_bind = None
        if matrices is not None:
            # glTF stores matrices column-major; pyrr's row-major array has the same memory order
            data = np.asarray([np.asarray(m, dtype='f4').reshape(16) for m in matrices], dtype='f4')
            inverse_bind = self.add_accessor(data, pygltflib.MAT4)
        self.gltf.skins.append(pygltflib.Skin(name=name, joints=list(joints), inverseBindMatrices=inverse_bind))
        return len(self.gltf.skins) - 1

    def add_animation(self, name, channels):
        """channels: list of (node, path, times, values, interpolation)"""
        animation = pygltflib.Animation(name=name, channels=[], samplers=[])
        for node, path, times, values, interpolation in channels:
            values = np.asarray(values, dtype='f4')
            value_type = pygltflib.VEC4 if values.shape[1] == 4 else pygltflib.VEC3
            input_idx = self.add_accessor(np.asarray(times, dtype='f4'), pygltflib.SCALAR)
            output_idx = self.add_accessor(values, value_type)
            animation.samplers.append(pygltflib.AnimationSampler(
                input=input_idx, output=output_idx, interpolation=interpolation))
            animation.channels.append(pygltflib.AnimationChannel(
                sampler=len(animation.samplers) - 1,
                target=pygltflib.AnimationChannelTarget(node=node, path=path)))
        self.gltf.animations.append(animation)
        return len(self.gltf.animations) - 1

    def build(self):
        encoded = base64.b64encode(bytes(self.blob)).decode('ascii')
        self.gltf.buffers = [pygltflib.Buffer(byteLength=len(self.blob), uri=DATA_URI_HEADER + encoded)]
        return self.gltf


@pytest.fixture
def gltf_builder():
    return GltfBuilder()


@pytest.fixture
def rigged_gltf(gltf_builder):
    """Two-joint rig (root -> arm) with one walk animation."""
    root = gltf_builder.add_node("root", children=[1])
    arm = gltf_builder.add_node("arm")
    gltf_builder.add_skin(
        [root, arm],
        [Matrix44.identity(), Matrix44.from_translation([0.0, -1.0, 0.0])],
        name="body",
    )
    half = np.sqrt(0.5)
    gltf_builder.add_animation("walk", [
        (arm, "rotation", [0.0, 1.0], [[0.0, 0.0, 0.0, 1.0], [0.0, half, 0.0, half]], "LINEAR"),
        (root, "translation", [0.0, 0.5], [[0.0, 0.0, 0.0], [0.0, 0.0, 2.0]], "STEP"),
    ])
    return gltf_builder.build()
