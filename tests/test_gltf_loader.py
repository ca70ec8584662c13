"""Tests for reading skins and animations from glTF"""

import numpy as np
import pygltflib
import pytest

from gltf2rf.core.errors import DataMismatch
from gltf2rf.loaders.gltf_loader import GltfLoader, load_scene
from gltf2rf.scene import AnimationTarget, InterpolationType


def test_load_nodes_and_skin(rigged_gltf):
    """Joints keep node indices, names and children"""
    scene = GltfLoader(verbose=False).load_gltf(rigged_gltf)

    assert len(scene.nodes) == 2
    skin = scene.skins[0]
    assert skin.name == "body"
    assert [j.index for j in skin.joints] == [0, 1]
    assert [j.name for j in skin.joints] == ["root", "arm"]
    assert skin.joints[0].children == [1]
    assert skin.joints[1].children == []


def test_load_inverse_bind_matrices(rigged_gltf):
    """Matrices come back in pyrr layout with translation in the last row"""
    scene = GltfLoader(verbose=False).load_gltf(rigged_gltf)

    matrices = scene.skins[0].inverse_bind_matrices
    assert len(matrices) == 2
    assert np.allclose(matrices[0], np.identity(4))
    assert np.allclose(np.asarray(matrices[1])[3, :3], [0.0, -1.0, 0.0])


def test_load_animation_channels(rigged_gltf):
    """Channels keep target, property, interpolation and samples"""
    scene = GltfLoader(verbose=False).load_gltf(rigged_gltf)

    animation = scene.animations[0]
    assert animation.name == "walk"
    rotation, translation = animation.channels

    assert rotation.target_node == 1
    assert rotation.target_property == AnimationTarget.ROTATION
    assert rotation.interpolation == InterpolationType.LINEAR
    assert np.allclose(rotation.times, [0.0, 1.0])
    assert rotation.values.shape == (2, 4)

    assert translation.target_node == 0
    assert translation.target_property == AnimationTarget.TRANSLATION
    assert translation.interpolation == InterpolationType.STEP
    assert np.allclose(translation.values[1], [0.0, 0.0, 2.0])


def test_skin_without_matrices(gltf_builder):
    """Missing inverse bind matrices load as None"""
    gltf_builder.add_node("only")
    gltf_builder.add_skin([0])

    scene = GltfLoader(verbose=False).load_gltf(gltf_builder.build())

    assert scene.skins[0].inverse_bind_matrices is None


def test_unnamed_objects_load_as_none(gltf_builder):
    """Empty names are normalized to None so defaults apply later"""
    gltf_builder.add_node()
    gltf_builder.add_skin([0], [np.identity(4)])
    gltf_builder.add_animation(None, [(0, "translation", [0.0], [[0.0, 0.0, 0.0]], "LINEAR")])

    scene = GltfLoader(verbose=False).load_gltf(gltf_builder.build())

    assert scene.nodes[0].name is None
    assert scene.skins[0].name is None
    assert scene.animations[0].name is None


def test_normalized_rotation_outputs(gltf_builder):
    """Normalized SHORT rotations are mapped to [-1, 1]"""
    gltf_builder.add_node("joint")
    times = gltf_builder.add_accessor(np.array([0.0, 1.0], dtype='f4'), pygltflib.SCALAR)
    rotations = gltf_builder.add_accessor(
        np.array([[0, 0, 0, 32767], [0, -32767, 0, 0]], dtype=np.int16),
        pygltflib.VEC4, component_type=pygltflib.SHORT, normalized=True)
    gltf_builder.gltf.animations.append(pygltflib.Animation(
        samplers=[pygltflib.AnimationSampler(input=times, output=rotations)],
        channels=[pygltflib.AnimationChannel(
            sampler=0, target=pygltflib.AnimationChannelTarget(node=0, path="rotation"))],
    ))

    scene = GltfLoader(verbose=False).load_gltf(gltf_builder.build())

    values = scene.animations[0].channels[0].values
    assert np.allclose(values, [[0.0, 0.0, 0.0, 1.0], [0.0, -1.0, 0.0, 0.0]])
    assert scene.animations[0].channels[0].interpolation == InterpolationType.LINEAR


def test_scale_and_weights_channels_are_kept(gltf_builder):
    """Non-skeletal channels load; extraction decides what to use"""
    gltf_builder.add_node("joint")
    gltf_builder.add_animation("grow", [(0, "scale", [0.0], [[2.0, 2.0, 2.0]], "LINEAR")])

    scene = GltfLoader(verbose=False).load_gltf(gltf_builder.build())

    assert scene.animations[0].channels[0].target_property == AnimationTarget.SCALE


def test_load_scene_from_file(rigged_gltf, tmp_path):
    """A saved .gltf file loads with its source path"""
    path = tmp_path / "rig.gltf"
    rigged_gltf.save(str(path))

    scene = load_scene(path, verbose=False)

    assert scene.source == path
    assert len(scene.skins) == 1
    assert len(scene.animations) == 1
    assert scene.animations[0].channels[0].values.shape == (2, 4)


def test_dangling_joint_index(gltf_builder):
    """Skins referencing missing nodes are reported as conversion errors"""
    gltf_builder.add_node("only")
    gltf_builder.add_skin([5])

    with pytest.raises(DataMismatch):
        GltfLoader(verbose=False).load_gltf(gltf_builder.build())


def test_unknown_interpolation(gltf_builder):
    gltf_builder.add_node("joint")
    gltf_builder.add_animation("a", [(0, "translation", [0.0], [[0.0, 0.0, 0.0]], "BEZIER")])

    with pytest.raises(DataMismatch):
        GltfLoader(verbose=False).load_gltf(gltf_builder.build())


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_scene(tmp_path / "missing.glb", verbose=False)
