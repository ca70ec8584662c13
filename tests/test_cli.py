"""Tests for the command line interface"""

import runpy
from pathlib import Path

from pyrr import Matrix44

from gltf2rf.cli import main


def test_cli_converts_file(rigged_gltf, tmp_path):
    """Output directory is created and filled"""
    source = tmp_path / "rig.gltf"
    rigged_gltf.save(str(source))
    out_dir = tmp_path / "out"

    assert main([str(source), "-o", str(out_dir), "--quiet"]) == 0

    assert sorted(p.name for p in out_dir.iterdir()) == ["body.bones", "walk.rfa"]


def test_cli_reports_conversion_error(gltf_builder, tmp_path, capsys):
    """Conversion errors exit with status 1 and a message on stderr"""
    gltf_builder.add_node("root")
    gltf_builder.add_skin([0], [Matrix44.from_scale([2.0, 2.0, 2.0])])
    source = tmp_path / "scaled.gltf"
    gltf_builder.build().save(str(source))

    assert main([str(source), "-o", str(tmp_path / "out"), "-q"]) == 1

    assert "Error:" in capsys.readouterr().err


def test_cli_missing_input(tmp_path, capsys):
    """A missing input file is reported, not raised"""
    assert main([str(tmp_path / "missing.glb"), "-q"]) == 1

    assert "Error:" in capsys.readouterr().err


def test_cli_dangling_joint(gltf_builder, tmp_path, capsys):
    gltf_builder.add_node("root")
    gltf_builder.add_skin([3], [Matrix44.identity()])
    source = tmp_path / "broken.gltf"
    gltf_builder.build().save(str(source))

    assert main([str(source), "-o", str(tmp_path / "out"), "-q"]) == 1

    assert "malformed glTF" in capsys.readouterr().err


def test_cli_malformed_config(rigged_gltf, tmp_path, capsys):
    source = tmp_path / "rig.gltf"
    rigged_gltf.save(str(source))
    config = tmp_path / "bad.json"
    config.write_text("{not json")

    assert main([str(source), "-o", str(tmp_path / "out"), "--config", str(config), "-q"]) == 1

    assert "Error:" in capsys.readouterr().err


def test_cli_inspect_bones_file(rigged_gltf, tmp_path, capsys):
    """--inspect lists the chunks and bones of a written file"""
    source = tmp_path / "rig.gltf"
    rigged_gltf.save(str(source))
    out_dir = tmp_path / "out"
    assert main([str(source), "-o", str(out_dir), "-q"]) == 0

    assert main([str(out_dir / "body.bones"), "--inspect"]) == 0

    output = capsys.readouterr().out
    assert "Chunk BONE" in output
    assert "Bones: 2" in output
    assert "Bone 1: arm (parent 0)" in output


def test_cli_inspect_garbage(tmp_path, capsys):
    path = tmp_path / "junk.v3m"
    path.write_bytes(b"\x01\x02\x03")

    assert main([str(path), "--inspect"]) == 1

    assert "Error:" in capsys.readouterr().err


def test_main_script_runs_from_repo_root(monkeypatch):
    """main.py imports the CLI without editing sys.path itself"""
    repo_root = Path(__file__).resolve().parents[1]
    monkeypatch.syspath_prepend(str(repo_root))

    namespace = runpy.run_path(str(repo_root / "main.py"), run_name="gltf2rf_main")

    assert namespace["main"].__module__ == "src.gltf2rf.cli"
