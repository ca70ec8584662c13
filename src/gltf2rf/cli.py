"""
Command line interface.

Usage:
    gltf2rf model.glb -o out/ [--skin 0] [--config gltf2rf.json] [--quiet]
    gltf2rf --inspect character.v3c
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config.settings import load_settings
from .converter import convert_scene
from .core.errors import ConversionError
from .formats.v3m_reader import read_bones, read_v3m_file
from .loaders.gltf_loader import load_scene


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gltf2rf",
        description="Convert glTF skeletal animations to Red Faction RFA files.",
    )
    parser.add_argument("input", type=Path,
                        help="Input .gltf or .glb file (with --inspect: a V3M/V3C or .bones file)")
    parser.add_argument("-o", "--output-dir", type=Path, default=Path("."),
                        help="Directory for converted files (created if missing)")
    parser.add_argument("--skin", type=int, default=0,
                        help="Index of the skin that defines bone order (default: 0)")
    parser.add_argument("--config", type=Path, default=None,
                        help="JSON file with conversion setting overrides (default: ./gltf2rf.json if present)")
    parser.add_argument("--inspect", action="store_true",
                        help="Print the header, chunks and bones of an RF mesh file instead of converting")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print errors")
    return parser.parse_args(argv)


def inspect_file(path: Path):
    """Print the layout of a V3M/V3C file or bare chunk stream."""
    v3m = read_v3m_file(path)
    print(f"File: {path}")
    print(f"Size: {v3m.size}")
    if v3m.header is not None:
        header = v3m.header
        print(f"Signature: 0x{header.signature:08X} ({header.kind})")
        print(f"Version: 0x{header.version:X}")
        print(f"Submeshes: {header.num_submeshes}, LODs: {header.num_all_lods}, "
              f"materials: {header.num_all_materials}")
    else:
        print("Signature: none (bare chunk stream)")

    for chunk in v3m.chunks:
        print(f"  Chunk {chunk.name} at {chunk.offset}, {len(chunk.data)} bytes")

    bones = read_bones(v3m)
    if bones is not None:
        print(f"Bones: {len(bones)}")
        for i, bone in enumerate(bones):
            print(f"  Bone {i}: {bone.name} (parent {bone.parent_index})")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    verbose = not args.quiet

    try:
        if args.inspect:
            inspect_file(args.input)
            return 0

        settings = load_settings(args.config)
        scene = load_scene(args.input, verbose=verbose)
        args.output_dir.mkdir(parents=True, exist_ok=True)
        result = convert_scene(scene, args.output_dir, skin_index=args.skin,
                               settings=settings, verbose=verbose)
    except (ConversionError, OSError, ValueError) as e:
        # ValueError covers malformed JSON in the config file
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if verbose:
        print(f"Wrote {len(result.bones)} bones to {result.bones_file}")
        print(f"Wrote {len(result.animation_files)} animations to {args.output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
