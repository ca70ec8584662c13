#!/usr/bin/env python3
"""
glTF to Red Faction converter - Main Entry Point

Converts the skins and skeletal animations of a glTF/GLB file into RFA
animation files and V3C bone chunks.
"""

import sys

from src.gltf2rf.cli import main

if __name__ == '__main__':
    sys.exit(main())
