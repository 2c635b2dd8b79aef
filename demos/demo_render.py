#!/usr/bin/env python3
"""
Demo: Scene Rendering

Loads a scene file and renders its meshes, light sources and grid cloner.
Usage:
    python demo_render.py <scene.yaml> [--show] [--save] [--normals] [--wireframe]

Example:
    python demo_render.py scenes/canopy.yaml --show
    python demo_render.py scenes/canopy.yaml --save --wireframe
"""

import argparse
import logging
from pathlib import Path

import matplotlib.pyplot as plt

from plantviz.core.io import SceneLoader
from plantviz.visualization import render, render_into, export_scene


def main():
    parser = argparse.ArgumentParser(description="Render a scene file")
    parser.add_argument("scene_file", type=str, help="Path to scene YAML file")
    parser.add_argument("--show", action="store_true", help="Display plot interactively")
    parser.add_argument("--save", action="store_true", help="Save image to the output path")
    parser.add_argument("--normals", action="store_true", help="Show face normals")
    parser.add_argument("--wireframe", action="store_true", help="Show triangle edges")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Default: save if neither specified
    if not args.show and not args.save:
        args.save = True

    scene = SceneLoader.load(Path(args.scene_file).resolve())
    config = scene.render_config

    fig = render(scene.mesh, config=config,
                 normals=args.normals or config.mesh.normals,
                 wireframe=args.wireframe or config.mesh.wireframe)
    if scene.sources:
        render_into(scene.sources, scene=fig, config=config)
    if scene.grid is not None:
        render_into(scene.grid, scene=fig, config=config)
    fig.suptitle(scene.name)

    if args.save:
        path = scene.output_path
        path.parent.mkdir(parents=True, exist_ok=True)
        options = {} if scene.config.output.dpi is None else {"dpi": scene.config.output.dpi}
        export_scene(fig, path, **options)

    if args.show:
        plt.show()
    plt.close(fig)


if __name__ == "__main__":
    main()
