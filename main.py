#!/usr/bin/env python3
"""
lumentrace - A Python Path Tracing Renderer

Main entry point for rendering scenes.
"""

import argparse
import dataclasses
import logging
import sys
import time

from lumentrace.framebuffer import ImageWriteError
from lumentrace.renderer import Renderer, RenderSettings
from lumentrace.scene_parser import SceneParseError, load_scene
from lumentrace.scenes import SCENES, create_default_camera


def default_output_name() -> str:
    """Timestamped file name so repeated renders never overwrite each other."""
    return f"image_{int(time.time() * 1000)}.png"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='lumentrace - A Python Path Tracing Renderer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene demo --output render.png
  python main.py --width 400 --samples 20 --depth 10 --seed 1
  python main.py --scene-file scenes/demo.yaml --samples 200
        '''
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument('--scene', type=str, default='demo', choices=sorted(SCENES),
                        help='Built-in scene to render (default: demo)')
    source.add_argument('--scene-file', type=str, default=None,
                        help='YAML or JSON scene description')

    parser.add_argument('--width', type=int, default=None, help='Image width (default: 1280)')
    parser.add_argument('--aspect-ratio', type=float, default=None,
                        help='Width / height for built-in scenes (default: 16/9)')
    parser.add_argument('--samples', type=int, default=None, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, default=None, help='Max ray depth (default: 50)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for a reproducible image')
    parser.add_argument('--output', type=str, default=None,
                        help='Output PNG filename (default: image_<timestamp>.png)')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.scene_file and args.aspect_ratio is not None:
        parser.error('--aspect-ratio only applies to built-in scenes; set it in the scene file')

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    print("=" * 60)
    print("lumentrace Path Tracer")
    print("=" * 60)

    # Scene, camera and base settings
    try:
        if args.scene_file:
            print(f"\nLoading scene: {args.scene_file}")
            world, camera, settings = load_scene(args.scene_file)
        else:
            print(f"\nCreating scene: {args.scene}")
            settings = RenderSettings()
            if args.aspect_ratio is not None:
                settings = dataclasses.replace(settings, aspect_ratio=args.aspect_ratio)
            world = SCENES[args.scene]()
            camera = create_default_camera(settings.aspect_ratio)

        overrides = {}
        if args.width is not None:
            overrides['width'] = args.width
        if args.samples is not None:
            overrides['samples_per_pixel'] = args.samples
        if args.depth is not None:
            overrides['max_depth'] = args.depth
        if args.seed is not None:
            overrides['seed'] = args.seed
        settings = dataclasses.replace(settings, **overrides)
    except (SceneParseError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"  Objects in scene: {len(world)}")
    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Seed: {settings.seed if settings.seed is not None else 'random'}")
    print(f"  Field of View: {camera.vfov:g} deg (aspect {camera.aspect_ratio:.3f})")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    framebuffer = renderer.render(world, camera)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    if elapsed > 0:
        print(f"  Samples per second: {(settings.width * settings.height * settings.samples_per_pixel) / elapsed:.0f}")

    output = args.output or default_output_name()
    print(f"\nSaving to: {output}")
    try:
        framebuffer.save_png(output)
    except ImageWriteError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
