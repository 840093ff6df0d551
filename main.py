#!/usr/bin/env python3
"""
BounceTracer - A Python Monte Carlo Path Tracer

Main entry point for rendering the demo scenes.
"""

import argparse
import logging
import sys
import time

from bouncetracer.renderer import Renderer, RenderSettings, to_rgba8
from bouncetracer.scenes import SCENES, get_scene
from bouncetracer.export import save_png, DEFAULT_OUTPUT


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='BounceTracer - A Python Monte Carlo Path Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene demo --output render.png
  python main.py --width 128 --height 128 --samples 16 --depth 8 --seed 1
  python main.py --scene glass --threads 1
        '''
    )

    parser.add_argument('--width', type=int, default=512, help='Image width (default: 512)')
    parser.add_argument('--height', type=int, default=512, help='Image height (default: 512)')
    parser.add_argument('--samples', type=int, default=256, help='Samples per pixel (default: 256)')
    parser.add_argument('--depth', type=int, default=1000, help='Max bounces per ray (default: 1000)')
    parser.add_argument('--threads', type=int, default=0, help='Number of threads (0=auto)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible renders')
    parser.add_argument('--output', type=str, default=str(DEFAULT_OUTPUT), help='Output filename')
    parser.add_argument('--scene', type=str, default='demo', choices=sorted(SCENES),
                        help='Scene to render (default: demo)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show renderer log messages')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    try:
        settings = RenderSettings(
            width=args.width,
            height=args.height,
            samples_per_pixel=args.samples,
            max_depth=args.depth,
            num_threads=args.threads,
            seed=args.seed
        )
    except ValueError as e:
        parser.error(str(e))

    print("=" * 60)
    print("BounceTracer")
    print("=" * 60)
    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Threads: {settings.num_threads}")

    scene = get_scene(args.scene)
    print(f"\nScene: {args.scene} ({len(scene)} objects)")

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

    pixels = renderer.render(scene)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    print(f"  Samples per second: {(settings.pixel_count * settings.samples_per_pixel) / elapsed:.0f}")

    try:
        path = save_png(to_rgba8(pixels, settings.width, settings.height), args.output)
    except OSError as e:
        print(f"\nFailed to save {args.output}: {e}", file=sys.stderr)
        return 1

    print(f"\nSaved to: {path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
