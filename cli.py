import argparse
import sys
import time
import requests
from materials import Material
from ray import RenderConfig, Scene, render_image
from scenes import INPUT_TRIANGLES_URL, load_scene, read_obj_triangle_set


def render(scene, config=None, output_path=None, show=False):
    """Render scene, report timing, then save and/or display the framebuffer."""
    if config is None:
        config = RenderConfig()

    print(f"Rendering {len(scene)} triangles at {config.width}x{config.height}...")
    start_time = time.time()
    image = render_image(scene, config)
    end_time = time.time()
    print(f"Render complete in: {end_time - start_time:.2f} seconds")

    if output_path:
        image.writeToFile(output_path)
        print(f"Wrote {output_path}")
    if show:
        image.show()
    return image


def _triple(text):
    parts = text.split(',')
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected x,y,z but got {text!r}")
    try:
        return tuple(float(p) for p in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected three numbers but got {text!r}")


def build_parser():
    parser = argparse.ArgumentParser(description="Ray trace a scene of triangle sets with Blinn-Phong shading.")
    parser.add_argument('--scene', default=INPUT_TRIANGLES_URL,
                        help="triangle-set JSON file or URL (default: %(default)s)")
    parser.add_argument('--no-scene', action='store_true',
                        help="skip the JSON scene, render only --obj meshes")
    parser.add_argument('--obj', action='append', default=[],
                        help="Wavefront OBJ mesh to add with a plain gray material (repeatable)")
    parser.add_argument('--width', type=int, default=256)
    parser.add_argument('--height', type=int, default=256)
    parser.add_argument('--eye', type=_triple, default=(0.5, 0.5, -0.5), help="x,y,z")
    parser.add_argument('--light', type=_triple, default=(-0.5, 1.5, -0.5), help="x,y,z")
    parser.add_argument('--epsilon', type=float, default=1e-5)
    parser.add_argument('--workers', type=int, default=1, help="threads rendering rows")
    parser.add_argument('--output', default='out.png')
    parser.add_argument('--show', action='store_true')
    parser.add_argument('--verbose', action='store_true', help="print per-row progress")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = RenderConfig(eye=args.eye, light=args.light, epsilon=args.epsilon,
                              width=args.width, height=args.height,
                              workers=args.workers, verbose=args.verbose)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    tsets = []
    try:
        if not args.no_scene:
            print(f"Loading {args.scene}...")
            tsets.extend(load_scene(args.scene).triangle_sets)
        gray = Material(0.1, 0.6, 0.3, 11)
        for path in args.obj:
            with open(path) as f:
                tsets.append(read_obj_triangle_set(f, gray))
    except (OSError, ValueError, requests.RequestException) as e:
        print(f"Error: unable to load scene: {e}", file=sys.stderr)
        return 1

    scene = Scene(tsets)
    print(f"Loaded {len(scene)} triangles in {len(tsets)} triangle sets.")
    render(scene, config, output_path=args.output, show=args.show)
    return 0


if __name__ == '__main__':
    sys.exit(main())
