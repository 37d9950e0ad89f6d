import numpy as np
from concurrent.futures import ThreadPoolExecutor
from materials import Material
from geometry import Triangle, TriangleSet, no_hit, Hit, EPSILON
from ImLite import Image, draw_pixel
from utils import *

"""
Core implementation of the ray tracer.
"""


class Ray:

    def __init__(self, origin, direction):
        """Create a ray with the given origin and direction.
        """
        self.origin = np.array(origin, np.float64)
        self.direction = np.array(direction, np.float64)


class RenderConfig:

    def __init__(self, eye=(0.5, 0.5, -0.5), light=(-0.5, 1.5, -0.5), epsilon=EPSILON,
                 width=256, height=256, depth=0.5, workers=1, verbose=False):
        """Fixed parameters of one render.

        Parameters:
          eye : (3,) -- ray origin for every pixel, also the view position for shading
          light : (3,) -- position of the single point light
          epsilon : float -- intersection threshold
          width, height : int -- framebuffer size in pixels
          depth : float -- z offset of the image plane from the eye
          workers : int -- number of threads rendering rows, 1 for sequential
          verbose : bool -- print per-row progress
        """
        if int(width) != width or int(height) != height or width <= 0 or height <= 0:
            raise ValueError(f"width and height must be positive integers, got {width}x{height}")
        if not epsilon > 0:
            raise ValueError(f"epsilon must be positive, got {epsilon}")
        if int(workers) != workers or workers < 1:
            raise ValueError(f"workers must be a positive integer, got {workers}")
        self.eye = vec(eye)
        self.light = vec(light)
        self.epsilon = float(epsilon)
        self.width = int(width)
        self.height = int(height)
        self.depth = float(depth)
        self.workers = int(workers)
        self.verbose = verbose


class PointLight:
    def __init__(self, position):
        """Create a point light at given position"""
        self.position = vec(position)

    def illuminate(self, ray, hit):
        """Compute the diffuse and specular shading at a surface point due to this light.

        There is no shadow test: the light reaches every hit point.
        """
        mat = hit.material
        normal_hit = hit.normal
        light_vec = normalize(self.position - hit.point)
        view_vec = normalize(ray.origin - hit.point)
        halfway_full = light_vec + view_vec

        diffuse = max(0.0, np.dot(normal_hit, light_vec))

        # light exactly opposite the eye: no half vector, no highlight
        if np.linalg.norm(halfway_full) == 0:
            specular = 0.0
        else:
            halfway_vec = normalize(halfway_full)
            specular = max(0.0, np.dot(normal_hit, halfway_vec)) ** mat.n

        return mat.diffuse * diffuse + mat.specular * specular

class AmbientLight:

    def illuminate(self, ray, hit):
        """Ambient term: the material's ambient reflectance, unattenuated.
        """
        return hit.material.ambient


def shade(ray, hit, lights):
    """Sum the light contributions at a hit and convert to an opaque 8-bit (r, g, b, a) color."""
    color = np.zeros(3)
    for light in lights:
        color = color + light.illuminate(ray, hit)
    rgb = np.round(clamp(color) * 255)
    return np.array([rgb[0], rgb[1], rgb[2], 255], dtype=np.uint8)


class Scene:

    def __init__(self, triangle_sets):
        """Create a scene containing the given triangle sets, in order.
        """
        self.triangle_sets = list(triangle_sets)
        for tset in self.triangle_sets:
            if not isinstance(tset, TriangleSet):
                raise ValueError(f"Scene expects TriangleSet objects, got {type(tset).__name__}")

    def __len__(self):
        return sum(len(tset) for tset in self.triangle_sets)

    def intersect(self, ray, epsilon=EPSILON):
        """Computes the first (smallest t) intersection between a ray and the scene.

        Every triangle is tested. Candidates replace the current best only when
        strictly nearer, so equal distances keep the earlier triangle.
        """
        closest_hit = no_hit
        for tset in self.triangle_sets:
            for tri in tset.surfs:
                hit = tri.intersect(ray, epsilon)
                if hit.t < closest_hit.t:
                    closest_hit = hit
        return closest_hit


def generate_ray(x, y, config):
    """Ray from the eye through pixel (x, y); rows count down from the top of the image.

    Returns None when the pixel maps to a zero direction, which only happens
    with a zero depth offset; such a pixel is treated as a miss.
    """
    w = config.width
    h = config.height
    direction = vec([x / w - 0.5, (h - y) / h - 0.5, config.depth])
    if not np.any(direction):
        return None
    return Ray(config.eye, normalize(direction))


def render_row(scene, config, y, lights=None):
    """Trace every pixel of row y; returns (x, color) pairs for the pixels that hit."""
    if lights is None:
        lights = [AmbientLight(), PointLight(config.light)]

    row = []
    for x in range(config.width):
        ray = generate_ray(x, y, config)
        if ray is None:
            continue
        hit = scene.intersect(ray, config.epsilon)
        if hit is not no_hit:
            row.append((x, shade(ray, hit, lights)))
    return row


def render_image(scene, config=None, image=None):
    """
    render a ray traced image.

    Pixels whose ray misses the scene keep the framebuffer's existing value.
    Returns the framebuffer written into.
    """
    if config is None:
        config = RenderConfig()
    if image is None:
        image = Image.Blank(config.width, config.height)
    if image.width != config.width or image.height != config.height:
        raise ValueError(
            f"framebuffer is {image.width}x{image.height} but the render is "
            f"configured for {config.width}x{config.height}")

    lights = [AmbientLight(), PointLight(config.light)]
    ny = config.height

    if config.workers > 1:
        # rows are independent; each task returns its own pixels
        with ThreadPoolExecutor(max_workers=config.workers) as executor:
            rows = executor.map(lambda i: render_row(scene, config, i, lights), range(ny))
            for i, row in enumerate(rows):
                if config.verbose:
                    print(f"rendering row {i+1}/{ny}...")
                for j, color in row:
                    draw_pixel(image, j, i, color)
        return image

    for i in range(ny):
        if config.verbose:
            print(f"rendering row {i+1}/{ny}...")
        for j, color in render_row(scene, config, i, lights):
            draw_pixel(image, j, i, color)

    return image
