import json
import requests
import numpy as np
from materials import Material
from geometry import TriangleSet
from ray import Scene

"""
Loading scenes: triangle-set JSON documents and Wavefront OBJ meshes.
"""

INPUT_TRIANGLES_URL = "https://ncsucgclass.github.io/prog1/triangles.json"


def parse_triangle_sets(data):
    """Build a Scene from a parsed triangle-set document.

    The document is a list of objects, each with
      material : {ambient, diffuse, specular, n}
      vertices : list of [x, y, z]
      triangles : list of [i, j, k] indices into vertices
    """
    if not isinstance(data, list):
        raise ValueError("a triangle-set document must be a list of triangle sets")

    tsets = []
    for i, entry in enumerate(data):
        missing = [k for k in ('material', 'vertices', 'triangles') if k not in entry]
        if missing:
            raise ValueError(f"triangle set {i} is missing fields: {', '.join(missing)}")
        try:
            material = Material.from_dict(entry['material'])
            tsets.append(TriangleSet(entry['vertices'], entry['triangles'], material))
        except ValueError as e:
            raise ValueError(f"triangle set {i}: {e}") from e
    return Scene(tsets)


def load_scene(source=INPUT_TRIANGLES_URL, timeout=10):
    """Load a triangle-set document from an http(s) URL or a local file path."""
    if source.startswith(('http://', 'https://')):
        response = requests.get(source, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    else:
        with open(source) as f:
            data = json.load(f)
    return parse_triangle_sets(data)


def read_obj_triangle_set(f, material):
    """Read a file in the Wavefront OBJ file format into a TriangleSet.

    Argument is an open file. Only positions and faces are used; polygons are
    split into triangle fans and negative (relative) indices are resolved.
    """
    posns = []
    faces = []

    for words in (line.split() for line in f.readlines()):
        if not words:
            continue
        if words[0] == 'v':
            posns.append([float(s) for s in words[1:4]])
        elif words[0] == 'f':
            inds = []
            for w in words[1:]:
                k = int(w.split('/')[0])
                inds.append(k - 1 if k > 0 else len(posns) + k)
            for j in range(1, len(inds) - 1):
                faces.append([inds[0], inds[j], inds[j + 1]])

    return TriangleSet(np.array(posns, dtype=np.float64), np.array(faces, dtype=np.int64), material)
