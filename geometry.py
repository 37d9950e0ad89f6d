import numpy as np
from utils import normalize

EPSILON = 1e-5 # parallel-ray and minimum-distance threshold


class Hit:
    def __init__(self, t, point=None, normal=None, material=None):
        """Create a Hit with the given data.

        Parameters:
          t : float -- the t value of the intersection along the ray
          point : (3,) -- the 3D point where the intersection happens
          normal : (3,) -- the unit normal of the hit triangle, in winding order
          material : (Material) -- the material of the surface
        """
        self.t = t
        self.point = point
        self.normal = normal
        self.material = material

# Value to represent absence of an intersection
no_hit = Hit(np.inf)


class Triangle:

    def __init__(self, vs, material):
        """Create a triangle from the given vertices.

        Parameters:
          vs (3,3) -- an array of 3 3D points that are the vertices (winding order)
          material : Material -- the material shared by the owning triangle set
        """
        self.vs = vs
        self.material = material
        self.edge_1 = self.vs[1] - self.vs[0]
        self.edge_2 = self.vs[2] - self.vs[0]

    def intersect(self, ray, epsilon=EPSILON):
        """Computes the intersection between a ray and this triangle, if it exists.

        Möller-Trumbore: solve for (t, u, v) with
        origin + t * direction = (1 - u - v) * v0 + u * v1 + v * v2.

        Parameters:
          ray : Ray -- the ray to intersect with the triangle
          epsilon : float -- parallel and self-intersection threshold
        Return:
          Hit -- the hit data
        """
        h = np.cross(ray.direction, self.edge_2)
        a = np.dot(self.edge_1, h)

        # ray parallel to the triangle's plane
        if -epsilon < a and a < epsilon:
            return no_hit

        f = 1.0 / a
        s = ray.origin - self.vs[0]
        u = f * np.dot(s, h)

        if u < 0 or u > 1:
            return no_hit

        q = np.cross(s, self.edge_1)
        v = f * np.dot(ray.direction, q)

        if v < 0 or u + v > 1:
            return no_hit

        t = f * np.dot(self.edge_2, q)

        if t <= epsilon:
            return no_hit

        point = ray.origin + t * ray.direction
        normal = normalize(np.cross(self.edge_1, self.edge_2))
        return Hit(t, point, normal, self.material)


def _as_rows(data, dtype, message):
    """Convert data to an (N, 3) array, raising ValueError with message otherwise."""
    try:
        values = np.array(data, dtype=np.float64)
    except (TypeError, ValueError):
        raise ValueError(message)
    if np.issubdtype(dtype, np.integer) and not np.all(values == np.floor(values)):
        raise ValueError(f"{message}; got non-integral index values")
    rows = values.astype(dtype)
    if rows.size == 0:
        return rows.reshape(0, 3)
    if rows.ndim != 2 or rows.shape[1] != 3:
        raise ValueError(message)
    return rows


class TriangleSet:

    def __init__(self, vertices, triangles, material):
        """Create an indexed triangle mesh with one material.

        Parameters:
          vertices : (V,3) -- vertex positions
          triangles : (T,3) -- index triples into vertices
          material : Material -- applied to every triangle of the set
        """
        if material is None:
            raise ValueError("TriangleSet requires a material")
        self.vertices = _as_rows(vertices, np.float64, "vertices must be a sequence of 3D points")
        self.triangles = _as_rows(triangles, np.int64, "triangles must be a sequence of index triples")

        n_verts = len(self.vertices)
        bad = (self.triangles < 0) | (self.triangles >= n_verts)
        if np.any(bad):
            tri = int(np.argwhere(bad)[0][0])
            raise ValueError(
                f"triangle {tri} {self.triangles[tri].tolist()} references a vertex "
                f"outside 0..{n_verts - 1}")

        self.material = material
        self.surfs = [Triangle(self.vertices[i], self.material) for i in self.triangles]

    def __len__(self):
        return len(self.surfs)

    def __iter__(self):
        return iter(self.surfs)
