import numpy as np

def vec(list):
    """Handy shorthand to make a double-precision float array."""
    return np.array(list, dtype=np.float64)

def dot(a, b):
    return float(np.dot(a, b))

def cross(a, b):
    """Right-handed cross product of two 3D vectors."""
    return np.cross(a, b)

def add(a, b):
    return a + b

def subtract(a, b):
    return a - b

def scale(c, v):
    return c * v

def normalize(v):
    """Return a unit vector in the direction of the vector v.

    v must have non-zero length; ray, light and view directions are always
    built from distinct points.
    """
    length = np.linalg.norm(v)
    assert length > 0, "cannot normalize a zero-length vector"
    return v / length

def clamp(x, lo=0.0, hi=1.0):
    return np.clip(x, lo, hi)
