import numpy as np


def _reflectance(name, value):
    if value is None:
        raise ValueError(f"Material is missing its {name} reflectance")
    k = np.array(value, dtype=np.float64)
    if k.shape not in ((), (3,)):
        raise ValueError(f"Material {name} must be a scalar or a 3-vector, got shape {k.shape}")
    return k


class Material:

    def __init__(self, ambient, diffuse, specular, n):
        """
        Create a new Blinn-Phong material.

        Parameters:
          ambient : (3,) or float -- Ambient reflectance
          diffuse : (3,) or float -- Diffuse (Lambertian) reflectance
          specular : (3,) or float -- Specular reflectance
          n : float -- Specular exponent (shininess), non-negative
        """
        self.ambient = _reflectance('ambient', ambient)
        self.diffuse = _reflectance('diffuse', diffuse)
        self.specular = _reflectance('specular', specular)
        if n is None:
            raise ValueError("Material is missing its shininess exponent n")
        self.n = float(n)
        if self.n < 0:
            raise ValueError(f"Material shininess must be non-negative, got {self.n}")

    @classmethod
    def from_dict(cls, data):
        """Build a material from a {ambient, diffuse, specular, n} mapping."""
        missing = [k for k in ('ambient', 'diffuse', 'specular', 'n') if k not in data]
        if missing:
            raise ValueError(f"Material is missing fields: {', '.join(missing)}")
        return cls(data['ambient'], data['diffuse'], data['specular'], data['n'])

    def __repr__(self):
        return (f"Material(ambient={self.ambient.tolist()}, diffuse={self.diffuse.tolist()}, "
                f"specular={self.specular.tolist()}, n={self.n})")
