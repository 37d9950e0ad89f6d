from utils import *
from ray import *
from cli import render

red = Material(ambient=vec([0.1, 0.05, 0.05]), diffuse=vec([0.6, 0.2, 0.2]), specular=vec([0.3, 0.3, 0.3]), n=11)
blue = Material(ambient=0.1, diffuse=vec([0.2, 0.2, 0.7]), specular=0.4, n=40)

# A red triangle in front of a larger blue one, both facing the eye
scene = Scene([
    TriangleSet([[0.15, 0.15, 0.75], [0.15, 0.85, 0.75], [0.85, 0.15, 0.75]], [[0, 1, 2]], red),
    TriangleSet([[0.0, 0.0, 1.0], [0.0, 1.0, 1.0], [1.0, 1.0, 1.0], [1.0, 0.0, 1.0]],
                [[0, 1, 2], [0, 2, 3]], blue),
])

config = RenderConfig(width=256, height=256)

render(scene, config, output_path="two_triangles.png")
