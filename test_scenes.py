import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock
import numpy as np
import requests
import cli
from materials import Material
from scenes import INPUT_TRIANGLES_URL, load_scene, parse_triangle_sets, read_obj_triangle_set

TRIANGLES = [
    {
        "material": {"ambient": [0.1, 0.1, 0.1], "diffuse": [0.6, 0.4, 0.4],
                     "specular": [0.3, 0.3, 0.3], "n": 11},
        "vertices": [[0.15, 0.6, 0.75], [0.25, 0.9, 0.75], [0.35, 0.6, 0.75]],
        "triangles": [[0, 1, 2]],
    },
    {
        "material": {"ambient": [0.1, 0.1, 0.1], "diffuse": [0.6, 0.6, 0.4],
                     "specular": [0.3, 0.3, 0.3], "n": 17},
        "vertices": [[0.15, 0.15, 0.75], [0.15, 0.35, 0.75], [0.35, 0.35, 0.75], [0.35, 0.15, 0.75]],
        "triangles": [[0, 1, 2], [2, 3, 0]],
    },
]


class TestParseTriangleSets(unittest.TestCase):

    def test_parse(self):
        scene = parse_triangle_sets(TRIANGLES)
        self.assertEqual(len(scene.triangle_sets), 2)
        self.assertEqual(len(scene), 3)
        second = scene.triangle_sets[1]
        self.assertEqual(second.material.n, 17.0)
        np.testing.assert_allclose(second.surfs[1].vs[0], [0.35, 0.35, 0.75])

    def test_missing_material_field(self):
        doc = json.loads(json.dumps(TRIANGLES))
        del doc[1]["material"]["specular"]
        with self.assertRaisesRegex(ValueError, "triangle set 1"):
            parse_triangle_sets(doc)

    def test_missing_set_field(self):
        doc = json.loads(json.dumps(TRIANGLES))
        del doc[0]["vertices"]
        with self.assertRaises(ValueError):
            parse_triangle_sets(doc)

    def test_bad_index(self):
        doc = json.loads(json.dumps(TRIANGLES))
        doc[0]["triangles"] = [[0, 1, 5]]
        with self.assertRaises(ValueError):
            parse_triangle_sets(doc)

    def test_not_a_list(self):
        with self.assertRaises(ValueError):
            parse_triangle_sets({"triangles": []})


class TestLoadScene(unittest.TestCase):

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "triangles.json")
            with open(path, "w") as f:
                json.dump(TRIANGLES, f)
            scene = load_scene(path)
        self.assertEqual(len(scene), 3)

    def test_from_url(self):
        response = mock.Mock()
        response.json.return_value = TRIANGLES
        with mock.patch("scenes.requests.get", return_value=response) as get:
            scene = load_scene()
        get.assert_called_once_with(INPUT_TRIANGLES_URL, timeout=10)
        response.raise_for_status.assert_called_once_with()
        self.assertEqual(len(scene), 3)

    def test_http_error(self):
        response = mock.Mock()
        response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        with mock.patch("scenes.requests.get", return_value=response):
            with self.assertRaises(requests.HTTPError):
                load_scene("https://example.com/missing.json")

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_scene("/nonexistent/triangles.json")


class TestReadObj(unittest.TestCase):

    def test_quad_and_triangle(self):
        obj = io.StringIO(
            "# a quad and a triangle\n"
            "v 0 0 0\n"
            "v 1 0 0\n"
            "v 1 1 0\n"
            "v 0 1 0\n"
            "vt 0 0\n"
            "vn 0 0 1\n"
            "\n"
            "f 1/1/1 2/1/1 3/1/1 4/1/1\n"
            "f -4 -3 -1\n"
        )
        mat = Material(0.1, 0.6, 0.3, 11)
        tset = read_obj_triangle_set(obj, mat)
        self.assertEqual(len(tset), 3)
        np.testing.assert_array_equal(tset.triangles, [[0, 1, 2], [0, 2, 3], [0, 1, 3]])
        self.assertIs(tset.material, mat)

    def test_bad_face_index(self):
        obj = io.StringIO("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 4\n")
        with self.assertRaises(ValueError):
            read_obj_triangle_set(obj, Material(0.1, 0.6, 0.3, 11))


class TestCli(unittest.TestCase):

    def test_render_to_file(self):
        with tempfile.TemporaryDirectory() as d:
            scene_path = os.path.join(d, "triangles.json")
            out_path = os.path.join(d, "out.png")
            with open(scene_path, "w") as f:
                json.dump(TRIANGLES, f)
            with redirect_stdout(io.StringIO()):
                status = cli.main(["--scene", scene_path, "--width", "8", "--height", "8",
                                   "--output", out_path])
            self.assertEqual(status, 0)
            self.assertTrue(os.path.exists(out_path))

    def test_load_failure(self):
        with redirect_stdout(io.StringIO()), mock.patch("sys.stderr", new_callable=io.StringIO) as err:
            status = cli.main(["--scene", "/nonexistent/triangles.json"])
        self.assertEqual(status, 1)
        self.assertIn("unable to load scene", err.getvalue())

    def test_bad_config(self):
        with mock.patch("sys.stderr", new_callable=io.StringIO):
            self.assertEqual(cli.main(["--no-scene", "--width", "0"]), 2)


if __name__ == '__main__':
    unittest.main()
