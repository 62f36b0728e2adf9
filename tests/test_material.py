import numpy as np
import pytest
from PIL import Image

from core.uv import UV
from core.vector import Vector3
from materials.material import Material
from materials.presets import MaterialPresets, ColorPresets
from materials.texture_loader import load_texture, load_face_textures, load_normal_map
from materials.textures import ImageTexture, CheckerTexture


@pytest.fixture
def quad_texture():
    """2x2 texture: red, green on the top row; blue, white on the bottom row."""
    data = np.array([
        [[255, 0, 0, 255], [0, 255, 0, 255]],
        [[0, 0, 255, 255], [255, 255, 255, 255]],
    ], dtype=np.uint8)
    return ImageTexture(data)


def flat_map(r, g, b):
    return ImageTexture(np.full((2, 2, 3), (r, g, b), dtype=np.uint8))


def save_png(path, color, size=(4, 2)):
    Image.new("RGB", size, color).save(path)
    return str(path)


class TestColorAt:
    def test_untextured_face_uses_diffuse(self, matte):
        assert matte.color_at(3, UV(0.5, 0.5)) is matte.diffuse

    def test_texture_lookup(self, quad_texture):
        mat = Material(Vector3(0, 0, 0), 10.0, [1, 0, 0, 0], textures=[quad_texture] * 6)
        assert mat.color_at(0, UV(0.75, 0.25)).to_tuple() == (0.0, 1.0, 0.0)
        assert mat.color_at(0, UV(0.25, 0.75)).to_tuple() == (0.0, 0.0, 1.0)

    def test_uv_of_one_is_clamped(self, quad_texture):
        mat = Material(Vector3(0, 0, 0), 10.0, [1, 0, 0, 0], textures=[quad_texture] * 6)
        assert mat.color_at(2, UV(1.0, 1.0)).to_tuple() == (1.0, 1.0, 1.0)

    def test_face_without_texture_falls_back(self, quad_texture):
        diffuse = Vector3(0.1, 0.2, 0.3)
        mat = Material(diffuse, 10.0, [1, 0, 0, 0],
                       textures=[quad_texture, None, None, None, None, None])
        assert mat.color_at(1, UV(0.1, 0.1)) is diffuse
        assert mat.color_at(0, UV(0.1, 0.1)).to_tuple() == (1.0, 0.0, 0.0)

    def test_lookup_does_not_modify_material(self, quad_texture):
        mat = Material(Vector3(0.5, 0.5, 0.5), 10.0, [1, 0, 0, 0], textures=[quad_texture] * 6)
        mat.color_at(0, UV(0.75, 0.25))
        assert mat.diffuse.to_tuple() == (0.5, 0.5, 0.5)


class TestShadingNormal:
    def test_without_map_returns_geometric_normal(self, matte):
        n = Vector3(0, 0, 1)
        assert matte.shading_normal(n, UV(0.5, 0.5)) is n

    def test_flat_map_keeps_normal(self):
        mat = Material(Vector3(1, 1, 1), 10.0, [1, 0, 0, 0], normal_map=flat_map(128, 128, 255))
        n = mat.shading_normal(Vector3(0, 0, 1), UV(0.5, 0.5))
        assert n.to_tuple() == pytest.approx((0.0, 0.0, 1.0), abs=1e-2)
        assert n.length() == pytest.approx(1.0)

    def test_map_tilts_along_tangent(self):
        mat = Material(Vector3(1, 1, 1), 10.0, [1, 0, 0, 0], normal_map=flat_map(255, 128, 128))
        n = mat.shading_normal(Vector3(0, 0, 1), UV(0.5, 0.5))
        # Tangent of the +z face is cross(+z, up) = -x.
        assert n.x == pytest.approx(-1.0, abs=1e-2)

    @pytest.mark.parametrize("normal", [Vector3(0, 1, 0), Vector3(0, -1, 0)])
    def test_normal_parallel_to_up(self, normal):
        mat = Material(Vector3(1, 1, 1), 10.0, [1, 0, 0, 0], normal_map=flat_map(200, 60, 220))
        n = mat.shading_normal(normal, UV(0.5, 0.5))
        assert all(c == c for c in n)
        assert n.length() == pytest.approx(1.0)
        assert n.dot(normal) > 0


class TestMaterialValidation:
    def test_albedo_needs_four_weights(self):
        with pytest.raises(ValueError):
            Material(Vector3(1, 1, 1), 10.0, [1, 0, 0])

    def test_six_textures_required(self, quad_texture):
        with pytest.raises(ValueError):
            Material(Vector3(1, 1, 1), 10.0, [1, 0, 0, 0], textures=[quad_texture] * 5)

    def test_black(self):
        black = Material.black()
        assert black.diffuse.to_tuple() == (0, 0, 0)
        assert black.albedo == (0.0, 0.0, 0.0, 0.0)


class TestTextures:
    def test_rgb_data_gets_opaque_alpha(self):
        tex = ImageTexture(np.zeros((3, 5, 3), dtype=np.uint8))
        assert (tex.width, tex.height) == (5, 3)
        assert tex.sample(0.0, 0.0) == (0, 0, 0, 255)

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            ImageTexture(np.zeros((4, 4), dtype=np.uint8))

    def test_checker(self):
        tex = CheckerTexture(Vector3(1, 1, 1), Vector3(0, 0, 0), squares=2)
        assert tex.sample(0.1, 0.1) == (255, 255, 255, 255)
        assert tex.sample(0.6, 0.1) == (0, 0, 0, 255)
        assert tex.sample(0.6, 0.6) == (255, 255, 255, 255)
        data = tex.to_rgba_array()
        assert data.shape == (2, 2, 4)
        assert tuple(data[0, 1]) == (0, 0, 0, 255)


class TestTextureLoader:
    def test_load_texture(self, tmp_path):
        tex = load_texture(save_png(tmp_path / "red.png", (255, 0, 0)))
        assert (tex.width, tex.height) == (4, 2)
        assert tex.sample(0.5, 0.5) == (255, 0, 0, 255)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_texture(str(tmp_path / "nope.png"))

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_text("not an image")
        with pytest.raises(ValueError):
            load_texture(str(path))

    def test_single_path_shared_by_all_faces(self, tmp_path):
        textures = load_face_textures([save_png(tmp_path / "a.png", (0, 255, 0))])
        assert len(textures) == 6
        assert all(t is textures[0] for t in textures)

    def test_missing_face_falls_back(self, tmp_path, capsys):
        good = save_png(tmp_path / "a.png", (0, 255, 0))
        missing = str(tmp_path / "missing.png")
        textures = load_face_textures([good, good, missing, good, good, None])
        assert textures[2] is None
        assert textures[5] is None
        assert textures[0] is not None
        assert "Warning" in capsys.readouterr().out

    def test_wrong_path_count(self, tmp_path):
        with pytest.raises(ValueError):
            load_face_textures(["a.png", "b.png"])

    def test_missing_normal_map(self, tmp_path):
        assert load_normal_map(None) is None
        assert load_normal_map(str(tmp_path / "missing.png")) is None


class TestPresets:
    def test_glass(self):
        glass = MaterialPresets.glass()
        assert glass.refractive_index == 1.5
        assert glass.albedo[3] > 0

    def test_mirror_is_opaque(self):
        assert MaterialPresets.mirror().refractive_index == 0.0

    def test_untextured_presets(self):
        grass = MaterialPresets.grass()
        assert grass.textures == (None,) * 6
        assert grass.diffuse is ColorPresets.GRASS

    def test_from_rgb(self):
        assert ColorPresets.from_rgb(255, 0, 51).to_tuple() == pytest.approx((1.0, 0.0, 0.2))
