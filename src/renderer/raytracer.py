# renderer/raytracer.py
import math
from typing import Sequence
import numpy as np
from core.vector import Vector3
from core.utils import reflect, refract, fresnel, offset_origin
from geometry.hittable import Intersect
from geometry.world import HittableList
from lighting.light import Light
from .constants import MAX_DEPTH, SKYBOX_RGB, FOV
from .cpu_kernels import render_kernel
from .framebuffer import Framebuffer
from .tone_mapping import to_hex, pack_image

SKYBOX_COLOR = Vector3(*SKYBOX_RGB)
BLACK = Vector3(0, 0, 0)

BACKENDS = ("numba", "python")

def cast_shadow(intersect: Intersect, light: Light, objects, camera) -> float:
    """
    Shadow factor of one light at a shaded point: 0 when nothing blocks the
    light, otherwise 1 - (d / light_distance)^2 for the first blocker found
    at distance d. Blockers close to the point darken the most.
    """
    light_dir = (light.position - intersect.point).normalize()
    light_distance = (light.position - intersect.point).length()

    shadow_origin = offset_origin(intersect, light_dir)
    for obj in objects:
        rec = obj.ray_intersect(shadow_origin, light_dir, camera.eye)
        if rec.is_intersecting and rec.distance < light_distance:
            ratio = rec.distance / light_distance
            return 1.0 - min(ratio * ratio, 1.0)
    return 0.0

def cast_ray(origin: Vector3, direction: Vector3, objects, lights: Sequence[Light],
             depth: int, camera) -> Vector3:
    """
    Color seen from origin along the unit direction.

    Rays deeper than MAX_DEPTH and rays that hit nothing return the skybox
    color. The result is not clamped: several lights add up.
    """
    if depth > MAX_DEPTH:
        return SKYBOX_COLOR

    intersect = Intersect.empty()
    zbuffer = math.inf
    for obj in objects:
        rec = obj.ray_intersect(origin, direction, camera.eye)
        if rec.is_intersecting and rec.distance < zbuffer:
            zbuffer = rec.distance
            intersect = rec

    if not intersect.is_intersecting:
        return SKYBOX_COLOR

    material = intersect.material
    albedo = material.albedo
    color = material.color_at(intersect.face, intersect.uv)
    normal = material.shading_normal(intersect.normal, intersect.uv)

    kr = fresnel(direction, normal, material.refractive_index)
    reflectivity = kr * albedo[2]
    transparency = (1.0 - kr) * albedo[3]

    # Secondary rays do not depend on the light, so trace them once and
    # reuse the colors in every light's contribution.
    reflect_color = BLACK
    if lights and reflectivity > 0:
        reflect_dir = reflect(direction, normal).normalize()
        reflect_origin = offset_origin(intersect, reflect_dir)
        reflect_color = cast_ray(reflect_origin, reflect_dir, objects, lights, depth + 1, camera)

    refract_color = BLACK
    if lights and transparency > 0:
        refract_dir = refract(direction, normal, material.refractive_index).normalize()
        refract_origin = offset_origin(intersect, refract_dir)
        refract_color = cast_ray(refract_origin, refract_dir, objects, lights, depth + 1, camera)

    local_weight = max(0.0, 1.0 - reflectivity - transparency)

    final_color = BLACK
    for light in lights:
        light_dir = (light.position - intersect.point).normalize()
        view_dir = (origin - intersect.point).normalize()
        reflect_dir = reflect(-light_dir, normal).normalize()

        shadow_intensity = cast_shadow(intersect, light, objects, camera)
        light_intensity = light.intensity * (1.0 - shadow_intensity)

        diffuse_intensity = min(max(normal.dot(light_dir), 0.0), 1.0)
        diffuse = color * albedo[0] * diffuse_intensity * light_intensity

        specular_intensity = max(view_dir.dot(reflect_dir), 0.0) ** material.specular
        specular = light.color * albedo[1] * specular_intensity * light_intensity

        final_color = (final_color
                       + (diffuse + specular) * local_weight
                       + reflect_color * reflectivity
                       + refract_color * transparency)

    return final_color

def render(framebuffer: Framebuffer, objects, camera, lights: Sequence[Light]):
    """Trace one primary ray per pixel, row by row, into the framebuffer."""
    width = framebuffer.width
    height = framebuffer.height
    aspect_ratio = width / height
    perspective_scale = math.tan(FOV * 0.5)

    for y in range(height):
        for x in range(width):
            screen_x = (2.0 * x / width - 1.0) * aspect_ratio * perspective_scale
            screen_y = (1.0 - 2.0 * y / height) * perspective_scale

            ray = camera.get_ray(screen_x, screen_y)
            pixel_color = cast_ray(ray.origin, ray.direction, objects, lights, 0, camera)
            framebuffer.set_pixel(x, y, to_hex(pixel_color))

class Renderer:
    """
    Renders frames of a cube scene into a Framebuffer, either with the
    numba-compiled kernels or with the pure Python shader above.
    """
    def __init__(self, width: int, height: int, backend: str = "numba"):
        if backend not in BACKENDS:
            raise ValueError(f"Unknown backend {backend!r}, expected one of {BACKENDS}")
        self.width = width
        self.height = height
        self.backend = backend
        self.framebuffer = Framebuffer(width, height)
        self.frame_number = 0
        self.scene_data = None
        self.frame_output = np.zeros((height, width, 3), dtype=np.float64)

    def update_scene_data(self, world: HittableList) -> None:
        """
        Flatten the scene into arrays for the compiled kernels.

        Boxes become min/max corner rows plus a material index. Materials
        are deduplicated by identity, so boxes sharing a material share a
        row. Textures are packed one after another into a single RGBA array
        with per-texture offsets and sizes; -1 marks a face without texture.
        """
        print("\n=== Updating Scene Data ===")
        print(f"World contains {len(world.objects)} objects")

        materials = []
        material_index = {}
        textures = []
        texture_index = {}

        def register_texture(texture):
            if texture is None:
                return -1
            key = id(texture)
            if key not in texture_index:
                texture_index[key] = len(textures)
                textures.append(texture)
            return texture_index[key]

        n = len(world.objects)
        box_min = np.zeros((n, 3), dtype=np.float64)
        box_max = np.zeros((n, 3), dtype=np.float64)
        box_material = np.zeros(n, dtype=np.int64)
        for i, obj in enumerate(world.objects):
            box_min[i] = obj.minimum.to_tuple()
            box_max[i] = obj.maximum.to_tuple()
            key = id(obj.material)
            if key not in material_index:
                material_index[key] = len(materials)
                materials.append(obj.material)
            box_material[i] = material_index[key]

        m = len(materials)
        mat_diffuse = np.zeros((m, 3), dtype=np.float64)
        mat_specular = np.zeros(m, dtype=np.float64)
        mat_albedo = np.zeros((m, 4), dtype=np.float64)
        mat_ior = np.zeros(m, dtype=np.float64)
        mat_textures = np.full((m, 6), -1, dtype=np.int64)
        mat_normal_map = np.full(m, -1, dtype=np.int64)
        for j, mat in enumerate(materials):
            mat_diffuse[j] = mat.diffuse.to_tuple()
            mat_specular[j] = mat.specular
            mat_albedo[j] = mat.albedo
            mat_ior[j] = mat.refractive_index
            for face, texture in enumerate(mat.textures):
                mat_textures[j, face] = register_texture(texture)
            mat_normal_map[j] = register_texture(mat.normal_map)

        tex_offsets = np.zeros(len(textures), dtype=np.int64)
        tex_sizes = np.zeros((len(textures), 2), dtype=np.int64)
        chunks = []
        offset = 0
        for k, texture in enumerate(textures):
            data = texture.to_rgba_array()
            tex_offsets[k] = offset
            tex_sizes[k] = (data.shape[1], data.shape[0])
            chunks.append(data.reshape(-1).astype(np.float64))
            offset += data.size
        tex_data = np.concatenate(chunks) if chunks else np.zeros(0, dtype=np.float64)

        self.scene_data = (box_min, box_max, box_material, mat_diffuse, mat_specular,
                           mat_albedo, mat_ior, mat_textures, mat_normal_map,
                           tex_data, tex_offsets, tex_sizes)
        print(f"  {n} boxes, {m} materials, {len(textures)} textures uploaded")

    @staticmethod
    def light_arrays(lights: Sequence[Light]):
        count = len(lights)
        light_pos = np.zeros((count, 3), dtype=np.float64)
        light_color = np.zeros((count, 3), dtype=np.float64)
        light_intensity = np.zeros(count, dtype=np.float64)
        for i, light in enumerate(lights):
            light_pos[i] = light.position.to_tuple()
            light_color[i] = light.color.to_tuple()
            light_intensity[i] = light.intensity
        return light_pos, light_color, light_intensity

    def render_frame(self, camera, world: HittableList, lights: Sequence[Light]) -> Framebuffer:
        """Render one frame with the configured backend and return the framebuffer."""
        self.frame_number += 1
        if self.backend == "python":
            render(self.framebuffer, world.objects, camera, lights)
            return self.framebuffer

        if self.scene_data is None:
            raise RuntimeError("update_scene_data() must be called before rendering with the numba backend")

        aspect_ratio = self.width / self.height
        perspective_scale = math.tan(FOV * 0.5)
        render_kernel(self.frame_output, aspect_ratio, perspective_scale,
                      np.array(camera.eye.to_tuple(), dtype=np.float64),
                      np.array(camera.right.to_tuple(), dtype=np.float64),
                      np.array(camera.true_up.to_tuple(), dtype=np.float64),
                      np.array(camera.forward.to_tuple(), dtype=np.float64),
                      self.scene_data, self.light_arrays(lights))
        self.framebuffer.buffer[:, :] = pack_image(self.frame_output)
        return self.framebuffer
