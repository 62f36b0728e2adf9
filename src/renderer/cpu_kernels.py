# renderer/cpu_kernels.py

import math
import numpy as np
from numba import njit
from core.utils import ORIGIN_BIAS
from core.uv import UV_UPPER
from geometry.cube import FACE_EPSILON
from .constants import MAX_DEPTH, SKYBOX_RGB

SKY_R, SKY_G, SKY_B = SKYBOX_RGB

# Work stack entries: origin (3), direction (3), weight, depth.
# Every entry pushes at most two children, so depth-first traversal never
# holds more than two entries per level.
STACK_SIZE = 2 * (MAX_DEPTH + 3)
STACK_FIELDS = 8

@njit
def normalize3(x, y, z):
    l = math.sqrt(x * x + y * y + z * z)
    if l == 0.0:
        return 0.0, 0.0, 0.0
    return x / l, y / l, z / l

@njit
def cross3(ax, ay, az, bx, by, bz):
    return ay * bz - az * by, az * bx - ax * bz, ax * by - ay * bx

@njit
def reflect3(vx, vy, vz, nx, ny, nz):
    d = vx * nx + vy * ny + vz * nz
    return vx - nx * 2.0 * d, vy - ny * 2.0 * d, vz - nz * 2.0 * d

@njit
def refract3(vx, vy, vz, nx, ny, nz, ior):
    cosi = -max(-1.0, min(1.0, vx * nx + vy * ny + vz * nz))
    if cosi < 0.0:
        cosi = -cosi
        eta = ior
        nx, ny, nz = -nx, -ny, -nz
    else:
        eta = 1.0 / ior

    k = 1.0 - eta * eta * (1.0 - cosi * cosi)
    if k < 0.0:
        return reflect3(vx, vy, vz, nx, ny, nz)
    s = eta * cosi - math.sqrt(k)
    return vx * eta + nx * s, vy * eta + ny * s, vz * eta + nz * s

@njit
def fresnel_kernel(vx, vy, vz, nx, ny, nz, ior):
    if ior <= 0.0:
        return 1.0
    cosi = max(-1.0, min(1.0, vx * nx + vy * ny + vz * nz))
    etai = 1.0
    etat = ior
    if cosi > 0.0:
        etai, etat = etat, etai

    sint = etai / etat * math.sqrt(max(0.0, 1.0 - cosi * cosi))
    if sint >= 1.0:
        return 1.0

    cost = math.sqrt(max(0.0, 1.0 - sint * sint))
    cosi = abs(cosi)
    rs = ((etat * cosi) - (etai * cost)) / ((etat * cosi) + (etai * cost))
    rp = ((etai * cosi) - (etat * cost)) / ((etai * cosi) + (etat * cost))
    return (rs * rs + rp * rp) / 2.0

@njit
def offset3(px, py, pz, nx, ny, nz, dx, dy, dz):
    ox = nx * ORIGIN_BIAS
    oy = ny * ORIGIN_BIAS
    oz = nz * ORIGIN_BIAS
    if dx * nx + dy * ny + dz * nz < 0.0:
        return px - ox, py - oy, pz - oz
    return px + ox, py + oy, pz + oz

@njit
def _slab(o, d, lo, hi, t_min, t_max):
    """Narrow [t_min, t_max] by one axis. Returns (ok, t_min, t_max, entered)."""
    if d == 0.0:
        if o < lo or o > hi:
            return False, t_min, t_max, False
        return True, t_min, t_max, False

    t0 = (lo - o) / d
    t1 = (hi - o) / d
    if t0 > t1:
        t0, t1 = t1, t0
    if t_min > t1 or t0 > t_max:
        return False, t_min, t_max, False

    entered = False
    if t0 > t_min:
        t_min = t0
        entered = True
    if t1 < t_max:
        t_max = t1
    return True, t_min, t_max, entered

@njit
def face_normal(face):
    sign = -1.0 if face % 2 == 0 else 1.0
    axis = face // 2
    if axis == 0:
        return sign, 0.0, 0.0
    if axis == 1:
        return 0.0, sign, 0.0
    return 0.0, 0.0, sign

@njit
def _face_at(px, py, pz, bmin, bmax, entry_axis, dx, dy, dz):
    if abs(px - bmin[0]) < FACE_EPSILON:
        return 0
    if abs(px - bmax[0]) < FACE_EPSILON:
        return 1
    if abs(py - bmin[1]) < FACE_EPSILON:
        return 2
    if abs(py - bmax[1]) < FACE_EPSILON:
        return 3
    if abs(pz - bmin[2]) < FACE_EPSILON:
        return 4
    if abs(pz - bmax[2]) < FACE_EPSILON:
        return 5

    if entry_axis == 0:
        return 0 if dx > 0.0 else 1
    if entry_axis == 1:
        return 2 if dy > 0.0 else 3
    return 4 if dz > 0.0 else 5

@njit
def _face_uv(px, py, pz, bmin, bmax, face):
    size_x = bmax[0] - bmin[0]
    size_y = bmax[1] - bmin[1]
    size_z = bmax[2] - bmin[2]
    if face == 0:
        return (pz - bmin[2]) / size_z, (bmax[1] - py) / size_y
    if face == 1:
        return (bmax[2] - pz) / size_z, (bmax[1] - py) / size_y
    if face == 2:
        return (px - bmin[0]) / size_x, (bmax[2] - pz) / size_z
    if face == 3:
        return (px - bmin[0]) / size_x, (pz - bmin[2]) / size_z
    if face == 4:
        return (bmax[0] - px) / size_x, (bmax[1] - py) / size_y
    return (px - bmin[0]) / size_x, (bmax[1] - py) / size_y

@njit
def box_intersect(ox, oy, oz, dx, dy, dz, bmin, bmax, vx, vy, vz):
    """
    Slab test against one box with back-face culling against the viewer
    (vx, vy, vz). Returns (distance, face, u, v); face is -1 on a miss.
    """
    t_min = -np.inf
    t_max = np.inf
    entry_axis = -1

    ok, t_min, t_max, entered = _slab(ox, dx, bmin[0], bmax[0], t_min, t_max)
    if not ok:
        return -1.0, -1, 0.0, 0.0
    if entered:
        entry_axis = 0
    ok, t_min, t_max, entered = _slab(oy, dy, bmin[1], bmax[1], t_min, t_max)
    if not ok:
        return -1.0, -1, 0.0, 0.0
    if entered:
        entry_axis = 1
    ok, t_min, t_max, entered = _slab(oz, dz, bmin[2], bmax[2], t_min, t_max)
    if not ok:
        return -1.0, -1, 0.0, 0.0
    if entered:
        entry_axis = 2

    if t_min < 0.0:
        return -1.0, -1, 0.0, 0.0

    px = ox + dx * t_min
    py = oy + dy * t_min
    pz = oz + dz * t_min
    face = _face_at(px, py, pz, bmin, bmax, entry_axis, dx, dy, dz)
    nx, ny, nz = face_normal(face)

    wx, wy, wz = normalize3(vx - px, vy - py, vz - pz)
    if nx * wx + ny * wy + nz * wz <= 0.0:
        return -1.0, -1, 0.0, 0.0

    u, v = _face_uv(px, py, pz, bmin, bmax, face)
    return t_min, face, u, v

@njit
def nearest_hit(ox, oy, oz, dx, dy, dz, box_min, box_max, vx, vy, vz):
    """Returns (box index, distance, face, u, v); the index is -1 on a miss."""
    best = -1
    best_t = np.inf
    best_face = -1
    best_u = 0.0
    best_v = 0.0
    for i in range(box_min.shape[0]):
        t, face, u, v = box_intersect(ox, oy, oz, dx, dy, dz, box_min[i], box_max[i], vx, vy, vz)
        if face >= 0 and t < best_t:
            best = i
            best_t = t
            best_face = face
            best_u = u
            best_v = v
    return best, best_t, best_face, best_u, best_v

@njit
def sample_texture(tex, u, v, tex_data, tex_offsets, tex_sizes):
    """Nearest texel of a packed RGBA texture as raw (r, g, b) in [0, 255]."""
    u = min(max(u, 0.0), UV_UPPER)
    v = min(max(v, 0.0), UV_UPPER)
    width = tex_sizes[tex, 0]
    height = tex_sizes[tex, 1]
    x = int(u * width)
    y = int(v * height)
    base = tex_offsets[tex] + (y * width + x) * 4
    return tex_data[base], tex_data[base + 1], tex_data[base + 2]

@njit
def shadow_kernel(px, py, pz, nx, ny, nz, lpx, lpy, lpz, box_min, box_max, vx, vy, vz):
    """Soft shadow factor in [0, 1] for one light; 0 means fully lit."""
    tx = lpx - px
    ty = lpy - py
    tz = lpz - pz
    ldx, ldy, ldz = normalize3(tx, ty, tz)
    light_distance = math.sqrt(tx * tx + ty * ty + tz * tz)

    sx, sy, sz = offset3(px, py, pz, nx, ny, nz, ldx, ldy, ldz)
    for i in range(box_min.shape[0]):
        t, face, _, _ = box_intersect(sx, sy, sz, ldx, ldy, ldz, box_min[i], box_max[i], vx, vy, vz)
        if face >= 0 and t < light_distance:
            ratio = t / light_distance
            return 1.0 - min(ratio * ratio, 1.0)
    return 0.0

@njit
def trace_kernel(ox, oy, oz, dx, dy, dz, ex, ey, ez, scene, lights):
    """
    Color seen along one primary ray.

    Recursion is unrolled into a work stack. Shading is linear in the
    colors returned by secondary rays, so each entry carries the factor its
    color is scaled by on the way back up: a hit adds weight * local color
    and pushes its reflected and refracted rays with weight * n_lights *
    reflectivity and weight * n_lights * transparency.
    """
    (box_min, box_max, box_material, mat_diffuse, mat_specular, mat_albedo, mat_ior,
     mat_textures, mat_normal_map, tex_data, tex_offsets, tex_sizes) = scene
    light_pos, light_color, light_intensity = lights
    n_lights = light_pos.shape[0]

    stack = np.empty((STACK_SIZE, STACK_FIELDS))
    stack[0, 0] = ox
    stack[0, 1] = oy
    stack[0, 2] = oz
    stack[0, 3] = dx
    stack[0, 4] = dy
    stack[0, 5] = dz
    stack[0, 6] = 1.0
    stack[0, 7] = 0.0
    top = 1

    r = 0.0
    g = 0.0
    b = 0.0
    while top > 0:
        top -= 1
        rox = stack[top, 0]
        roy = stack[top, 1]
        roz = stack[top, 2]
        rdx = stack[top, 3]
        rdy = stack[top, 4]
        rdz = stack[top, 5]
        weight = stack[top, 6]
        depth = int(stack[top, 7])

        if depth > MAX_DEPTH:
            r += weight * SKY_R
            g += weight * SKY_G
            b += weight * SKY_B
            continue

        idx, t, face, u, v = nearest_hit(rox, roy, roz, rdx, rdy, rdz, box_min, box_max, ex, ey, ez)
        if idx < 0:
            r += weight * SKY_R
            g += weight * SKY_G
            b += weight * SKY_B
            continue

        px = rox + rdx * t
        py = roy + rdy * t
        pz = roz + rdz * t
        gnx, gny, gnz = face_normal(face)
        mat = box_material[idx]

        # Surface color
        tex = mat_textures[mat, face]
        if tex < 0:
            cr = mat_diffuse[mat, 0]
            cg = mat_diffuse[mat, 1]
            cb = mat_diffuse[mat, 2]
        else:
            tr, tg, tb = sample_texture(tex, u, v, tex_data, tex_offsets, tex_sizes)
            cr = tr / 255.0
            cg = tg / 255.0
            cb = tb / 255.0

        # Shading normal
        nx, ny, nz = gnx, gny, gnz
        nmap = mat_normal_map[mat]
        if nmap >= 0:
            tr, tg, tb = sample_texture(nmap, u, v, tex_data, tex_offsets, tex_sizes)
            mx = tr / 255.0 * 2.0 - 1.0
            my = tg / 255.0 * 2.0 - 1.0
            mz = tb / 255.0 * 2.0 - 1.0
            tx, ty, tz = cross3(gnx, gny, gnz, 0.0, 1.0, 0.0)
            if math.sqrt(tx * tx + ty * ty + tz * tz) < 1e-6:
                tx, ty, tz = cross3(gnx, gny, gnz, 1.0, 0.0, 0.0)
            tx, ty, tz = normalize3(tx, ty, tz)
            bx, by, bz = cross3(gnx, gny, gnz, tx, ty, tz)
            qx, qy, qz = normalize3(tx * mx + bx * my + gnx * mz,
                                    ty * mx + by * my + gny * mz,
                                    tz * mx + bz * my + gnz * mz)
            if qx != 0.0 or qy != 0.0 or qz != 0.0:
                nx, ny, nz = qx, qy, qz

        ior = mat_ior[mat]
        kr = fresnel_kernel(rdx, rdy, rdz, nx, ny, nz, ior)
        reflectivity = kr * mat_albedo[mat, 2]
        transparency = (1.0 - kr) * mat_albedo[mat, 3]
        local_weight = max(0.0, 1.0 - reflectivity - transparency)

        a0 = mat_albedo[mat, 0]
        a1 = mat_albedo[mat, 1]
        spec = mat_specular[mat]
        for l in range(n_lights):
            ldx, ldy, ldz = normalize3(light_pos[l, 0] - px, light_pos[l, 1] - py, light_pos[l, 2] - pz)
            vdx, vdy, vdz = normalize3(rox - px, roy - py, roz - pz)
            hx, hy, hz = reflect3(-ldx, -ldy, -ldz, nx, ny, nz)
            hx, hy, hz = normalize3(hx, hy, hz)

            shadow = shadow_kernel(px, py, pz, gnx, gny, gnz,
                                   light_pos[l, 0], light_pos[l, 1], light_pos[l, 2],
                                   box_min, box_max, ex, ey, ez)
            li = light_intensity[l] * (1.0 - shadow)

            di = min(max(nx * ldx + ny * ldy + nz * ldz, 0.0), 1.0)
            si = max(vdx * hx + vdy * hy + vdz * hz, 0.0) ** spec
            dfac = a0 * di * li
            sfac = a1 * si * li
            r += weight * (cr * dfac + light_color[l, 0] * sfac) * local_weight
            g += weight * (cg * dfac + light_color[l, 1] * sfac) * local_weight
            b += weight * (cb * dfac + light_color[l, 2] * sfac) * local_weight

        if n_lights > 0 and reflectivity > 0.0:
            qx, qy, qz = reflect3(rdx, rdy, rdz, nx, ny, nz)
            qx, qy, qz = normalize3(qx, qy, qz)
            sx, sy, sz = offset3(px, py, pz, gnx, gny, gnz, qx, qy, qz)
            stack[top, 0] = sx
            stack[top, 1] = sy
            stack[top, 2] = sz
            stack[top, 3] = qx
            stack[top, 4] = qy
            stack[top, 5] = qz
            stack[top, 6] = weight * n_lights * reflectivity
            stack[top, 7] = depth + 1
            top += 1

        if n_lights > 0 and transparency > 0.0:
            qx, qy, qz = refract3(rdx, rdy, rdz, nx, ny, nz, ior)
            qx, qy, qz = normalize3(qx, qy, qz)
            sx, sy, sz = offset3(px, py, pz, gnx, gny, gnz, qx, qy, qz)
            stack[top, 0] = sx
            stack[top, 1] = sy
            stack[top, 2] = sz
            stack[top, 3] = qx
            stack[top, 4] = qy
            stack[top, 5] = qz
            stack[top, 6] = weight * n_lights * transparency
            stack[top, 7] = depth + 1
            top += 1

    return r, g, b

@njit
def render_kernel(image, aspect_ratio, perspective_scale,
                  eye, right, up, forward, scene, lights):
    """
    Row-major frame loop writing linear colors into image[y, x].
    eye, right, up and forward are the camera position and basis.
    """
    height = image.shape[0]
    width = image.shape[1]
    for y in range(height):
        for x in range(width):
            screen_x = (2.0 * x / width - 1.0) * aspect_ratio * perspective_scale
            screen_y = (1.0 - 2.0 * y / height) * perspective_scale

            lx, ly, lz = normalize3(screen_x, screen_y, -1.0)
            wx, wy, wz = normalize3(right[0] * lx + up[0] * ly - forward[0] * lz,
                                    right[1] * lx + up[1] * ly - forward[1] * lz,
                                    right[2] * lx + up[2] * ly - forward[2] * lz)

            r, g, b = trace_kernel(eye[0], eye[1], eye[2], wx, wy, wz,
                                   eye[0], eye[1], eye[2], scene, lights)
            image[y, x, 0] = r
            image[y, x, 1] = g
            image[y, x, 2] = b
