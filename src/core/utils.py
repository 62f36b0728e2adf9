# core/utils.py
import math
from core.vector import Vector3

# Distance a secondary ray origin is pushed off the surface it leaves.
ORIGIN_BIAS = 1e-4

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)

def refract(v: Vector3, n: Vector3, ior: float) -> Vector3:
    """
    Refracts the unit vector v through a surface with outward normal n
    separating air from a medium of index ior.

    When the ray leaves the medium (v points along n) the normal is flipped
    and the index ratio inverted. Total internal reflection returns the
    reflected direction instead.
    """
    cosi = -max(-1.0, min(1.0, v.dot(n)))
    if cosi < 0:
        # Leaving the medium
        cosi = -cosi
        eta = ior
        n = -n
    else:
        eta = 1.0 / ior

    k = 1.0 - eta * eta * (1.0 - cosi * cosi)
    if k < 0:
        return reflect(v, n)
    return v * eta + n * (eta * cosi - math.sqrt(k))

def fresnel(v: Vector3, n: Vector3, ior: float) -> float:
    """
    Fraction of light reflected at the surface for the unit incident
    direction v, from the exact dielectric Fresnel equations.

    Returns 1.0 on total internal reflection and for opaque materials
    (ior <= 0).
    """
    if ior <= 0:
        return 1.0

    cosi = max(-1.0, min(1.0, v.dot(n)))
    etai, etat = 1.0, ior
    if cosi > 0:
        etai, etat = etat, etai

    sint = etai / etat * math.sqrt(max(0.0, 1.0 - cosi * cosi))
    if sint >= 1.0:
        return 1.0

    cost = math.sqrt(max(0.0, 1.0 - sint * sint))
    cosi = abs(cosi)
    rs = ((etat * cosi) - (etai * cost)) / ((etat * cosi) + (etai * cost))
    rp = ((etai * cosi) - (etat * cost)) / ((etai * cosi) + (etat * cost))
    return (rs * rs + rp * rp) / 2.0

def offset_origin(intersect, direction: Vector3) -> Vector3:
    """
    Moves the hit point off the surface along the normal, to the side the
    new ray travels into, so it does not hit the surface it starts on.
    """
    offset = intersect.normal * ORIGIN_BIAS
    if direction.dot(intersect.normal) < 0:
        return intersect.point - offset
    return intersect.point + offset
