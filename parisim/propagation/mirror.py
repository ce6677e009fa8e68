"""Mirror engine: reflect surfaces and devices across planar surfaces.

Angles follow the scenario convention: antenna rotation is
[azimuth, elevation] in degrees, [0, 0] pointing along +x, azimuth measured
in the xy-plane towards +y, elevation towards +z.
"""
import dataclasses
import warnings
from typing import Sequence

import numpy as np

from ..errors import AccuracyWarning, GeometryError
from ..pools.records import Pool
from .surfaces import Surface, SurfaceRegistry

SYMMETRY_WARNING = (
    "Mirroring on surfaces only works for symmetrical directivity patterns "
    "(the third antenna rotation axis is not mirrored)."
)


def rotation_to_unit_vector(rotation_deg: Sequence[float]) -> np.ndarray:
    """Unit vector for an [azimuth, elevation] rotation in degrees."""
    azimuth, elevation = np.radians(np.asarray(rotation_deg, dtype=np.float64)[:2])
    return np.array([
        np.cos(elevation) * np.cos(azimuth),
        np.cos(elevation) * np.sin(azimuth),
        np.sin(elevation),
    ])


def unit_vector_to_rotation(vector: Sequence[float]) -> np.ndarray:
    """[azimuth, elevation] in degrees of a direction vector (length ignored)."""
    x, y, z = np.asarray(vector, dtype=np.float64)
    azimuth = np.arctan2(y, x)
    elevation = np.arctan2(z, np.hypot(x, y))
    return np.degrees(np.array([azimuth, elevation]))


def mirror_point(point: Sequence[float], surface: Surface) -> np.ndarray:
    """Reflect a point across the plane of a surface."""
    mirrored = np.array(point, dtype=np.float64)
    mirrored[surface.dimension] = 2 * surface.shift - mirrored[surface.dimension]
    return mirrored


def mirror_surface(registry: SurfaceRegistry, surface_name: str, mirror_name: str) -> Surface:
    """
    Mirror one registered surface across another.

    Surfaces in the same plane orientation get the reflected shift
    ``2 * mirror.shift - surface.shift``. Otherwise the surface keeps its
    plane and its bounds along the mirror's axis are reflected, reordered and
    united with the original bounds, so the mirrored surface always includes
    the original one.

    Args:
        registry: Registry holding both surfaces (not modified)
        surface_name: Surface to mirror
        mirror_name: Surface acting as the mirror

    Returns:
        New surface named "<surface>@<mirror>" with ``source`` and ``mirror`` set

    Raises:
        KeyError: if a name is not registered
        GeometryError: if the surface is infinite and not parallel to the mirror
    """
    surface = registry[surface_name]
    mirror = registry[mirror_name]

    if surface.dimension != mirror.dimension and not surface.is_bounded:
        raise GeometryError(
            f"Cannot mirror an unbounded surface ('{surface_name}') across a "
            f"surface in a different plane ('{mirror_name}')."
        )

    shift = surface.shift
    bounds = None if surface.bounds is None else surface.bounds.copy()
    if surface.dimension == mirror.dimension:
        shift = 2 * mirror.shift - surface.shift
    else:
        dim = mirror.dimension
        reflected = np.sort(2 * mirror.shift - surface.bounds[:, dim])
        bounds[0, dim] = min(reflected[0], surface.bounds[0, dim])
        bounds[1, dim] = max(reflected[1], surface.bounds[1, dim])

    return dataclasses.replace(
        surface,
        name=f"{surface_name}@{mirror_name}",
        shift=shift,
        bounds=bounds,
        mirror=mirror_name,
        source=surface_name,
    )


def mirror_device(pool: Pool, index: int, surface: Surface, warn: bool = True) -> Pool:
    """
    Mirror the position and antenna orientation of one device.

    The device position and the tip of its antenna unit vector are both
    reflected across the surface plane; the new orientation is recovered from
    the reflected direction. Only azimuth and elevation are mirrored, so the
    result is exact only for antenna patterns symmetric about the third
    rotation axis. An AccuracyWarning is issued unless ``warn`` is False.

    Args:
        pool: Pool holding the device (not modified); needs ``pos`` and ``ant_rot``
        index: Device index
        surface: Mirror surface

    Returns:
        New pool with the device's ``pos`` and ``ant_rot`` replaced
    """
    if warn:
        warnings.warn(SYMMETRY_WARNING, AccuracyWarning, stacklevel=2)

    device = pool.device(index)
    position = np.asarray(device["pos"], dtype=np.float64)
    tip = position + rotation_to_unit_vector(device["ant_rot"])

    new_position = mirror_point(position, surface)
    new_tip = mirror_point(tip, surface)
    new_rotation = unit_vector_to_rotation(new_tip - new_position)

    return pool.with_values(index, pos=new_position, ant_rot=new_rotation)
