"""Planar reflective surfaces and the named surface registry.

A surface is the plane ``x[dimension] == shift``, either infinite or bounded
by a [min, max] interval on each of the two other axes. Axes are numbered
0 (x), 1 (y), 2 (z).
"""
import copy
import numbers
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

import numpy as np

from ..errors import GeometryError

AXIS_NAMES = ("x", "y", "z")


@dataclass
class Surface:
    """Planar surface perpendicular to one coordinate axis.

    Attributes:
        name: Registry name
        dimension: Axis the plane is perpendicular to (0, 1 or 2)
        shift: Offset of the plane along that axis (m)
        bounds: (2, 3) array of [min; max] per axis, None for an infinite plane.
            The column of ``dimension`` is held at [shift, shift].
        opaque: Rays must not cross this surface to reach an image behind it
        mirror: Name of the surface this one was mirrored across (mirrored surfaces only)
        source: Name of the original surface (mirrored surfaces only)
    """
    name: str
    dimension: int
    shift: float
    bounds: Optional[np.ndarray] = None
    opaque: bool = False
    mirror: Optional[str] = None
    source: Optional[str] = None

    def __post_init__(self):
        if (isinstance(self.dimension, bool)
                or not isinstance(self.dimension, numbers.Integral)
                or self.dimension not in (0, 1, 2)):
            raise GeometryError(f"Surface '{self.name}': dimension must be 0, 1 or 2")
        self.dimension = int(self.dimension)
        self.shift = float(self.shift)
        if self.bounds is not None:
            bounds = np.array(self.bounds, dtype=np.float64)
            if bounds.shape != (2, 3):
                raise GeometryError(
                    f"Surface '{self.name}': bounds must have shape (2, 3), got {bounds.shape}"
                )
            bounds[:, self.dimension] = self.shift
            if np.any(bounds[0] > bounds[1]):
                raise GeometryError(f"Surface '{self.name}': bounds must satisfy min <= max")
            self.bounds = bounds

    @property
    def is_bounded(self) -> bool:
        return self.bounds is not None

    @property
    def is_mirrored(self) -> bool:
        return self.mirror is not None

    @property
    def normal(self) -> np.ndarray:
        n = np.zeros(3)
        n[self.dimension] = 1.0
        return n

    def contains(self, point: Sequence[float], tol: float = 1e-9) -> bool:
        """Whether a point on the plane lies within the surface bounds."""
        point = np.asarray(point, dtype=np.float64)
        if abs(point[self.dimension] - self.shift) > tol:
            return False
        if self.bounds is None:
            return True
        others = [d for d in range(3) if d != self.dimension]
        return bool(np.all(
            (point[others] >= self.bounds[0, others] - tol)
            & (point[others] <= self.bounds[1, others] + tol)
        ))

    def intersect(self, start: Sequence[float], end: Sequence[float]) -> Optional[np.ndarray]:
        """
        Intersection of the segment start->end with the (bounded) surface.

        Returns:
            Intersection point, or None if the segment does not cross the
            surface. Segments lying in the plane do not cross it.
        """
        start = np.asarray(start, dtype=np.float64)
        end = np.asarray(end, dtype=np.float64)
        s0 = start[self.dimension] - self.shift
        s1 = end[self.dimension] - self.shift
        if s0 * s1 > 0 or s0 == s1:
            return None
        t = s0 / (s0 - s1)
        point = start + t * (end - start)
        point[self.dimension] = self.shift
        if not self.contains(point):
            return None
        return point

    def crossed_by(self, start: Sequence[float], end: Sequence[float]) -> bool:
        return self.intersect(start, end) is not None

    def describe(self) -> str:
        text = f"{self.name}: {AXIS_NAMES[self.dimension]} = {self.shift:g} m"
        if self.bounds is not None:
            spans = [
                f"{AXIS_NAMES[d]} in [{self.bounds[0, d]:g}, {self.bounds[1, d]:g}]"
                for d in range(3) if d != self.dimension
            ]
            text += " (" + ", ".join(spans) + ")"
        else:
            text += " (infinite)"
        if self.is_mirrored:
            text += f", {self.source} mirrored at {self.mirror}"
        return text


@dataclass
class SurfaceRegistry:
    """Ordered collection of named surfaces.

    Insertion order is the traversal order used when generating virtual
    transmitters.
    """
    surfaces: Dict[str, Surface] = field(default_factory=dict)

    @classmethod
    def from_surfaces(cls, surfaces: Sequence[Surface]) -> "SurfaceRegistry":
        registry = cls()
        for surface in surfaces:
            registry.add(surface)
        return registry

    def add(self, surface: Surface) -> None:
        if surface.name in self.surfaces:
            raise KeyError(f"Surface '{surface.name}' is already registered")
        self.surfaces[surface.name] = surface

    def __getitem__(self, name: str) -> Surface:
        try:
            return self.surfaces[name]
        except KeyError:
            raise KeyError(f"Unknown surface '{name}'") from None

    def __contains__(self, name: str) -> bool:
        return name in self.surfaces

    def __iter__(self) -> Iterator[Surface]:
        return iter(self.surfaces.values())

    def __len__(self) -> int:
        return len(self.surfaces)

    def names(self) -> List[str]:
        return list(self.surfaces)

    def originals(self) -> List[Surface]:
        """Surfaces that are not themselves mirror images."""
        return [s for s in self.surfaces.values() if not s.is_mirrored]

    def copy(self) -> "SurfaceRegistry":
        return copy.deepcopy(self)


def room_surfaces(room_dim: Sequence[Sequence[float]], opaque: bool = False) -> SurfaceRegistry:
    """
    Six bounded walls of a rectangular room.

    Args:
        room_dim: [[xmin, xmax], [ymin, ymax], [zmin, zmax]] in meters
        opaque: Mark all walls opaque

    Returns:
        Registry with walls named x_min, x_max, y_min, y_max, z_min, z_max
    """
    room = np.asarray(room_dim, dtype=np.float64)
    if room.shape != (3, 2):
        raise GeometryError(f"room_dim must have shape (3, 2), got {room.shape}")
    if np.any(room[:, 0] >= room[:, 1]):
        raise GeometryError("room_dim must satisfy min < max on every axis")

    registry = SurfaceRegistry()
    for dim in range(3):
        for side, shift in (("min", room[dim, 0]), ("max", room[dim, 1])):
            registry.add(Surface(
                name=f"{AXIS_NAMES[dim]}_{side}",
                dimension=dim,
                shift=shift,
                bounds=room.T.copy(),
                opaque=opaque,
            ))
    return registry
