"""Shared interface types between the image-source core and its collaborators."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol

import numpy as np
from numpy.typing import NDArray

from .pools.records import Pool

if TYPE_CHECKING:
    from .propagation.surfaces import SurfaceRegistry


@dataclass
class LinkGeometry:
    """Geometry handed to a gain model together with one transmitter.

    Attributes:
        receiver_position: Receiving device position (3,) in meters
        surfaces: Registry including mirrored surfaces
        carrier_frequency_hz: Carrier frequency, None to use the transmitter's ``fc``
    """
    receiver_position: NDArray[np.float64]
    surfaces: SurfaceRegistry
    carrier_frequency_hz: Optional[float] = None


class GainModel(Protocol):
    """Channel/attenuation model assigning a gain factor to a virtual transmitter."""

    def __call__(self, transmitter: Dict[str, Any], geometry: LinkGeometry) -> float:
        ...


@dataclass
class VirtualTransmitterSet:
    """Result of virtual transmitter generation.

    Attributes:
        readers: Real readers followed by their virtual transmitters
        surfaces: Input surfaces plus the mirrored surfaces needed for
            passage checks of higher-order images
        max_reflection_order: Requested maximum reflection order
    """
    readers: Pool
    surfaces: SurfaceRegistry
    max_reflection_order: int
    order_counts: Dict[int, int] = field(default_factory=dict)

    @property
    def n_real(self) -> int:
        return self.order_counts.get(0, 0)

    @property
    def n_virtual(self) -> int:
        return sum(n for order, n in self.order_counts.items() if order > 0)
