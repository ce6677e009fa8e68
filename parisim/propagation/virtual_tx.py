"""Virtual transmitter generation with the image-source method.

A reflection of a real transmitter at a planar surface is modeled as a
direct path from a virtual transmitter, the transmitter's mirror image
across that surface. Images of images give higher reflection orders.

Output ordering (stable, relied upon by seeded downstream simulations):
the input readers first, unchanged; then all order-1 images (real reader
outer loop, surfaces inner loop in registry order); then all order-2 images
(order-1 parents in pool order, surfaces inner loop); and so on.
"""
import logging
import warnings
from typing import Dict, List, Sequence

import numpy as np

from ..errors import AccuracyWarning, GeometryError, SchemaError
from ..interfaces import GainModel, LinkGeometry, VirtualTransmitterSet
from ..pools.algebra import concat, merge, take
from ..pools.devices import VIRTUAL_FIELDS
from ..pools.records import Pool
from .mirror import SYMMETRY_WARNING, mirror_device, mirror_surface
from .surfaces import Surface, SurfaceRegistry

logger = logging.getLogger(__name__)


def _check_reader_fields(readers: Pool) -> None:
    missing = [name for name in ("pos", "ant_rot") + VIRTUAL_FIELDS if name not in readers]
    if missing:
        raise SchemaError(f"Reader pool lacks virtual transmitter fields: {missing}")


def create_image(
    readers: Pool,
    parent: int,
    surface: Surface,
    source_index: int,
) -> Pool:
    """
    Single-device pool holding the image of one reader across one surface.

    Args:
        readers: Pool holding the parent device
        parent: Index of the parent (real reader or lower-order image)
        surface: Reflecting surface
        source_index: Index of the real reader the chain descends from

    Returns:
        One-device pool with mirrored geometry and provenance fields set
    """
    image = mirror_device(take(readers, parent), 0, surface, warn=False)
    order = int(readers.attributes["virtual_reflection_order"].values[parent]) + 1
    chain = tuple(readers.attributes["virtual_surface_chain"].values[parent]) + (surface.name,)
    if surface.opaque:
        must_pass, must_not_pass = "", surface.name
    else:
        must_pass, must_not_pass = surface.name, ""
    return image.with_values(
        0,
        is_virtual=True,
        virtual_gain_factor=float("nan"),
        virtual_source_index=source_index,
        virtual_mirror_dimension=surface.dimension,
        virtual_last_surface=surface.name,
        virtual_surface_must_pass=must_pass,
        virtual_surface_must_not_pass=must_not_pass,
        virtual_reflection_order=order,
        virtual_surface_chain=chain,
    )


def generate_virtual_transmitters(
    readers: Pool,
    surfaces: SurfaceRegistry,
    max_reflection_order: int,
) -> VirtualTransmitterSet:
    """
    Derive virtual transmitters for all real readers of a pool.

    Every real reader is mirrored across every original (non-mirrored)
    surface of the registry; each resulting image is mirrored again across
    every surface except the one it was just reflected in, up to
    ``max_reflection_order`` reflections. For images of order >= 2 the
    previous reflecting surface mirrored across the new one is added to the
    returned registry ("<previous>@<new>") for multi-hop passage checks;
    pairs where that mirroring is undefined are skipped.

    Gain factors are left at NaN; see ``apply_gain``.

    Args:
        readers: Base reader pool (not modified)
        surfaces: Reflective surfaces (not modified)
        max_reflection_order: Maximum number of reflections per image (>= 0)

    Returns:
        VirtualTransmitterSet with the extended reader pool and registry

    Raises:
        ValueError: if max_reflection_order is negative
        ConsistencyError, SchemaError: for malformed reader pools
    """
    if max_reflection_order < 0:
        raise ValueError(f"max_reflection_order must be >= 0, got {max_reflection_order}")
    readers.check_consistency()
    _check_reader_fields(readers)

    registry = surfaces.copy()
    mirrors = registry.originals()
    result = readers.copy()

    is_virtual = readers["is_virtual"]
    real = [i for i, virtual in enumerate(is_virtual) if not virtual]
    order_counts = {0: len(real)}

    if max_reflection_order == 0 or not mirrors or not real:
        logger.info("No virtual transmitters generated (order %d, %d surfaces)",
                    max_reflection_order, len(mirrors))
        return VirtualTransmitterSet(result, registry, max_reflection_order, order_counts)

    warnings.warn(SYMMETRY_WARNING, AccuracyWarning, stacklevel=2)

    # (index in result, real reader index)
    parents = [(i, i) for i in real]
    for order in range(1, max_reflection_order + 1):
        images = []
        children = []
        offset = result.length()
        for parent, source in parents:
            last = result.attributes["virtual_last_surface"].values[parent]
            for surface in mirrors:
                if surface.name == last:
                    continue
                images.append(create_image(result, parent, surface, source))
                children.append((offset + len(images) - 1, source))
                if order >= 2:
                    _register_mirrored(registry, last, surface.name)
        if images:
            result = merge(result, concat(images))
        order_counts[order] = len(children)
        logger.info("Reflection order %d: %d virtual transmitters", order, len(children))
        parents = children
        if not parents:
            break

    return VirtualTransmitterSet(result, registry, max_reflection_order, order_counts)


def _register_mirrored(registry: SurfaceRegistry, surface_name: str, mirror_name: str) -> None:
    name = f"{surface_name}@{mirror_name}"
    if name in registry:
        return
    try:
        registry.add(mirror_surface(registry, surface_name, mirror_name))
    except GeometryError as exc:
        logger.debug("Skipping mirrored surface %s: %s", name, exc)


def reflection_orders(readers: Pool) -> Dict[int, List[int]]:
    """Device indices grouped by reflection order."""
    groups: Dict[int, List[int]] = {}
    for i, order in enumerate(readers["virtual_reflection_order"]):
        groups.setdefault(int(order), []).append(i)
    return groups


def check_passage(
    readers: Pool,
    index: int,
    receiver_position: Sequence[float],
    surfaces: SurfaceRegistry,
) -> bool:
    """
    Whether the path from a (virtual) transmitter to a receiver is realizable.

    Real transmitters always pass. For a virtual transmitter the segment to
    the receiver must cross its ``virtual_surface_must_pass`` surface, or must
    not cross its ``virtual_surface_must_not_pass`` surface. For images of
    order >= 2 reached through a transmissive surface the segment must also
    cross the previous surface of ``virtual_surface_chain`` mirrored across the
    last one ("<previous>@<last>"), when that mirrored surface is registered.
    """
    device = readers.device(index)
    if not device["is_virtual"]:
        return True
    start = np.asarray(device["pos"], dtype=np.float64)
    end = np.asarray(receiver_position, dtype=np.float64)
    if device["virtual_surface_must_pass"]:
        if not surfaces[device["virtual_surface_must_pass"]].crossed_by(start, end):
            return False
        chain = device["virtual_surface_chain"]
        if len(chain) >= 2:
            mirrored = f"{chain[-2]}@{chain[-1]}"
            if mirrored in surfaces:
                return surfaces[mirrored].crossed_by(start, end)
        return True
    if device["virtual_surface_must_not_pass"]:
        return not surfaces[device["virtual_surface_must_not_pass"]].crossed_by(start, end)
    return True


def apply_gain(readers: Pool, model: GainModel, geometry: LinkGeometry) -> Pool:
    """
    Assign gain factors to all virtual transmitters of a pool.

    Args:
        readers: Reader pool (not modified)
        model: Gain model called once per virtual transmitter
        geometry: Link geometry passed through to the model

    Returns:
        New pool; real readers keep a NaN gain factor
    """
    readers.check_consistency()
    result = readers.copy()
    gains = result.attributes["virtual_gain_factor"].values
    for i, virtual in enumerate(result.attributes["is_virtual"].values):
        if virtual:
            gains[i] = float(model(readers.device(i), geometry))
        else:
            gains[i] = float("nan")
    return result
