"""Reflective surfaces and image-source virtual transmitters."""
from .surfaces import AXIS_NAMES, Surface, SurfaceRegistry, room_surfaces
from .mirror import (
    mirror_device,
    mirror_point,
    mirror_surface,
    rotation_to_unit_vector,
    unit_vector_to_rotation,
)
from .virtual_tx import (
    apply_gain,
    check_passage,
    create_image,
    generate_virtual_transmitters,
    reflection_orders,
)

__all__ = [
    'AXIS_NAMES', 'Surface', 'SurfaceRegistry', 'room_surfaces',
    'mirror_device', 'mirror_point', 'mirror_surface',
    'rotation_to_unit_vector', 'unit_vector_to_rotation',
    'apply_gain', 'check_passage', 'create_image',
    'generate_virtual_transmitters', 'reflection_orders',
]
