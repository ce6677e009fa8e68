"""RFID positioning simulation: device pools and image-source reflections."""
from .config import ChannelConfig, ScenarioConfig
from .errors import AccuracyWarning, ConsistencyError, GeometryError, PoolError, SchemaError
from .interfaces import GainModel, LinkGeometry, VirtualTransmitterSet
from .pools import Pool, merge, replicate
from .propagation import Surface, SurfaceRegistry, generate_virtual_transmitters
from .report import format_reader_pool

__all__ = [
    "ChannelConfig",
    "ScenarioConfig",
    "AccuracyWarning",
    "ConsistencyError",
    "GeometryError",
    "PoolError",
    "SchemaError",
    "GainModel",
    "LinkGeometry",
    "VirtualTransmitterSet",
    "Pool",
    "merge",
    "replicate",
    "Surface",
    "SurfaceRegistry",
    "generate_virtual_transmitters",
    "format_reader_pool",
]
