"""Error taxonomy for pool algebra and image-source geometry."""


class PoolError(ValueError):
    """Base class for malformed or incompatible device pools."""


class ConsistencyError(PoolError):
    """Indexed attributes of one pool disagree in length, or a count is missing."""


class SchemaError(PoolError):
    """Two pools do not share the same attribute layout."""


class GeometryError(ValueError):
    """A surface operation is geometrically undefined."""


class AccuracyWarning(UserWarning):
    """A geometric operation is only exact under an assumption the caller must check."""
