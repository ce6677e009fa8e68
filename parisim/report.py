"""Tabular summary of a reader pool (real and virtual transmitters)."""
import math

import numpy as np

from .errors import SchemaError
from .pools.records import Pool

REPORT_FIELDS = (
    "pos",
    "is_virtual",
    "virtual_source_index",
    "virtual_gain_factor",
    "virtual_surface_must_pass",
    "virtual_surface_must_not_pass",
)

HEADER = "  {:>5s}  |  {:>13s}  |  {:>7s}  |  {:>8s}  |  {:>11s}  |  {:>13s}".format(
    "(V)TX", "DIST TO ORIG.", "VTX SRC", "VTX GAIN", "HAS TO PASS", "MUST NOT PASS"
)
RULE = "---------+-------------------+-----------+------------+---------------+----------------"


def _format_gain(gain: float) -> str:
    if gain is None or (isinstance(gain, float) and math.isnan(gain)):
        return ""
    return f"{gain:.3f}"


def format_reader_pool(readers: Pool) -> str:
    """
    Format a reader pool as a table, one row per device.

    Columns: device number (1-based), distance of the position from the
    origin, originating transmitter (virtual devices), gain factor and the
    passage constraint.

    Raises:
        ConsistencyError: for inconsistent pools
        SchemaError: if the pool lacks the reported attributes
    """
    readers.check_consistency()
    missing = [name for name in REPORT_FIELDS if name not in readers]
    if missing:
        raise SchemaError(f"Reader pool lacks attributes required for the report: {missing}")

    lines = [HEADER, RULE]
    n = readers.length() or 0
    for i in range(n):
        device = readers.device(i)
        distance = float(np.linalg.norm(np.asarray(device["pos"], dtype=np.float64)))
        if device["is_virtual"]:
            source = f"TX{int(device['virtual_source_index']) + 1}"
            gain = _format_gain(device["virtual_gain_factor"])
            must_pass = device["virtual_surface_must_pass"]
            must_not_pass = device["virtual_surface_must_not_pass"]
        else:
            source = gain = must_pass = must_not_pass = ""
        lines.append(
            f"    {i + 1:>3d}  |  {distance:>11.1f} m  |  {source:>7s}  |  {gain:>8s}  "
            f"|  {must_pass:>11s}  |  {must_not_pass:>13s}"
        )
    return "\n".join(lines)
