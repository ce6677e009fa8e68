"""Pool algebra: replicate and merge device pools.

Both operations return new pools and never modify their inputs. They fail
before producing output when a pool is inconsistent (indexed attributes of
different lengths) or when two pools do not share the same layout.
"""
import copy
import logging
import numbers
from typing import Optional, Sequence

from ..errors import ConsistencyError, SchemaError
from .records import IndexedAttribute, Pool, ScalarAttribute

logger = logging.getLogger(__name__)


def replicate(pool: Pool, n: int) -> Pool:
    """
    Replicate a pool n times.

    Every indexed attribute of length L becomes the original sequence
    repeated n times (length L*n), nested pools are replicated recursively
    with the same multiplier and scalars are copied unchanged.

    Args:
        pool: Pool to replicate (may hold any number of devices)
        n: Positive multiplier

    Returns:
        New pool with count L*n

    Raises:
        ValueError: if n is not a positive integer
        ConsistencyError: if indexed attribute lengths disagree
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 1:
        raise ValueError(f"Replication factor must be a positive integer, got {n!r}")
    pool.check_consistency()
    return _replicate(pool, int(n))


def _replicate(pool: Pool, n: int) -> Pool:
    length = pool.length()
    result = Pool(count=None if pool.count is None else length * n)
    for name, attr in pool.attributes.items():
        if isinstance(attr, IndexedAttribute):
            result.attributes[name] = IndexedAttribute(
                [copy.deepcopy(value) for _ in range(n) for value in attr.values]
            )
        elif isinstance(attr, Pool):
            result.attributes[name] = _replicate(attr, n)
        else:
            result.attributes[name] = ScalarAttribute(copy.deepcopy(attr.value))
    logger.debug("Replicated pool of %s devices x%d", length, n)
    return result


def check_schema(pool1: Pool, pool2: Pool) -> None:
    """Raise SchemaError unless both pools share names, kinds and nesting."""
    names1 = sorted(pool1.attributes)
    names2 = sorted(pool2.attributes)
    if len(names1) != len(names2):
        raise SchemaError(
            "Layout of pools differ (different number of attributes: "
            f"{len(names1)} vs {len(names2)}). Cannot combine these pools."
        )
    if names1 != names2:
        differing = sorted(set(names1).symmetric_difference(names2))
        raise SchemaError(
            f"Layout of pools differ (different attributes: {differing}). "
            "Cannot combine these pools."
        )
    for name in names1:
        attr1 = pool1.attributes[name]
        attr2 = pool2.attributes[name]
        if type(attr1) is not type(attr2):
            raise SchemaError(
                f"Layout of pools differ (attribute '{name}' is "
                f"{type(attr1).__name__} vs {type(attr2).__name__})."
            )
        if isinstance(attr1, Pool):
            check_schema(attr1, attr2)


def merge(pool1: Pool, pool2: Pool, index: Optional[int] = None) -> Pool:
    """
    Combine two pools of identical layout.

    Args:
        pool1: Pool to extend
        pool2: Pool providing the devices
        index: If given, only device ``index`` of pool2 is appended

    Returns:
        New pool: pool1 followed by all devices of pool2 (count c1+c2), or by
        the selected device (count c1+1)

    Raises:
        SchemaError: if the pools have different layouts
        ConsistencyError: if either pool is inconsistent, or pool2 has no count
            while pool1 has one
        IndexError: if index is outside pool2
    """
    check_schema(pool1, pool2)
    pool1.check_consistency()
    pool2.check_consistency()
    if index is not None:
        _check_index(pool2, index)
    return _merge(pool1, pool2, index)


append = merge


def _check_index(pool: Pool, index: int) -> None:
    length = pool.length()
    if length is not None and not 0 <= index < length:
        raise IndexError(f"Device index {index} out of range for pool of {length} devices")
    for sub in pool.nested().values():
        _check_index(sub, index)


def _merge(pool1: Pool, pool2: Pool, index: Optional[int]) -> Pool:
    if index is None and pool1.count is not None and pool2.count is None:
        raise ConsistencyError('Length entry "count" is missing in pool2.')

    result = Pool(count=pool1.count)
    for name, attr1 in pool1.attributes.items():
        attr2 = pool2.attributes[name]
        if isinstance(attr1, IndexedAttribute):
            if index is None:
                added = attr2.values
            else:
                added = [attr2.values[index]]
            result.attributes[name] = IndexedAttribute(
                copy.deepcopy(attr1.values) + copy.deepcopy(added)
            )
        elif isinstance(attr1, Pool):
            result.attributes[name] = _merge(attr1, attr2, index)
        else:
            result.attributes[name] = ScalarAttribute(copy.deepcopy(attr1.value))

    if result.count is not None:
        result.count += 1 if index is not None else pool2.count
    return result


def empty_like(pool: Pool) -> Pool:
    """Pool with the same layout and scalars but zero devices."""
    result = Pool(count=None if pool.count is None else 0)
    for name, attr in pool.attributes.items():
        if isinstance(attr, IndexedAttribute):
            result.attributes[name] = IndexedAttribute([])
        elif isinstance(attr, Pool):
            result.attributes[name] = empty_like(attr)
        else:
            result.attributes[name] = ScalarAttribute(copy.deepcopy(attr.value))
    return result


def take(pool: Pool, index: int) -> Pool:
    """Single-device pool holding device ``index`` of ``pool``."""
    return merge(empty_like(pool), pool, index)


def concat(pools: Sequence[Pool]) -> Pool:
    """
    Concatenate several pools of identical layout in one pass.

    Equivalent to folding ``merge`` over the sequence, but every device is
    copied once.

    Args:
        pools: Non-empty sequence of pools; scalars are taken from the first

    Returns:
        New pool holding the devices of all pools in order

    Raises:
        ValueError: if pools is empty
        SchemaError, ConsistencyError: as for ``merge``
    """
    if not pools:
        raise ValueError("Cannot concatenate an empty sequence of pools")
    first = pools[0]
    for pool in pools[1:]:
        check_schema(first, pool)
    for pool in pools:
        pool.check_consistency()
    return _concat(pools)


def _concat(pools: Sequence[Pool]) -> Pool:
    first = pools[0]
    if first.count is not None and any(pool.count is None for pool in pools[1:]):
        raise ConsistencyError('Length entry "count" is missing in a concatenated pool.')

    result = Pool(count=None if first.count is None else sum(pool.count for pool in pools))
    for name, attr in first.attributes.items():
        if isinstance(attr, IndexedAttribute):
            values = []
            for pool in pools:
                values.extend(copy.deepcopy(pool.attributes[name].values))
            result.attributes[name] = IndexedAttribute(values)
        elif isinstance(attr, Pool):
            result.attributes[name] = _concat([pool.attributes[name] for pool in pools])
        else:
            result.attributes[name] = ScalarAttribute(copy.deepcopy(attr.value))
    logger.debug("Concatenated %d pools into %s devices", len(pools), result.count)
    return result
