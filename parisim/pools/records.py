"""Self-describing device record pools.

A pool holds ``count`` devices (readers or tags). Every attribute is one of
three tagged variants:

- ``IndexedAttribute``: one value per device, stored as a list of length ``count``
- ``ScalarAttribute``: a pool-wide constant
- ``Pool``: a nested sub-pool with its own ``count`` (grouped sub-parameters)

Pools are treated as values. Accessors return copies and every modifying
helper returns a new pool.
"""
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from ..errors import ConsistencyError


@dataclass
class ScalarAttribute:
    """Pool-wide constant (not per device)."""
    value: Any


@dataclass
class IndexedAttribute:
    """Per-device attribute, one entry per device."""
    values: List[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)


@dataclass
class Pool:
    """Homogeneous collection of device records.

    Attributes:
        count: Number of devices represented (None if the pool carries no count)
        attributes: Attribute name -> ScalarAttribute, IndexedAttribute or Pool
    """
    count: Optional[int] = None
    attributes: Dict[str, Union[ScalarAttribute, IndexedAttribute, "Pool"]] = field(
        default_factory=dict
    )

    @classmethod
    def from_fields(cls, count: Optional[int] = None, **fields: Any) -> "Pool":
        """Build a pool from plain values.

        Lists become indexed attributes, pools become nested pools and
        everything else becomes a scalar attribute.

        Example:
            >>> Pool.from_fields(count=1, pos=[(0.0, 0.0, 0.0)], fc=[915e6], label="rdr")
        """
        attributes = {}
        for name, value in fields.items():
            if isinstance(value, Pool):
                attributes[name] = value
            elif isinstance(value, list):
                attributes[name] = IndexedAttribute(list(value))
            else:
                attributes[name] = ScalarAttribute(value)
        return cls(count=count, attributes=attributes)

    def __contains__(self, name: str) -> bool:
        return name in self.attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self.attributes)

    def __getitem__(self, name: str) -> Any:
        """Return a copy of an attribute's content.

        Indexed attributes are returned as a list, scalars as their value and
        nested pools as a pool.
        """
        attr = self.attributes[name]
        if isinstance(attr, IndexedAttribute):
            return copy.deepcopy(attr.values)
        if isinstance(attr, ScalarAttribute):
            return copy.deepcopy(attr.value)
        return attr.copy()

    def names(self) -> List[str]:
        return list(self.attributes)

    def copy(self) -> "Pool":
        return copy.deepcopy(self)

    def indexed_lengths(self) -> Dict[str, int]:
        """Lengths of all indexed attributes on this level (nested pools excluded)."""
        return {
            name: len(attr) for name, attr in self.attributes.items()
            if isinstance(attr, IndexedAttribute)
        }

    def nested(self) -> Dict[str, "Pool"]:
        return {
            name: attr for name, attr in self.attributes.items()
            if isinstance(attr, Pool)
        }

    def length(self) -> Optional[int]:
        """Common length of the indexed attributes.

        Falls back to ``count`` when the pool has no indexed attributes.

        Raises:
            ConsistencyError: if lengths disagree with each other or with ``count``
        """
        lengths = self.indexed_lengths()
        distinct = set(lengths.values())
        if len(distinct) > 1:
            raise ConsistencyError(
                f"Pool is not consistent (indexed attribute lengths differ: {lengths})"
            )
        if not distinct:
            return self.count
        length = distinct.pop()
        if self.count is not None and self.count != length:
            raise ConsistencyError(
                f"Pool is not consistent (count={self.count}, "
                f"indexed attributes have length {length})"
            )
        return length

    def check_consistency(self) -> None:
        """Validate this pool and all nested pools, raising ConsistencyError."""
        self.length()
        for sub in self.nested().values():
            sub.check_consistency()

    def schema(self) -> Tuple:
        """Attribute layout as a comparable tuple of (name, kind[, sub-schema])."""
        layout = []
        for name in sorted(self.attributes):
            attr = self.attributes[name]
            if isinstance(attr, Pool):
                layout.append((name, "nested", attr.schema()))
            elif isinstance(attr, IndexedAttribute):
                layout.append((name, "indexed"))
            else:
                layout.append((name, "scalar"))
        return tuple(layout)

    def device(self, index: int) -> Dict[str, Any]:
        """All attribute values of one device, nested pools as nested dicts."""
        n = self.length()
        if n is None or not 0 <= index < n:
            raise IndexError(f"Device index {index} out of range for pool of {n} devices")
        values = {}
        for name, attr in self.attributes.items():
            if isinstance(attr, IndexedAttribute):
                values[name] = copy.deepcopy(attr.values[index])
            elif isinstance(attr, ScalarAttribute):
                values[name] = copy.deepcopy(attr.value)
            else:
                values[name] = attr.device(index)
        return values

    def with_value(self, name: str, index: int, value: Any) -> "Pool":
        """Return a new pool with one device slot of an indexed attribute replaced."""
        attr = self.attributes[name]
        if not isinstance(attr, IndexedAttribute):
            raise TypeError(f"Attribute '{name}' is not an indexed attribute")
        if not 0 <= index < len(attr):
            raise IndexError(f"Device index {index} out of range for attribute '{name}'")
        pool = self.copy()
        pool.attributes[name].values[index] = copy.deepcopy(value)
        return pool

    def with_values(self, index: int, **values: Any) -> "Pool":
        """Return a new pool with several indexed attributes of one device replaced."""
        pool = self
        for name, value in values.items():
            pool = pool.with_value(name, index, value)
        return pool
