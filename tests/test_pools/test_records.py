"""Tests for the pool data model."""
import pytest
import numpy as np

from parisim.errors import ConsistencyError
from parisim.pools.records import IndexedAttribute, Pool, ScalarAttribute


class TestFromFields:
    """Tests for building pools from plain values."""

    def test_variant_tagging(self, two_device_pool):
        """Lists become indexed, pools nested, everything else scalar."""
        attrs = two_device_pool.attributes
        assert isinstance(attrs["pos"], IndexedAttribute)
        assert isinstance(attrs["label"], ScalarAttribute)
        assert isinstance(attrs["sub"], Pool)

    def test_names_keep_order(self, two_device_pool):
        """Attribute names keep their insertion order."""
        assert two_device_pool.names() == ["pos", "fc", "label", "sub"]


class TestAccess:
    """Tests for value-semantics accessors."""

    def test_getitem_returns_copy(self, two_device_pool):
        """Modifying returned values must not change the pool."""
        positions = two_device_pool["pos"]
        positions[0][0] = 99.0
        positions.append(None)
        assert two_device_pool["pos"][0][0] == 0.0
        assert len(two_device_pool["pos"]) == 2

    def test_scalar_access(self, two_device_pool):
        """Scalars are returned as plain values."""
        assert two_device_pool["label"] == "readers"

    def test_device(self, two_device_pool):
        """Device view holds indexed values, scalars and nested values."""
        device = two_device_pool.device(1)
        assert np.allclose(device["pos"], [1.0, 2.0, 3.0])
        assert device["fc"] == 868e6
        assert device["label"] == "readers"
        assert device["sub"] == {"gain": 2.0}

    def test_device_out_of_range(self, two_device_pool):
        """Indices past the count raise IndexError."""
        with pytest.raises(IndexError):
            two_device_pool.device(2)

    def test_with_value_is_new_pool(self, two_device_pool):
        """with_value must leave the original untouched."""
        updated = two_device_pool.with_value("fc", 0, 1e9)
        assert updated["fc"] == [1e9, 868e6]
        assert two_device_pool["fc"] == [915e6, 868e6]

    def test_with_value_rejects_scalar(self, two_device_pool):
        """Scalars cannot be set per device."""
        with pytest.raises(TypeError):
            two_device_pool.with_value("label", 0, "x")

    def test_with_values(self, two_device_pool):
        """Several attributes of one device in a single call."""
        updated = two_device_pool.with_values(1, fc=1.0, pos=np.zeros(3))
        assert updated["fc"][1] == 1.0
        assert np.allclose(updated["pos"][1], 0.0)


class TestConsistency:
    """Tests for the length invariant."""

    def test_consistent_pool(self, two_device_pool):
        """Length matches count and the check passes."""
        assert two_device_pool.length() == 2
        two_device_pool.check_consistency()

    def test_lengths_differ(self):
        """Indexed attributes of unequal length have no length."""
        pool = Pool.from_fields(count=2, a=[1, 2], b=[1])
        with pytest.raises(ConsistencyError):
            pool.length()

    def test_count_mismatch(self):
        """Count must equal the indexed length."""
        pool = Pool.from_fields(count=3, a=[1, 2])
        with pytest.raises(ConsistencyError):
            pool.check_consistency()

    def test_nested_inconsistency(self):
        """Nested pools are checked too."""
        pool = Pool.from_fields(count=1, a=[1], sub=Pool.from_fields(x=[1, 2], y=[1]))
        with pytest.raises(ConsistencyError):
            pool.check_consistency()

    def test_no_indexed_attributes_uses_count(self):
        """Without indexed attributes the count is the length."""
        assert Pool.from_fields(count=4, label="x").length() == 4


class TestSchema:
    """Tests for layout comparison."""

    def test_schema_ignores_values(self, two_device_pool):
        """Same names and kinds give the same schema."""
        other = Pool.from_fields(
            count=1, sub=Pool.from_fields(count=1, gain=[0.0]),
            fc=[1.0], pos=[np.zeros(3)], label="other",
        )
        assert other.schema() == two_device_pool.schema()

    def test_schema_distinguishes_kinds(self):
        """Indexed and scalar attributes differ in schema."""
        a = Pool.from_fields(count=1, x=[1])
        b = Pool.from_fields(count=1, x=1)
        assert a.schema() != b.schema()
