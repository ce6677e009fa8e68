"""Tests for surfaces and the surface registry."""
import pytest
import numpy as np

from parisim.errors import GeometryError
from parisim.propagation.surfaces import Surface, SurfaceRegistry, room_surfaces


class TestSurface:
    """Tests for Surface."""

    def test_infinite(self, x_wall):
        """An unbounded surface contains every point of its plane."""
        assert not x_wall.is_bounded
        assert x_wall.contains([5.0, 100.0, -100.0])

    def test_bounds_plane_column(self):
        """The column of the plane axis is pinned to the shift."""
        surface = Surface("s", 2, 1.0, bounds=[[0, 0, 0], [1, 1, 0]])
        assert np.allclose(surface.bounds[:, 2], 1.0)

    def test_invalid_dimension(self):
        """Axis numbers other than 0, 1, 2 are rejected."""
        with pytest.raises(GeometryError):
            Surface("s", 3, 0.0)

    @pytest.mark.parametrize("dimension", [True, 1.0, "1"])
    def test_dimension_must_be_integer(self, dimension):
        """Booleans, floats and strings are not axis numbers."""
        with pytest.raises(GeometryError):
            Surface("s", dimension, 0.0)

    def test_numpy_integer_dimension(self):
        """NumPy integers are accepted and stored as int."""
        surface = Surface("s", np.int64(1), 0.0)
        assert surface.dimension == 1
        assert type(surface.dimension) is int

    def test_invalid_bounds(self):
        """Bounds with min greater than max are rejected."""
        with pytest.raises(GeometryError):
            Surface("s", 0, 0.0, bounds=[[0, 2, 0], [0, 1, 1]])

    def test_bounded_contains(self):
        """Points must lie on the plane and within the bounds."""
        surface = Surface("s", 0, 0.0, bounds=[[0, -1, -1], [0, 1, 1]])
        assert surface.contains([0.0, 0.5, 0.5])
        assert not surface.contains([0.0, 1.5, 0.5])
        assert not surface.contains([0.1, 0.5, 0.5])

    def test_intersect(self, x_wall):
        """Segment crossing the wall gives the crossing point."""
        point = x_wall.intersect([0.0, 0.0, 0.0], [10.0, 2.0, 0.0])
        assert np.allclose(point, [5.0, 1.0, 0.0])

    def test_segment_on_one_side(self, x_wall):
        """No intersection when both ends are on one side."""
        assert x_wall.intersect([0.0, 0.0, 0.0], [4.0, 0.0, 0.0]) is None
        assert not x_wall.crossed_by([6.0, 0.0, 0.0], [7.0, 0.0, 0.0])

    def test_bounded_miss(self):
        """Crossing the plane outside the bounds does not count."""
        surface = Surface("s", 0, 5.0, bounds=[[5, -1, -1], [5, 1, 1]])
        assert surface.crossed_by([0.0, 0.0, 0.0], [10.0, 0.0, 0.0])
        assert not surface.crossed_by([0.0, 3.0, 0.0], [10.0, 3.0, 0.0])


class TestRegistry:
    """Tests for SurfaceRegistry."""

    def test_insertion_order(self):
        """Names and iteration follow insertion order."""
        registry = SurfaceRegistry.from_surfaces([Surface("b", 0, 1.0), Surface("a", 1, 2.0)])
        assert registry.names() == ["b", "a"]
        assert [s.name for s in registry] == ["b", "a"]

    def test_unknown_name(self, x_wall_registry):
        """Looking up a missing name raises KeyError."""
        with pytest.raises(KeyError, match="Unknown surface"):
            x_wall_registry["nope"]

    def test_duplicate_name(self, x_wall_registry, x_wall):
        """Names are unique."""
        with pytest.raises(KeyError):
            x_wall_registry.add(x_wall)

    def test_copy_is_independent(self, x_wall_registry):
        """Adding to a copy leaves the original alone."""
        clone = x_wall_registry.copy()
        clone.add(Surface("other", 1, 0.0))
        assert len(x_wall_registry) == 1


class TestRoomSurfaces:
    """Tests for the room wall registry."""

    def test_six_walls(self, room):
        """One wall per side of the box."""
        assert room.names() == ["x_min", "x_max", "y_min", "y_max", "z_min", "z_max"]

    def test_wall_geometry(self, room):
        """The ceiling spans the room extent."""
        ceiling = room["z_max"]
        assert ceiling.dimension == 2
        assert ceiling.shift == 2.5
        assert np.allclose(ceiling.bounds[:, 0], [-3.0, 3.0])
        assert np.allclose(ceiling.bounds[:, 1], [-3.0, 3.0])

    def test_invalid_room(self):
        """min must be below max on every axis."""
        with pytest.raises(GeometryError):
            room_surfaces([[1, 0], [0, 1], [0, 1]])
