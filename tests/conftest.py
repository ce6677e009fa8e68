"""Shared pytest fixtures for all test modules."""
import pytest
import numpy as np

from parisim.config import ScenarioConfig
from parisim.pools.devices import create_std_reader, create_std_tag
from parisim.pools.records import Pool
from parisim.propagation.surfaces import Surface, SurfaceRegistry, room_surfaces


# === Pool Fixtures ===

@pytest.fixture
def two_device_pool():
    """Small pool with indexed, scalar and nested attributes."""
    return Pool.from_fields(
        count=2,
        pos=[np.array([0.0, 0.0, 0.0]), np.array([1.0, 2.0, 3.0])],
        fc=[915e6, 868e6],
        label="readers",
        sub=Pool.from_fields(count=2, gain=[1.0, 2.0]),
    )


@pytest.fixture
def std_reader():
    """Single standard reader."""
    return create_std_reader()


@pytest.fixture
def std_tag():
    """Single standard tag at the origin."""
    return create_std_tag([0.0, 0.0, 0.0])


# === Surface Fixtures ===

@pytest.fixture
def x_wall():
    """Infinite wall at x = 5 m."""
    return Surface(name="x_wall", dimension=0, shift=5.0)


@pytest.fixture
def x_wall_registry(x_wall):
    return SurfaceRegistry.from_surfaces([x_wall])


@pytest.fixture
def room():
    """Walls of the default 6 x 6 x 2.5 m room."""
    return room_surfaces([[-3.0, 3.0], [-3.0, 3.0], [0.0, 2.5]])


# === Configuration Fixtures ===

@pytest.fixture
def default_config():
    """Sensatag room without reflections."""
    return ScenarioConfig()


@pytest.fixture
def reflection_config():
    """Sensatag room with first-order wall reflections."""
    config = ScenarioConfig(max_reflection_order=1)
    config.channel.vtx_on = True
    return config
