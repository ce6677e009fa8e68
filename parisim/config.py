"""Scenario and channel configuration management."""
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Literal, Union

import numpy as np
import yaml


@dataclass
class ChannelConfig:
    """Global channel switches and parameters.

    Attributes:
        type: "room" (directivity does not apply to scattered paths) or "outdoor"
        noise_on: Add receiver noise
        surf_on: Model reflective surfaces
        vtx_on: Model reflections with virtual transmitters
        small_on: Model smallscale fading
        small_det: Use only the average smallscale model
        plf: Path-loss factor
        n0_dbm: Single-sided noise density in dBm per ``n0_bandwidth_hz``
        pol_dim: Axis of linear polarization for all devices (0, 1, 2)
    """
    type: Literal["room", "outdoor"] = "room"
    noise_on: bool = False
    surf_on: bool = False
    vtx_on: bool = False
    small_on: bool = False
    small_det: bool = True
    plf: float = 2.0
    n0_dbm: float = -47.0
    n0_bandwidth_hz: float = 3000.0
    pol_dim: int = 2

    @property
    def n0_w_per_hz(self) -> float:
        """Noise density in W/Hz."""
        return 10 ** ((self.n0_dbm - 30) / 10) / self.n0_bandwidth_hz

    def validate(self) -> List[str]:
        errors = []
        if self.type not in ("room", "outdoor"):
            errors.append("type must be 'room' or 'outdoor'")
        if not self.plf > 0:
            errors.append("plf (path-loss factor) must be positive")
        if self.pol_dim not in (0, 1, 2):
            errors.append("pol_dim must be 0, 1 or 2")
        if not self.n0_bandwidth_hz > 0:
            errors.append("n0_bandwidth_hz must be positive")
        return errors


def _default_room() -> List[List[float]]:
    return [[-3.0, 3.0], [-3.0, 3.0], [0.0, 2.5]]


def _default_reader_positions() -> List[List[float]]:
    return [[-1.0, -1.0, 1.0], [-1.0, 1.0, 1.0], [1.0, -1.0, 1.0], [1.0, 1.0, 1.0]]


def _default_reader_rotations() -> List[List[float]]:
    return [[45.0, 0.0], [-45.0, 0.0], [135.0, 0.0], [-135.0, 0.0]]


def _default_tag_positions() -> List[List[float]]:
    return [[-0.25, -0.25, 1.0], [-0.25, 0.25, 1.0], [0.25, -0.25, 1.0], [0.25, 0.25, 1.0]]


@dataclass
class ScenarioConfig:
    """Configuration of the sensatag room scenario.

    Attributes:
        name: Scenario identifier
        suffix: Label for generated reports
        fs_hz: Simulation sampling frequency
        c: Speed of light used by the simulator
        room_dim: [[xmin, xmax], [ymin, ymax], [zmin, zmax]] in meters
        max_reflection_order: Maximum reflection order of virtual transmitters
        sensormode: Set all tags to field sensor mode (record field strength only)
        sensormode_carrier_length_s: Carrier length in field sensor mode
        reader_positions: [x, y, z] per reader
        reader_rotations: [azimuth, elevation] in degrees per reader
        tag_positions: [x, y, z] per tag
        channel: Global channel settings
    """
    name: str = "paris-sensatag"
    suffix: str = "paris-sensatag_room"

    # Constants
    fs_hz: float = 3e9
    c: float = 3e8

    # Geometry
    room_dim: List[List[float]] = field(default_factory=_default_room)
    max_reflection_order: int = 0

    # Field sensors
    sensormode: bool = False
    sensormode_carrier_length_s: float = 1e-4

    # Devices
    reader_positions: List[List[float]] = field(default_factory=_default_reader_positions)
    reader_rotations: List[List[float]] = field(default_factory=_default_reader_rotations)
    tag_positions: List[List[float]] = field(default_factory=_default_tag_positions)

    channel: ChannelConfig = field(default_factory=ChannelConfig)

    @property
    def n_readers(self) -> int:
        return len(self.reader_positions)

    @property
    def n_tags(self) -> int:
        return len(self.tag_positions)

    @property
    def virtual_transmitters_enabled(self) -> bool:
        return (self.channel.vtx_on or self.channel.surf_on) and self.max_reflection_order > 0

    def wavelength_m(self, carrier_frequency_hz: float) -> float:
        """Wavelength at a carrier frequency using the configured speed of light."""
        return self.c / carrier_frequency_hz

    def in_room(self, position) -> bool:
        room = np.asarray(self.room_dim, dtype=np.float64)
        pos = np.asarray(position, dtype=np.float64)
        return bool(np.all((pos >= room[:, 0]) & (pos <= room[:, 1])))

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ScenarioConfig":
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        channel = data.pop("channel", None) or {}
        return cls(channel=ChannelConfig(**channel), **data)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        with open(path, 'w') as f:
            yaml.dump(asdict(self), f, default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate configuration parameters.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = list(self.channel.validate())

        room = np.asarray(self.room_dim, dtype=np.float64)
        if room.shape != (3, 2):
            errors.append("room_dim must be [[xmin, xmax], [ymin, ymax], [zmin, zmax]]")
        elif np.any(room[:, 0] >= room[:, 1]):
            errors.append("room_dim must satisfy min < max on every axis")

        if self.max_reflection_order < 0:
            errors.append("max_reflection_order must be >= 0")

        if not self.fs_hz > 0:
            errors.append("fs_hz must be positive")

        if len(self.reader_rotations) != len(self.reader_positions):
            errors.append("reader_positions and reader_rotations must have the same length")

        if room.shape == (3, 2):
            for i, pos in enumerate(self.reader_positions):
                if not self.in_room(pos):
                    errors.append(f"reader {i} position {list(pos)} is outside the room")
            for i, pos in enumerate(self.tag_positions):
                if not self.in_room(pos):
                    errors.append(f"tag {i} position {list(pos)} is outside the room")

        return errors
