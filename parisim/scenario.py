"""
Sensatag Room Scenario

Four readers in the corners of a 2 m square facing the room center, four
tags in the middle, optional room-wall reflections via virtual transmitters.
Builds the device pools handed to the channel/waveform model.
"""
import logging
import warnings
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import ScenarioConfig
from .errors import AccuracyWarning
from .interfaces import VirtualTransmitterSet
from .pools.algebra import replicate
from .pools.devices import create_std_reader, create_std_tag
from .pools.records import Pool
from .propagation.surfaces import SurfaceRegistry, room_surfaces
from .propagation.virtual_tx import generate_virtual_transmitters
from .report import format_reader_pool

logger = logging.getLogger(__name__)


@dataclass
class Scenario:
    """Complete scenario setup."""
    config: ScenarioConfig
    readers: Pool
    tags: Pool
    surfaces: SurfaceRegistry
    virtual: Optional[VirtualTransmitterSet]
    report: str

    @property
    def n_virtual(self) -> int:
        return 0 if self.virtual is None else self.virtual.n_virtual


def build_tag_pool(config: ScenarioConfig) -> Pool:
    """Tags replicated from the standard tag and placed per config."""
    tags = replicate(create_std_tag(), config.n_tags)
    for i, pos in enumerate(config.tag_positions):
        tags = tags.with_value("pos", i, np.asarray(pos, dtype=np.float64))
    return tags


def build_reader_pool(config: ScenarioConfig) -> Pool:
    """Real readers replicated from the standard reader, placed and rotated per config."""
    readers = replicate(create_std_reader(config.sensormode, False), config.n_readers)
    for i, (pos, rot) in enumerate(zip(config.reader_positions, config.reader_rotations)):
        readers = readers.with_values(
            i,
            pos=np.asarray(pos, dtype=np.float64),
            ant_rot=np.asarray(rot, dtype=np.float64),
        )
    return readers


def build_scenario(config: ScenarioConfig = None, verbose: bool = False) -> Scenario:
    """Build readers, tags, room surfaces and virtual transmitters.

    Args:
        config: Scenario configuration (defaults to the sensatag room)
        verbose: Print progress and the transmitter setup

    Returns:
        Scenario with the finished reader pool (real + virtual) and tag pool

    Raises:
        ValueError: if the configuration does not validate
    """
    if config is None:
        config = ScenarioConfig()

    errors = config.validate()
    if errors:
        raise ValueError("Invalid scenario configuration: " + "; ".join(errors))

    if verbose:
        print(f"Scenario: {config.name}")
        print(f"  Readers: {config.n_readers}, tags: {config.n_tags}")
        print(f"  Max. reflection order: {config.max_reflection_order}")

    tags = build_tag_pool(config)
    readers = build_reader_pool(config)
    surfaces = room_surfaces(config.room_dim)

    virtual = None
    if config.virtual_transmitters_enabled:
        if verbose:
            print("  Generating virtual transmitters...")
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", AccuracyWarning)
            virtual = generate_virtual_transmitters(
                readers, surfaces, config.max_reflection_order
            )
        for warning in caught:
            logger.warning("%s", warning.message)
        readers = virtual.readers
        surfaces = virtual.surfaces

    report = format_reader_pool(readers)
    logger.info("Scenario %s: %d transmitters (%d virtual)",
                config.name, readers.count, 0 if virtual is None else virtual.n_virtual)

    if verbose:
        print("TRANSMITTER SETUP:\n")
        print(report)

    return Scenario(
        config=config,
        readers=readers,
        tags=tags,
        surfaces=surfaces,
        virtual=virtual,
        report=report,
    )
