"""Standard single-device reader and tag templates.

Each factory returns a one-device pool. Grow it with ``replicate`` and then
overwrite positions and rotations per device.
"""
from typing import Sequence

import numpy as np

from .records import Pool

# Virtual-transmitter bookkeeping fields carried by every reader
VIRTUAL_FIELDS = (
    "is_virtual",
    "virtual_gain_factor",
    "virtual_source_index",
    "virtual_mirror_dimension",
    "virtual_last_surface",
    "virtual_surface_must_pass",
    "virtual_surface_must_not_pass",
    "virtual_reflection_order",
    "virtual_surface_chain",
)


def create_mfcw_setup(fieldsensor: bool = False, virtual: bool = False) -> Pool:
    """
    Multi-frequency continuous-wave (MFCW) setup of a single reader.

    The secondary carrier offset sets the number of channel taps: a low
    offset (1 MHz) gives few taps, a high one (50 MHz) a dense channel.
    Field sensors use a dense channel; virtual transmitters use a medium one
    since there can be many of them.
    """
    if fieldsensor and not virtual:
        offsets = [50e6]
    elif fieldsensor and virtual:
        offsets = [20e6]
    else:
        offsets = [1e6]
    return Pool.from_fields(
        count=1,
        nc=[1],                               # number of secondary carriers
        fi=[np.array(offsets)],               # Hz secondary carrier offsets
        vari=[np.array([1e-3])],              # secondary carrier variances (main carrier: 1)
    )


def create_std_reader(fieldsensor: bool = False, virtual: bool = False) -> Pool:
    """
    Single reader with the standard setup.

    Args:
        fieldsensor: Tags are in field-sensor mode (affects the MFCW setup)
        virtual: Mark the reader as a virtual transmitter

    Returns:
        One-device reader pool
    """
    return Pool.from_fields(
        count=1,
        fc=[915e6],                                       # Hz carrier frequency
        ant=["channelchar_directivity_vivaldi_4x1-20cm"], # antenna characteristic
        ant_rot=[np.array([0.0, 0.0])],                   # deg [azimuth, elevation], [0,0]: +x
        ptx=[3.28],                                       # W EIRP
        t0=[0.0],                                         # s time delay
        id_ch=[False],                                    # monostatic (identical smallscale channels)
        frs=[65e6],                                       # Hz reader sampling frequency
        quant=[float("nan")],                             # bits quantization (NaN: off)
        pos=[np.zeros(3)],                                # m [x, y, z]
        is_virtual=[bool(virtual)],
        virtual_gain_factor=[float("nan")],
        virtual_source_index=[-1],
        virtual_mirror_dimension=[0],
        virtual_last_surface=[""],
        virtual_surface_must_pass=[""],
        virtual_surface_must_not_pass=[""],
        virtual_reflection_order=[0],
        virtual_surface_chain=[()],                       # surfaces reflected in, in order
        mfcw=create_mfcw_setup(fieldsensor, virtual),
    )


def create_std_tag(init_pos: Sequence[float] = (0.0, 0.0, 0.0)) -> Pool:
    """
    Single tag with the standard setup.

    Only some assembly/detuning states have a simulator characteristic:
    cat in {450, 1250} fF, rat in {-67, 0, 200} percent, enr in {0, 0.5},
    fsr in {0, 100e6} Hz.

    Args:
        init_pos: Initial [x, y, z] position in meters

    Returns:
        One-device tag pool
    """
    return Pool.from_fields(
        count=1,
        t0=[0.0],                                   # s time delay
        rn16=[""],                                  # zero-length RN16 (faster ranging)
        ant=["channelchar_directivity_l2-dipole"],  # antenna characteristic ("" = isotropic)
        ant_rot=[np.array([0.0, 0.0])],             # deg [azimuth, elevation]
        pwrchar=["Vdda_AVG"],                       # power supply characteristic
        modcharid=["c-p2a"],                        # modulator characteristic ID
        adsm_file=["tagchar_modulator_adsm"],       # assembly/detuning state table
        cat=[450e-15],                              # F assembly capacity
        rat=[0.0],                                  # percent shift of assembly resistance
        enr=[0.0],                                  # resonance boost (-1..1)
        fsr=[0.0],                                  # Hz resonance frequency shift
        pos=[np.asarray(init_pos, dtype=np.float64)],
    )
