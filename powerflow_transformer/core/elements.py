"""
Element definitions for transformer two-port modelling.

This module contains the enumerations and the configuration record shared by
every transformer:
- Connection topologies and solver formulations
- Phase sets (A, B, C) as combinable flags
- Immutable transformer configuration (ratings and per-unit impedance)
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, Flag, IntEnum


class ConnectionType(IntEnum):
    """Transformer winding connection, using the configuration's discrete codes."""
    UNKNOWN = 0
    WYE_WYE = 1
    DELTA_DELTA = 2
    DELTA_GROUNDED_WYE = 3
    SINGLE_PHASE = 4
    SINGLE_PHASE_CENTER_TAPPED = 5


class SolverMethod(Enum):
    """Power-flow formulation of the surrounding solver."""
    FORWARD_BACKWARD_SWEEP = "FBS"  # Impedance form, radial networks
    GAUSS_SEIDEL = "GS"             # Nodal admittance form
    NEWTON_RAPHSON = "NR"           # Not supported


class SpecialLink(Enum):
    """Link classification the external solver uses for its own phase checks."""
    NORMAL = 0
    DELTA_GWYE = 1
    SPLIT_PHASE = 2


class Phase(Flag):
    """Primary phases of a link. Combine with ``|`` (e.g. ``Phase.A | Phase.C``)."""
    NONE = 0
    A = 1
    B = 2
    C = 4
    ABC = A | B | C


# Matrix row/column order
PHASE_ORDER: tuple[Phase, Phase, Phase] = (Phase.A, Phase.B, Phase.C)

# Neutral and split-secondary conductors carry no row in the 3x3 matrices
_IGNORED_CONDUCTORS = frozenset({"N", "S"})


def parse_phases(phases: "Phase | str | Iterable | None") -> Phase:
    """
    Normalize a phase specification to a Phase flag.

    Accepts a Phase, a string such as "ABC", "AN" or "A|C", or an iterable of
    phase letters / Phase members. Neutral (N) and split (S) conductors are
    ignored.

    Raises:
        ValueError: If an unknown phase letter is given
    """
    if phases is None:
        return Phase.NONE
    if isinstance(phases, Phase):
        return phases
    if isinstance(phases, str):
        items: Iterable = [ch for ch in phases if ch not in "|, "]
    else:
        items = phases

    result = Phase.NONE
    for item in items:
        if isinstance(item, Phase):
            result |= item
            continue
        letter = str(item).strip().upper()
        if letter in _IGNORED_CONDUCTORS:
            continue
        if letter not in ("A", "B", "C"):
            raise ValueError(f"Unknown phase '{item}'. Use A, B or C.")
        result |= Phase[letter]
    return result


def phase_count(phases: Phase) -> int:
    """Number of active phases in a Phase flag."""
    return sum(1 for p in PHASE_ORDER if p in phases)


def special_link_for(connection_type: "ConnectionType | int") -> SpecialLink:
    """Return the link classification for a connection type."""
    if connection_type == ConnectionType.DELTA_GROUNDED_WYE:
        return SpecialLink.DELTA_GWYE
    if connection_type == ConnectionType.SINGLE_PHASE_CENTER_TAPPED:
        return SpecialLink.SPLIT_PHASE
    return SpecialLink.NORMAL


@dataclass(frozen=True)
class TransformerConfiguration:
    """
    Immutable transformer configuration, shareable by several transformers.

    Attributes:
        V_primary: Primary rated voltage (V)
        V_secondary: Secondary rated voltage (V)
        connection_type: Winding connection (ConnectionType or its integer code)
        impedance: Series impedance in per-unit on the transformer base
        kVA_rating: Total rated power (kVA)
        phaseA_kVA_rating: Phase A rated power (kVA), center-tapped only
        phaseB_kVA_rating: Phase B rated power (kVA), center-tapped only
        phaseC_kVA_rating: Phase C rated power (kVA), center-tapped only
        name: Configuration name (for reporting)
    """
    V_primary: float
    V_secondary: float
    connection_type: ConnectionType | int
    impedance: complex
    kVA_rating: float
    phaseA_kVA_rating: float = 0.0
    phaseB_kVA_rating: float = 0.0
    phaseC_kVA_rating: float = 0.0
    name: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'impedance', complex(self.impedance))
        # Keep unrecognized codes as plain ints; the dispatcher rejects them
        if not isinstance(self.connection_type, ConnectionType):
            try:
                object.__setattr__(self, 'connection_type', ConnectionType(self.connection_type))
            except ValueError:
                pass

    @staticmethod
    def rating_field(phase: Phase) -> str:
        """Name of the per-phase rating field for a single phase."""
        if phase not in PHASE_ORDER:
            raise ValueError(f"Expected a single phase, got {phase}")
        return f"phase{phase.name}_kVA_rating"

    def phase_kVA_rating(self, phase: Phase) -> float:
        """Rated power (kVA) of a single phase."""
        return getattr(self, self.rating_field(phase))
