"""Value types for well production data.

``WellAPI`` and ``ReportingPeriod`` are immutable keys; ``ProductionRecord``
is the per-well, per-month accumulator the parser fills in.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .exceptions import InvalidPhaseCode


@dataclass(frozen=True, order=True)
class WellAPI:
    """API well number: state code, county code and well sequence."""
    state: int = 0
    county: int = 0
    well: int = 0

    def __str__(self) -> str:
        return f"{self.state:02d}{self.county:03d}{self.well:05d}"


@dataclass(frozen=True, order=True)
class ReportingPeriod:
    """Year and month a production volume was reported for."""
    year: int = 0
    month: int = 0

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


class Phase(str, Enum):
    """Produced commodity."""
    OIL = "oil"
    GAS = "gas"
    WATER = "water"

    @classmethod
    def from_code(cls, code: str) -> "Phase":
        """Map an OCD product kind code to a phase.

        Only the first character is significant and it must be an
        upper-case ``O``, ``G`` or ``W``.

        Raises:
            InvalidPhaseCode: If the code is empty or starts with anything else
        """
        phase = _PHASE_CODES.get(code[:1])
        if phase is None:
            raise InvalidPhaseCode(code)
        return phase


_PHASE_CODES = {"O": Phase.OIL, "G": Phase.GAS, "W": Phase.WATER}


@dataclass
class ProductionRecord:
    """Volumes for one well and one period; ``None`` means no reading."""
    oil: Optional[float] = None
    gas: Optional[float] = None
    water: Optional[float] = None

    def get(self, phase: Phase) -> Optional[float]:
        return getattr(self, phase.value)

    def set(self, phase: Phase, value: float) -> None:
        setattr(self, phase.value, value)


# well -> period -> volumes
Aggregate = Dict[WellAPI, Dict[ReportingPeriod, ProductionRecord]]
