"""
Pathogenicity Data

Predicted deleteriousness scores for a variant, as returned by a
pathogenicity data provider.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional

from ..errors import ConfigurationError


class PathogenicitySource(Enum):
    """Pathogenicity predictors."""

    POLYPHEN = "POLYPHEN"
    MUTATION_TASTER = "MUTATION_TASTER"
    SIFT = "SIFT"
    CADD = "CADD"
    REMM = "REMM"
    REVEL = "REVEL"
    MVP = "MVP"
    M_CAP = "M_CAP"
    MPC = "MPC"
    PRIMATE_AI = "PRIMATE_AI"


def parse_pathogenicity_sources(
    names: Optional[Iterable[str]], step: Optional[str] = None
) -> FrozenSet[PathogenicitySource]:
    """
    Parse pathogenicity source names.

    Raises:
        ConfigurationError: If a name is not a known source
    """
    sources = set()
    for name in names or []:
        try:
            sources.add(PathogenicitySource[str(name).strip().upper()])
        except KeyError:
            valid = ", ".join(s.name for s in PathogenicitySource)
            raise ConfigurationError(
                f"Illegal PathogenicitySource: '{name}'. Permitted sources are any of: {valid}",
                step=step,
                option="pathogenicitySources",
            ) from None
    return frozenset(sources)


def normalise_score(source: PathogenicitySource, raw: float) -> float:
    """
    Convert a raw predictor value to [0, 1], higher = more pathogenic.

    SIFT is inverted (low raw = damaging) and CADD is a PHRED-scaled rank.
    """
    if source == PathogenicitySource.SIFT:
        return 1.0 - raw
    if source == PathogenicitySource.CADD:
        return 1.0 - 10 ** (-raw / 10.0)
    return raw


@dataclass(frozen=True)
class PathogenicityData:
    """
    Raw predictor scores for one variant.

    Attributes:
        scores: Source -> raw predictor value
    """

    scores: Dict[PathogenicitySource, float] = field(default_factory=dict)

    def restricted_to(self, sources: Iterable[PathogenicitySource]) -> "PathogenicityData":
        wanted = set(sources)
        return PathogenicityData(
            scores={s: v for s, v in self.scores.items() if s in wanted}
        )

    def has_predicted_score(self) -> bool:
        return bool(self.scores)

    def most_pathogenic_score(self) -> Optional[float]:
        """Highest normalised score, or None with no predictions."""
        if not self.scores:
            return None
        return max(normalise_score(s, v) for s, v in self.scores.items())
