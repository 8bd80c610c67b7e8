"""
Frequency Data

Population allele frequencies for a variant, as returned by a frequency
data provider. Frequencies are percentages (0-100).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional
import math

from ..errors import ConfigurationError


class FrequencySource(Enum):
    """Population frequency databases."""

    THOUSAND_GENOMES = "1000Genomes"
    TOPMED = "TOPMed"
    UK10K = "UK10K"
    LOCAL = "LOCAL"

    ESP_AFRICAN_AMERICAN = "ESP AA"
    ESP_EUROPEAN_AMERICAN = "ESP EA"
    ESP_ALL = "ESP All"

    EXAC_AFRICAN_INC_AFRICAN_AMERICAN = "ExAC AFR"
    EXAC_AMERICAN = "ExAC AMR"
    EXAC_EAST_ASIAN = "ExAC EAS"
    EXAC_FINNISH = "ExAC FIN"
    EXAC_NON_FINNISH_EUROPEAN = "ExAC NFE"
    EXAC_SOUTH_ASIAN = "ExAC SAS"
    EXAC_OTHER = "ExAC OTH"

    GNOMAD_E_AFR = "gnomAD_E_AFR"
    GNOMAD_E_AMR = "gnomAD_E_AMR"
    GNOMAD_E_ASJ = "gnomAD_E_ASJ"
    GNOMAD_E_EAS = "gnomAD_E_EAS"
    GNOMAD_E_FIN = "gnomAD_E_FIN"
    GNOMAD_E_NFE = "gnomAD_E_NFE"
    GNOMAD_E_OTH = "gnomAD_E_OTH"
    GNOMAD_E_SAS = "gnomAD_E_SAS"

    GNOMAD_G_AFR = "gnomAD_G_AFR"
    GNOMAD_G_AMR = "gnomAD_G_AMR"
    GNOMAD_G_ASJ = "gnomAD_G_ASJ"
    GNOMAD_G_EAS = "gnomAD_G_EAS"
    GNOMAD_G_FIN = "gnomAD_G_FIN"
    GNOMAD_G_NFE = "gnomAD_G_NFE"
    GNOMAD_G_OTH = "gnomAD_G_OTH"
    GNOMAD_G_SAS = "gnomAD_G_SAS"


def parse_frequency_sources(
    names: Optional[Iterable[str]], step: Optional[str] = None
) -> FrozenSet[FrequencySource]:
    """
    Parse frequency source names.

    Raises:
        ConfigurationError: If a name is not a known source
    """
    sources = set()
    for name in names or []:
        try:
            sources.add(FrequencySource[str(name).strip().upper()])
        except KeyError:
            valid = ", ".join(s.name for s in FrequencySource)
            raise ConfigurationError(
                f"Illegal FrequencySource: '{name}'. Permitted sources are any of: {valid}",
                step=step,
                option="frequencySources",
            ) from None
    return frozenset(sources)


@dataclass(frozen=True)
class FrequencyData:
    """
    Observed allele frequencies for one variant.

    Attributes:
        rs_id: dbSNP identifier, if the variant is known
        frequencies: Source -> frequency as a percentage
    """

    rs_id: Optional[str] = None
    frequencies: Dict[FrequencySource, float] = field(default_factory=dict)

    def restricted_to(self, sources: Iterable[FrequencySource]) -> "FrequencyData":
        """Return a copy holding only the requested sources."""
        wanted = set(sources)
        return FrequencyData(
            rs_id=self.rs_id,
            frequencies={s: f for s, f in self.frequencies.items() if s in wanted},
        )

    @property
    def max_frequency(self) -> float:
        """Highest observed frequency (percent), 0 when unobserved."""
        if not self.frequencies:
            return 0.0
        return max(self.frequencies.values())

    def is_represented_in_database(self) -> bool:
        """Known to dbSNP or observed in any population."""
        return bool(self.rs_id) or bool(self.frequencies)

    def score(self) -> float:
        """
        Rarity score in [0, 1].

        1 for unobserved variants, 0 above 2 %, exponential decay in between.
        """
        max_freq = self.max_frequency
        if max_freq <= 0:
            return 1.0
        if max_freq > 2:
            return 0.0
        return 1.13533 - (0.13533 * math.exp(max_freq))
