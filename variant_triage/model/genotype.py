"""
Genotypes

Per-individual genotype calls, optionally phase-tagged.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class GenotypeType(Enum):
    """Zygosity classes of a genotype call."""

    HOM_REF = "HOM_REF"
    HET = "HET"
    HOM_VAR = "HOM_VAR"
    NO_CALL = "NO_CALL"


@dataclass(frozen=True)
class Genotype:
    """
    A genotype call for one individual at one site.

    Attributes:
        alleles: Allele indices (0 = reference, None = missing call)
        phased: Whether the alleles are ordered by haplotype ("0|1")
        phase_set: Phase block identifier; phased calls are only comparable
            within the same block
    """

    alleles: Tuple[Optional[int], ...]
    phased: bool = False
    phase_set: Optional[int] = None

    @classmethod
    def parse(cls, gt: str, phase_set: Optional[int] = None) -> "Genotype":
        """
        Parse a VCF-style GT string such as "0/1", "1|0", "./." or "1".

        Raises:
            ValueError: If the string is not a valid GT value
        """
        if gt is None or not gt.strip():
            raise ValueError("Empty genotype string")
        gt = gt.strip()
        if "/" in gt and "|" in gt:
            raise ValueError(f"Mixed phasing separators in genotype: {gt!r}")

        phased = "|" in gt
        parts = gt.split("|") if phased else gt.split("/")

        alleles = []
        for part in parts:
            if part == ".":
                alleles.append(None)
            elif part.isdigit():
                alleles.append(int(part))
            else:
                raise ValueError(f"Invalid allele {part!r} in genotype: {gt!r}")

        return cls(alleles=tuple(alleles), phased=phased, phase_set=phase_set)

    @property
    def type(self) -> GenotypeType:
        """Zygosity of the call."""
        if not self.alleles or any(a is None for a in self.alleles):
            return GenotypeType.NO_CALL
        if all(a == 0 for a in self.alleles):
            return GenotypeType.HOM_REF
        if all(a != 0 for a in self.alleles) and len(set(self.alleles)) == 1:
            return GenotypeType.HOM_VAR
        return GenotypeType.HET

    @property
    def is_called(self) -> bool:
        return self.type != GenotypeType.NO_CALL

    @property
    def is_het(self) -> bool:
        return self.type == GenotypeType.HET

    @property
    def is_hom_ref(self) -> bool:
        return self.type == GenotypeType.HOM_REF

    @property
    def is_hom_var(self) -> bool:
        return self.type == GenotypeType.HOM_VAR

    @property
    def carries_alt(self) -> bool:
        """True if any called allele is non-reference."""
        return any(a is not None and a != 0 for a in self.alleles)

    def alt_haplotypes(self) -> Tuple[int, ...]:
        """Haplotype indices carrying a non-reference allele (phased calls only)."""
        if not self.phased:
            return ()
        return tuple(
            i for i, allele in enumerate(self.alleles)
            if allele is not None and allele != 0
        )

    def is_phase_comparable(self, other: "Genotype") -> bool:
        """Whether haplotype indices of the two calls refer to the same chromosomes."""
        return (
            self.phased
            and other.phased
            and self.phase_set == other.phase_set
            and len(self.alleles) == len(other.alleles)
        )

    def __str__(self) -> str:
        sep = "|" if self.phased else "/"
        return sep.join("." if a is None else str(a) for a in self.alleles)
