"""
Compound Heterozygosity

Finds pairs of variants in one gene that could together explain an
autosomal (or X-linked) recessive phenotype, given the pedigree and the
genotype calls of every family member.

A pair is kept unless some individual's data rules it out:

- Phased calls in the same phase block override genotype inference. An
  affected individual with both alternate alleles on one haplotype (cis)
  rules the pair out, as does an unaffected individual carrying them on
  different haplotypes (trans).
- Without usable phase, an affected individual must be heterozygous at
  both sites. An unaffected individual homozygous for either alternate
  allele rules the pair out; one heterozygous at both sites is
  inconclusive.
- When both parents of an affected individual are genotyped at both sites
  and one parent carries both variants while the other carries neither,
  the variants were inherited together and the pair is ruled out.

Individuals with a missing call at either site, with unknown affection
status, or absent from the pedigree contribute no evidence.
"""

from enum import Enum
from typing import List, Optional, Sequence
import logging

from ..model import Genotype, Individual, Pedigree, VariantEvaluation, VariantPair

logger = logging.getLogger(__name__)


class Phase(Enum):
    CIS = "cis"
    TRANS = "trans"


def phase_between(gt1: Genotype, gt2: Genotype) -> Optional[Phase]:
    """
    Phase relation of two heterozygous calls, or None if phase is unknown.

    Both calls must be phased within the same phase block and each must
    carry its alternate allele on exactly one haplotype.
    """
    if not (gt1.is_het and gt2.is_het and gt1.is_phase_comparable(gt2)):
        return None
    hap1 = gt1.alt_haplotypes()
    hap2 = gt2.alt_haplotypes()
    if len(hap1) != 1 or len(hap2) != 1:
        return None
    return Phase.CIS if hap1 == hap2 else Phase.TRANS


class CompHetChecker:
    """
    Resolves compound heterozygous variant pairs against a pedigree.

    Example:
        >>> checker = CompHetChecker(pedigree)
        >>> pairs = checker.find_compatible_pairs(gene.passed_variant_evaluations())
    """

    def __init__(self, pedigree: Pedigree):
        self.pedigree = pedigree

    def find_compatible_pairs(
        self, variants: Sequence[VariantEvaluation]
    ) -> List[VariantPair]:
        """
        All compatible unordered pairs.

        Pairs are emitted as (variants[i], variants[j]) with i < j, in
        input order, so the output is stable for a given input list.
        """
        pairs: List[VariantPair] = []
        for i, first in enumerate(variants):
            for second in variants[i + 1:]:
                if self.is_compatible_pair(first, second):
                    pairs.append((first, second))
        logger.debug(f"{len(pairs)} compound heterozygous pairs from {len(variants)} variants")
        return pairs

    def is_compatible_pair(self, first: VariantEvaluation, second: VariantEvaluation) -> bool:
        for individual in self.pedigree:
            if self._rules_out(individual, first, second):
                logger.debug(f"{individual.id} rules out pair {first} / {second}")
                return False
        return True

    def _rules_out(
        self,
        individual: Individual,
        first: VariantEvaluation,
        second: VariantEvaluation,
    ) -> bool:
        if not (individual.is_affected or individual.is_unaffected):
            return False
        gt1 = first.genotype(individual.id)
        gt2 = second.genotype(individual.id)
        if gt1 is None or gt2 is None:
            return False

        phase = phase_between(gt1, gt2)

        if individual.is_affected:
            if phase is not None:
                return phase == Phase.CIS
            if not (gt1.is_het and gt2.is_het):
                return True
            return self._inherited_together(individual, first, second)

        if phase is not None:
            return phase == Phase.TRANS
        return gt1.is_hom_var or gt2.is_hom_var

    def _inherited_together(
        self,
        child: Individual,
        first: VariantEvaluation,
        second: VariantEvaluation,
    ) -> bool:
        """Whether one parent carries both variants and the other neither."""
        father = self.pedigree.father_of(child)
        mother = self.pedigree.mother_of(child)
        if father is None or mother is None:
            return False

        carried = []
        for parent in (father, mother):
            gt1 = first.genotype(parent.id)
            gt2 = second.genotype(parent.id)
            if gt1 is None or gt2 is None:
                return False
            carried.append((gt1.carries_alt, gt2.carries_alt))

        both = (True, True)
        neither = (False, False)
        return (carried[0] == both and carried[1] == neither) or (
            carried[0] == neither and carried[1] == both
        )
