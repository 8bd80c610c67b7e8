"""
Inheritance Mode Checker

Tests whether a gene's variants segregate with the disease in a family
under each requested mode of inheritance.

Rules per mode (individuals with unknown affection status, or without a
call for the variant, are skipped):

    AUTOSOMAL_DOMINANT  affected are heterozygous, unaffected are hom-ref
    AUTOSOMAL_RECESSIVE affected are hom-alt, unaffected are not, genotyped
                        parents of an affected carrier are not hom-ref;
                        or the variant is part of a compound het pair
    X_DOMINANT          affected carry the alt allele, unaffected do not
    X_RECESSIVE         affected females are hom-alt and affected males
                        carry the alt allele; unaffected males carry
                        nothing and unaffected females are not hom-alt;
                        or the variant is part of a compound het pair
    MITOCHONDRIAL       affected carry the alt allele, unaffected are
                        not hom-alt

Autosomal modes consider variants off the X, Y and MT contigs; X-linked
modes consider X only; the mitochondrial mode considers MT only.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterable, List, Sequence, Set
import logging

from ..model import (
    Individual,
    ModeOfInheritance,
    Pedigree,
    VariantEvaluation,
    VariantPair,
)
from .comp_het import CompHetChecker

logger = logging.getLogger(__name__)

_NON_AUTOSOMAL = frozenset({"X", "Y", "MT"})


@dataclass
class InheritanceCompatibility:
    """
    Outcome of checking one gene's variants.

    Attributes:
        compatible_modes: Modes at least one variant is compatible with
        variant_modes: Variant -> modes it is compatible with
        comp_het_pairs: Recessive mode -> compound heterozygous pairs
    """

    compatible_modes: FrozenSet[ModeOfInheritance] = frozenset()
    variant_modes: Dict[VariantEvaluation, Set[ModeOfInheritance]] = field(
        default_factory=dict
    )
    comp_het_pairs: Dict[ModeOfInheritance, List[VariantPair]] = field(default_factory=dict)

    @property
    def is_compatible(self) -> bool:
        return bool(self.compatible_modes)

    def compatible_variants(self) -> List[VariantEvaluation]:
        return [v for v, modes in self.variant_modes.items() if modes]


def _is_autosomal(variant: VariantEvaluation) -> bool:
    return variant.chromosome not in _NON_AUTOSOMAL


class InheritanceModeChecker:
    """
    Evaluates variants against modes of inheritance for a pedigree.

    With an empty pedigree there is no segregation evidence and every
    variant in scope for a mode is compatible with it.
    """

    def __init__(self, pedigree: Pedigree):
        self.pedigree = pedigree
        self.comp_het_checker = CompHetChecker(pedigree)

    def check(
        self,
        variants: Sequence[VariantEvaluation],
        modes: Iterable[ModeOfInheritance],
    ) -> InheritanceCompatibility:
        """
        Check variants (typically a gene's passing variants) against modes.

        Args:
            variants: Variants in their original order
            modes: Modes to test

        Returns:
            InheritanceCompatibility for the variants
        """
        variant_modes: Dict[VariantEvaluation, Set[ModeOfInheritance]] = {
            v: set() for v in variants
        }
        comp_het_pairs: Dict[ModeOfInheritance, List[VariantPair]] = {}

        for mode in modes:
            if mode == ModeOfInheritance.ANY:
                for v in variants:
                    variant_modes[v].add(mode)
                continue

            in_scope, single_check = self._rules_for(mode)
            candidates = [v for v in variants if in_scope(v)]

            for v in candidates:
                if single_check(v):
                    variant_modes[v].add(mode)

            if mode.is_recessive:
                pairs = self.comp_het_checker.find_compatible_pairs(candidates)
                if pairs:
                    comp_het_pairs[mode] = pairs
                    logger.debug(f"{len(pairs)} compound heterozygous pairs for {mode.name}")
                for first, second in pairs:
                    variant_modes[first].add(mode)
                    variant_modes[second].add(mode)

        compatible = frozenset(
            mode for found in variant_modes.values() for mode in found
        )
        return InheritanceCompatibility(
            compatible_modes=compatible,
            variant_modes=variant_modes,
            comp_het_pairs=comp_het_pairs,
        )

    def _rules_for(self, mode: ModeOfInheritance):
        rules: Dict[ModeOfInheritance, tuple] = {
            ModeOfInheritance.AUTOSOMAL_DOMINANT: (_is_autosomal, self.is_dominant_compatible),
            ModeOfInheritance.AUTOSOMAL_RECESSIVE: (_is_autosomal, self.is_hom_alt_compatible),
            ModeOfInheritance.X_DOMINANT: (
                lambda v: v.is_x_chromosomal, self.is_x_dominant_compatible
            ),
            ModeOfInheritance.X_RECESSIVE: (
                lambda v: v.is_x_chromosomal, self.is_x_recessive_compatible
            ),
            ModeOfInheritance.MITOCHONDRIAL: (
                lambda v: v.is_mitochondrial, self.is_mitochondrial_compatible
            ),
        }
        return rules[mode]

    # ==================== Single-variant rules ====================

    def _all_informative(
        self,
        variant: VariantEvaluation,
        affected_ok: Callable,
        unaffected_ok: Callable,
    ) -> bool:
        for individual in self.pedigree:
            gt = variant.genotype(individual.id)
            if gt is None:
                continue
            if individual.is_affected and not affected_ok(individual, gt):
                return False
            if individual.is_unaffected and not unaffected_ok(individual, gt):
                return False
        return True

    def is_dominant_compatible(self, variant: VariantEvaluation) -> bool:
        return self._all_informative(
            variant,
            lambda ind, gt: gt.is_het,
            lambda ind, gt: gt.is_hom_ref,
        )

    def is_hom_alt_compatible(self, variant: VariantEvaluation) -> bool:
        if not self._all_informative(
            variant,
            lambda ind, gt: gt.is_hom_var,
            lambda ind, gt: not gt.is_hom_var,
        ):
            return False
        return self._parents_transmit(variant, self.pedigree.affected())

    def is_x_dominant_compatible(self, variant: VariantEvaluation) -> bool:
        return self._all_informative(
            variant,
            lambda ind, gt: gt.carries_alt,
            lambda ind, gt: not gt.carries_alt,
        )

    def is_x_recessive_compatible(self, variant: VariantEvaluation) -> bool:
        def affected_ok(individual: Individual, gt) -> bool:
            return gt.carries_alt if individual.is_male else gt.is_hom_var

        def unaffected_ok(individual: Individual, gt) -> bool:
            return not gt.carries_alt if individual.is_male else not gt.is_hom_var

        return self._all_informative(variant, affected_ok, unaffected_ok)

    def is_mitochondrial_compatible(self, variant: VariantEvaluation) -> bool:
        return self._all_informative(
            variant,
            lambda ind, gt: gt.carries_alt,
            lambda ind, gt: not gt.is_hom_var,
        )

    def _parents_transmit(
        self, variant: VariantEvaluation, affected: List[Individual]
    ) -> bool:
        """Genotyped parents of an affected individual must carry the allele."""
        for child in affected:
            if variant.genotype(child.id) is None:
                continue
            for parent in self.pedigree.parents_of(child):
                gt = variant.genotype(parent.id)
                if gt is not None and gt.is_hom_ref:
                    return False
        return True
