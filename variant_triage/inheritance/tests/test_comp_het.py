"""
Tests for compound heterozygous pair resolution.
"""

import pytest

from variant_triage.inheritance import CompHetChecker, Phase, phase_between
from variant_triage.model import (
    AffectionStatus,
    Genotype,
    Individual,
    Pedigree,
    Sex,
    VariantEvaluation,
)


def variant(chrom, pos, ref, alt, **genotypes):
    return VariantEvaluation(
        chrom, pos, ref, alt,
        gene_symbol="ABC",
        gene_id=123,
        genotypes={sample: Genotype.parse(gt) for sample, gt in genotypes.items()},
    )


@pytest.fixture
def siblings_with_mother():
    """Two affected brothers, unaffected mother, father unknown."""
    return Pedigree.from_records([
        {"id": "Cain", "familyId": "1", "paternalId": "0", "maternalId": "Eve",
         "sex": "MALE", "affectionStatus": "AFFECTED"},
        {"id": "Abel", "familyId": "1", "paternalId": "0", "maternalId": "Eve",
         "sex": "MALE", "affectionStatus": "AFFECTED"},
        {"id": "Eve", "familyId": "1", "paternalId": "0", "maternalId": "0",
         "sex": "FEMALE", "affectionStatus": "UNAFFECTED"},
    ])


@pytest.fixture
def trio():
    return Pedigree([
        Individual("child", "F1", "dad", "mum", Sex.MALE, AffectionStatus.AFFECTED),
        Individual("dad", "F1", None, None, Sex.MALE, AffectionStatus.UNAFFECTED),
        Individual("mum", "F1", None, None, Sex.FEMALE, AffectionStatus.UNAFFECTED),
    ])


class TestPhaseBetween:
    """Tests for phase_between."""

    def test_cis(self):
        assert phase_between(Genotype.parse("1|0"), Genotype.parse("1|0")) == Phase.CIS

    def test_trans(self):
        assert phase_between(Genotype.parse("1|0"), Genotype.parse("0|1")) == Phase.TRANS

    def test_unphased_is_unknown(self):
        assert phase_between(Genotype.parse("1|0"), Genotype.parse("0/1")) is None

    def test_hom_is_unknown(self):
        assert phase_between(Genotype.parse("1|1"), Genotype.parse("0|1")) is None

    def test_different_phase_sets_unknown(self):
        a = Genotype.parse("1|0", phase_set=1)
        b = Genotype.parse("1|0", phase_set=2)
        assert phase_between(a, b) is None


class TestCompHetChecker:
    """Tests for CompHetChecker."""

    def test_brothers_sharing_maternal_haplotype(self, siblings_with_mother):
        """p1 and p2 travel together from the mother; p3 lies on the other haplotype."""
        p1 = variant("1", 98518687, "T", "A", Cain="1|0", Abel="1|0", Eve="1|0")
        p2 = variant("1", 98518683, "T", "A", Cain="1|0", Abel="1|0", Eve="1|0")
        p3 = variant("1", 97723020, "A", "G", Cain="0|1", Abel="0|1", Eve="0|0")

        pairs = CompHetChecker(siblings_with_mother).find_compatible_pairs([p1, p2, p3])

        assert pairs == [(p1, p3), (p2, p3)]

    def test_brothers_with_unphased_third_variant(self, siblings_with_mother):
        p1 = variant("1", 98518687, "T", "A", Cain="1|0", Abel="1|0", Eve="1|0")
        p2 = variant("1", 98518683, "T", "A", Cain="1|0", Abel="1|0", Eve="1|0")
        p3 = variant("1", 97723020, "A", "G", Cain="0/1", Abel="0/1", Eve="0/0")

        pairs = CompHetChecker(siblings_with_mother).find_compatible_pairs([p1, p2, p3])

        assert pairs == [(p1, p3), (p2, p3)]

    def test_fewer_than_two_variants(self, trio):
        checker = CompHetChecker(trio)
        assert checker.find_compatible_pairs([]) == []
        assert checker.find_compatible_pairs([variant("1", 1, "A", "T", child="0/1")]) == []

    def test_classic_trio(self, trio):
        paternal = variant("1", 100, "A", "T", child="0/1", dad="0/1", mum="0/0")
        maternal = variant("1", 200, "A", "T", child="0/1", dad="0/0", mum="0/1")
        assert CompHetChecker(trio).find_compatible_pairs([paternal, maternal]) == [
            (paternal, maternal)
        ]

    def test_unaffected_parent_hom_alt_excluded(self, trio):
        first = variant("1", 100, "A", "T", child="0/1", dad="1/1", mum="0/0")
        second = variant("1", 200, "A", "T", child="0/1", dad="0/0", mum="0/1")
        assert CompHetChecker(trio).find_compatible_pairs([first, second]) == []

    def test_both_alleles_from_one_parent_excluded(self, trio):
        first = variant("1", 100, "A", "T", child="0/1", dad="0/1", mum="0/0")
        second = variant("1", 200, "A", "T", child="0/1", dad="0/1", mum="0/0")
        assert CompHetChecker(trio).find_compatible_pairs([first, second]) == []

    def test_parent_het_at_both_sites_is_inconclusive(self):
        """Without the other parent there is no evidence of joint transmission."""
        pedigree = Pedigree([
            Individual("child", "F1", "dad", None, Sex.MALE, AffectionStatus.AFFECTED),
            Individual("dad", "F1", None, None, Sex.MALE, AffectionStatus.UNAFFECTED),
        ])
        first = variant("1", 100, "A", "T", child="0/1", dad="0/1")
        second = variant("1", 200, "A", "T", child="0/1", dad="0/1")
        assert CompHetChecker(pedigree).find_compatible_pairs([first, second]) == [
            (first, second)
        ]

    def test_missing_parent_record_never_disqualifies(self):
        """Mother is named but absent from the pedigree and unsequenced."""
        pedigree = Pedigree([
            Individual("child", "F1", "dad", "mum", Sex.FEMALE, AffectionStatus.AFFECTED),
            Individual("dad", "F1", None, None, Sex.MALE, AffectionStatus.UNAFFECTED),
        ])
        paternal = variant("1", 100, "A", "T", child="0/1", dad="0/1")
        other = variant("1", 200, "A", "T", child="0/1", dad="0/0")
        assert CompHetChecker(pedigree).find_compatible_pairs([paternal, other]) == [
            (paternal, other)
        ]

    def test_missing_calls_are_uninformative(self, trio):
        first = variant("1", 100, "A", "T", child="0/1", dad="./.", mum="0/0")
        second = variant("1", 200, "A", "T", child="0/1", dad="1/1")
        assert CompHetChecker(trio).find_compatible_pairs([first, second]) == [(first, second)]

    def test_affected_hom_alt_excluded(self, trio):
        first = variant("1", 100, "A", "T", child="1/1")
        second = variant("1", 200, "A", "T", child="0/1")
        assert CompHetChecker(trio).find_compatible_pairs([first, second]) == []

    def test_affected_in_cis_excluded(self, trio):
        first = variant("1", 100, "A", "T", child="0|1")
        second = variant("1", 200, "A", "T", child="0|1")
        assert CompHetChecker(trio).find_compatible_pairs([first, second]) == []

    def test_phase_overrides_genotype_inference(self, trio):
        """Both alleles appear to come from dad, but phase puts them in trans."""
        first = variant("1", 100, "A", "T", child="0|1", dad="0/1", mum="0/0")
        second = variant("1", 200, "A", "T", child="1|0", dad="0/1", mum="0/0")
        assert CompHetChecker(trio).find_compatible_pairs([first, second]) == [(first, second)]

    def test_unaffected_in_trans_excluded(self, trio):
        first = variant("1", 100, "A", "T", child="0|1", mum="0|1")
        second = variant("1", 200, "A", "T", child="1|0", mum="1|0")
        assert CompHetChecker(trio).find_compatible_pairs([first, second]) == []

    def test_unknown_affection_status_ignored(self):
        pedigree = Pedigree([
            Individual("child", affection_status=AffectionStatus.AFFECTED),
            Individual("aunt", affection_status=AffectionStatus.UNKNOWN),
        ])
        first = variant("1", 100, "A", "T", child="0/1", aunt="1/1")
        second = variant("1", 200, "A", "T", child="0/1", aunt="1/1")
        assert CompHetChecker(pedigree).find_compatible_pairs([first, second]) == [(first, second)]

    def test_variant_may_appear_in_several_pairs(self, trio):
        a = variant("1", 100, "A", "T", child="0/1", dad="0/1", mum="0/0")
        b = variant("1", 200, "A", "T", child="0/1", dad="0/0", mum="0/1")
        c = variant("1", 300, "A", "T", child="0/1", dad="0/0", mum="0/1")
        assert CompHetChecker(trio).find_compatible_pairs([a, b, c]) == [(a, b), (a, c)]
