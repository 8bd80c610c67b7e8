"""
Tests for gene-level filters.
"""

import pytest

from variant_triage.filters import InheritanceFilter, PriorityScoreFilter
from variant_triage.model import (
    AffectionStatus,
    FilterResult,
    FilterType,
    Gene,
    Genotype,
    Individual,
    ModeOfInheritance,
    Pedigree,
    PriorityType,
    Sex,
    VariantEvaluation,
)


def variant(pos, **genotypes):
    return VariantEvaluation(
        "2", pos, "A", "G",
        genotypes={sample: Genotype.parse(gt) for sample, gt in genotypes.items()},
    )


@pytest.fixture
def trio():
    return Pedigree([
        Individual("child", "F1", "dad", "mum", Sex.FEMALE, AffectionStatus.AFFECTED),
        Individual("dad", "F1", None, None, Sex.MALE, AffectionStatus.UNAFFECTED),
        Individual("mum", "F1", None, None, Sex.FEMALE, AffectionStatus.UNAFFECTED),
    ])


class TestPriorityScoreFilter:
    """Tests for PriorityScoreFilter."""

    def test_pass_and_fail(self):
        f = PriorityScoreFilter(PriorityType.HIPHIVE_PRIORITY, 0.5)
        high = Gene("A", 1)
        high.add_priority_score(PriorityType.HIPHIVE_PRIORITY, 0.7)
        low = Gene("B", 2)
        low.add_priority_score(PriorityType.HIPHIVE_PRIORITY, 0.2)

        assert f.evaluate(high).passed
        assert f.evaluate(high).score == pytest.approx(0.7)
        assert f.evaluate(low).failed

    def test_missing_score_fails(self):
        gene = Gene("A", 1)
        gene.add_priority_score(PriorityType.OMIM_PRIORITY, 1.0)
        result = PriorityScoreFilter(PriorityType.HIPHIVE_PRIORITY, 0.5).evaluate(gene)
        assert result.failed
        assert "No HIPHIVE_PRIORITY score" in result.message


class TestInheritanceFilter:
    """Tests for InheritanceFilter."""

    def test_recessive_compound_het_passes(self, trio):
        gene = Gene("ABC", 1, [
            variant(100, child="0/1", dad="0/1", mum="0/0"),
            variant(200, child="0/1", dad="0/0", mum="0/1"),
        ])
        f = InheritanceFilter({ModeOfInheritance.AUTOSOMAL_RECESSIVE}, trio)
        compatibility = f.check(gene)
        assert compatibility.compatible_modes == {ModeOfInheritance.AUTOSOMAL_RECESSIVE}
        assert compatibility.comp_het_pairs[ModeOfInheritance.AUTOSOMAL_RECESSIVE] == [
            tuple(gene.variant_evaluations)
        ]
        assert f.evaluate(gene).passed

    def test_dominant_fails_when_unaffected_parent_carries(self, trio):
        gene = Gene("ABC", 1, [variant(100, child="0/1", dad="0/1", mum="0/0")])
        f = InheritanceFilter({ModeOfInheritance.AUTOSOMAL_DOMINANT}, trio)
        result = f.evaluate(gene)
        assert result.failed
        assert result.filter_type == FilterType.INHERITANCE_FILTER

    def test_only_passing_variants_are_checked(self, trio):
        de_novo = variant(100, child="0/1", dad="0/0", mum="0/0")
        inherited = variant(200, child="0/1", dad="0/1", mum="0/0")
        de_novo.add_filter_result(
            "frequencyFilter", FilterResult.fail(FilterType.FREQUENCY_FILTER)
        )
        gene = Gene("ABC", 1, [de_novo, inherited])
        f = InheritanceFilter({ModeOfInheritance.AUTOSOMAL_DOMINANT}, trio)
        assert f.evaluate(gene).failed

    def test_evaluate_does_not_mutate(self, trio):
        gene = Gene("ABC", 1, [variant(100, child="0/1", dad="0/0", mum="0/0")])
        InheritanceFilter({ModeOfInheritance.AUTOSOMAL_DOMINANT}, trio).evaluate(gene)
        assert gene.filter_results == {}
        assert gene.compatible_inheritance_modes == set()
