"""
Tests for variants, genes and pedigrees.
"""

import pytest

from variant_triage.errors import ConfigurationError
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
    normalise_chromosome,
)


def make_variant(chrom="1", pos=100, **kwargs):
    return VariantEvaluation(chrom, pos, "A", "T", **kwargs)


class TestVariantEvaluation:
    """Tests for VariantEvaluation."""

    @pytest.mark.parametrize("raw,expected", [
        ("chr1", "1"),
        ("chrX", "X"),
        ("chrM", "MT"),
        ("M", "MT"),
        (23, "X"),
        ("25", "MT"),
    ])
    def test_chromosome_normalised(self, raw, expected):
        assert normalise_chromosome(raw) == expected
        assert make_variant(chrom=raw).chromosome == expected

    def test_passes_until_a_fail_is_recorded(self):
        variant = make_variant()
        assert variant.passed_filters()

        variant.add_filter_result("qualityFilter", FilterResult.pass_(FilterType.QUALITY_FILTER))
        assert variant.passed_filters()

        variant.add_filter_result("frequencyFilter", FilterResult.fail(FilterType.FREQUENCY_FILTER))
        assert not variant.passed_filters()
        assert variant.failed_filter_types() == [FilterType.FREQUENCY_FILTER]
        assert not variant.passed_filter(FilterType.FREQUENCY_FILTER)
        assert variant.passed_filter(FilterType.QUALITY_FILTER)

    def test_results_keep_evaluation_order(self):
        variant = make_variant()
        variant.add_filter_result("intervalFilter", FilterResult.pass_(FilterType.INTERVAL_FILTER))
        variant.add_filter_result("qualityFilter", FilterResult.pass_(FilterType.QUALITY_FILTER))
        assert list(variant.filter_results) == ["intervalFilter", "qualityFilter"]

    def test_duplicate_step_result_rejected(self):
        variant = make_variant()
        variant.add_filter_result("qualityFilter", FilterResult.pass_(FilterType.QUALITY_FILTER))
        with pytest.raises(ValueError, match="already has a result"):
            variant.add_filter_result("qualityFilter", FilterResult.fail(FilterType.QUALITY_FILTER))

    def test_genotype_lookup_ignores_no_calls(self):
        variant = make_variant(genotypes={
            "proband": Genotype.parse("0/1"),
            "mother": Genotype.parse("./."),
        })
        assert variant.genotype("proband").is_het
        assert variant.genotype("mother") is None
        assert variant.genotype("father") is None


class TestGene:
    """Tests for Gene."""

    def test_passed_filters_needs_a_passing_variant(self):
        gene = Gene("FGFR2", 2263)
        assert not gene.passed_filters()

        variant = make_variant()
        gene.add_variant(variant)
        assert gene.passed_filters()

        variant.add_filter_result("intervalFilter", FilterResult.fail(FilterType.INTERVAL_FILTER))
        assert not gene.passed_filters()

    def test_gene_level_fail(self):
        gene = Gene("FGFR2", 2263, [make_variant()])
        gene.add_filter_result(
            "inheritanceFilter", FilterResult.fail(FilterType.INHERITANCE_FILTER)
        )
        assert gene.has_passing_variant()
        assert not gene.passed_filters()

    def test_passed_variants_keep_order(self):
        first, second, third = make_variant(pos=1), make_variant(pos=2), make_variant(pos=3)
        second.add_filter_result("intervalFilter", FilterResult.fail(FilterType.INTERVAL_FILTER))
        gene = Gene("ABC", 123, [first, second, third])
        assert gene.passed_variant_evaluations() == [first, third]

    def test_priority_score_is_product(self):
        gene = Gene("ABC", 123)
        assert gene.priority_score == 1.0
        gene.add_priority_score(PriorityType.OMIM_PRIORITY, 0.5)
        gene.add_priority_score(PriorityType.PHIVE_PRIORITY, 0.8)
        assert gene.priority_score == pytest.approx(0.4)
        assert gene.get_priority_score(PriorityType.HIPHIVE_PRIORITY) is None

    def test_inheritance_findings(self):
        gene = Gene("ABC", 123)
        gene.set_inheritance_findings({ModeOfInheritance.AUTOSOMAL_RECESSIVE}, {})
        assert gene.is_compatible_with(ModeOfInheritance.AUTOSOMAL_RECESSIVE)
        assert not gene.is_compatible_with(ModeOfInheritance.AUTOSOMAL_DOMINANT)

    def test_to_dict(self):
        gene = Gene("ABC", 123, [make_variant()])
        data = gene.to_dict()
        assert data["symbol"] == "ABC"
        assert data["passed"] is True
        assert data["n_variants"] == 1


class TestPedigree:
    """Tests for Pedigree and Individual."""

    @pytest.fixture
    def trio_records(self):
        return [
            {"id": "child", "familyId": "F1", "paternalId": "dad", "maternalId": "mum",
             "sex": "MALE", "affectionStatus": "AFFECTED"},
            {"id": "dad", "familyId": "F1", "paternalId": "0", "maternalId": "0",
             "sex": "1", "affectionStatus": "1"},
            {"id": "mum", "familyId": "F1", "sex": "FEMALE", "affectionStatus": "UNAFFECTED"},
        ]

    def test_from_records(self, trio_records):
        pedigree = Pedigree.from_records(trio_records)
        assert len(pedigree) == 3
        child = pedigree.get("child")
        assert child.is_affected
        assert child.sex == Sex.MALE
        assert [p.id for p in pedigree.parents_of(child)] == ["dad", "mum"]
        assert pedigree.get("dad").paternal_id is None
        assert pedigree.get("dad").affection_status == AffectionStatus.UNAFFECTED

    def test_children_and_parents(self, trio_records):
        pedigree = Pedigree.from_records(trio_records)
        assert [c.id for c in pedigree.children_of(pedigree.get("mum"))] == ["child"]
        assert pedigree.is_parent("dad")
        assert not pedigree.is_parent("child")
        assert [i.id for i in pedigree.affected()] == ["child"]
        assert {i.id for i in pedigree.unaffected()} == {"dad", "mum"}

    def test_missing_parent_record_is_unknown(self):
        pedigree = Pedigree([Individual("child", maternal_id="mum")])
        assert pedigree.parents_of(pedigree.get("child")) == []

    def test_duplicate_individual_rejected(self):
        with pytest.raises(ConfigurationError, match="Duplicate"):
            Pedigree([Individual("a"), Individual("a")])

    def test_self_parent_rejected(self):
        with pytest.raises(ConfigurationError, match="own parent"):
            Pedigree([Individual("a", paternal_id="a")])

    def test_unknown_affection_status_rejected(self):
        with pytest.raises(ConfigurationError):
            Individual.from_dict({"id": "a", "affectionStatus": "MAYBE"})
