"""
Tests for genotype calls.
"""

import pytest

from variant_triage.model import Genotype, GenotypeType


class TestGenotypeParse:
    """Tests for Genotype.parse."""

    def test_unphased_het(self):
        gt = Genotype.parse("0/1")
        assert gt.alleles == (0, 1)
        assert not gt.phased
        assert gt.type == GenotypeType.HET

    def test_phased_het(self):
        gt = Genotype.parse("1|0")
        assert gt.phased
        assert gt.is_het
        assert gt.alt_haplotypes() == (0,)

    def test_hom_ref_and_hom_var(self):
        assert Genotype.parse("0/0").is_hom_ref
        assert Genotype.parse("1/1").is_hom_var
        assert Genotype.parse("2|2").is_hom_var

    def test_multiallelic_het(self):
        gt = Genotype.parse("1/2")
        assert gt.type == GenotypeType.HET
        assert gt.carries_alt

    def test_haploid_alt_is_hom_var(self):
        assert Genotype.parse("1").is_hom_var
        assert Genotype.parse("0").is_hom_ref

    def test_missing_calls(self):
        assert Genotype.parse("./.").type == GenotypeType.NO_CALL
        assert not Genotype.parse("./1").is_called
        assert not Genotype.parse(".").is_called

    @pytest.mark.parametrize("value", ["", "0/x", "0|1/1", "a"])
    def test_malformed_raises(self, value):
        with pytest.raises(ValueError):
            Genotype.parse(value)

    def test_str_round_trip(self):
        assert str(Genotype.parse("0|1")) == "0|1"
        assert str(Genotype.parse("./.")) == "./."


class TestPhase:
    """Tests for phase comparisons."""

    def test_unphased_has_no_haplotypes(self):
        assert Genotype.parse("0/1").alt_haplotypes() == ()

    def test_phase_comparable_same_block(self):
        a = Genotype.parse("0|1", phase_set=100)
        b = Genotype.parse("1|0", phase_set=100)
        assert a.is_phase_comparable(b)

    def test_different_phase_blocks_not_comparable(self):
        a = Genotype.parse("0|1", phase_set=100)
        b = Genotype.parse("0|1", phase_set=200)
        assert not a.is_phase_comparable(b)

    def test_unphased_not_comparable(self):
        assert not Genotype.parse("0|1").is_phase_comparable(Genotype.parse("0/1"))
