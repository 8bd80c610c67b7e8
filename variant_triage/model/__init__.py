"""
Model

Value types shared by every analysis step: variants, genes, genotypes,
pedigrees, filter results and the annotation data returned by providers.
"""

from .filter_result import FilterResult, FilterStatus, FilterType
from .frequency import FrequencyData, FrequencySource, parse_frequency_sources
from .gene import Gene, VariantPair
from .genotype import Genotype, GenotypeType
from .modes import ModeOfInheritance, RECESSIVE_MODES, parse_inheritance_modes
from .pathogenicity import (
    PathogenicityData,
    PathogenicitySource,
    parse_pathogenicity_sources,
)
from .pedigree import AffectionStatus, Individual, Pedigree, Sex
from .priority import PriorityType
from .variant import VariantEvaluation, normalise_chromosome
from .variant_effect import VariantEffect, parse_variant_effects

__all__ = [
    # Results
    "FilterResult",
    "FilterStatus",
    "FilterType",
    # Annotation data
    "FrequencyData",
    "FrequencySource",
    "parse_frequency_sources",
    "PathogenicityData",
    "PathogenicitySource",
    "parse_pathogenicity_sources",
    "VariantEffect",
    "parse_variant_effects",
    # Entities
    "Gene",
    "VariantPair",
    "VariantEvaluation",
    "normalise_chromosome",
    "Genotype",
    "GenotypeType",
    # Pedigree
    "AffectionStatus",
    "Individual",
    "Pedigree",
    "Sex",
    # Modes
    "ModeOfInheritance",
    "RECESSIVE_MODES",
    "parse_inheritance_modes",
    "PriorityType",
]
