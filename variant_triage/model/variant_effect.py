"""
Variant Effects

Functional consequence classes (Sequence Ontology terms) and the default
pathogenicity each implies when no predictor score is available.
"""

from enum import Enum
from typing import Iterable, FrozenSet

from ..errors import ConfigurationError


class VariantEffect(Enum):
    """Sequence Ontology variant consequence terms."""

    # High impact
    FRAMESHIFT_VARIANT = "frameshift_variant"
    STOP_GAINED = "stop_gained"
    SPLICE_ACCEPTOR_VARIANT = "splice_acceptor_variant"
    SPLICE_DONOR_VARIANT = "splice_donor_variant"
    START_LOST = "start_lost"
    STOP_LOST = "stop_lost"
    EXON_LOSS_VARIANT = "exon_loss_variant"

    # Moderate impact
    MISSENSE_VARIANT = "missense_variant"
    INFRAME_INSERTION = "inframe_insertion"
    INFRAME_DELETION = "inframe_deletion"
    PROTEIN_ALTERING_VARIANT = "protein_altering_variant"

    # Low impact
    SPLICE_REGION_VARIANT = "splice_region_variant"
    SYNONYMOUS_VARIANT = "synonymous_variant"
    START_RETAINED_VARIANT = "start_retained_variant"
    STOP_RETAINED_VARIANT = "stop_retained_variant"

    # Modifier
    CODING_TRANSCRIPT_INTRON_VARIANT = "coding_transcript_intron_variant"
    NON_CODING_TRANSCRIPT_INTRON_VARIANT = "non_coding_transcript_intron_variant"
    NON_CODING_TRANSCRIPT_EXON_VARIANT = "non_coding_transcript_exon_variant"
    FIVE_PRIME_UTR_EXON_VARIANT = "5_prime_UTR_exon_variant"
    THREE_PRIME_UTR_EXON_VARIANT = "3_prime_UTR_exon_variant"
    UPSTREAM_GENE_VARIANT = "upstream_gene_variant"
    DOWNSTREAM_GENE_VARIANT = "downstream_gene_variant"
    INTERGENIC_VARIANT = "intergenic_variant"
    REGULATORY_REGION_VARIANT = "regulatory_region_variant"

    SEQUENCE_VARIANT = "sequence_variant"

    @classmethod
    def from_name(cls, name: str) -> "VariantEffect":
        """Look up an effect by enum name or SO term."""
        token = str(name).strip()
        if token.upper() in cls.__members__:
            return cls[token.upper()]
        for effect in cls:
            if effect.value == token:
                return effect
        raise ValueError(f"Unknown variant effect: {name!r}")

    @property
    def default_pathogenicity(self) -> float:
        return DEFAULT_PATHOGENICITY.get(self, 0.0)


# Missense pathogenicity is normally taken from predictors; this is the
# fallback when none are available.
DEFAULT_PATHOGENICITY = {
    VariantEffect.FRAMESHIFT_VARIANT: 0.95,
    VariantEffect.STOP_GAINED: 0.95,
    VariantEffect.SPLICE_ACCEPTOR_VARIANT: 0.95,
    VariantEffect.SPLICE_DONOR_VARIANT: 0.95,
    VariantEffect.START_LOST: 0.95,
    VariantEffect.STOP_LOST: 0.9,
    VariantEffect.EXON_LOSS_VARIANT: 0.95,
    VariantEffect.MISSENSE_VARIANT: 0.6,
    VariantEffect.INFRAME_INSERTION: 0.85,
    VariantEffect.INFRAME_DELETION: 0.85,
    VariantEffect.PROTEIN_ALTERING_VARIANT: 0.85,
    VariantEffect.SPLICE_REGION_VARIANT: 0.8,
    VariantEffect.SYNONYMOUS_VARIANT: 0.1,
}

# Effects a regulatory feature filter removes unless they fall in a
# regulatory region
NON_REGULATORY_NON_CODING_EFFECTS = frozenset({
    VariantEffect.INTERGENIC_VARIANT,
    VariantEffect.UPSTREAM_GENE_VARIANT,
})


def parse_variant_effects(names: Iterable[str]) -> FrozenSet[VariantEffect]:
    """
    Parse a list of effect names.

    Raises:
        ConfigurationError: If any name is not a known effect
    """
    effects = set()
    for name in names:
        try:
            effects.add(VariantEffect.from_name(name))
        except ValueError:
            valid = ", ".join(e.name for e in VariantEffect)
            raise ConfigurationError(
                f"Illegal VariantEffect: '{name}'. Permitted effects are any of: {valid}",
                step="variantEffectFilter",
                option="remove",
            ) from None
    return frozenset(effects)
