"""
Inheritance

Segregation checks of a gene's variants against modes of inheritance,
including compound heterozygous pair resolution.
"""

from .checker import InheritanceCompatibility, InheritanceModeChecker
from .comp_het import CompHetChecker, Phase, phase_between

__all__ = [
    "CompHetChecker",
    "InheritanceCompatibility",
    "InheritanceModeChecker",
    "Phase",
    "phase_between",
]
