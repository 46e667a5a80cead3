# Message export module

from .exporter import Exporter
from .structure import ALTERNATIVE, MIXED, RELATED, StructurePlan, classify_structure

__all__ = [
    "Exporter",
    "StructurePlan",
    "classify_structure",
    "MIXED",
    "RELATED",
    "ALTERNATIVE",
]
