from .generator import SelectorGenerator, synthesize
from .patterns import ClassFilter, is_dynamic_id
from .uniqueness import identifies, is_unique

__all__ = [
    "ClassFilter",
    "SelectorGenerator",
    "identifies",
    "is_dynamic_id",
    "is_unique",
    "synthesize",
]
