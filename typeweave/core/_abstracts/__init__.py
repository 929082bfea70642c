from .generator import AbstractTypeGenerator
from .graph import _BaseGraph
from .visitors import TypeGenerationVisitor, TypeInspectionVisitor

__all__ = [
    "AbstractTypeGenerator",
    "TypeGenerationVisitor",
    "TypeInspectionVisitor",
    "_BaseGraph",
]
