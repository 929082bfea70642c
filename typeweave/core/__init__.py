"""
This module exposes the core components of the typeweave engine: the type
generator with its `augment` entry point, the augmented type descriptors and
the visualization tools for generation passes.
"""

from typeweave.core.descriptor import AugmentedType, GeneratedConstructor
from typeweave.core.generator import DynamicTypeGenerator, augment, default_generator
from typeweave.core.nxgraph import ClaimGraph
from typeweave.core._matrix import ClaimMatrix

__all__ = [
    "AugmentedType",
    "ClaimGraph",
    "ClaimMatrix",
    "DynamicTypeGenerator",
    "GeneratedConstructor",
    "augment",
    "default_generator",
]
