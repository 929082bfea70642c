"""
This module provides a convenient entry point for setting global
configuration options for the typeweave package.
"""

from typeweave._utils import set_typeweave_option

__all__ = ["set_typeweave_option"]
