"""
This module defines the exceptions raised while a specification type is
inspected and its augmented type is synthesized.

`TypeGenerationError`:
The single error surfaced by `augment`. Any failure of a generation pass is
wrapped in it (the original error is kept as `__cause__`), so callers only
need to handle one type. The message always names the specification type.

`AmbiguousPropertyClaimError`:
Raised when two capability handlers want to take ownership of the same
property. Every property is owned by at most one handler.

`AbstractMemberOnConcreteTypeError`:
Raised when an abstract member is left without an implementation by every
handler, so the generated type would not be instantiable.
"""

from typeweave._utils import MethodInfo

from ._formatter import TreeFormatter


class TypeGenerationError(Exception):
    """Raised when an augmented type cannot be generated for a type."""

    def __init__(self, type_: type, detail: str | None = None):
        self.type = type_
        formatter = TreeFormatter()
        formatter.node("Could not generate a decorated class for type ")
        formatter.append_type(type_)
        formatter.append(".")
        if detail:
            formatter.start_children()
            formatter.node(detail)
            formatter.end_children()
        super().__init__(str(formatter))


class AmbiguousPropertyClaimError(ValueError):
    """Raised when more than one handler claims the same property."""

    def __init__(self, property_name: str, *args):
        self.property_name = property_name
        super().__init__(f"Multiple matches for {property_name}", *args)


class AbstractMemberOnConcreteTypeError(ValueError):
    """Raised when an abstract member is not implemented by any handler."""

    def __init__(self, method: MethodInfo):
        self.method = method
        formatter = TreeFormatter()
        formatter.node("Cannot have abstract method ")
        formatter.append_method(method)
        formatter.append(".")
        super().__init__(str(formatter))
