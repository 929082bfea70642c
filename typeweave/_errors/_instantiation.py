"""
This module defines the exceptions raised when an instance of an augmented
type is constructed.

`InstantiationError` covers everything that prevents the constructor from
being invoked at all (an abstract generated type, arguments that do not bind
to the constructor signature). `InvocationError` wraps an exception raised
by the constructor body itself; the original is kept as `__cause__`.
"""


class InstantiationError(Exception):
    """Raised when an augmented type cannot be instantiated."""

    def __init__(self, type_: type, detail: str):
        self.type = type_
        super().__init__(f"Could not create an instance of type {type_.__name__}: {detail}")


class InvocationError(Exception):
    """Raised when the constructor of an augmented type raises."""

    def __init__(self, type_: type):
        self.type = type_
        super().__init__(f"Constructor of type {type_.__name__} raised an exception.")
