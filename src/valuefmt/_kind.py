"""Render kinds and the type descriptors built for each value."""

__all__ = ["Kind", "TypeInfo", "MISSING"]

import enum
from dataclasses import dataclass, field


class _Missing:
    """Marker for an absent value or an absent declared type."""
    __slots__ = ()

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING = _Missing()


class Kind(enum.Enum):
    """Closed set of structural categories a value is rendered as."""
    INVALID = "invalid"
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    COMPLEX = "complex"
    STRING = "string"
    VARIANT = "variant"
    POINTER = "pointer"
    ARRAY = "array"
    SLICE = "slice"
    MAP = "map"
    FUNCTION = "func"
    CHANNEL = "chan"
    STRUCT = "struct"
    RAW_POINTER = "raw_pointer"
    UNKNOWN = "unknown"


def _no_children():
    return ()


@dataclass(frozen=True)
class TypeInfo:
    """Descriptor for one value, computed once before it is rendered.

    The shape of `children()` depends on the kind:

    - ARRAY, SLICE: ``(value, declared)`` pairs
    - MAP: ``(key, key_declared, value, value_declared)`` tuples
    - STRUCT: ``(field_name, value, declared)`` tuples

    Every other kind has no children.

    Attributes:
        kind: (Kind) Category the value renders as
        name: (str) Declared type name, or a signature for functions
        bits: (int) Width of fixed size numbers, 0 when unsized
        value: The value itself, unwrapped for ctypes scalars
        nil: (bool) Value is a nil sentinel and renders as a leaf
        target: Value behind a pointer or held by a variant
        target_type: Declared type of target, MISSING for its runtime type
        symbol: (str) Qualified name of a function
        params: (tuple[str]) Parameter type names of a function
        returns: (str) Return type text of a function, with leading space
        length: (int) Current length of a channel
        capacity: (int) Capacity of a channel, 0 when unbounded
        unordered: (bool) Children have no stable order and get sorted
        identity: Hashable key of a container for cycle detection
    """
    kind: Kind
    name: str = ""
    bits: int = 0
    value: object = None
    nil: bool = False
    target: object = MISSING
    target_type: object = MISSING
    symbol: str = ""
    params: tuple = ()
    returns: str = ""
    length: int = 0
    capacity: int = 0
    unordered: bool = False
    identity: object = None
    iterate: object = field(default=_no_children, repr=False, compare=False)

    def children(self):
        """Iterate nested values in the order they are rendered."""
        return self.iterate()
