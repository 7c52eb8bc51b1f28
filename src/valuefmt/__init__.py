"""
Typed, indented text rendering of arbitrary Python values.

Values render by their structural kind, whatever their concrete type. A
dataclass `A` with one int field `VInt` formats as:

    A{
        VInt: int{1},
    }
"""

__version__ = "0.1.0"


from ._error import *
from ._kind import *
from ._options import *
from ._quote import *
from ._effects import *
from ._typenames import *
from ._ctypes import *
from ._describe import *
from ._render import *
