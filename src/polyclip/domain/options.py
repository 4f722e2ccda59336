"""Boolean operation options passed through to the clipping engine."""

from enum import Enum


class ClipType(str, Enum):
    """Which boolean set operation to perform."""

    UNION = "union"
    DIFFERENCE = "difference"
    INTERSECTION = "intersection"
    XOR = "xor"


class FillRule(str, Enum):
    """Winding convention used to decide which regions are inside.

    - EVEN_ODD: odd winding numbers are filled
    - NON_ZERO: any non-zero winding number is filled
    - POSITIVE: winding numbers greater than zero are filled
    - NEGATIVE: winding numbers less than zero are filled
    """

    EVEN_ODD = "evenodd"
    NON_ZERO = "nonzero"
    POSITIVE = "positive"
    NEGATIVE = "negative"
