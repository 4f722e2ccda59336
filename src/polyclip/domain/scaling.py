"""Conversion between application coordinates and the engine's integer grid.

The clipping engine works on signed integer coordinates. Application code
works in floating point units. A PointScaler multiplies application values
by a fixed factor and rounds them onto the grid, and divides on the way
back. Areas scale with the square of the factor.
"""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from polyclip.exceptions import GeometryFormatError


class PointScaler(BaseModel):
    """Fixed multiplier between application units and grid units.

    Attributes:
        multiplier: Number of grid units per application unit
    """

    model_config = ConfigDict(frozen=True)

    multiplier: int = Field(
        default=100,
        ge=1,
        le=10**9,
        description="Grid units per application unit",
    )

    def to_grid(self, value: float) -> int:
        """Quantize an application coordinate onto the grid.

        Rounds half away from zero so that quantization is symmetric
        around the origin.

        Args:
            value: Coordinate in application units

        Returns:
            Coordinate in grid units
        """
        scaled = value * self.multiplier
        return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))

    def from_grid(self, value: int) -> float:
        """Convert a grid coordinate back to application units."""
        return value / self.multiplier

    def area_from_grid(self, area: float) -> float:
        """Convert an area measured in grid units to application units."""
        return area / (self.multiplier * self.multiplier)


ONE = PointScaler(multiplier=1)
DECI = PointScaler(multiplier=10)
CENTI = PointScaler(multiplier=100)
MILLI = PointScaler(multiplier=1000)


def scaler_from_data(multiplier: Any, source: str = "<data>") -> PointScaler:
    """Build a scaler from a "scale" value read from serialized geometry.

    Raises:
        GeometryFormatError: If the value is not a valid multiplier
    """
    try:
        return PointScaler(multiplier=multiplier)
    except ValidationError as e:
        raise GeometryFormatError(source, f"invalid scale {multiplier!r}") from e
