from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .models import WindowGeometry

logger = logging.getLogger(__name__)

# Windows reports minimized windows at (-32000, -32000); anything past these bounds is off-screen.
MIN_VALID_COORD = -10000
MAX_VALID_COORD = 10000
MIN_SIZE = 100
MAX_SIZE = 10000


@dataclass(frozen=True)
class WindowPlacement:
    """Where to put a window on restore. `center` wins over a missing position."""

    center: bool = False
    position: Optional[Tuple[int, int]] = None
    size: Optional[Tuple[int, int]] = None


def _in_range(value: int, low: int, high: int) -> bool:
    return low <= value <= high


# PUBLIC_INTERFACE
def resolve_placement(geometry: WindowGeometry) -> WindowPlacement:
    """
    Turn saved geometry into a placement, discarding out-of-range values.

    - A position is used only when both x and y are set and lie within the coordinate envelope.
      An out-of-range position means the window is centered and the saved size is ignored.
    - A size is used only when both width and height are set and lie within the size envelope.
    """
    position: Optional[Tuple[int, int]] = None
    if geometry.x is not None and geometry.y is not None:
        if not (
            _in_range(geometry.x, MIN_VALID_COORD, MAX_VALID_COORD)
            and _in_range(geometry.y, MIN_VALID_COORD, MAX_VALID_COORD)
        ):
            logger.warning("Ignoring off-screen window position (%s, %s)", geometry.x, geometry.y)
            return WindowPlacement(center=True)
        position = (geometry.x, geometry.y)

    size: Optional[Tuple[int, int]] = None
    if geometry.width is not None and geometry.height is not None:
        if _in_range(geometry.width, MIN_SIZE, MAX_SIZE) and _in_range(geometry.height, MIN_SIZE, MAX_SIZE):
            size = (geometry.width, geometry.height)
        else:
            logger.warning("Ignoring window size %sx%s", geometry.width, geometry.height)

    return WindowPlacement(position=position, size=size)
