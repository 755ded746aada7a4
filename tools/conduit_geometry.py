"""
Conduit cross-section geometry.

Wetted area and hydraulic diameter for full pipes (circular or rectangular duct)
and open channels. For open channels the free surface is not wetted, so the
perimeter is bottom + two sides.
"""

import math
from dataclasses import dataclass

from utils.input_resolver import ConduitShape, ConduitType


@dataclass(frozen=True)
class ConduitGeometry:
    area: float                # m²
    hydraulic_diameter: float  # m


def resolve_geometry(conduit_type: ConduitType, conduit_shape: ConduitShape,
                     dimension: float, depth: float) -> ConduitGeometry:
    """Area and hydraulic diameter (Dh = 4A/P) of the conduit.

    Args:
        conduit_type: PIPE (full bore) or CHANNEL (free surface)
        conduit_shape: CIRCULAR or RECTANGULAR (pipes only; channels are rectangular)
        dimension: Pipe diameter or duct/channel width in m
        depth: Duct height or channel water depth in m

    Returns:
        ConduitGeometry
    """
    d = dimension
    h = depth

    if conduit_type == ConduitType.PIPE:
        if conduit_shape == ConduitShape.CIRCULAR:
            return ConduitGeometry(area=math.pi * (d / 2) ** 2, hydraulic_diameter=d)
        # Rectangular duct, four wetted sides
        return ConduitGeometry(area=d * h, hydraulic_diameter=(2 * d * h) / (d + h))

    area = d * h
    return ConduitGeometry(area=area, hydraulic_diameter=(4 * area) / (d + 2 * h))
