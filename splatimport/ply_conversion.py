"""Conversion of raw ``.ply`` splat properties into renderable values."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Tuple

from splatimport.parsing import (
    GetPropertyFn,
    Metadata,
    Property,
    to_alpha_linear,
    to_color_linear,
    to_scale_linear,
)
from splatimport.splat_log import log_error

__all__ = ["ConvertedSplat", "REQUIRED_PROPERTIES", "validate_metadata", "convert_splat"]

REQUIRED_PROPERTIES: Tuple[Property, ...] = (
    Property.X,
    Property.Y,
    Property.Z,
    Property.ROTATION_X,
    Property.ROTATION_Y,
    Property.ROTATION_Z,
    Property.ROTATION_W,
    Property.SCALE_X,
    Property.SCALE_Y,
    Property.SCALE_Z,
    Property.DC_RED,
    Property.DC_GREEN,
    Property.DC_BLUE,
    Property.OPACITY,
)


@dataclass(frozen=True)
class ConvertedSplat:
    """One splat in the output coordinate system (X+ forward, Y+ right, Z+ up)."""

    position: Tuple[float, float, float]
    rotation: Tuple[float, float, float, float]
    scale: Tuple[float, float, float]
    color: Tuple[int, int, int, int]


def _f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def validate_metadata(metadata: Metadata) -> bool:
    """Report whether the file carries every property this importer needs."""
    for prop in REQUIRED_PROPERTIES:
        if prop not in metadata.properties:
            log_error(f"Required property {prop.value} missing.")
            return False
    return True


def convert_splat(get: GetPropertyFn) -> ConvertedSplat:
    """Read one splat through ``get`` and convert it to the output conventions."""

    def value(prop: Property) -> float:
        return _f32(float(get(prop)))

    # Input: Z+ forward, X+ right, Y- up.
    position = (value(Property.Z), value(Property.X), -value(Property.Y))

    # Handedness flips, so every imaginary part of the quaternion is negated.
    x = -value(Property.ROTATION_Z)
    y = -value(Property.ROTATION_X)
    z = value(Property.ROTATION_Y)
    w = value(Property.ROTATION_W)
    length = _f32(math.sqrt(x * x + y * y + z * z + w * w))
    if length == 0.0:
        rotation = (math.nan, math.nan, math.nan, math.nan)
    else:
        rotation = tuple(_f32(component / length) for component in (x, y, z, w))

    scale = (
        to_scale_linear(get(Property.SCALE_Z)),
        to_scale_linear(get(Property.SCALE_X)),
        to_scale_linear(get(Property.SCALE_Y)),
    )

    color = (
        to_color_linear(get(Property.DC_RED)),
        to_color_linear(get(Property.DC_GREEN)),
        to_color_linear(get(Property.DC_BLUE)),
        to_alpha_linear(get(Property.OPACITY)),
    )

    return ConvertedSplat(position, rotation, scale, color)