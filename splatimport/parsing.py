"""Shared types and value conversions for 3D Gaussian splat importers."""

from __future__ import annotations

import abc
import enum
import math
import struct
from dataclasses import dataclass, field
from typing import Callable, Dict, Union

__all__ = [
    "Property",
    "PropertyFormat",
    "PropertyValue",
    "Metadata",
    "SplatParseError",
    "SplatParser",
    "GetPropertyFn",
    "ParseSplatFn",
    "to_color_linear",
    "to_alpha_linear",
    "to_scale_linear",
]


class Property(enum.Enum):
    """Properties that may appear in a splat file."""

    IGNORE = 0
    X = 1
    Y = 2
    Z = 3
    ROTATION_X = 4
    ROTATION_Y = 5
    ROTATION_Z = 6
    ROTATION_W = 7
    SCALE_X = 8
    SCALE_Y = 9
    SCALE_Z = 10
    DC_RED = 11
    DC_GREEN = 12
    DC_BLUE = 13
    OPACITY = 14


class PropertyFormat(enum.Enum):
    """Encodings a property may be stored with."""

    UNKNOWN = 0
    I8 = 1
    I16 = 2
    I32 = 3
    U8 = 4
    U16 = 5
    U32 = 6
    F32 = 7
    F64 = 8


PropertyValue = Union[int, float]
GetPropertyFn = Callable[[Property], PropertyValue]
ParseSplatFn = Callable[[int, GetPropertyFn], None]


@dataclass
class Metadata:
    """Properties available in a splat file, with their formats, and the splat count."""

    properties: Dict[Property, PropertyFormat] = field(default_factory=dict)
    num_splats: int = 0


class SplatParseError(ValueError):
    """Raised when splat data cannot be decoded."""


class SplatParser(abc.ABC):
    """Interface implemented by splat file parsers."""

    @abc.abstractmethod
    def parse_metadata(self, buffer: bytes) -> Metadata:
        """Read only the metadata from ``buffer``; raise SplatParseError on failure."""

    @abc.abstractmethod
    def parse_data(self, parse_splat: ParseSplatFn) -> None:
        """Call ``parse_splat(index, get)`` once per splat; raise SplatParseError on failure."""


def _f32(value: float) -> float:
    """Round a value to single precision."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _clamp_to_u8(value: float) -> int:
    if math.isnan(value) or value <= 0.0:
        return 0
    if value >= 255.0:
        return 255
    return int(value)


def to_color_linear(dc: PropertyValue) -> int:
    """Convert a degree-0 spherical harmonic coefficient to a linear 8-bit channel."""
    dc_f = _f32(float(dc))
    color_srgb = _f32(0.5 + 0.2820948 * dc_f)
    if math.isnan(color_srgb) or color_srgb <= 0.0:
        return 0
    # Blending happens in linear space downstream, so undo the sRGB gamma here.
    color_linear = _f32(math.pow(color_srgb, 2.2)) if math.isfinite(color_srgb) else math.inf
    return _clamp_to_u8(_f32(color_linear * 255.0))


def to_alpha_linear(opacity: PropertyValue) -> int:
    """Convert a logit-encoded opacity to a linear 8-bit alpha."""
    opacity_f = _f32(float(opacity))
    try:
        denominator = 1.0 + math.exp(-opacity_f)
    except OverflowError:
        return 0
    return _clamp_to_u8(_f32(_f32(1.0 / denominator) * 255.0))


def to_scale_linear(scale: PropertyValue) -> float:
    """Convert a logarithmic scale to a linear single-precision value."""
    try:
        return _f32(math.exp(_f32(float(scale))))
    except OverflowError:
        return math.inf