"""Parser for Gaussian splat assets stored as ``.ply`` files."""

from __future__ import annotations

import enum
import functools
import re
import struct
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from splatimport.parsing import (
    Metadata,
    ParseSplatFn,
    Property,
    PropertyFormat,
    PropertyValue,
    SplatParseError,
    SplatParser,
)
from splatimport.splat_log import log_error, log_warn

__all__ = ["PlyFormat", "PropertyDesc", "SplatParserPly"]


class PlyFormat(enum.Enum):
    """Data encoding declared by a ``.ply`` header."""

    INVALID = 0
    ASCII = 1
    BINARY_BIG_ENDIAN = 2
    BINARY_LITTLE_ENDIAN = 3


@dataclass
class PropertyDesc:
    """Type and byte offset of a property within one splat record."""

    offset: int = 0
    type: PropertyFormat = PropertyFormat.UNKNOWN


_WHITESPACE = b" \t"
_WORD_PATTERN = re.compile(rb"[^ \t]+")
_DIGITS = re.compile(rb"[0-9]+")
_SIZE_MAX = 2**64 - 1

_FORMATS: Dict[bytes, PlyFormat] = {
    b"ascii": PlyFormat.ASCII,
    b"binary_big_endian": PlyFormat.BINARY_BIG_ENDIAN,
    b"binary_little_endian": PlyFormat.BINARY_LITTLE_ENDIAN,
}

_PROPERTIES: Dict[bytes, Property] = {
    b"x": Property.X,
    b"y": Property.Y,
    b"z": Property.Z,
    b"f_dc_0": Property.DC_RED,
    b"f_dc_1": Property.DC_GREEN,
    b"f_dc_2": Property.DC_BLUE,
    b"opacity": Property.OPACITY,
    b"rot_0": Property.ROTATION_W,
    b"rot_1": Property.ROTATION_X,
    b"rot_2": Property.ROTATION_Y,
    b"rot_3": Property.ROTATION_Z,
    b"scale_0": Property.SCALE_X,
    b"scale_1": Property.SCALE_Y,
    b"scale_2": Property.SCALE_Z,
}

_TYPES: Dict[bytes, PropertyFormat] = {
    b"float": PropertyFormat.F32,
    b"float32": PropertyFormat.F32,
}

_TYPE_SIZES: Dict[PropertyFormat, int] = {PropertyFormat.F32: 4}

_STRUCT_CODES: Dict[PropertyFormat, str] = {PropertyFormat.F32: "f"}

_BYTE_ORDERS: Dict[PlyFormat, str] = {
    PlyFormat.BINARY_BIG_ENDIAN: ">",
    PlyFormat.BINARY_LITTLE_ENDIAN: "<",
}


def _text(raw: bytes) -> str:
    return raw.decode("latin-1")


def _fail(message: str) -> SplatParseError:
    log_error(message)
    return SplatParseError(message)


def _pop_line(data: bytes, pos: int) -> Tuple[Optional[bytes], int]:
    """Return the next trimmed line starting at ``pos`` and the position after it.

    A blank line yields ``None``. The final line, lacking a newline, is
    returned untrimmed and consumes the rest of ``data``.
    """
    eol = data.find(b"\n", pos)
    if eol < 0:
        return data[pos:], len(data)
    line = data[pos:eol].strip(_WHITESPACE)
    if not line:
        return None, pos
    return line, eol + 1


def _pop_token(line: bytes) -> Tuple[Optional[bytes], bytes]:
    """Split the leading word off ``line``; ``None`` if the line does not start with one."""
    match = _WORD_PATTERN.match(line)
    if match is None:
        return None, line
    return match.group(), line[match.end():].lstrip(_WHITESPACE)


class SplatParserPly(SplatParser):
    """Parser for ``.ply`` splat assets."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self._format = PlyFormat.INVALID
        self._layout: Dict[Property, PropertyDesc] = {}
        self._num_splats = 0
        self._splat_size = 0
        self._data = memoryview(b"")

    def _add_property(self, prop: Property, fmt: PropertyFormat) -> bool:
        if prop is not Property.IGNORE:
            if prop in self._layout:
                return False
            self._layout[prop] = PropertyDesc(self._splat_size, fmt)
        self._splat_size += _TYPE_SIZES[fmt]
        return True

    def _parse_format_line(self, data: bytes, pos: int) -> int:
        line, pos = _pop_line(data, pos)
        if line is None:
            raise _fail("Unable to parse format line.")

        word, rest = _pop_token(line)
        if word is None:
            raise _fail(f"Unexpected format metadata: {_text(line)}.")
        if word != b"format":
            raise _fail(f"Invalid format metadata: {_text(rest)}.")

        format_word, rest = _pop_token(rest)
        if format_word is None:
            raise _fail(f"Unable to parse format type: {_text(rest)}.")
        if format_word not in _FORMATS:
            raise _fail(f"Invalid format type: {_text(format_word)}.")
        self._format = _FORMATS[format_word]

        version, rest = _pop_token(rest)
        if version is None:
            raise _fail(f"Unable to parse format version: {_text(rest)}.")
        if version != b"1.0":
            log_warn(
                f"Unexpected encoding version {_text(version)} for "
                f"{_text(format_word)}. Continuing anyway."
            )
        return pos

    def _parse_element(self, rest: bytes) -> None:
        if self._num_splats != 0:
            raise _fail(
                "Unable to import `.ply` with more than one vertex element specified."
            )
        word, rest = _pop_token(rest)
        if word is None:
            raise _fail(f"Invalid vertex element line: {_text(rest)}.")
        if word != b"vertex":
            raise _fail(f"Unexpected element type: {_text(word)}.")

        word, rest = _pop_token(rest)
        if word is None:
            raise _fail(f"Invalid vertex element count: {_text(rest)}.")
        digits = _DIGITS.match(word)
        if digits is None or int(digits.group()) > _SIZE_MAX:
            raise _fail(f"Failed to parse vertex count: {_text(word)}.")
        self._num_splats = int(digits.group())
        if self._num_splats == 0:
            raise _fail("Found zero splats. Stopping.")

    def _parse_property(self, rest: bytes) -> None:
        if self._num_splats == 0:
            raise _fail(
                f"Invalid property line (missing associated element): {_text(rest)}."
            )
        word, rest = _pop_token(rest)
        if word is None:
            raise _fail(f"Unable to parse property type: {_text(rest)}.")
        if word not in _TYPES:
            raise _fail(f"Invalid property type: {_text(rest)}.")
        fmt = _TYPES[word]

        name, rest = _pop_token(rest)
        if name is None:
            raise _fail(f"Unable to parse property name: {_text(rest)}.")
        prop = _PROPERTIES.get(name, Property.IGNORE)
        if not self._add_property(prop, fmt):
            raise _fail(f"Duplicate property: {_text(name)}")

    def _parse_header(self, data: bytes) -> None:
        line, pos = _pop_line(data, 0)
        if line is None:
            raise _fail("Unable to parse magic number.")
        if line != b"ply":
            raise _fail(f"Invalid magic number: {_text(line)}.")

        pos = self._parse_format_line(data, pos)

        while True:
            line, pos = _pop_line(data, pos)
            if line is None:
                raise _fail("Unable to parse header line.")
            word, rest = _pop_token(line)
            if word is None:
                raise _fail(f"Invalid header line: {_text(line)}.")

            if word == b"comment":
                continue
            if word == b"element":
                self._parse_element(rest)
            elif word == b"property":
                self._parse_property(rest)
            elif word == b"end_header":
                self._data = memoryview(data)[pos:]
                return
            else:
                raise _fail(f"Unknown header element: {_text(word)}")

    def parse_metadata(self, buffer: bytes) -> Metadata:
        """Read the header of a ``.ply`` buffer and check the data size against it."""
        self._reset()
        data = bytes(buffer)
        try:
            self._parse_header(data)
        except SplatParseError:
            log_error("Unable to parse PLY header.")
            raise

        remaining = len(self._data)
        expected = self._num_splats * self._splat_size
        if remaining != expected:
            raise _fail(
                f"Data size mismatch: {expected} bytes expected but "
                f"{remaining} bytes remaining."
            )

        return Metadata(
            properties={prop: desc.type for prop, desc in self._layout.items()},
            num_splats=self._num_splats,
        )

    def _read(self, byte_order: str, base: int, prop: Property) -> PropertyValue:
        desc = self._layout[prop]
        code = _STRUCT_CODES.get(desc.type)
        if code is None:
            log_warn("Unexpected type. Unable to convert.")
            return 0.0
        return struct.unpack_from(byte_order + code, self._data, base + desc.offset)[0]

    def parse_data(self, parse_splat: ParseSplatFn) -> None:
        """Call ``parse_splat(index, get)`` for every splat in the parsed buffer."""
        if self._format is PlyFormat.ASCII:
            raise _fail("ASCII format not supported.")
        byte_order = _BYTE_ORDERS.get(self._format)
        if byte_order is None:
            raise _fail("Invalid metadata format.")

        for index in range(self._num_splats):
            get = functools.partial(self._read, byte_order, index * self._splat_size)
            parse_splat(index, get)