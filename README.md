# splatimport

`splatimport` reads 3D Gaussian splat (3DGS) assets stored in `.ply` files. It
converts each splat into values that are ready for a renderer:

- a position, with the axes remapped from the file's convention (Z+ forward,
  X+ right, Y- up) to X+ forward, Y+ right, Z+ up
- a unit rotation quaternion, with its handedness swapped to match (all
  components are NaN if the stored quaternion has zero length)
- a linear scale, taken from the file's logarithmic scale
- an 8-bit linear RGBA colour, built from the degree-0 spherical harmonic
  coefficients and the logit-encoded opacity

Values are computed at single precision.

## Installation

```
pip install splatimport
```

## Usage

```python
from splatimport.ply_parsing import SplatParserPly
from splatimport.ply_conversion import validate_metadata, convert_splat
from splatimport.parsing import SplatParseError

with open("scene.ply", "rb") as fh:
    data = fh.read()

parser = SplatParserPly()
try:
    metadata = parser.parse_metadata(data)
except SplatParseError as exc:
    raise SystemExit(f"not a usable splat file: {exc}")

if not validate_metadata(metadata):
    raise SystemExit("file lacks properties required for import")

splats = [None] * metadata.num_splats

def on_splat(index, get):
    splats[index] = convert_splat(get)

parser.parse_data(on_splat)

first = splats[0]
print(first.position, first.rotation, first.scale, first.color)
```

### `splatimport.ply_parsing`

`SplatParserPly.parse_metadata(buffer)` reads the header and checks that the
size of the data after `end_header` equals the vertex count times the size of
one vertex record. It returns a `Metadata` holding the recognised `Property`
values with their `PropertyFormat`, and `num_splats`.

The header must start with `ply` and a `format` line, and contain exactly one
`element vertex <count>` with a non-zero count. `comment` lines are skipped.
A format version other than `1.0` only produces a warning. Every `property`
must be of type `float` or `float32`. Properties with names that are not
recognised, such as higher-order spherical harmonic coefficients, are skipped.
A recognised property that appears twice is an error.

`SplatParserPly.parse_data(parse_splat)` calls `parse_splat(index, get)` once
per splat. `get(property)` returns that property's raw value. Both
`binary_little_endian` and `binary_big_endian` data are read.

`PlyFormat` and `PropertyDesc` describe the declared encoding and the layout of
each property within a record.

### `splatimport.ply_conversion`

- `REQUIRED_PROPERTIES`: position, rotation, scale, the three DC colour
  coefficients and opacity.
- `validate_metadata(metadata)` returns `True` if every required property is
  present. Otherwise it logs an error and returns `False`.
- `convert_splat(get)` returns a frozen `ConvertedSplat` with `position`,
  `rotation`, `scale` and `color` tuples.

### `splatimport.parsing`

This module holds the shared types: `Property`, `PropertyFormat`, `Metadata`,
the abstract `SplatParser` interface, and `SplatParseError`, which is a
subclass of `ValueError`. It also holds the standalone conversions
`to_color_linear`, `to_alpha_linear` and `to_scale_linear`.

## Diagnostics

Parse failures raise `SplatParseError`. Errors and warnings are also sent to a
receiver, if you register one:

```python
from splatimport.splat_log import Level, set_log_receiver

def receiver(level: Level, message: str) -> None:
    print(level.name, message)

set_log_receiver(receiver)
```

Pass `None` to stop receiving messages. With no receiver set, messages are
dropped.

## What it does not do

- ASCII PLY is recognised in the header, but `parse_data` raises
  `SplatParseError` for it. Its data cannot be read.
- Only `float`/`float32` properties are accepted. Integer or `double`
  properties are rejected.
- Only degree-0 spherical harmonics are used.
- There is no command-line tool, and nothing is written back to disk. The
  package only reads and converts.