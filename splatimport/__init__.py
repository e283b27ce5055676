"""Reading and converting 3D Gaussian splat assets from binary PLY files."""

__version__ = "0.1.0"