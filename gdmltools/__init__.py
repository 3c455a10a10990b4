"""Build benchmark detector geometries and write, read and trim them as GDML."""

__version__ = "0.1.0"