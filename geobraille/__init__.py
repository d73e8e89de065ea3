"""geobraille — preview vector geographic data as Unicode Braille text."""

__version__ = "0.1.0"
