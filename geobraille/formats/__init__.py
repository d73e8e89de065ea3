"""Input format decoders. Each turns raw input (text, or bytes for binary formats) into shapely geometry."""

from geobraille.formats.registry import (
    DecodeOptions,
    decode,
    decoder,
    get_registry,
    infer_format,
    load_builtin_decoders,
)

__all__ = [
    "DecodeOptions",
    "decode",
    "decoder",
    "get_registry",
    "infer_format",
    "load_builtin_decoders",
]
