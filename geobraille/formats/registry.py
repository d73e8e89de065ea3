"""Decoder registry — every input format is a standalone function registered via decorator.

Usage:
    @decoder(name="wkt", extensions=[".wkt"], description="Well-known text")
    def decode_wkt(text: str, options: DecodeOptions) -> list[BaseGeometry]:
        return [shapely.wkt.loads(line) for line in text.splitlines() if line.strip()]

Adding a new format = creating one module in this package with the decorator.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from shapely.geometry.base import BaseGeometry

from geobraille.errors import DecodeError

logger = logging.getLogger(__name__)

# Modules in this package that are not decoders.
_NON_DECODER_MODULES = {"registry"}


@dataclass
class DecodeOptions:
    """Format-specific knobs. Decoders ignore the ones they do not use."""

    lat_column: str = "lat"
    lon_column: str = "lon"
    polyline_precision: int = 5


# Text formats receive str; binary formats receive the raw bytes.
DecoderFn = Callable[[Any, DecodeOptions], list[BaseGeometry]]


@dataclass
class DecoderSpec:
    name: str
    fn: DecoderFn
    extensions: list[str] = field(default_factory=list)
    description: str = ""
    binary: bool = False


class DecoderRegistry:
    """Registry of input formats, keyed by name and file extension."""

    def __init__(self) -> None:
        self._decoders: dict[str, DecoderSpec] = {}

    def register(self, spec: DecoderSpec) -> None:
        if spec.name in self._decoders:
            raise ValueError(f"Duplicate decoder name: {spec.name}")
        self._decoders[spec.name] = spec
        logger.debug("Registered decoder %s (%s)", spec.name, ", ".join(spec.extensions))

    def get(self, name: str) -> DecoderSpec:
        try:
            return self._decoders[name.lower()]
        except KeyError:
            raise DecodeError(
                f"Unknown format {name!r}; expected one of: {', '.join(self.names())}"
            ) from None

    def names(self) -> list[str]:
        return sorted(self._decoders)

    def for_path(self, path: str | Path) -> DecoderSpec:
        """Look a decoder up by file extension (case-insensitive)."""
        suffix = Path(path).suffix.lower()
        for spec in self._decoders.values():
            if suffix in spec.extensions:
                return spec
        raise DecodeError(f"Cannot infer the format of {str(path)!r}; pass one explicitly")

    @property
    def count(self) -> int:
        return len(self._decoders)


# Module-level singleton
_registry = DecoderRegistry()


def get_registry() -> DecoderRegistry:
    return _registry


def decoder(
    *,
    name: str,
    extensions: list[str] | None = None,
    description: str = "",
    binary: bool = False,
):
    """Decorator to register a decoder function."""

    def wrap(fn: DecoderFn) -> DecoderFn:
        spec = DecoderSpec(
            name=name,
            fn=fn,
            extensions=[ext.lower() for ext in extensions or []],
            description=description,
            binary=binary,
        )
        _registry.register(spec)
        return fn

    return wrap


def load_builtin_decoders() -> DecoderRegistry:
    """Import every decoder module in this package so the decorators fire."""
    package = importlib.import_module("geobraille.formats")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        if module_name not in _NON_DECODER_MODULES:
            importlib.import_module(f"geobraille.formats.{module_name}")
    logger.debug("%d decoders available", _registry.count)
    return _registry


def infer_format(path: str | Path) -> str:
    return load_builtin_decoders().for_path(path).name


def decode(
    data: str | bytes,
    format_name: str,
    options: DecodeOptions | None = None,
) -> list[BaseGeometry]:
    """Decode ``data`` with the named format. Text formats accept UTF-8 bytes."""
    spec = load_builtin_decoders().get(format_name)
    if spec.binary:
        if not isinstance(data, bytes):
            raise DecodeError(f"{spec.description or spec.name} input must be read as bytes")
        payload: str | bytes = data
    else:
        payload = _as_text(data)
    geometries = spec.fn(payload, options or DecodeOptions())
    logger.debug("Decoded %d geometries as %s", len(geometries), spec.name)
    return geometries


def _as_text(data: str | bytes) -> str:
    if isinstance(data, str):
        return data
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Input is not valid UTF-8 text: {e}") from e
