"""Codec adapters for round-trip testing.

This module provides the interface and registry through which the harness
reaches a codec. A codec is selected either by registered name or by an
import path of the form ``package.module:attribute`` pointing at a
CodecAdapter subclass or instance.

Available adapters:
    - zlib: standard library deflate (window size follows max symbol bits)

Usage:
    from codec_tester.adapters import load_codec, list_codecs

    for name in list_codecs():
        print(name)

    codec = load_codec("zlib")
    codec = load_codec("mypackage.lzw:LzwCodec")
"""

from __future__ import annotations

import importlib

from codec_tester.core.exceptions import CodecLoadError

from .base import CodecAdapter, drain, emit
from .zlib_codec import ZlibCodec

__all__ = [
    "CodecAdapter",
    "ZlibCodec",
    "drain",
    "emit",
    "get_codec",
    "list_codecs",
    "load_codec",
    "register_codec",
]

# Registry of available codecs
_CODECS: dict[str, type[CodecAdapter]] = {}


def register_codec(name: str, codec_class: type[CodecAdapter]) -> None:
    """Register a codec adapter.

    Args:
        name: Codec name (used in CLI --codec flag).
        codec_class: CodecAdapter subclass.

    """
    _CODECS[name] = codec_class


def list_codecs() -> list[str]:
    """List registered codec names.

    Returns:
        List of registered codec names.

    """
    return list(_CODECS.keys())


def get_codec(name: str, **kwargs: object) -> CodecAdapter:
    """Get a codec adapter instance by name.

    Args:
        name: Codec name.
        **kwargs: Arguments passed to the adapter constructor.

    Returns:
        CodecAdapter instance.

    Raises:
        CodecLoadError: If the codec name is not registered.

    """
    if name not in _CODECS:
        available = ", ".join(_CODECS.keys()) if _CODECS else "none"
        raise CodecLoadError(
            f"Unknown codec '{name}'. Available: {available}",
            error_code="unknown_codec",
            context={"codec": name},
        )
    return _CODECS[name](**kwargs)


def load_codec(spec: str) -> CodecAdapter:
    """Resolve a registered name or ``module:attribute`` import path.

    Args:
        spec: Codec name or import path.

    Returns:
        CodecAdapter instance.

    Raises:
        CodecLoadError: If the codec cannot be found or is not an adapter.

    """
    if ":" not in spec:
        return get_codec(spec)

    module_name, _, attribute = spec.partition(":")
    try:
        module = importlib.import_module(module_name)
        target = getattr(module, attribute)
    except (ImportError, AttributeError) as e:
        raise CodecLoadError(
            f"Cannot load codec '{spec}': {e}",
            error_code="import_failed",
            context={"codec": spec},
        ) from e

    if isinstance(target, type) and issubclass(target, CodecAdapter):
        return target()
    if isinstance(target, CodecAdapter):
        return target
    raise CodecLoadError(
        f"'{spec}' is not a CodecAdapter",
        error_code="not_an_adapter",
        context={"codec": spec},
    )


register_codec(ZlibCodec.name, ZlibCodec)
