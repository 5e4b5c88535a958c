"""Converter interfaces and registry for pluggable code conversion."""

from .base import Converter
from .registry import ConverterRegistry, create_default_registry

__all__ = ["Converter", "ConverterRegistry", "create_default_registry"]
