"""Converter registry and discovery helpers."""

from __future__ import annotations

import importlib
import importlib.util
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import ModuleType

from code_converter.application.results import LanguageSupport
from code_converter.errors import NoConverterError, PluginError
from code_converter.languages import known_languages
from code_converter.plugins.base import Converter
from code_converter.plugins.builtins import IdentityConverter
from code_converter.types import LanguagePair


def _normalize(language: str) -> str:
    return language.strip().lower()


class ConverterRegistry:
    """Registry mapping ``(source, target)`` language pairs to converters.

    Parameters
    ----------
    logger : logging.Logger | None, optional
        Logger receiving registration events. Defaults to the module logger.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._converters: dict[LanguagePair, Converter] = {}
        self._logger = logger or logging.getLogger(__name__)

    def register(
        self,
        source_language: str,
        target_language: str,
        converter: Converter,
    ) -> None:
        """Register ``converter`` for a language pair.

        An existing registration for the same pair is replaced and the pair
        moves to the end of the listing order.

        Parameters
        ----------
        source_language : str
            Source language tag.
        target_language : str
            Target language tag.
        converter : Converter
            Converter instance.
        """
        key = (_normalize(source_language), _normalize(target_language))
        replaced = self._converters.pop(key, None) is not None
        self._converters[key] = converter
        self._logger.info(
            "%s converter: %s-to-%s",
            "Replaced" if replaced else "Registered",
            *key,
        )

    def get(self, source_language: str, target_language: str) -> Converter | None:
        """Return the converter for a pair, or ``None``."""
        return self._converters.get(
            (_normalize(source_language), _normalize(target_language))
        )

    def resolve(self, source_language: str, target_language: str) -> Converter:
        """Return the converter for a pair.

        Raises
        ------
        NoConverterError
            If no converter is registered for the pair.
        """
        converter = self.get(source_language, target_language)
        if converter is None:
            raise NoConverterError(source_language, target_language)
        return converter

    def keys(self) -> list[LanguagePair]:
        """Return registered pairs in registration order."""
        return list(self._converters)

    def list_supported(self) -> list[LanguageSupport]:
        """Describe every registration in registration order."""
        return [
            LanguageSupport(
                source_language=source,
                target_language=target,
                features=tuple(converter.supported_features()),
            )
            for (source, target), converter in self._converters.items()
        ]

    def load_module(self, module_or_path: str) -> None:
        """Load converters from module name or file path.

        .. warning::
            This method executes code from the specified module. Only load
            converter modules from trusted sources.

        Parameters
        ----------
        module_or_path : str
            Python import path or filesystem path to a converter module.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    Parameters
    ----------
    module_or_path : str
        Python module path or local file path.

    Returns
    -------
    ModuleType
        Imported module object.

    Raises
    ------
    PluginError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise PluginError(f"Unable to load converter module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise PluginError(
                f"Unable to execute converter module {candidate}: {exc}"
            ) from exc
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise PluginError(
            f"Unable to import converter module '{module_or_path}': {exc}"
        ) from exc


def _register_from_module(module: ModuleType, registry: ConverterRegistry) -> None:
    """Register converter definitions found in module.

    Supported contracts, checked in order: a ``register_converters(registry)``
    hook, a ``CONVERTERS`` mapping of ``(source, target)`` to converter, or a
    single ``CONVERTER`` exposing ``source_language`` and ``target_language``.
    """
    if hasattr(module, "register_converters"):
        module.register_converters(registry)
        return

    converters_obj = getattr(module, "CONVERTERS", None)
    if converters_obj is not None:
        if not isinstance(converters_obj, Mapping):
            raise PluginError(
                "CONVERTERS must map (source_language, target_language) to converters."
            )
        for (source, target), converter in converters_obj.items():
            registry.register(source, target, converter)
        return

    converter_obj = getattr(module, "CONVERTER", None)
    if converter_obj is not None:
        source = getattr(converter_obj, "source_language", None)
        target = getattr(converter_obj, "target_language", None)
        if not source or not target:
            raise PluginError(
                "CONVERTER must define 'source_language' and 'target_language'."
            )
        registry.register(source, target, converter_obj)
        return

    raise PluginError(
        "Converter module must expose register_converters(registry), "
        "CONVERTERS, or CONVERTER."
    )


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
    logger: logging.Logger | None = None,
) -> ConverterRegistry:
    """Create default converter registry.

    Parameters
    ----------
    extra_modules : Iterable[str] | None, optional
        Additional converter modules to load.
    logger : logging.Logger | None, optional
        Logger passed to the registry.

    Returns
    -------
    ConverterRegistry
        Registry with identity converters and external converters.
    """
    registry = ConverterRegistry(logger=logger)
    identity = IdentityConverter()
    for language in known_languages():
        registry.register(language, language, identity)
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
