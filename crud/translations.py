"""Hierarchical translation lookups for the crud helpers.

Translations are nested dictionaries per locale. A lookup walks an ordered
list of scopes and returns the first scope that defines the key, which lets a
specific view override a label defined for its parents or globally.
"""

from __future__ import annotations

import copy
import logging
from typing import Callable, Iterable, List, Optional, Sequence

from django.conf import settings
from django.utils.translation import get_language

from .formatters import captionize

logger = logging.getLogger(__name__)

Resolver = Callable[[str, Sequence[str]], Optional[str]]

DEFAULT_TRANSLATIONS = {
    "en": {
        "global": {
            "no_list_entries": "No entries found.",
            "button": {
                "save": "Save",
                "cancel": "Cancel",
            },
            "associations": {
                "no_entry": "(none)",
            },
        },
    },
}


def _deep_merge(target: dict, updates: dict) -> dict:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[str(key)] = copy.deepcopy(value)
    return target


class TranslationStore:
    """In-memory translation trees keyed by locale."""

    def __init__(self, *sources: dict):
        self._sources = sources
        self._translations: dict = {}
        self.reset()

    def reset(self) -> None:
        """Drop stored translations and reload the initial sources."""
        self._translations = {}
        for source in self._sources:
            for locale, tree in source.items():
                self.store_translations(locale, tree)

    def store_translations(self, locale: str, tree: dict) -> None:
        _deep_merge(self._translations.setdefault(locale.lower(), {}), tree)

    def lookup(self, locale: str, key: str) -> Optional[str]:
        node = self._translations.get(locale.lower())
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        if isinstance(node, dict):
            return None
        return str(node)


translations = TranslationStore(
    DEFAULT_TRANSLATIONS,
    getattr(settings, "DRY_CRUD_TRANSLATIONS", {}),
)


def candidate_locales(language: Optional[str] = None) -> List[str]:
    """Return ``["de-ch", "de"]`` style fallbacks for the active language."""
    language = (language or get_language() or settings.LANGUAGE_CODE).lower()
    locales = [language]
    base = language.split("-")[0]
    if base != language:
        locales.append(base)
    return locales


def resolve(key: str, scopes: Sequence[str]) -> Optional[str]:
    """Default resolver: first ``<scope>.<key>`` found in the store."""
    locales = candidate_locales()
    for scope in scopes:
        path = f"{scope}.{key}" if scope else key
        for locale in locales:
            value = translations.lookup(locale, path)
            if value is not None:
                return value
    return None


def translation_scopes(view) -> List[str]:
    """Collect ``translation_scope`` attributes along the view's class hierarchy.

    The most specific class comes first.
    """
    if view is None:
        return []
    klass = view if isinstance(view, type) else type(view)
    scopes = []
    for base in klass.__mro__:
        scope = vars(base).get("translation_scope")
        if scope and scope not in scopes:
            scopes.append(scope)
    return scopes


def inheritable_scopes(view_scopes: Iterable[str], action_name: Optional[str] = None) -> List[str]:
    scopes = []
    for scope in view_scopes:
        if action_name:
            scopes.append(f"{scope}.{action_name}")
        scopes.append(f"{scope}.global")
    scopes.append("global")
    return scopes


def association_scopes(field=None) -> List[str]:
    """Scopes for an association key: the association, its target, global."""
    scopes = []
    if field is not None:
        owner = field.model._meta.model_name
        target = field.related_model._meta.model_name
        scopes.append(f"associations.models.{owner}.{field.name}")
        scopes.append(f"associations.{target}")
    scopes.append("global.associations")
    return scopes


def translate(key: str, scopes: Sequence[str], resolver: Optional[Resolver] = None, default=None, **interpolations) -> str:
    """Resolve ``key`` through ``scopes``, formatting ``interpolations`` in."""
    value = (resolver or resolve)(str(key), scopes)
    if value is None:
        logger.debug(f"Translation missing for '{key}' in scopes {list(scopes)}")
        if default is not None:
            return default
        return captionize(key)
    if interpolations:
        try:
            value = value.format(**interpolations)
        except (KeyError, IndexError, ValueError):
            logger.warning(f"Translation for '{key}' does not take {sorted(interpolations)}: {value!r}")
    return value
