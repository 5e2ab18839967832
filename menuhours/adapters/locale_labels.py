"""
Build DisplayLabels for a locale.

Day abbreviations come from pendulum's locale data; the remaining literals
come from configuration (the surrounding application's translation layer).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

import pendulum

from ..domain.formatter import DEFAULT_LABELS, DisplayLabels

logger = logging.getLogger(__name__)

# A known Monday, used to render abbreviated weekday names.
_REFERENCE_MONDAY = pendulum.datetime(2024, 1, 1)

FALLBACK_LOCALE = "en"


def day_abbreviations(locale: str) -> Tuple[str, ...]:
    """
    Abbreviated weekday names, Monday first, for a locale.

    Unknown locales fall back to English.
    """
    try:
        return tuple(
            _REFERENCE_MONDAY.add(days=offset).format("ddd", locale=locale)
            for offset in range(7)
        )
    except ValueError as exc:
        logger.warning("Locale %r unavailable (%s), falling back to %r", locale, exc, FALLBACK_LOCALE)
        return DEFAULT_LABELS.day_abbreviations


def labels_for_locale(
    locale: str = FALLBACK_LOCALE,
    overrides: Optional[Mapping[str, Any]] = None,
) -> DisplayLabels:
    """
    Assemble labels for ``locale``.

    Args:
        locale: Locale code understood by pendulum (e.g. "en", "de", "fr")
        overrides: Explicit values for any DisplayLabels field; ``None``
            values are ignored

    Returns:
        DisplayLabels instance
    """
    values: Dict[str, Any] = {"day_abbreviations": day_abbreviations(locale)}

    for name, value in (overrides or {}).items():
        if value is not None:
            values[name] = value

    return DisplayLabels(**values)
