"""Region eligibility gate for the remote storefront.

The remote experience is only offered in a fixed set of countries. The device
country is taken from the first detector that yields a code: an explicit
override from settings, then the process locale.
"""

from __future__ import annotations

import locale
from typing import Callable, Iterable, Sequence

from loguru import logger

__all__ = [
    "CountryDetector",
    "RegionGate",
    "fixed_country",
    "locale_country_code",
]

log = logger.bind(module="entrypoint.region")

CountryDetector = Callable[[], "str | None"]


def _normalise(code: str | None) -> str | None:
    text = (code or "").strip().upper()
    return text or None


def locale_country_code() -> str | None:
    """Return the territory part of the current locale (``en_US`` -> ``US``)."""
    name, _encoding = locale.getlocale()
    if not name:
        return None
    # Accept both "ru_RU" and "ru-RU"; drop any "@modifier" suffix.
    name = name.split("@", 1)[0].replace("-", "_")
    if "_" not in name:
        return None
    territory = name.split("_", 1)[1]
    return _normalise(territory[:2]) if len(territory) >= 2 else None


def fixed_country(code: str | None) -> CountryDetector:
    """Detector that always answers ``code`` (used for the settings override)."""

    def _detect() -> str | None:
        return code

    return _detect


class RegionGate:
    def __init__(
        self,
        allowed_countries: Iterable[str],
        detectors: Sequence[CountryDetector] | None = None,
    ) -> None:
        self.allowed_countries = frozenset(
            code for code in (_normalise(c) for c in allowed_countries) if code
        )
        self.detectors: tuple[CountryDetector, ...] = tuple(detectors or (locale_country_code,))

    def detect_country(self) -> str | None:
        """Return the first country code any detector yields."""
        for detector in self.detectors:
            name = getattr(detector, "__name__", repr(detector))
            try:
                code = _normalise(detector())
            except Exception as exc:  # noqa: BLE001 - a broken detector just yields nothing
                log.warning("Country detector {} failed: {}", name, exc)
                continue
            if code:
                log.debug("Country detector {} returned {}", name, code)
                return code
        return None

    def is_eligible(self) -> bool:
        code = self.detect_country()
        eligible = code is not None and code in self.allowed_countries
        log.info("Region gate country={} eligible={}", code, eligible)
        return eligible
