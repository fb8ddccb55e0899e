"""
Suffix-based dispatch of domains to naming services.

The router keeps an explicit table of (suffix, service) pairs built once at
construction; a suffix claimed by two services is a configuration error and
fails there, never at call time.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from .errors import ConfigurationError, ConfigurationErrorCode, ResolutionError, ResolutionErrorCode
from .logging import get_logger
from .services.base import NamingService

log = get_logger(__name__)


class NamingServiceRouter:
    def __init__(self, services: Iterable[NamingService]) -> None:
        self._services: Tuple[NamingService, ...] = tuple(services)
        table: Dict[str, NamingService] = {}
        for service in self._services:
            for suffix in service.suffixes:
                if suffix in table:
                    raise ConfigurationError(ConfigurationErrorCode.AmbiguousSuffix, suffix=suffix)
                table[suffix] = service
        self._table = table

    @property
    def services(self) -> Tuple[NamingService, ...]:
        return self._services

    @property
    def suffixes(self) -> Tuple[str, ...]:
        return tuple(self._table)

    def service_for_suffix(self, suffix: str) -> Optional[NamingService]:
        return self._table.get(suffix)

    def route(self, domain: str) -> NamingService:
        """
        Return the single service that supports `domain`.

        Raises ResolutionError(UnsupportedDomain) before any network call when
        nothing matches.
        """
        matches: List[NamingService] = [s for s in self._services if s.is_supported_domain(domain)]
        if not matches:
            raise ResolutionError(ResolutionErrorCode.UnsupportedDomain, domain=domain)
        if len(matches) > 1:
            raise ConfigurationError(ConfigurationErrorCode.AmbiguousSuffix, suffix=domain.rsplit(".", 1)[-1])
        log.debug("route_selected", domain=domain, service=matches[0].name)
        return matches[0]


__all__ = ["NamingServiceRouter"]
