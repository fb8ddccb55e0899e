from __future__ import annotations

"""
Configuration for the resolution SDK.

- Reads environment variables (optionally from `.env`) via pydantic-settings.
- Normalizes per-service sources (url / network / registry) into a typed model.
- Exposes a cached `get_settings()` accessor.

Environment variables:
    RESOLUTION_ETH_URL            (str, default "https://mainnet.infura.io") : Ethereum JSON-RPC endpoint
    RESOLUTION_NETWORK            (str, default "mainnet")
    RESOLUTION_CNS_REGISTRY       (hex address, optional) : overrides the CNS registry table
    RESOLUTION_ENS_REGISTRY       (hex address, optional) : overrides the ENS registry table
    RESOLUTION_REQUEST_TIMEOUT    (float seconds, default 10)
    RESOLUTION_LOG_LEVEL          (str, default "WARNING")
    RESOLUTION_LOG_FORMAT         ("json" | "console", default "json")

A source may be given as:
    True / None          -> defaults from settings
    "https://..."        -> url; network inferred from an Infura-style host
    {"url":..., "network":..., "registry":...} or NamingServiceSource
"""

import re
from functools import lru_cache
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError, ConfigurationErrorCode

DEFAULT_URL = "https://mainnet.infura.io"

# Chain id -> network name for sources configured numerically.
NETWORK_IDS = {
    1: "mainnet",
    3: "ropsten",
    4: "rinkeby",
    5: "goerli",
    42: "kovan",
}

_INFURA_RE = re.compile(r"^https?://(?P<network>[a-z]+)\.infura\.io", re.IGNORECASE)
_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


class NamingServiceSource(BaseModel):
    """Where one naming service reads its registry from."""

    url: Optional[str] = Field(default=None, description="Ethereum JSON-RPC endpoint")
    network: Optional[str] = Field(default=None, description="Network name, e.g. mainnet")
    registry: Optional[str] = Field(default=None, description="Registry contract address override")

    model_config = {"frozen": True}

    @field_validator("network", mode="before")
    @classmethod
    def _coerce_network(cls, v):
        if v is None or v == "":
            return None
        if isinstance(v, int) or (isinstance(v, str) and v.isdigit()):
            return NETWORK_IDS.get(int(v), str(v))
        return str(v).lower()

    @field_validator("url")
    @classmethod
    def _check_scheme(cls, v):
        if v and not v.lower().startswith(("http://", "https://")):
            raise ValueError(f"URL must start with http:// or https://, got: {v!r}")
        return v

    @field_validator("registry")
    @classmethod
    def _check_registry(cls, v):
        if v is not None and not _ADDRESS_RE.match(v):
            raise ValueError(f"Invalid registry address: {v!r}")
        return v


SourceLike = Union[bool, None, str, Mapping[str, Any], NamingServiceSource]


def network_from_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    m = _INFURA_RE.match(url)
    return m.group("network").lower() if m else None


def url_for_network(network: Optional[str]) -> Optional[str]:
    if not network:
        return None
    return f"https://{network}.infura.io"


def normalize_source(
    source: SourceLike,
    *,
    service: str,
    settings: Optional["ResolutionSettings"] = None,
) -> NamingServiceSource:
    """
    Turn any accepted source shape into a complete NamingServiceSource.

    Raises ConfigurationError when the source is malformed or when neither
    the url nor the network can be determined.
    """
    settings = settings or get_settings()
    try:
        if source is True or source is None:
            src = settings.source_for(service)
        elif isinstance(source, str):
            src = NamingServiceSource(url=source)
        elif isinstance(source, NamingServiceSource):
            src = source
        elif isinstance(source, Mapping):
            src = NamingServiceSource(**dict(source))
        else:
            raise TypeError(f"unsupported source type {type(source).__name__}")
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(ConfigurationErrorCode.InvalidSource, method=service, detail=str(e)) from e

    network = src.network or network_from_url(src.url)
    url = src.url or url_for_network(network)
    if not network:
        raise ConfigurationError(ConfigurationErrorCode.UnspecifiedNetwork, method=service)
    if not url:
        raise ConfigurationError(ConfigurationErrorCode.UnspecifiedUrl, method=service)
    return NamingServiceSource(url=url, network=network, registry=src.registry)


def registry_for(
    source: NamingServiceSource,
    registry_map: Mapping[str, str],
    *,
    service: str,
) -> str:
    """Explicit registry wins, else the service's per-network table."""
    if source.registry:
        return source.registry
    try:
        return registry_map[source.network or ""]
    except KeyError:
        raise ConfigurationError(
            ConfigurationErrorCode.UnsupportedNetwork, method=service, network=source.network
        ) from None


class ResolutionSettings(BaseSettings):
    eth_url: str = Field(DEFAULT_URL, description="Ethereum JSON-RPC endpoint")
    network: str = Field("mainnet", description="Default network for all services")
    cns_registry: Optional[str] = Field(None, description="CNS registry override")
    ens_registry: Optional[str] = Field(None, description="ENS registry override")
    request_timeout: float = Field(10.0, gt=0, description="HTTP timeout in seconds")
    log_level: str = Field("WARNING", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_format: str = Field("json", description='"json" or "console"')

    model_config = SettingsConfigDict(
        env_prefix="RESOLUTION_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    def source_for(self, service: str) -> NamingServiceSource:
        registry = {"CNS": self.cns_registry, "ENS": self.ens_registry}.get(service)
        return NamingServiceSource(url=self.eth_url, network=self.network, registry=registry)


@lru_cache(maxsize=1)
def get_settings() -> ResolutionSettings:
    return ResolutionSettings()


__all__ = [
    "DEFAULT_URL",
    "NETWORK_IDS",
    "NamingServiceSource",
    "ResolutionSettings",
    "get_settings",
    "normalize_source",
    "registry_for",
    "network_from_url",
    "url_for_network",
]
