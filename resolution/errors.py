"""
Typed error classes for domain resolution.

Every failure raised by the naming services, the router and the contract
transport is one of the classes below, so callers can catch a specific failure
mode by code while still being able to catch the base `ResolutionSdkError`.

    try:
        addr = await resolution.address("brad.crypto", "BTC")
    except ResolutionError as e:
        if e.code is ResolutionErrorCode.UnspecifiedCurrency:
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Dict, Optional, TypeVar

from .logging import get_logger

__all__ = [
    "ResolutionSdkError",
    "ResolutionErrorCode",
    "ResolutionError",
    "ConfigurationErrorCode",
    "ConfigurationError",
    "RpcError",
    "ignore_resolution_error",
]

log = get_logger(__name__)

T = TypeVar("T")


class ResolutionSdkError(Exception):
    """Base class for all resolution errors."""


class ResolutionErrorCode(str, Enum):
    UnregisteredDomain = "UnregisteredDomain"
    UnspecifiedResolver = "UnspecifiedResolver"
    RecordNotFound = "RecordNotFound"
    UnspecifiedCurrency = "UnspecifiedCurrency"
    UnsupportedDomain = "UnsupportedDomain"
    MethodNotSupported = "MethodNotSupported"
    NamingServiceDown = "NamingServiceDown"


_MESSAGES: Dict[ResolutionErrorCode, str] = {
    ResolutionErrorCode.UnregisteredDomain: "Domain {domain} is not registered",
    ResolutionErrorCode.UnspecifiedResolver: "Domain {domain} is not configured",
    ResolutionErrorCode.RecordNotFound: "No {recordName} record found for {domain}",
    ResolutionErrorCode.UnspecifiedCurrency: "Domain {domain} has no {currencyTicker} attached to it",
    ResolutionErrorCode.UnsupportedDomain: "Domain {domain} is not supported",
    ResolutionErrorCode.MethodNotSupported: "Method {method} is not supported",
    ResolutionErrorCode.NamingServiceDown: "{method} naming service is down at the moment",
}


@dataclass(eq=False)
class ResolutionError(ResolutionSdkError):
    """
    Raised when a domain cannot be resolved.

    Fields:
      - code: what went wrong (see ResolutionErrorCode)
      - domain, record_name, currency_ticker, method: optional context
      - cause_detail: transport message for NamingServiceDown
    """

    code: ResolutionErrorCode
    domain: Optional[str] = None
    record_name: Optional[str] = None
    currency_ticker: Optional[str] = None
    method: Optional[str] = None
    cause_detail: Optional[str] = None

    def __post_init__(self) -> None:
        self.code = ResolutionErrorCode(self.code)
        super().__init__(self.message)

    @property
    def context(self) -> Dict[str, Any]:
        ctx = {
            "domain": self.domain,
            "recordName": self.record_name,
            "currencyTicker": self.currency_ticker,
            "method": self.method,
        }
        return {k: v for k, v in ctx.items() if v is not None}

    @property
    def message(self) -> str:
        fields = {"domain": "", "recordName": "", "currencyTicker": "", "method": ""}
        fields.update(self.context)
        msg = _MESSAGES[self.code].format(**fields)
        if self.cause_detail:
            msg = f"{msg}: {self.cause_detail}"
        return msg

    def __str__(self) -> str:
        return self.message


class ConfigurationErrorCode(str, Enum):
    UnspecifiedNetwork = "UnspecifiedNetwork"
    UnspecifiedUrl = "UnspecifiedUrl"
    UnsupportedNetwork = "UnsupportedNetwork"
    AmbiguousSuffix = "AmbiguousSuffix"
    InvalidSource = "InvalidSource"


@dataclass(eq=False)
class ConfigurationError(ResolutionSdkError):
    """
    Raised when a naming service or router is set up incorrectly.
    """

    code: ConfigurationErrorCode
    method: Optional[str] = None
    network: Optional[str] = None
    suffix: Optional[str] = None
    detail: Optional[str] = None

    def __post_init__(self) -> None:
        self.code = ConfigurationErrorCode(self.code)
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.code is ConfigurationErrorCode.UnspecifiedNetwork:
            return f"Unspecified network in Resolution {self.method} configuration"
        if self.code is ConfigurationErrorCode.UnspecifiedUrl:
            return f"Unspecified url in Resolution {self.method} configuration"
        if self.code is ConfigurationErrorCode.UnsupportedNetwork:
            return (
                f"Network {self.network} is not supported by {self.method}; "
                "pass a registry address explicitly"
            )
        if self.code is ConfigurationErrorCode.InvalidSource:
            return f"Invalid source in Resolution {self.method} configuration: {self.detail}"
        return f"Suffix {self.suffix!r} is claimed by more than one naming service"

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class RpcError(ResolutionSdkError):
    """Raised by the JSON-RPC transport; naming services wrap it as NamingServiceDown."""

    method: Optional[str]
    code: int
    message: str
    data: Optional[Any] = None
    http_status: Optional[int] = None

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def __str__(self) -> str:
        parts = [f"RPC[{self.method or '-'}] code={self.code} msg={self.message!r}"]
        if self.http_status is not None:
            parts.append(f"http={self.http_status}")
        if self.data is not None:
            parts.append(f"data={self.data!r}")
        return " ".join(parts)

    @property
    def is_revert(self) -> bool:
        """JSON-RPC code 3 or an "execution reverted" message from eth_call."""
        return self.code == 3 or "revert" in (self.message or "").lower()


async def ignore_resolution_error(code: ResolutionErrorCode, pending: Awaitable[T]) -> Optional[T]:
    """
    Await `pending`; a ResolutionError with exactly `code` becomes None.
    Any other failure propagates unchanged.
    """
    try:
        return await pending
    except ResolutionError as e:
        if e.code is not code:
            raise
        log.debug("ignored_resolution_error", code=code.value, **e.context)
        return None
