import pytest

from resolution.errors import (
    ConfigurationError,
    ConfigurationErrorCode,
    ResolutionError,
    ResolutionErrorCode,
    ResolutionSdkError,
    RpcError,
    ignore_resolution_error,
)


def test_context_keeps_only_known_fields():
    e = ResolutionError(ResolutionErrorCode.RecordNotFound, domain="brad.crypto", record_name="ipfs.html.value")
    assert e.context == {"domain": "brad.crypto", "recordName": "ipfs.html.value"}
    assert str(e) == "No ipfs.html.value record found for brad.crypto"
    assert isinstance(e, ResolutionSdkError)


def test_code_accepts_plain_string():
    e = ResolutionError("UnspecifiedCurrency", domain="brad.crypto", currency_ticker="BTC")
    assert e.code is ResolutionErrorCode.UnspecifiedCurrency
    assert "BTC" in str(e)


def test_naming_service_down_carries_detail():
    e = ResolutionError(ResolutionErrorCode.NamingServiceDown, method="CNS", cause_detail="Network error")
    assert str(e) == "CNS naming service is down at the moment: Network error"


def test_configuration_error_messages():
    e = ConfigurationError(ConfigurationErrorCode.UnspecifiedNetwork, method="CNS")
    assert str(e) == "Unspecified network in Resolution CNS configuration"
    amb = ConfigurationError(ConfigurationErrorCode.AmbiguousSuffix, suffix="crypto")
    assert "crypto" in str(amb)
    assert isinstance(amb, ResolutionSdkError)


def test_rpc_error_revert_detection():
    assert RpcError(method="eth_call", code=3, message="execution reverted").is_revert
    assert RpcError(method="eth_call", code=-32000, message="VM Exception: revert").is_revert
    assert not RpcError(method="eth_call", code=-32098, message="Network error").is_revert


async def _fail(code):
    raise ResolutionError(code, domain="brad.crypto")


async def _value():
    return "0xabc"


@pytest.mark.asyncio
async def test_ignore_substitutes_none_for_matching_code():
    assert await ignore_resolution_error(ResolutionErrorCode.RecordNotFound, _fail(ResolutionErrorCode.RecordNotFound)) is None


@pytest.mark.asyncio
async def test_ignore_passes_values_through():
    assert await ignore_resolution_error(ResolutionErrorCode.RecordNotFound, _value()) == "0xabc"


@pytest.mark.asyncio
async def test_ignore_propagates_other_codes():
    with pytest.raises(ResolutionError) as exc:
        await ignore_resolution_error(ResolutionErrorCode.RecordNotFound, _fail(ResolutionErrorCode.NamingServiceDown))
    assert exc.value.code is ResolutionErrorCode.NamingServiceDown


@pytest.mark.asyncio
async def test_ignore_propagates_foreign_exceptions():
    async def boom():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await ignore_resolution_error(ResolutionErrorCode.RecordNotFound, boom())
