import json

import httpx
import pytest

from resolution import Resolution
from resolution.contracts.abi import CNS_REGISTRY_ABI
from resolution.errors import ResolutionError, ResolutionErrorCode
from resolution.namehash import namehash
from resolution.rpc.http import JsonRpcClient
from resolution.tests.conftest import CNS_REGISTRY, ENS_REGISTRY, OWNER, RESOLVER, records


@pytest.fixture
def resolution(chain, settings):
    return Resolution(settings=settings, contract_factory=chain.factory)


def test_builds_both_services(resolution):
    assert resolution.cns.name == "CNS"
    assert resolution.ens.name == "ENS"
    assert resolution.service_name("brad.crypto") == "CNS"
    assert resolution.service_name("vitalik.eth") == "ENS"


def test_disabled_service_is_not_routed(chain, settings):
    r = Resolution(ens=False, settings=settings, contract_factory=chain.factory)
    assert r.ens is None
    assert not r.is_supported_domain("vitalik.eth")
    with pytest.raises(ResolutionError) as exc:
        r.namehash("vitalik.eth")
    assert exc.value.code is ResolutionErrorCode.UnsupportedDomain


def test_accepts_prebuilt_service(cns, settings, chain):
    r = Resolution(cns=cns, ens=False, settings=settings, contract_factory=chain.factory)
    assert r.cns is cns


def test_namehash_and_childhash(resolution):
    assert resolution.namehash("crypto") == "0x0f4a10a4f46c288cea365fcf45cccf0e9d901b945b9829ccdb54c10dc3cb7a6f"
    parent = resolution.namehash("world.crypto")
    assert resolution.childhash(parent, "hello", "CNS") == resolution.namehash("hello.world.crypto")
    with pytest.raises(ResolutionError) as exc:
        resolution.childhash(parent, "hello", "ZNS")
    assert exc.value.code is ResolutionErrorCode.MethodNotSupported
    assert exc.value.method == "childhash"
    assert "ZNS" in str(exc.value)


@pytest.mark.asyncio
async def test_address_routes_to_cns(chain, resolution):
    chain.contract(CNS_REGISTRY, resolverOf=RESOLVER)
    chain.contract(RESOLVER, get=records({"crypto.ZIL.address": "zil1yu5u4hegy9v3xgluweg4en54zm8f8auwxu0xxj"}))
    assert await resolution.address("reseller-test-braden-6.crypto", "ZIL") == "zil1yu5u4hegy9v3xgluweg4en54zm8f8auwxu0xxj"
    assert ENS_REGISTRY not in {addr for addr, _, _ in chain.calls}


@pytest.mark.asyncio
async def test_metadata_routes(chain, resolution):
    chain.contract(CNS_REGISTRY, resolverOf=RESOLVER)
    chain.contract(RESOLVER, get=records({"ipfs.redirect_domain.value": "https://example.com"}))
    assert await resolution.http_url("brad.crypto") == "https://example.com"
    assert await resolution.resolver("brad.crypto") == RESOLVER


@pytest.mark.asyncio
async def test_owner_routes(chain, resolution):
    chain.contract(ENS_REGISTRY, owner=OWNER)
    assert await resolution.owner("vitalik.eth") == OWNER


@pytest.mark.asyncio
async def test_address_or_none(chain, resolution):
    chain.contract(CNS_REGISTRY, resolverOf=RESOLVER)
    chain.contract(RESOLVER, get=records({}))
    assert await resolution.address_or_none("brad.crypto", "BTC") is None


@pytest.mark.asyncio
async def test_address_or_none_keeps_transport_failures(chain, resolution):
    down = ResolutionError(ResolutionErrorCode.NamingServiceDown, method="CNS")
    chain.contract(CNS_REGISTRY, resolverOf=down)
    with pytest.raises(ResolutionError) as exc:
        await resolution.address_or_none("brad.crypto", "BTC")
    assert exc.value.code is ResolutionErrorCode.NamingServiceDown


@pytest.mark.asyncio
async def test_unsupported_domain_makes_no_calls(chain, resolution):
    with pytest.raises(ResolutionError) as exc:
        await resolution.address("brad.zil", "ZIL")
    assert exc.value.code is ResolutionErrorCode.UnsupportedDomain
    assert chain.calls == []


@pytest.mark.asyncio
async def test_resolve_is_not_supported(resolution):
    with pytest.raises(ResolutionError) as exc:
        await resolution.resolve("brad.crypto")
    assert exc.value.code is ResolutionErrorCode.MethodNotSupported


@pytest.mark.asyncio
async def test_context_manager_closes_services(settings):
    async with Resolution(settings=settings) as r:
        assert r.cns.url == "https://mainnet.infura.io"


@pytest.mark.asyncio
async def test_shared_rpc_client_is_used_and_closed(settings):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        seen.append(body["params"][0])
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": "0x"})

    rpc = JsonRpcClient("https://mainnet.infura.io", transport=httpx.MockTransport(handler))
    async with Resolution(settings=settings, rpc=rpc) as r:
        assert r.rpc is rpc
        with pytest.raises(ResolutionError) as exc:
            await r.resolver("brad.crypto")
        assert exc.value.code is ResolutionErrorCode.UnregisteredDomain
        with pytest.raises(ResolutionError):
            await r.resolver("vitalik.eth")

    node = namehash("brad.crypto")
    assert seen[0] == {"to": CNS_REGISTRY, "data": CNS_REGISTRY_ABI["resolverOf"].encode_call([node])}
    assert {call["to"] for call in seen} == {CNS_REGISTRY, ENS_REGISTRY}
    assert rpc._client.is_closed
