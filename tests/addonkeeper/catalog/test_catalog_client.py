from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from addonkeeper.app import settings as app_settings
from addonkeeper.catalog import client as catalog_client
from addonkeeper.catalog.client import fetchCatalog
from addonkeeper.catalog.models import CatalogSource
from addonkeeper.config.flavor import Flavor
from addonkeeper.core.logging import clearLogContext, getLogContext, setLogContext
from addonkeeper.core.errors import (
    CatalogConnectionError,
    CatalogDecodeError,
    CatalogError,
    CatalogHTTPError,
)
from addonkeeper.http import client as http_client

CATALOG_URL = "https://catalog.test/curse.json"

RECORD = {
    "id": 3358,
    "name": "Deadly Boss Mods",
    "categories": ["Boss Encounters", "PvP"],
    "summary": "Raid alerts",
    "numberOfDownloads": 123456,
    "source": "curse",
    "flavors": ["retail", "classic"],
}


def _install_transport(monkeypatch: pytest.MonkeyPatch, handler):
    transport = httpx.MockTransport(handler)
    original_async_client = http_client.httpx.AsyncClient
    # Unwrap a previous patch so a re-install within one test uses the new transport.
    original_async_client = getattr(original_async_client, "_original", original_async_client)

    class _PatchedAsyncClient:
        """Wrap httpx.AsyncClient so the transport can be injected."""

        _original = original_async_client

        def __init__(self, *args, **kwargs):
            kwargs = dict(kwargs)
            kwargs["transport"] = transport
            self._client = original_async_client(*args, **kwargs)

        async def __aenter__(self):
            client = await self._client.__aenter__()
            return client

        async def __aexit__(self, exc_type, exc, tb):
            return await self._client.__aexit__(exc_type, exc, tb)

    monkeypatch.setattr(http_client.httpx, "AsyncClient", _PatchedAsyncClient)
    return transport


@pytest.mark.asyncio
async def test_fetchCatalog_success_decodesRecords(monkeypatch):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[RECORD])

    _install_transport(monkeypatch, handler)

    catalog = await fetchCatalog(CATALOG_URL, 5)

    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert str(seen[0].url) == CATALOG_URL
    assert len(catalog) == 1
    addon = catalog.addons[0]
    assert addon.id == 3358
    assert addon.name == "Deadly Boss Mods"
    assert addon.categories == ["Boss Encounters", "PvP"]
    assert addon.summary == "Raid alerts"
    assert addon.downloadCount == 123456
    assert addon.source is CatalogSource.Curse
    assert addon.supportedFlavors == [Flavor.Retail, Flavor.Classic]


@pytest.mark.asyncio
async def test_fetchCatalog_httpFailure_carriesBody(monkeypatch):
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(500, text="oops")

    _install_transport(monkeypatch, handler)

    with pytest.raises(CatalogHTTPError) as excinfo:
        await fetchCatalog(CATALOG_URL, 5)

    assert "oops" in str(excinfo.value)
    assert excinfo.value.status == 500
    assert excinfo.value.body == "oops"
    # No retries
    assert calls == 1


@pytest.mark.asyncio
async def test_fetchCatalog_notFound_isHttpFailure(monkeypatch):
    _install_transport(monkeypatch, lambda request: httpx.Response(404, text="no such catalog"))

    with pytest.raises(CatalogHTTPError) as excinfo:
        await fetchCatalog(CATALOG_URL, 5)

    assert excinfo.value.status == 404


@pytest.mark.asyncio
async def test_fetchCatalog_malformedJson_isDecodeFailure(monkeypatch):
    _install_transport(monkeypatch, lambda request: httpx.Response(200, text="[{not json"))

    with pytest.raises(CatalogDecodeError) as excinfo:
        await fetchCatalog(CATALOG_URL, 5)

    assert not isinstance(excinfo.value, CatalogHTTPError)
    assert isinstance(excinfo.value, CatalogError)


@pytest.mark.parametrize(
    "payload",
    [
        {"addons": [RECORD]},
        [{**RECORD, "source": "wowinterface"}],
        [{**RECORD, "flavors": ["retail", "wotlk"]}],
        [{**RECORD, "numberOfDownloads": -1}],
        [{key: value for key, value in RECORD.items() if key != "summary"}],
        [{**RECORD, "NumberOfDownloads": 1, "numberOfDownloads": None}],
        [RECORD, {**RECORD, "name": "Duplicate id"}],
    ],
)
@pytest.mark.asyncio
async def test_fetchCatalog_schemaMismatch_isDecodeFailure(monkeypatch, payload):
    _install_transport(monkeypatch, lambda request: httpx.Response(200, json=payload))

    with pytest.raises(CatalogDecodeError):
        await fetchCatalog(CATALOG_URL, 5)


@pytest.mark.asyncio
async def test_fetchCatalog_followsRedirects(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/curse.json":
            return httpx.Response(302, headers={"Location": "https://mirror.test/catalog.json"})
        return httpx.Response(200, json=[RECORD, {**RECORD, "id": 1, "flavors": ["classic"]}])

    _install_transport(monkeypatch, handler)

    catalog = await fetchCatalog(CATALOG_URL, 5)

    assert [addon.id for addon in catalog] == [3358, 1]


@pytest.mark.asyncio
async def test_fetchCatalog_timeout_isConnectionFailure(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    _install_transport(monkeypatch, handler)

    with pytest.raises(CatalogConnectionError):
        await fetchCatalog(CATALOG_URL, 0.5)


@pytest.mark.asyncio
async def test_fetchCatalog_connectError_isConnectionFailure(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    _install_transport(monkeypatch, handler)

    with pytest.raises(CatalogConnectionError):
        await fetchCatalog(CATALOG_URL, 5)


@pytest.mark.asyncio
async def test_fetchCatalog_defaultsComeFromSettings(monkeypatch, isolatedUserDir: Path):
    isolatedUserDir.mkdir(parents=True, exist_ok=True)
    (isolatedUserDir / "settings.json5").write_text(
        json.dumps({"catalog": {"url": "http://127.0.0.1:8765/local.json", "timeoutSeconds": 3}}),
        encoding="utf-8",
    )
    app_settings.reloadSettings()
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    _install_transport(monkeypatch, handler)

    catalog = await fetchCatalog()

    assert len(catalog) == 0
    assert str(seen[0].url) == "http://127.0.0.1:8765/local.json"


def test_defaultCatalogUrl_matchesShippedSettings():
    assert app_settings.settings("catalog.url") == catalog_client.DEFAULT_CATALOG_URL


@pytest.mark.asyncio
async def test_fetchCatalog_malformedUrl_isConnectionFailure(monkeypatch):
    _install_transport(monkeypatch, lambda request: httpx.Response(200, json=[RECORD]))

    with pytest.raises(CatalogConnectionError):
        await fetchCatalog("http://[::1/c.json", 5)


@pytest.mark.asyncio
async def test_fetchCatalog_restoresCallerLogContext(monkeypatch):
    seen: list[dict | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(getLogContext())
        return httpx.Response(200, json=[])

    _install_transport(monkeypatch, handler)

    setLogContext(flavor="classic")
    try:
        await fetchCatalog(CATALOG_URL, 5)
        assert getLogContext() == {"flavor": "classic"}

        _install_transport(monkeypatch, lambda request: httpx.Response(500, text="oops"))
        with pytest.raises(CatalogHTTPError):
            await fetchCatalog(CATALOG_URL, 5)
        assert getLogContext() == {"flavor": "classic"}
    finally:
        clearLogContext()

    assert seen == [{"flavor": "classic", "operation": "catalog.fetch"}]
