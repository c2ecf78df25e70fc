# addonkeeper/catalog/client.py
from __future__ import annotations
import logging

from pydantic import ValidationError

from addonkeeper.app.settings import settings
from addonkeeper.core.errors import CatalogConnectionError, CatalogDecodeError, CatalogHTTPError
from addonkeeper.core.logging import resetLogContext, setLogContext
from addonkeeper.http import client as httpClient
from .models import Catalog

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_CATALOG_URL", "fetchCatalog"]

DEFAULT_CATALOG_URL = "https://raw.githubusercontent.com/casperstorm/ajour-catalog/master/curse.json"



async def fetchCatalog(url: str | None = None, timeoutSeconds: float | None = None) -> Catalog:
    """
    Fetches and decodes the remote add-on catalog with a single GET.

    `url` and `timeoutSeconds` default to the `catalog.url` / `catalog.timeoutSeconds` settings.

    Raises:
        CatalogConnectionError: host unreachable or the request timed out
        CatalogHTTPError: non-success status, message carries the response body
        CatalogDecodeError: body is not a valid catalog document
    """
    url = url or str(settings("catalog.url", DEFAULT_CATALOG_URL))
    if timeoutSeconds is None:
        timeoutSeconds = float(settings("catalog.timeoutSeconds", 30))
    maxConnections = int(settings("catalog.maxConnectionsPerHost", 6))

    ctxToken = setLogContext(operation="catalog.fetch")
    try:
        try:
            resp = await httpClient.request(
                "GET",
                url,
                timeoutSeconds=timeoutSeconds,
                maxConnections=maxConnections,
                followRedirects=True,
            )
        except httpClient.HTTPError as err:
            logger.warning("Catalog request to '%s' failed with HTTP %d", url, err.status)
            raise CatalogHTTPError(err.status, err.body) from err
        except httpClient.TransportError as err:
            logger.warning("Catalog request to '%s' failed: %s", url, err)
            raise CatalogConnectionError(str(err)) from err

        try:
            catalog = Catalog.model_validate_json(resp["content"])
        except ValidationError as err:
            logger.warning("Catalog from '%s' does not match the document schema (%d errors)", url, err.error_count())
            raise CatalogDecodeError(f"Couldn't decode catalog: {err}") from err

        logger.info("Fetched catalog with %d addons from '%s'", len(catalog), url)
        return catalog
    finally:
        resetLogContext(ctxToken)
