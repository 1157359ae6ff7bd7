from __future__ import annotations

import logging

import httpx

from .errors import TransportFailure
from .metadata.version import detect_odata_version
from .types import MetadataDocument

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
USER_AGENT = "odata-graph/0.1"


def metadata_url(url: str) -> str:
    """Turn a service root into its $metadata URL.

    URLs that already point at $metadata are returned unchanged.
    """
    url = url.strip()
    if url.endswith("$metadata"):
        return url
    return f"{url.rstrip('/')}/$metadata"


async def fetch_metadata(
    url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> MetadataDocument:
    """Fetch a service's metadata document.

    Raises TransportFailure on network errors and non-2xx responses; the
    body is not inspected here beyond version detection.
    """
    target = metadata_url(url)
    headers = {"User-Agent": USER_AGENT, "Accept": "application/xml"}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await own_client.get(target, headers=headers, follow_redirects=True)
        else:
            response = await client.get(target, headers=headers, follow_redirects=True)
    except (httpx.HTTPError, httpx.InvalidURL) as err:
        logger.warning("Metadata fetch failed for %s: %s", target, err)
        raise TransportFailure(target, str(err) or type(err).__name__) from err

    if not response.is_success:
        logger.warning("Metadata fetch for %s returned HTTP %s", target, response.status_code)
        raise TransportFailure(
            target, f"HTTP {response.status_code}", status_code=response.status_code
        )

    text = response.text
    return MetadataDocument(
        url=target,
        text=text,
        version=detect_odata_version(text, response.headers),
    )
