"""
fetcher.py -- All calls to the GLVD REST API.

Each function issues one GET, decodes the JSON body and returns typed
records. Any failure (transport, HTTP status, malformed JSON, unexpected
shape) is logged and raised as FetchError; nothing is retried.
"""

import logging
from typing import Any
from urllib.parse import quote

import requests

from . import __version__
from .config import get_settings
from .decoder import DecodeError, decode_detail, decode_summaries, decode_versions
from .models import CveDetailWithContexts, VulnerabilitySummary

logger = logging.getLogger("glvd.fetcher")

# Module-level session shared across all fetcher calls for connection pooling.
_session = requests.Session()
_session.max_redirects = 3
_session.headers.update({"User-Agent": f"glvdctl/{__version__}", "Accept": "application/json"})


class FetchError(Exception):
    """A GLVD request failed or returned something that could not be decoded."""


def _get_json(path: str) -> Any:
    settings = get_settings()
    url = f"{settings.api_url}/{path}"
    logger.debug("GET %s", url)
    try:
        resp = _session.get(url, timeout=settings.request_timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        logger.warning("GLVD request failed for %s: %s", url, e)
        raise FetchError(f"Request to {url} failed: {e}") from e
    try:
        return resp.json()
    except ValueError as e:  # includes requests.JSONDecodeError
        logger.warning("GLVD returned invalid JSON for %s: %s", url, e)
        raise FetchError(f"Invalid JSON from {url}: {e}") from e


def fetch_versions() -> list[str]:
    """Garden Linux release labels known to GLVD, in service order."""
    raw = _get_json("gardenlinuxVersions")
    try:
        return decode_versions(raw)
    except DecodeError as e:
        logger.warning("Could not decode version list: %s", e)
        raise FetchError(f"Unexpected version list response: {e}") from e


def fetch_summaries(version: str) -> list[VulnerabilitySummary]:
    """CVE summaries for one Garden Linux release."""
    raw = _get_json(f"cves/{quote(version, safe='')}")
    try:
        return decode_summaries(raw, vulnerable_field=get_settings().vulnerable_field)
    except DecodeError as e:
        logger.warning("Could not decode CVE list for %s: %s", version, e)
        raise FetchError(f"Unexpected CVE list response for {version}: {e}") from e


def fetch_detail(cve_id: str) -> CveDetailWithContexts:
    """Detail record and contexts for one CVE."""
    raw = _get_json(f"cveDetails/{quote(cve_id, safe='')}")
    try:
        return decode_detail(raw)
    except DecodeError as e:
        logger.warning("Could not decode details for %s: %s", cve_id, e)
        raise FetchError(f"Unexpected CVE details response for {cve_id}: {e}") from e
