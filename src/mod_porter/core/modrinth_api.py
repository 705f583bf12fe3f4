"""Modrinth API and website access. Every call returns a FetchResult and never raises."""
from urllib.parse import quote

import requests

from .constants import (
    MODRINTH_API_BASE,
    MODRINTH_SITE_BASE,
    REQUEST_TIMEOUT,
    CHUNK_SIZE,
    USER_AGENT,
    DEFAULT_LOADER,
)
from mod_porter.model_types import FetchResult, FetchStatus
from mod_porter.utils.network_utils import build_versions_page_url


class ModrinthClient:
    """Thin blocking client. One attempt per call, bounded by a timeout."""

    def __init__(self, session=None, api_base=MODRINTH_API_BASE, site_base=MODRINTH_SITE_BASE,
                 timeout=REQUEST_TIMEOUT, user_agent=USER_AGENT):
        self.session = session or requests.Session()
        self.api_base = api_base.rstrip('/')
        self.site_base = site_base.rstrip('/')
        self.timeout = timeout
        self.session.headers.update({'User-Agent': user_agent})

    def project_url(self, project_id: str) -> str:
        return f"{self.api_base}/project/{quote(project_id, safe='')}"

    def versions_page_url(self, slug: str, game_version: str, loader: str = DEFAULT_LOADER) -> str:
        return build_versions_page_url(self.site_base, slug, game_version, loader)

    def _get(self, url, stream=False):
        """GET url; returns (response, None) on 2xx, else (None, FetchResult describing the failure)."""
        try:
            response = self.session.get(url, timeout=self.timeout, stream=stream)
        except requests.exceptions.RequestException as e:
            return None, FetchResult(FetchStatus.TRANSPORT_ERROR, error=f"{type(e).__name__}: {e}", exception=e)

        if 200 <= response.status_code < 300:
            return response, None

        response.close()
        message = f"HTTP {response.status_code} for {url}"
        # Keep the response on the error so callers can tell a 404 from a 429
        http_error = requests.exceptions.HTTPError(message, response=response)
        status = FetchStatus.NOT_FOUND if response.status_code == 404 else FetchStatus.TRANSPORT_ERROR
        return None, FetchResult(status, error=message, exception=http_error)

    def get_project(self, project_id: str) -> FetchResult:
        """Fetch /v2/project/<id>. Payload is the decoded JSON object."""
        if not project_id:
            return FetchResult(FetchStatus.NOT_FOUND, error="Empty project id")

        response, failure = self._get(self.project_url(project_id))
        if failure:
            return failure

        try:
            data = response.json()
        except ValueError as e:
            return FetchResult(FetchStatus.PARSE_ERROR, error=f"Invalid JSON: {e}")
        if not isinstance(data, dict):
            return FetchResult(FetchStatus.PARSE_ERROR, error="Project response is not a JSON object")
        return FetchResult(FetchStatus.OK, data)

    def get_page(self, url: str) -> FetchResult:
        """Fetch an HTML page. Payload is the decoded text."""
        response, failure = self._get(url)
        if failure:
            return failure
        try:
            return FetchResult(FetchStatus.OK, response.text)
        except requests.exceptions.RequestException as e:
            return FetchResult(FetchStatus.TRANSPORT_ERROR, error=f"{type(e).__name__}: {e}", exception=e)

    def get_file(self, url: str) -> FetchResult:
        """Download a binary file. Payload is the raw bytes."""
        response, failure = self._get(url, stream=True)
        if failure:
            return failure
        try:
            content = b''.join(chunk for chunk in response.iter_content(chunk_size=CHUNK_SIZE) if chunk)
        except requests.exceptions.RequestException as e:
            return FetchResult(FetchStatus.TRANSPORT_ERROR, error=f"{type(e).__name__}: {e}", exception=e)
        finally:
            response.close()
        return FetchResult(FetchStatus.OK, content)

    def close(self):
        self.session.close()
