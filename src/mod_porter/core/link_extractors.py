"""Strategies for finding the download link on a Modrinth versions page."""
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .constants import DOWNLOAD_CONTROL_CLASS


class LinkExtractor:
    """Finds the artifact link in a listing page. Subclass when the page markup changes."""

    def extract(self, html: str, page_url: str) -> Optional[str]:
        raise NotImplementedError


class ClassLinkExtractor(LinkExtractor):
    """First <a> whose class attribute contains the marker, e.g. <a class="download-button" href="...">.

    The marker is matched as a substring, so "download-button-primary" matches as well.
    """

    def __init__(self, css_class: str = DOWNLOAD_CONTROL_CLASS, parser: str = "html.parser"):
        self.css_class = css_class
        self.parser = parser

    def extract(self, html: str, page_url: str) -> Optional[str]:
        soup = BeautifulSoup(html, self.parser)
        anchor = soup.select_one(f'a[class*="{self.css_class}"]')
        if anchor is None:
            return None
        href = (anchor.get("href") or "").strip()
        if not href:
            return None
        # Relative links are resolved against the page they came from
        return urljoin(page_url, href)
