"""URL helpers for Modrinth pages and download links."""

from urllib.parse import quote, unquote, urlencode, urlparse


def build_versions_page_url(site_base: str, slug: str, game_version: str, loader: str) -> str:
    """Build the project's versions listing filtered by loader and game version.

    e.g. https://modrinth.com/mod/sodium/versions?l=fabric&g=1.20.1
    """
    query = urlencode({'l': loader, 'g': game_version})
    return f"{site_base.rstrip('/')}/mod/{quote(slug, safe='')}/versions?{query}"


def filename_from_url(url: str) -> str:
    """Return the last path segment of a URL, percent-decoded. Query and fragment are ignored.

    Returns an empty string when the URL has no usable filename.
    """
    try:
        path = urlparse(url).path
    except (ValueError, AttributeError):
        return ''
    name = unquote(path.rsplit('/', 1)[-1])
    # A decoded segment must not smuggle a directory into the install folder
    if name in ('.', '..') or '/' in name or '\\' in name:
        return ''
    return name
