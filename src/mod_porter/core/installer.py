import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from .constants import DEFAULT_LOADER, DOWNLOAD_DELAY_SECONDS
from .link_extractors import ClassLinkExtractor
from .rate_limiter import RateLimiter
from mod_porter.model_types import InstallResult, InstallStage
from mod_porter.utils.symbols import LogSymbols
from mod_porter.utils.network_utils import filename_from_url
from mod_porter.utils.error_messages import describe_fetch_failure, suggest_fix_for_error, get_user_friendly_error


class ModInstaller:

    def __init__(self, client, log_callback=None, link_extractor=None, rate_limiter=None,
                 loader=DEFAULT_LOADER):
        self.client = client
        self.log_callback = log_callback
        self.link_extractor = link_extractor or ClassLinkExtractor()
        self.rate_limiter = rate_limiter or RateLimiter(DOWNLOAD_DELAY_SECONDS)
        self.loader = loader

    def _log(self, message, **kwargs):
        if self.log_callback:
            self.log_callback(message, **kwargs)

    def _log_fetch_failure(self, result):
        """Add the user-friendly explanation for a failed remote call, when there is one."""
        error_type, message = describe_fetch_failure(result)
        if not message:
            return
        if error_type == 'network_404':
            self._log(f"\n{message}", debug=True)
        else:
            self._log(f"\n{message}", error=True)

    def get_project_slug(self, remote_id: str) -> Optional[str]:
        """Look up the project's canonical slug. None on any failure."""
        result = self.client.get_project(remote_id)
        if not result.ok:
            self._log(f"  Project lookup for '{remote_id}' failed ({result.status.value}): {result.error}",
                      debug=True)
            self._log_fetch_failure(result)
            return None

        slug = result.payload.get('slug')
        if not isinstance(slug, str) or not slug:
            return None
        return slug

    def find_download_link(self, page_url: str):
        """Fetch the versions page and extract the artifact link.

        Returns:
            tuple: (link or None, InstallStage describing a failure or None)
        """
        page = self.client.get_page(page_url)
        if not page.ok:
            self._log(f"  {LogSymbols.ERROR} Failed to fetch mod page from URL: {page_url}", error=True)
            self._log(f"    {page.error}", debug=True)
            self._log_fetch_failure(page)
            return None, InstallStage.FETCH_PAGE_FAILED

        link = self.link_extractor.extract(page.payload, page_url)
        if not link:
            self._log(f"  {LogSymbols.ERROR} No download links found in the mod page.", error=True)
            return None, InstallStage.NO_LINK_FOUND
        return link, None

    def install(self, remote_id: str, target_version: str, install_dir: Union[str, Path]) -> InstallResult:
        """Locate the build of remote_id for target_version and write it to install_dir.

        Each step degrades on its own: failures are logged and returned as the
        stage that stopped the install, never raised. After a successful install
        the call returns only once the download delay has elapsed.
        """
        install_dir = Path(install_dir)

        slug = self.get_project_slug(remote_id)
        if not slug:
            self._log(f"  {LogSymbols.ERROR} Failed to retrieve mod information from Modrinth API.", error=True)
            return InstallResult(InstallStage.PROJECT_LOOKUP_FAILED)

        page_url = self.client.versions_page_url(slug, target_version, self.loader)
        self._log(f"  Versions page: {page_url}", debug=True)

        link, failed_stage = self.find_download_link(page_url)
        if failed_stage:
            return InstallResult(failed_stage)

        self._log(f"  Download URL: {link}")

        filename = filename_from_url(link)
        if not filename:
            self._log(f"  {LogSymbols.ERROR} Failed to download mod from URL: {link} (no file name in link)",
                      error=True)
            return InstallResult(InstallStage.DOWNLOAD_FAILED, download_url=link)

        self._log(f"  {LogSymbols.DOWNLOADING} Downloading {filename}...", debug=True)
        download = self.client.get_file(link)
        if not download.ok:
            self._log(f"  {LogSymbols.ERROR} Failed to download mod from URL: {link}", error=True)
            self._log(f"    {download.error}", debug=True)
            self._log_fetch_failure(download)
            return InstallResult(InstallStage.DOWNLOAD_FAILED, download_url=link)

        target_path = install_dir / filename
        try:
            self.write_file(target_path, download.payload)
        except OSError as e:
            self._log(f"  {LogSymbols.ERROR} Could not write {target_path}: {e}", error=True)
            error_type = suggest_fix_for_error(e)
            if error_type:
                self._log(f"\n{get_user_friendly_error(error_type)}", error=True)
            return InstallResult(InstallStage.WRITE_FAILED, download_url=link)

        self._log(f"  {LogSymbols.SUCCESS} Mod downloaded and installed: {target_path}", success=True)

        # Modrinth rate limit
        self.rate_limiter.mark()
        self.rate_limiter.wait()
        return InstallResult(InstallStage.SUCCESS, path=target_path, download_url=link)

    def write_file(self, target_path: Path, content: bytes):
        """Write bytes via a temp file in the same folder, replacing any existing file."""
        temp_fd, temp_path = tempfile.mkstemp(dir=target_path.parent, prefix='.tmp_', suffix='.part')
        try:
            with os.fdopen(temp_fd, 'wb') as f:
                f.write(content)
            os.replace(temp_path, target_path)
        except OSError:
            if os.path.exists(temp_path):
                try:
                    os.unlink(temp_path)
                except (OSError, PermissionError):
                    pass
            raise
