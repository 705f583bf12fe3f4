"""Core resolution pipeline."""
from .constants import DEFAULT_LOADER, DOWNLOAD_DELAY_SECONDS, MAPPINGS_FILE
from .archive_extractor import ArchiveIdentityExtractor
from .config_manager import ConfigManager, ModMappingTable
from .modrinth_api import ModrinthClient
from .compatibility import CompatibilityResolver
from .link_extractors import LinkExtractor, ClassLinkExtractor
from .rate_limiter import RateLimiter
from .installer import ModInstaller
from .installation_report import InstallationReport
from .pipeline import ModPorter, find_archives

__all__ = [
    'DEFAULT_LOADER', 'DOWNLOAD_DELAY_SECONDS', 'MAPPINGS_FILE',
    'ArchiveIdentityExtractor', 'ConfigManager', 'ModMappingTable', 'ModrinthClient',
    'CompatibilityResolver', 'LinkExtractor', 'ClassLinkExtractor', 'RateLimiter',
    'ModInstaller', 'InstallationReport', 'ModPorter', 'find_archives',
]
