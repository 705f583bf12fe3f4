"""Type definitions for better code clarity and IDE support."""
from enum import Enum
from typing import Any, NamedTuple, Optional, Tuple
from pathlib import Path


class ModMapping(NamedTuple):
    """One override from a local mod identity to a Modrinth project id."""
    expected_name: str
    api_name: str


class FetchStatus(Enum):
    OK = "ok"
    TRANSPORT_ERROR = "transport_error"
    PARSE_ERROR = "parse_error"
    NOT_FOUND = "not_found"


class FetchResult(NamedTuple):
    """Result of a single remote call. Anything but OK means "unavailable"."""
    status: FetchStatus
    payload: Any = None
    error: Optional[str] = None
    exception: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK


class MappingLoadStatus(Enum):
    LOADED = "loaded"
    TEMPLATE_CREATED = "template_created"
    PARSE_ERROR = "parse_error"


class MappingLoadResult(NamedTuple):
    """Result of loading mod_mappings.json."""
    mappings: Tuple[ModMapping, ...]
    status: MappingLoadStatus


class InstallStage(Enum):
    PROJECT_LOOKUP_FAILED = "project_lookup_failed"
    FETCH_PAGE_FAILED = "fetch_page_failed"
    NO_LINK_FOUND = "no_link_found"
    DOWNLOAD_FAILED = "download_failed"
    WRITE_FAILED = "write_failed"
    SUCCESS = "success"


class InstallResult(NamedTuple):
    """Result of a download-and-install attempt."""
    stage: InstallStage
    path: Optional[Path] = None
    download_url: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.stage is InstallStage.SUCCESS


class ModOutcome(NamedTuple):
    """What happened to one archive during a run."""
    archive: str
    mod_id: Optional[str]
    api_name: Optional[str]
    compatible: bool
    install: Optional[InstallResult]
