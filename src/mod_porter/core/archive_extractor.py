import json
import zipfile
import zlib
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from .constants import FABRIC_METADATA, FORGE_LEGACY_METADATA
from mod_porter.utils.error_messages import suggest_fix_for_error, get_user_friendly_error


IDENTITY_FIELDS = ('id', 'name')


def parse_metadata_text(content: str) -> Any:
    """Parse a metadata descriptor. Raw control characters inside strings are tolerated."""
    return json.loads(content, strict=False)


def _first_mod_object(document: Any) -> Optional[dict]:
    # mcmod.info is usually a list of mod objects, sometimes {"modList": [...]}
    if isinstance(document, dict):
        mod_list = document.get('modList')
        if isinstance(mod_list, list) and not any(field in document for field in IDENTITY_FIELDS):
            document = mod_list
        else:
            return document
    if isinstance(document, list):
        for entry in document:
            if isinstance(entry, dict):
                return entry
    return None


def identity_from_document(document: Any) -> Optional[str]:
    """Return `id`, else `name`, from a parsed descriptor. Only non-empty strings count."""
    mod_object = _first_mod_object(document)
    if mod_object is None:
        return None
    for field in IDENTITY_FIELDS:
        value = mod_object.get(field)
        if isinstance(value, str) and value:
            return value
    return None


class ArchiveIdentityExtractor:

    def __init__(self, log_callback=None):
        self.log_callback = log_callback

    def _log(self, message, **kwargs):
        if self.log_callback:
            self.log_callback(message, **kwargs)

    def read_metadata_document(self, archive_path: Union[str, Path]) -> Tuple[Optional[str], Any]:
        """Locate and parse the metadata descriptor of a mod archive.

        fabric.mod.json is looked up by exact name first. Otherwise the first entry
        whose full path equals mcmod.info (case-insensitive) is used.

        Returns:
            tuple: (entry_name or None, parsed document or None)

        Raises:
            zipfile.BadZipFile, OSError, ValueError: archive or descriptor unreadable
        """
        with zipfile.ZipFile(archive_path, 'r') as jar:
            names = jar.namelist()
            if FABRIC_METADATA in names:
                entry_name = FABRIC_METADATA
            else:
                entry_name = next(
                    (n for n in names if n.lower() == FORGE_LEGACY_METADATA.lower()),
                    None
                )
            if entry_name is None:
                return (None, None)

            with jar.open(entry_name) as f:
                content = f.read().decode('utf-8-sig')

        return (entry_name, parse_metadata_text(content))

    def extract_identity(self, archive_path: Union[str, Path]) -> Optional[str]:
        """Return the mod's self-declared id (or name), or None. Never raises."""
        archive_name = Path(archive_path).name
        try:
            entry_name, document = self.read_metadata_document(archive_path)
        except (zipfile.BadZipFile, zlib.error, EOFError, OSError, ValueError, RuntimeError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError.
            # A damaged deflate stream raises zlib.error or EOFError.
            self._log(f"  Could not read metadata from {archive_name}: {type(e).__name__}: {e}", debug=True)
            if suggest_fix_for_error(e) == 'corrupted_archive':
                self._log(f"\n{get_user_friendly_error('corrupted_archive')}", debug=True)
            return None

        if entry_name is None:
            self._log(f"  No {FABRIC_METADATA} or {FORGE_LEGACY_METADATA} in {archive_name}", debug=True)
            return None

        identity = identity_from_document(document)
        if identity is None:
            self._log(f"  {entry_name} in {archive_name} declares neither id nor name", debug=True)
        else:
            self._log(f"  Read '{identity}' from {archive_name}/{entry_name}", debug=True)
        return identity
