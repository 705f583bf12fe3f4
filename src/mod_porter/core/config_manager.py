"""Configuration file management with atomic writes to prevent corruption."""
import json
import tempfile
import os
from pathlib import Path
from typing import Iterable

from .constants import MAPPINGS_FILE, PREFS_FILE, TEMPLATE_MAPPINGS
from mod_porter.model_types import ModMapping, MappingLoadResult, MappingLoadStatus


class ModMappingTable:
    """Ordered local-name -> Modrinth-id overrides. First exact match wins."""

    def __init__(self, mappings: Iterable[ModMapping] = ()):
        self._mappings = tuple(mappings)

    @property
    def mappings(self):
        return self._mappings

    def __len__(self):
        return len(self._mappings)

    def resolve(self, expected_name: str) -> str:
        """Return the mapped api name, or expected_name unchanged when nothing matches."""
        for mapping in self._mappings:
            if mapping.expected_name == expected_name:
                return mapping.api_name
        return expected_name


class ConfigManager:
    """Manages mod_mappings.json and the prompt preferences."""

    def __init__(self, log_callback=None, mappings_file=None, prefs_file=None):
        self.mappings_file = Path(mappings_file) if mappings_file else MAPPINGS_FILE
        self.prefs_file = Path(prefs_file) if prefs_file else PREFS_FILE
        self.log_callback = log_callback

    def _log(self, message, **kwargs):
        if self.log_callback:
            self.log_callback(message, **kwargs)

    def _atomic_save_json(self, file_path, data, indent=2, ensure_ascii=False):
        """Atomic write: temp file + replace to prevent corruption on crash.

        Raises:
            OSError: the file could not be written
        """
        file_path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(
            dir=file_path.parent,
            prefix=f'.tmp_{file_path.stem}_',
            suffix='.json'
        )
        try:
            with os.fdopen(temp_fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=indent, ensure_ascii=ensure_ascii)
            os.replace(temp_path, file_path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    # ============================================================================
    # Mod mappings
    # ============================================================================

    def load_mappings(self) -> MappingLoadResult:
        """Load mod_mappings.json, creating a one-entry template when it is missing.

        A file that is not a JSON list loads as an empty table: every name then
        maps to itself. Never fatal.
        """
        if not self.mappings_file.exists():
            return self.create_template()

        try:
            with open(self.mappings_file, 'r', encoding='utf-8-sig') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            self._log(f"Error while parsing configuration file. Using default mappings. ({e})", error=True)
            return MappingLoadResult((), MappingLoadStatus.PARSE_ERROR)

        if not isinstance(data, list):
            self._log("Error while parsing configuration file. Using default mappings. "
                      "(expected a list of {ExpectedName, ApiName} entries)", error=True)
            return MappingLoadResult((), MappingLoadStatus.PARSE_ERROR)

        mappings = self.parse_mappings(data)
        self._log(f"Loaded {len(mappings)} mod mapping(s) from {self.mappings_file.name}", debug=True)
        return MappingLoadResult(mappings, MappingLoadStatus.LOADED)

    def parse_mappings(self, entries):
        """Convert raw JSON entries to ModMapping tuples, skipping malformed ones."""
        mappings = []
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict):
                self._log(f"Skipping mapping at index {idx}: not an object", warning=True)
                continue
            expected_name = entry.get('ExpectedName')
            api_name = entry.get('ApiName')
            if not isinstance(expected_name, str) or not isinstance(api_name, str):
                self._log(f"Skipping mapping at index {idx}: ExpectedName and ApiName must be strings",
                          warning=True)
                continue
            mappings.append(ModMapping(expected_name, api_name))
        return tuple(mappings)

    def create_template(self) -> MappingLoadResult:
        """Write the template mappings file and return it as the loaded table."""
        self._log(f"Configuration file '{self.mappings_file.name}' not found. Creating a template.")
        try:
            self._atomic_save_json(self.mappings_file, TEMPLATE_MAPPINGS)
        except OSError as e:
            self._log(f"Error saving {self.mappings_file.name}: {e}", error=True)
        return MappingLoadResult(self.parse_mappings(TEMPLATE_MAPPINGS), MappingLoadStatus.TEMPLATE_CREATED)

    # ============================================================================
    # Preferences
    # ============================================================================

    def load_preferences(self):
        """Load last used folders and game version."""
        if self.prefs_file.exists():
            try:
                with open(self.prefs_file, 'r', encoding='utf-8') as f:
                    prefs = json.load(f)
                if isinstance(prefs, dict):
                    return prefs
            except (json.JSONDecodeError, IOError) as e:
                self._log(f"Error loading preferences: {e}", error=True)
        return {}

    def save_preferences(self, prefs) -> bool:
        """Save preferences atomically."""
        try:
            self._atomic_save_json(self.prefs_file, prefs)
            return True
        except OSError as e:
            self._log(f"Error saving {self.prefs_file.name}: {e}", error=True)
            return False

    def remember(self, source_dir=None, install_dir=None, game_version=None):
        """Merge the given values into the saved preferences."""
        prefs = self.load_preferences()
        for key, value in (('last_source_dir', source_dir), ('last_install_dir', install_dir),
                           ('last_game_version', game_version)):
            if value:
                prefs[key] = str(value)
        return self.save_preferences(prefs)
