# -*- coding: utf-8 -*-
"""Application constants and paths."""
import sys
from pathlib import Path


# Base directory resolution (script vs PyInstaller bundle)
if hasattr(sys, '_MEIPASS'):
    BASE_DIR = Path(sys.executable).resolve().parent
else:
    # Script mode: working directory, mod_mappings.json lives next to where the tool is run
    BASE_DIR = Path.cwd()

# Paths
MAPPINGS_FILE = BASE_DIR / "mod_mappings.json"
PREFS_FILE = BASE_DIR / "config" / "porter_prefs.json"
LOG_FILE = BASE_DIR / "mod_porter.log"

# Remote service
MODRINTH_API_BASE = "https://api.modrinth.com/v2"
MODRINTH_SITE_BASE = "https://modrinth.com"
USER_AGENT = "modrinth-mod-porter/1.0 (python-requests)"
DEFAULT_LOADER = "fabric"
DOWNLOAD_CONTROL_CLASS = "download-button"

# Network timeouts & download
REQUEST_TIMEOUT = 30
CHUNK_SIZE = 8192

# Modrinth rate limit: pause after every installed mod
DOWNLOAD_DELAY_SECONDS = 5

# Archives
ARCHIVE_SUFFIX = ".jar"
FABRIC_METADATA = "fabric.mod.json"
FORGE_LEGACY_METADATA = "mcmod.info"

TEMPLATE_MAPPINGS = [
    {"ExpectedName": "Example Mod", "ApiName": "example-mod-api"}
]
