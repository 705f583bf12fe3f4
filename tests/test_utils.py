import importlib
import zipfile
import zlib

import requests

from mod_porter.core import constants
from mod_porter.utils.console_log import ConsoleLog
from mod_porter.utils.error_messages import get_user_friendly_error, suggest_fix_for_error
from mod_porter.utils.network_utils import build_versions_page_url, filename_from_url
from mod_porter.utils.path_validator import FolderValidator


def test_filename_from_url():
    assert filename_from_url("https://cdn/sodium-0.5.jar") == "sodium-0.5.jar"
    assert filename_from_url("https://cdn/data/x/sodium%20fabric.jar?sig=abc#frag") == "sodium fabric.jar"
    assert filename_from_url("https://cdn/folder/") == ""
    assert filename_from_url("https://cdn/a%2F..%2Fevil.jar") == ""
    assert filename_from_url("https://cdn/..") == ""


def test_build_versions_page_url():
    assert build_versions_page_url("https://modrinth.com/", "fabric-api", "1.20.1", "fabric") == \
        "https://modrinth.com/mod/fabric-api/versions?l=fabric&g=1.20.1"


def test_folder_validation(tmp_path):
    assert FolderValidator.validate_source(tmp_path) == (True, None)
    assert FolderValidator.validate_source(f'  "{tmp_path}"  ') == (True, None)
    assert FolderValidator.validate_source(tmp_path / "missing")[0] is False
    assert FolderValidator.validate_source("")[0] is False
    assert FolderValidator.validate_install(None) == (False, "Invalid installation folder path.")

    a_file = tmp_path / "file.txt"
    a_file.write_text("x")
    assert FolderValidator.validate_install(a_file)[0] is False


def test_suggest_fix_for_error():
    assert suggest_fix_for_error(requests.exceptions.Timeout()) == 'network_timeout'
    assert suggest_fix_for_error(requests.exceptions.InvalidURL()) is None
    assert suggest_fix_for_error(PermissionError()) == 'permission_denied'
    assert suggest_fix_for_error(OSError(28, "No space left on device")) == 'disk_space'

    response = requests.Response()
    response.status_code = 429
    assert suggest_fix_for_error(requests.exceptions.HTTPError(response=response)) == 'rate_limited'


def test_unknown_error_type_uses_default_message():
    message = get_user_friendly_error('something_else', "boom")
    assert "Technical details: boom" in message


def test_console_log_levels(tmp_path, capsys):
    log_file = tmp_path / "porter.log"
    log = ConsoleLog(log_file=log_file)

    log("plain")
    log("broken", error=True)
    log("hidden", debug=True)

    out, err = capsys.readouterr()
    assert out == "plain\n"
    assert err == "broken\n"

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    assert lines[1].endswith("ERROR: broken")
    assert lines[2].endswith("DEBUG: hidden")


def test_console_log_debug_shown_when_enabled(capsys):
    log = ConsoleLog(show_debug=True)
    log("details", debug=True)
    assert capsys.readouterr().out == "details\n"


def test_write_permission_check(tmp_path):
    assert FolderValidator.check_write_permissions(tmp_path) == (True, None)
    assert list(tmp_path.iterdir()) == []

    ok, message = FolderValidator.check_write_permissions(tmp_path / "missing")
    assert ok is False
    assert "Permission denied" in message


def test_damaged_archive_errors_are_classified():
    assert suggest_fix_for_error(zlib.error("invalid block type")) == 'corrupted_archive'
    assert suggest_fix_for_error(zipfile.BadZipFile("File is not a zip file")) == 'corrupted_archive'
    assert suggest_fix_for_error(EOFError()) == 'corrupted_archive'


def test_base_dir_is_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    reloaded = importlib.reload(constants)
    try:
        assert reloaded.BASE_DIR.resolve() == tmp_path.resolve()
        assert reloaded.MAPPINGS_FILE == reloaded.BASE_DIR / "mod_mappings.json"
    finally:
        monkeypatch.undo()
        importlib.reload(constants)
