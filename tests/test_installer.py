import requests

from mod_porter.core.installer import ModInstaller
from mod_porter.core.modrinth_api import ModrinthClient
from mod_porter.core.rate_limiter import RateLimiter
from mod_porter.model_types import InstallStage

from conftest import FakeResp, FakeSession, project_resp

PROJECT_URL = "https://api.modrinth.com/v2/project/sodium"
PAGE_URL = "https://modrinth.com/mod/sodium/versions?l=fabric&g=1.20.1"
JAR_URL = "https://cdn/sodium-0.5.jar"
PAGE_HTML = f'<html><body><a class="download-button" href="{JAR_URL}">Download</a></body></html>'
JAR_BYTES = b"PK\x03\x04 fake jar"


class RecordingLimiter(RateLimiter):
    def __init__(self):
        super().__init__(5, clock=lambda: 0.0, sleep=self._record)
        self.sleeps = []
    def _record(self, seconds):
        self.sleeps.append(seconds)


def make_installer(routes, logs, **kwargs):
    session = FakeSession(routes)
    limiter = RecordingLimiter()
    installer = ModInstaller(ModrinthClient(session=session), logs, rate_limiter=limiter, **kwargs)
    return installer, session, limiter


def happy_routes():
    return {
        PROJECT_URL: project_resp(slug="sodium", game_versions=["1.20.1"]),
        PAGE_URL: FakeResp(200, text=PAGE_HTML),
        JAR_URL: FakeResp(200, content=JAR_BYTES),
    }


def test_install_success(tmp_path, logs):
    installer, session, limiter = make_installer(happy_routes(), logs)

    result = installer.install("sodium", "1.20.1", tmp_path)

    assert result.success
    assert result.path == tmp_path / "sodium-0.5.jar"
    assert (tmp_path / "sodium-0.5.jar").read_bytes() == JAR_BYTES
    assert [url for url, _ in session.calls] == [PROJECT_URL, PAGE_URL, JAR_URL]
    assert any("Mod downloaded and installed" in m for m in logs.text())
    # one rate-limit pause per installed mod
    assert limiter.sleeps == [5]
    # no temp files left behind
    assert sorted(p.name for p in tmp_path.iterdir()) == ["sodium-0.5.jar"]


def test_install_twice_overwrites(tmp_path, logs):
    installer, _, limiter = make_installer(happy_routes(), logs)
    (tmp_path / "sodium-0.5.jar").write_bytes(b"old build")

    installer.install("sodium", "1.20.1", tmp_path)
    installer.install("sodium", "1.20.1", tmp_path)

    assert [p.name for p in tmp_path.iterdir()] == ["sodium-0.5.jar"]
    assert (tmp_path / "sodium-0.5.jar").read_bytes() == JAR_BYTES
    assert limiter.sleeps == [5, 5]


def test_missing_slug_aborts_before_write(tmp_path, logs):
    routes = happy_routes()
    routes[PROJECT_URL] = project_resp(game_versions=["1.20.1"])
    installer, session, limiter = make_installer(routes, logs)

    result = installer.install("sodium", "1.20.1", tmp_path)

    assert result.stage is InstallStage.PROJECT_LOOKUP_FAILED
    assert list(tmp_path.iterdir()) == []
    assert len(session.calls) == 1
    assert limiter.sleeps == []
    assert any("Failed to retrieve mod information" in m for m in logs.errors())


def test_project_lookup_transport_error(tmp_path, logs):
    routes = happy_routes()
    routes[PROJECT_URL] = requests.exceptions.ConnectionError("down")
    installer, _, _ = make_installer(routes, logs)

    assert installer.install("sodium", "1.20.1", tmp_path).stage is InstallStage.PROJECT_LOOKUP_FAILED


def test_page_fetch_failure(tmp_path, logs):
    routes = happy_routes()
    routes[PAGE_URL] = FakeResp(500)
    installer, _, limiter = make_installer(routes, logs)

    result = installer.install("sodium", "1.20.1", tmp_path)

    assert result.stage is InstallStage.FETCH_PAGE_FAILED
    assert any(f"Failed to fetch mod page from URL: {PAGE_URL}" in m for m in logs.errors())
    assert list(tmp_path.iterdir()) == []
    assert limiter.sleeps == []


def test_no_download_link(tmp_path, logs):
    routes = happy_routes()
    routes[PAGE_URL] = FakeResp(200, text="<html><body><p>No versions</p></body></html>")
    installer, _, _ = make_installer(routes, logs)

    result = installer.install("sodium", "1.20.1", tmp_path)

    assert result.stage is InstallStage.NO_LINK_FOUND
    assert any("No download links found in the mod page." in m for m in logs.errors())


def test_download_failure(tmp_path, logs):
    routes = happy_routes()
    routes[JAR_URL] = FakeResp(404)
    installer, _, limiter = make_installer(routes, logs)

    result = installer.install("sodium", "1.20.1", tmp_path)

    assert result.stage is InstallStage.DOWNLOAD_FAILED
    assert result.download_url == JAR_URL
    assert any(f"Failed to download mod from URL: {JAR_URL}" in m for m in logs.errors())
    assert list(tmp_path.iterdir()) == []
    assert limiter.sleeps == []


def test_link_without_filename(tmp_path, logs):
    routes = happy_routes()
    routes[PAGE_URL] = FakeResp(200, text='<a class="download-button" href="https://cdn/files/">d</a>')
    installer, session, _ = make_installer(routes, logs)

    result = installer.install("sodium", "1.20.1", tmp_path)

    assert result.stage is InstallStage.DOWNLOAD_FAILED
    assert "https://cdn/files/" not in [url for url, _ in session.calls]


def test_missing_install_dir_is_write_failure(tmp_path, logs):
    installer, _, limiter = make_installer(happy_routes(), logs)

    result = installer.install("sodium", "1.20.1", tmp_path / "gone")

    assert result.stage is InstallStage.WRITE_FAILED
    assert limiter.sleeps == []


def test_loader_is_used_in_page_url(tmp_path, logs):
    quilt_page = "https://modrinth.com/mod/sodium/versions?l=quilt&g=1.20.1"
    routes = happy_routes()
    routes[quilt_page] = routes.pop(PAGE_URL)
    installer, session, _ = make_installer(routes, logs, loader="quilt")

    assert installer.install("sodium", "1.20.1", tmp_path).success
    assert quilt_page in [url for url, _ in session.calls]


def test_slug_differs_from_project_id(tmp_path, logs):
    routes = {
        "https://api.modrinth.com/v2/project/AANobbMI": project_resp(slug="sodium"),
        PAGE_URL: FakeResp(200, text=PAGE_HTML),
        JAR_URL: FakeResp(200, content=JAR_BYTES),
    }
    installer, _, _ = make_installer(routes, logs)
    assert installer.install("AANobbMI", "1.20.1", tmp_path).success


def test_rate_limited_download_shows_rate_limit_message(tmp_path, logs):
    routes = happy_routes()
    routes[JAR_URL] = FakeResp(429)
    installer, _, limiter = make_installer(routes, logs)

    result = installer.install("sodium", "1.20.1", tmp_path)

    assert result.stage is InstallStage.DOWNLOAD_FAILED
    assert any("Rate limited by Modrinth (429)" in m for m in logs.errors())
    assert list(tmp_path.iterdir()) == []
    assert limiter.sleeps == []


def test_page_timeout_shows_connection_message(tmp_path, logs):
    routes = happy_routes()
    routes[PAGE_URL] = requests.exceptions.Timeout("read timed out")
    installer, _, _ = make_installer(routes, logs)

    result = installer.install("sodium", "1.20.1", tmp_path)

    assert result.stage is InstallStage.FETCH_PAGE_FAILED
    assert any("Connection timeout" in m for m in logs.errors())
