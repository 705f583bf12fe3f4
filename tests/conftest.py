import io
import json
import zipfile

import pytest
import requests


class Logger:
    def __init__(self):
        self.messages = []
    def __call__(self, msg, error=False, info=False, warning=False, debug=False, success=False):
        self.messages.append((msg, error))
    def text(self):
        return [m[0] for m in self.messages]
    def errors(self):
        return [m[0] for m in self.messages if m[1]]


class FakeResp:
    def __init__(self, status_code=200, json_data=None, text="", content=b"", json_error=False):
        self.status_code = status_code
        self._json_data = json_data
        self._json_error = json_error
        self.text = text
        self.content = content
        self.closed = False
    def json(self):
        if self._json_error:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json_data
    def iter_content(self, chunk_size=8192):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]
    def close(self):
        self.closed = True


class FakeSession:
    """Answers GETs from a url -> FakeResp (or exception) table and records every call."""
    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.headers = {}
        self.calls = []
        self.closed = False
    def get(self, url, timeout=None, stream=False):
        self.calls.append((url, timeout))
        if url not in self.routes:
            raise requests.exceptions.ConnectionError(f"No route to {url}")
        answer = self.routes[url]
        if isinstance(answer, Exception):
            raise answer
        return answer
    def close(self):
        self.closed = True


def project_resp(**fields):
    return FakeResp(200, json_data=fields)


def make_jar(path, files):
    """Write a zip archive; dict values are dumped as JSON, str/bytes written as is."""
    bio = io.BytesIO()
    with zipfile.ZipFile(bio, mode="w") as zf:
        for name, content in files.items():
            if isinstance(content, (dict, list)):
                content = json.dumps(content)
            zf.writestr(name, content)
    path.write_bytes(bio.getvalue())
    return path


@pytest.fixture
def logs():
    return Logger()
