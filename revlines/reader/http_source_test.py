import re

import pytest
import requests

from revlines.reader.config import Config
from revlines.reader.exceptions import IOFailure
from revlines.reader.http_source import HTTPByteSource, handleStatusCode
from revlines.reader.scanner import openScanner

URL = "https://wiki.example.org/dumps/titles.txt"


class FakeResponse:
    def __init__(self, status_code, content=b"", headers=None):
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self.url = URL


class FakeSession:
    """Just enough of requests.Session to serve `data` with Range support"""

    def __init__(self, data: bytes, ranges=True, head_status=200):
        self.data = data
        self.ranges = ranges
        self.head_status = head_status
        self.requested = []
        self.closed = False

    def head(self, url, allow_redirects=True, timeout=None):
        headers = {"Content-Length": str(len(self.data))}
        headers["Accept-Ranges"] = "bytes" if self.ranges else "none"
        return FakeResponse(self.head_status, headers=headers)

    def get(self, url, headers=None, timeout=None):
        start, last = re.match(r"bytes=(\d+)-(\d+)", headers["Range"]).groups()
        self.requested.append((int(start), int(last)))
        if not self.ranges:
            return FakeResponse(200, self.data)
        return FakeResponse(206, self.data[int(start) : int(last) + 1])

    def close(self):
        self.closed = True


class BrokenSession(FakeSession):
    def get(self, url, headers=None, timeout=None):
        raise requests.exceptions.ConnectionError("connection reset")


def test_reads_remote_file_backwards():
    data = "Main Page\nTalk:Main Page\n--END--\n".encode("utf-8")
    session = FakeSession(data)
    config = Config(block_size=8, encoding="utf-8")
    with openScanner(URL, config, session=session) as scanner:
        assert scanner.readLine() == "--END--"
        assert list(scanner) == ["Talk:Main Page", "Main Page"]
    # the caller still owns the session
    assert not session.closed
    # blocks are aligned to the block size counted from the start
    assert session.requested[0] == (32, 32)
    assert all(start % 8 == 0 for start, _ in session.requested)


def test_only_the_tail_is_fetched():
    data = b"x" * 10000 + b"\nlast line\n"
    session = FakeSession(data)
    with openScanner(URL, Config(block_size=64, encoding="ascii"), session=session) as scanner:
        assert scanner.readLine() == "last line"
    assert len(session.requested) == 1


def test_length_is_cached():
    source = HTTPByteSource(URL, FakeSession(b"abc"))
    assert source.length() == 3
    source.session.head_status = 500
    assert source.length() == 3


def test_missing_file_fails_construction():
    session = FakeSession(b"", head_status=404)
    with pytest.raises(IOFailure) as e:
        openScanner(URL, Config(encoding="utf-8"), session=session)
    assert "Not found" in str(e.value)
    assert not session.closed


def test_server_without_ranges():
    with pytest.raises(IOFailure):
        HTTPByteSource(URL, FakeSession(b"abc", ranges=False)).length()


def test_range_ignored_by_server():
    source = HTTPByteSource(URL, FakeSession(b"abc\ndef"))
    source.session.ranges = False
    with pytest.raises(IOFailure) as e:
        source.readBlock(7, 3)
    assert "range requests" in str(e.value)


def test_connection_error():
    session = BrokenSession(b"abc\ndef")
    with openScanner(URL, Config(block_size=4, encoding="utf-8"), session=session) as scanner:
        with pytest.raises(IOFailure) as e:
            scanner.readLine()
    assert "connection reset" in str(e.value)


def test_handle_status_code():
    assert handleStatusCode(FakeResponse(206)) == ""
    assert "Authentication required" in handleStatusCode(FakeResponse(403))
    assert "not satisfiable" in handleStatusCode(FakeResponse(416))
    assert "max retries" in handleStatusCode(FakeResponse(503))


def test_session_opened_for_the_url_is_closed(monkeypatch):
    session = FakeSession(b"one\ntwo\n")
    monkeypatch.setattr("revlines.reader.scanner.newSession", lambda config: session)
    with openScanner(URL, Config(block_size=4, encoding="utf-8")) as scanner:
        assert scanner.source.owns_session
        assert list(scanner) == ["two", "one"]
    assert session.closed


def test_passed_session_is_left_open():
    session = FakeSession(b"abc")
    source = HTTPByteSource(URL, session)
    source.close()
    assert not session.closed
    HTTPByteSource(URL, session, owns_session=True).close()
    assert session.closed
