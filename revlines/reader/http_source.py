import requests

from revlines.reader.exceptions import IOFailure
from revlines.reader.source import ByteSource

TIMEOUT = 30


def handleStatusCode(response) -> str:
    """Describe a failed response, "" for 2xx"""
    statuscode = response.status_code
    if statuscode >= 200 and statuscode < 300:
        return ""

    message = "HTTP Error %d." % statuscode
    if statuscode >= 300 and statuscode < 400:
        message += " Redirect should happen automatically: please report this as a bug."
    elif statuscode == 401 or statuscode == 403:
        message += " Authentication required."
    elif statuscode == 404:
        message += " Not found."
    elif statuscode == 416:
        message += " Requested range not satisfiable, did the file shrink?"
    elif statuscode == 429 or (statuscode >= 500 and statuscode < 600):
        message += " Server error, max retries exceeded."
    return message


class HTTPByteSource(ByteSource):
    """A remote file read with HTTP Range requests.

    The session is closed with the source only when `owns_session` is set."""

    def __init__(self, url: str, session: requests.Session, owns_session=False):
        self.name = url
        self.session = session
        self.owns_session = owns_session
        self.size = None

    def length(self) -> int:
        if self.size is not None:
            return self.size
        try:
            r = self.session.head(self.name, allow_redirects=True, timeout=TIMEOUT)
        except requests.exceptions.RequestException as e:
            raise IOFailure(self.name, 0, str(e)) from e
        message = handleStatusCode(r)
        if message:
            raise IOFailure(self.name, 0, message)
        if r.headers.get("Accept-Ranges", "").lower() == "none":
            raise IOFailure(self.name, 0, "server does not support range requests")
        if "Content-Length" not in r.headers:
            raise IOFailure(self.name, 0, "server did not send Content-Length")
        self.size = int(r.headers["Content-Length"])
        return self.size

    def readBlock(self, endOffset: int, maxLen: int) -> bytes:
        start = max(0, endOffset - maxLen)
        if start >= endOffset:
            return b""
        try:
            r = self.session.get(
                self.name,
                headers={"Range": f"bytes={start}-{endOffset - 1}"},
                timeout=TIMEOUT,
            )
        except requests.exceptions.RequestException as e:
            raise IOFailure(self.name, endOffset, str(e)) from e
        message = handleStatusCode(r)
        if message:
            raise IOFailure(self.name, endOffset, message)
        if r.status_code != 206:
            # the whole file came back, Range was ignored
            raise IOFailure(self.name, endOffset, "server does not support range requests")
        return r.content

    def close(self) -> None:
        if self.owns_session:
            self.session.close()
