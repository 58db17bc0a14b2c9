import threading

from urllib3.util.retry import RequestHistory

from revlines.reader.cli.delay import Delay
from revlines.reader.config import Config
from revlines.utils.session import CustomRetry, newSession


class FakeRawResponse:
    """The urllib3 response a retry sees"""

    def __init__(self, status=503):
        self.status = status
        self.drained = False

    def drain_conn(self):
        self.drained = True

    def get_redirect_location(self):
        return False


def patchSleep(monkeypatch, delay):
    """Make time.sleep instant; the sleep for `delay` waits until the spinner drew once"""
    slept = []
    drawn = threading.Event()

    def sleep(seconds):
        slept.append(seconds)
        if seconds == delay:
            drawn.wait(5)
        else:
            drawn.set()

    monkeypatch.setattr("revlines.reader.cli.delay.time.sleep", sleep)
    return slept


def test_retries_are_mounted():
    session = newSession(Config(retries=3))
    for prefix in ["http://", "https://"]:
        retries = session.adapters[prefix].max_retries
        assert isinstance(retries, CustomRetry)
        assert retries.total == 3
        assert 503 in retries.status_forcelist
    assert session.verify is True


def test_user_agent():
    session = newSession(Config())
    assert session.headers["User-Agent"].startswith("revlines/")


def test_insecure(capsys):
    session = newSession(Config(insecure=True))
    assert session.verify is False
    assert "SSL certificate verification disabled" in capsys.readouterr().out


def test_retry_sleep_shows_delay(monkeypatch, capsys):
    history = (RequestHistory("GET", "/dump.txt", None, 503, None),) * 2
    retry = CustomRetry(total=3, backoff_factor=0.3, history=history)
    backoff = retry.get_backoff_time()
    assert backoff > 0
    slept = patchSleep(monkeypatch, backoff)
    retry.sleep(FakeRawResponse(503))
    assert backoff in slept
    err = capsys.readouterr().err
    assert f"Delay {backoff:.1f}s: req retry (503) ." in err
    # the line is wiped afterwards
    assert err.endswith("\r")


def test_first_retry_does_not_sleep(monkeypatch, capsys):
    slept = patchSleep(monkeypatch, 0)
    CustomRetry(total=3, backoff_factor=0.3).sleep(FakeRawResponse())
    assert slept == []
    assert capsys.readouterr().err == ""


def test_increment_drains_response():
    response = FakeRawResponse(503)
    retry = CustomRetry(total=2, status_forcelist=[503])
    retry = retry.increment("GET", "/dump.txt", response=response, _pool=None)
    assert response.drained
    assert retry.total == 1
    assert retry.history[-1].status == 503


def test_increment_without_response():
    retry = CustomRetry(total=2).increment(
        "GET", "/dump.txt", error=ConnectionError("reset"), _pool=None
    )
    assert retry.total == 1


class TestDelay:
    def test_no_delay(self, capsys):
        Delay(msg="nothing", delay=0)
        assert capsys.readouterr().err == ""

    def test_without_message(self, monkeypatch, capsys):
        slept = patchSleep(monkeypatch, 1.5)
        delay = Delay(delay=1.5)
        assert delay.done
        assert 1.5 in slept
        assert "Delay 1.5s ." in capsys.readouterr().err
