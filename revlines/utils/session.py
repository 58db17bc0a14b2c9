import requests
import urllib3
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from revlines.reader.cli.delay import Delay
from revlines.reader.config import Config

from .user_agent import getUserAgent


# Courtesy datashaman https://stackoverflow.com/a/35504626
class CustomRetry(Retry):
    def increment(self, method=None, url=None, *args, **kwargs):
        if "_pool" in kwargs and kwargs.get("response") is not None:
            # drain conn in advance so that it won't be put back into conn.pool
            kwargs["response"].drain_conn()
        return super().increment(method, url, *args, **kwargs)

    def sleep(self, response=None):
        backoff = self.get_backoff_time()
        if backoff <= 0:
            return
        if response is not None:
            msg = "req retry (%s)" % response.status
        else:
            msg = None
        Delay(msg=msg, delay=backoff)


def newSession(config: Config) -> requests.Session:
    """Session for range requests, with retries and our user agent"""
    session = requests.Session()

    # Disable SSL verification
    if config.insecure:
        session.verify = False
        urllib3.disable_warnings()
        print("WARNING: SSL certificate verification disabled")

    retries = CustomRetry(
        total=int(config.retries),
        backoff_factor=0.3,
        status_forcelist=[500, 502, 503, 504, 429],
        allowed_methods=["GET", "HEAD"],
        raise_on_status=False,
    )
    session.mount("https://", HTTPAdapter(max_retries=retries))
    session.mount("http://", HTTPAdapter(max_retries=retries))

    session.headers.update({"User-Agent": getUserAgent()})
    return session
