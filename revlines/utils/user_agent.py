import requests

from revlines.reader.version import getVersion


def getUserAgent():
    return f"revlines/{getVersion()} python-requests/{requests.__version__}"
