import os
import tempfile
from contextlib import contextmanager

from revlines.reader.config import Config, newConfig


@contextmanager
def get_config(**params):
    """A Config whose log_dir is a scratch directory, removed afterwards"""
    config = newConfig(params)
    with tempfile.TemporaryDirectory(prefix="revlinestest_") as tmpdir:
        config.log_dir = tmpdir
        yield config


def writeFile(config: Config, filename: str, data: bytes) -> str:
    path = os.path.join(config.log_dir, filename)
    with open(path, "wb") as f:
        f.write(data)
    return path
