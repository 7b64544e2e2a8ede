from datetime import timedelta
import logging
import os
import time
from typing import Callable, Union

import requests

from .utils import atomic_writer


logger = logging.getLogger(__name__)


class CacheUnavailableError(Exception):
    pass


FetchFunc = Callable[[str, str], None]


class Fetcher:
    """Downloads an URL verbatim to a file, replacing the file only on success"""

    def __init__(self, session: requests.Session):
        self.session = session

    def __call__(self, url: str, path: str):
        logger.info("Downloading %s", url)
        response = self.session.get(url, headers={"Accept": "application/json"})
        response.raise_for_status()

        with atomic_writer(path) as f:
            f.write(response.content)


def _max_age_seconds(max_age: Union[timedelta, float]) -> float:
    if isinstance(max_age, timedelta):
        return max_age.total_seconds()
    return max_age


def ensure_fresh(path: str, url: str, max_age: Union[timedelta, float], fetch: FetchFunc,
                 now: Callable[[], float] = time.time) -> str:
    """
    Make sure that path holds a recent enough download of url.

    If path doesn't exist, or was last modified at least max_age ago,
    fetch(url, path) is called once. A failed download is logged and
    otherwise ignored: the old file, if any, is left in place, and
    reading it is up to the caller.
    """
    directory = os.path.dirname(path)
    if directory:
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise CacheUnavailableError(f"Can't create {directory}: {e.strerror}") from e

    try:
        mtime = os.stat(path).st_mtime
    except FileNotFoundError:
        mtime = None
    except OSError as e:
        raise CacheUnavailableError(f"Can't access {path}: {e.strerror}") from e

    if mtime is not None and now() - mtime < _max_age_seconds(max_age):
        logger.debug("%s is recent, not refreshing", path)
        return path

    if mtime is None:
        logger.info("%s does not exist, downloading", path)
    else:
        logger.info("%s is out of date, refreshing", path)

    try:
        fetch(url, path)
    except (requests.RequestException, OSError) as e:
        logger.warning("Failed to download %s: %s", url, e)

    return path
