import logging
import time
from typing import Callable, List, Optional, Sequence

from .cache import ensure_fresh, FetchFunc, Fetcher
from .config import Config
from .dist import Dist, EPEL, Fedora
from .release_info import parse_releases, Release


logger = logging.getLogger(__name__)


# The PDC product version for Fedora Rawhide; its version is "rawhide",
# not a number
RAWHIDE_VERSION_ID = "fedora-rawhide"


class EmptyResultError(LookupError):
    pass


def _is_rawhide(release: Release):
    return release.product_version_id == RAWHIDE_VERSION_ID


def _newest(releases: Sequence[Release], what: str) -> Release:
    if not releases:
        raise EmptyResultError(f"No {what} releases found")

    return max(releases, key=lambda r: r.major_version)


def release_dists(releases: Sequence[Release]) -> List[Dist]:
    """
    Convert Fedora releases to Dist objects, in the same order.

    Rawhide has no version number of its own, so it becomes the version
    after the newest other release.
    """
    def make_dist(release):
        if _is_rawhide(release):
            latest = _newest([r for r in releases if not _is_rawhide(r)], "branched Fedora")
            return Fedora(latest.major_version + 1)
        else:
            return Fedora(release.major_version)

    return [make_dist(r) for r in releases]


class ReleaseCatalog:
    """
    The currently active Fedora and EPEL releases.

    The data is stored in <cache_dir>/product-versions.json (by default
    ~/.fedora/product-versions.json) and refreshed from Fedora PDC when
    it is older than cache_max_age. Every query rereads the file.
    """

    def __init__(self, config: Optional[Config] = None, fetch: Optional[FetchFunc] = None,
                 now: Callable[[], float] = time.time):
        self.config = config if config is not None else Config.defaults()
        if fetch is None:
            fetch = Fetcher(self.config.get_requests_session())
        self.fetch = fetch
        self.now = now

    def fetch_catalog_file(self) -> str:
        return ensure_fresh(self.config.cache_file,
                            self.config.product_versions_url,
                            self.config.cache_max_age,
                            self.fetch,
                            now=self.now)

    def get_releases(self) -> List[Release]:
        """All active releases, newest first"""
        path = self.fetch_catalog_file()
        releases = parse_releases(path)
        logger.debug("Read %d releases from %s", len(releases), path)

        return list(reversed(releases))

    def get_release_ids(self) -> List[str]:
        return [r.product_version_id for r in self.get_releases()]

    def get_product_releases(self, product: str) -> List[Release]:
        return [r for r in self.get_releases() if r.product == product]

    def get_fedora_releases(self) -> List[Release]:
        return self.get_product_releases("fedora")

    def get_epel_releases(self) -> List[Release]:
        return self.get_product_releases("epel")

    def get_fedora_release_ids(self) -> List[str]:
        return [r.product_version_id for r in self.get_fedora_releases()]

    def get_epel_release_ids(self) -> List[str]:
        return [r.product_version_id for r in self.get_epel_releases()]

    def get_fedora_dists(self) -> List[Dist]:
        return release_dists(self.get_fedora_releases())

    def get_rawhide_dist(self) -> Dist:
        dists = self.get_fedora_dists()
        if not dists:
            raise EmptyResultError("No Fedora releases found")

        return dists[0]

    def get_latest_fedora_dist(self) -> Dist:
        """The newest branched Fedora release"""
        releases = [r for r in self.get_fedora_releases() if not _is_rawhide(r)]
        return Fedora(_newest(releases, "branched Fedora").major_version)

    def get_latest_epel_dist(self) -> Dist:
        return EPEL(_newest(self.get_epel_releases(), "EPEL").major_version)
