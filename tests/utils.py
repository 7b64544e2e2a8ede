from tempfile import NamedTemporaryFile
import json
import os

import yaml

from fedora_dists.base_config import Lookup
from fedora_dists.config import Config


# Listing as served by PDC: sorted by product_version_id, so oldest first
PRODUCT_VERSIONS = [
    {
        "name": "Fedora EPEL",
        "product": "epel",
        "product_version_id": "epel-8",
        "short": "epel",
        "version": "8",
        "active": True,
    },
    {
        "name": "Fedora EPEL",
        "product": "epel",
        "product_version_id": "epel-9",
        "short": "epel",
        "version": "9",
        "active": True,
    },
    {
        "name": "Fedora",
        "product": "fedora",
        "product_version_id": "fedora-32",
        "short": "fedora",
        "version": "32",
        "active": True,
    },
    {
        "name": "Fedora",
        "product": "fedora",
        "product_version_id": "fedora-33",
        "short": "fedora",
        "version": "33",
        "active": True,
    },
    {
        "name": "Fedora",
        "product": "fedora",
        "product_version_id": "fedora-rawhide",
        "short": "fedora",
        "version": "rawhide",
        "active": True,
    },
]

PRODUCT_VERSIONS_URL = "https://pdc.fedoraproject.org/rest_api/v1/product-versions/?active=true"


def write_config(tmp_path, content):
    tmpfile = NamedTemporaryFile(
        delete=False, prefix="config-", suffix=".yaml", dir=tmp_path, encoding="UTF-8", mode="w"
    )
    yaml.dump(content, tmpfile)
    tmpfile.close()
    return tmpfile.name


def get_config(tmp_path, **kwargs):
    attrs = {"cache_dir": str(tmp_path / "fedora")}
    attrs.update(kwargs)
    return Config(Lookup(attrs))


def write_product_versions(path, product_versions=PRODUCT_VERSIONS, mtime=None):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as f:
        json.dump(product_versions, f)

    if mtime is not None:
        os.utime(path, (mtime, mtime))


class FakeFetch:
    """Stands in for the download, writing canned product versions"""

    def __init__(self, product_versions=PRODUCT_VERSIONS, error=None):
        self.product_versions = product_versions
        self.error = error
        self.calls = []

    def __call__(self, url, path):
        self.calls.append((url, path))
        if self.error is not None:
            raise self.error

        write_product_versions(path, self.product_versions)
