from dataclasses import dataclass
import json
import re
from typing import List


class DecodeError(Exception):
    pass


class MalformedVersionError(ValueError):
    pass


@dataclass(frozen=True)
class Release:
    """An active product version, as listed by Fedora PDC"""
    product: str
    version: str
    product_version_id: str
    name: str = ""

    @property
    def major_version(self) -> int:
        # int() would also take " 33", "+33" and "3_3"
        if not re.fullmatch(r"[0-9]+", self.version):
            raise MalformedVersionError(
                f"{self.product_version_id}: version {self.version!r} is not a number"
            )

        return int(self.version)


def _release_from_json(release_json) -> Release:
    if not isinstance(release_json, dict):
        raise DecodeError("product version must be an object")

    try:
        return Release(product=str(release_json["product"]),
                       version=str(release_json["version"]),
                       product_version_id=str(release_json["product_version_id"]),
                       name=str(release_json.get("name", "")))
    except KeyError as e:
        raise DecodeError(f"product version is missing {e.args[0]!r}") from None


def parse_releases(path: str) -> List[Release]:
    """
    Read releases from a downloaded PDC product-versions listing.

    Both a plain list of product versions and the paginated form
    ({"count": ..., "results": [...]}) are accepted. The releases are
    returned in the order of the file.
    """
    try:
        with open(path, "rb") as f:
            data = json.load(f)
    except OSError as e:
        raise DecodeError(f"Can't read {path}: {e.strerror}") from e
    except ValueError as e:
        raise DecodeError(f"{path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("results")

    if not isinstance(data, list):
        raise DecodeError(f"{path}: expected a list of product versions")

    try:
        return [_release_from_json(x) for x in data]
    except DecodeError as e:
        raise DecodeError(f"{path}: {e}") from None
