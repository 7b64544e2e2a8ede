"""
Distributions (Fedora, EPEL, RHEL releases) and the names derived from them.

A distribution roughly corresponds to a dist-git branch. Most of the
mapping functions take the latest branched Fedora release as their first
argument: a Fedora release newer than that is rawhide.

    >>> branch = Fedora(32)
    >>> dist_branch(branch, Fedora(33))
    'master'
    >>> dist_branch(branch, Fedora(31))
    'f31'
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import re
from typing import ClassVar, NoReturn, Optional, Tuple, Union


class DistParseError(ValueError):
    pass


class Dist(ABC):
    """Base class of the three kinds of distribution.

    Within a kind, distributions sort by version. Across kinds the order is
    RHEL < EPEL < Fedora; this makes max() over mixed lists well-defined but
    says nothing about which release is actually newer.
    """

    _rank: ClassVar[int]

    @abstractmethod
    def _key(self) -> tuple: ...

    def _compare_key(self):
        return (self._rank, self._key())

    def __lt__(self, other):
        if not isinstance(other, Dist):
            return NotImplemented
        return self._compare_key() < other._compare_key()

    def __le__(self, other):
        if not isinstance(other, Dist):
            return NotImplemented
        return self._compare_key() <= other._compare_key()

    def __gt__(self, other):
        if not isinstance(other, Dist):
            return NotImplemented
        return self._compare_key() > other._compare_key()

    def __ge__(self, other):
        if not isinstance(other, Dist):
            return NotImplemented
        return self._compare_key() >= other._compare_key()

    @staticmethod
    def parse(text: str) -> "Dist":
        return parse_dist(text)


def _is_version_number(n) -> bool:
    return isinstance(n, int) and not isinstance(n, bool) and n >= 0


@dataclass(frozen=True)
class RHEL(Dist):
    version: Tuple[int, ...]

    _rank: ClassVar[int] = 0

    def __init__(self, version: Union[str, Tuple[int, ...]]):
        if isinstance(version, str):
            if not _VERSION_RE.fullmatch(version):
                raise ValueError(f"Invalid RHEL version: {version!r}")
            version = tuple(int(x) for x in version.split("."))
        else:
            version = tuple(version)

        if not version or not all(_is_version_number(x) for x in version):
            raise ValueError(f"Invalid RHEL version: {version!r}")

        object.__setattr__(self, "version", version)

    def _key(self):
        return self.version

    @property
    def major(self) -> int:
        return self.version[0]

    @property
    def version_string(self) -> str:
        return ".".join(str(x) for x in self.version)

    def __str__(self):
        return "rhel-" + self.version_string


@dataclass(frozen=True)
class EPEL(Dist):
    n: int

    _rank: ClassVar[int] = 1

    def __post_init__(self):
        if not _is_version_number(self.n):
            raise ValueError(f"Invalid EPEL version: {self.n!r}")

    def _key(self):
        return (self.n,)

    def __str__(self):
        # EPEL 6 and earlier branches were named elN
        return ("el" if self.n <= 6 else "epel") + str(self.n)


@dataclass(frozen=True)
class Fedora(Dist):
    n: int

    _rank: ClassVar[int] = 2

    def __post_init__(self):
        if not _is_version_number(self.n):
            raise ValueError(f"Invalid Fedora version: {self.n!r}")

    def _key(self):
        return (self.n,)

    def __str__(self):
        return "f" + str(self.n)


VARIANTS = (Fedora, EPEL, RHEL)


_VERSION_RE = re.compile(r"[0-9]+(?:\.[0-9]+)*")

_DIST_RE = re.compile(r"""
    f(?P<fedora>\d+)
  | (?:epel|el)(?P<epel>\d+)
  | rhel-(?P<rhel>\d+(?:\.\d+)*)
""", re.VERBOSE | re.ASCII)


def parse_dist(text: str) -> Dist:
    """Parse a distribution from text like "f29", "epel8", "el6" or "rhel-9.2".

    The whole string must match; anything else raises DistParseError.
    """
    m = _DIST_RE.fullmatch(text)
    if m is None:
        raise DistParseError(f"Can't parse {text!r} as a distribution")

    if m.group("fedora") is not None:
        return Fedora(int(m.group("fedora")))
    elif m.group("epel") is not None:
        return EPEL(int(m.group("epel")))
    else:
        return RHEL(m.group("rhel"))


def format_dist(dist: Dist) -> str:
    _check(dist)
    return str(dist)


def _check(dist):
    if not isinstance(dist, VARIANTS):
        raise TypeError(f"Not a distribution: {dist!r}")


def _unknown(dist) -> NoReturn:
    raise TypeError(f"Unhandled distribution type: {type(dist).__name__}")


def _is_rawhide(branch: Dist, dist: Dist) -> bool:
    return isinstance(dist, Fedora) and dist > branch


def dist_branch(branch: Dist, dist: Dist) -> str:
    """dist-git branch name for dist"""
    _check(dist)
    if _is_rawhide(branch, dist):
        return "master"

    return str(dist)


def dist_repo(branch: Dist, dist: Dist) -> str:
    """DNF/YUM repository name for dist"""
    if isinstance(dist, Fedora):
        return "rawhide" if dist > branch else "fedora"
    elif isinstance(dist, EPEL):
        return "epel"
    elif isinstance(dist, RHEL):
        return "rhel"
    else:
        _unknown(dist)


def dist_updates(branch: Dist, dist: Dist) -> Optional[str]:
    """DNF/YUM updates repository name for dist, if it has one"""
    if isinstance(dist, Fedora):
        return None if dist > branch else "updates"
    elif isinstance(dist, (EPEL, RHEL)):
        return None
    else:
        _unknown(dist)


def dist_override(branch: Dist, dist: Dist) -> bool:
    """Whether Bodhi buildroot overrides can be made for dist"""
    if isinstance(dist, Fedora):
        return dist <= branch
    elif isinstance(dist, EPEL):
        return dist.n < 9
    elif isinstance(dist, RHEL):
        return False
    else:
        _unknown(dist)


def dist_version(branch: Dist, dist: Dist) -> str:
    """OS release version of dist: "rawhide", "33", "8", "9.2", ..."""
    if isinstance(dist, Fedora):
        return "rawhide" if dist > branch else str(dist.n)
    elif isinstance(dist, EPEL):
        return str(dist.n)
    elif isinstance(dist, RHEL):
        return dist.version_string
    else:
        _unknown(dist)


def mock_config(branch: Dist, dist: Dist, arch: str) -> str:
    """Mock configuration name for building dist on arch"""
    if isinstance(dist, Fedora):
        prefix = "fedora"
    else:
        prefix = dist_repo(branch, dist)

    return f"{prefix}-{dist_version(branch, dist)}-{arch}"


def rpm_dist_tag(dist: Dist) -> str:
    """The %{dist} tag appended to the rpm release field"""
    if isinstance(dist, Fedora):
        return f".fc{dist.n}"
    elif isinstance(dist, EPEL):
        return f".el{dist.n}"
    elif isinstance(dist, RHEL):
        return f".el{dist.major}"
    else:
        _unknown(dist)


def koji_cmd(dist: Dist) -> str:
    if isinstance(dist, RHEL):
        return "brew"
    elif isinstance(dist, (Fedora, EPEL)):
        return "koji"
    else:
        _unknown(dist)


def rpkg_cmd(dist: Dist) -> str:
    if isinstance(dist, RHEL):
        return "rhpkg"
    elif isinstance(dist, (Fedora, EPEL)):
        return "fedpkg"
    else:
        _unknown(dist)


def dist_container(dist: Dist) -> str:
    """Container image to build or test dist in"""
    if isinstance(dist, Fedora):
        return f"fedora:{dist.n}"
    elif isinstance(dist, EPEL):
        return f"centos:{dist.n}"
    elif isinstance(dist, RHEL):
        return f"ubi{dist.major}/ubi"
    else:
        _unknown(dist)
