from datetime import timedelta
import os

from .base_config import ConfigError, configfield, Lookup
from .http_utils import HttpConfig


DEFAULT_PRODUCT_VERSIONS_URL = \
    "https://pdc.fedoraproject.org/rest_api/v1/product-versions/?active=true"

# about 5.5 hours
DEFAULT_CACHE_MAX_AGE = timedelta(seconds=20000)

CACHE_FILE_NAME = "product-versions.json"


class Config(HttpConfig):
    cache_dir: str = configfield(default="~/.fedora", expand_user=True)
    product_versions_url: str = DEFAULT_PRODUCT_VERSIONS_URL
    cache_max_age: timedelta = configfield(default=DEFAULT_CACHE_MAX_AGE, force_suffix=False)

    def __init__(self, lookup: Lookup):
        super().__init__(lookup)

        if self.cache_max_age.total_seconds() <= 0:
            raise ConfigError("cache_max_age must be a positive time interval")

        if not self.product_versions_url.startswith(("http://", "https://")):
            raise ConfigError("product_versions_url must be a http:// or https:// URL")

    @classmethod
    def defaults(cls):
        return cls(Lookup({}))

    @property
    def cache_file(self):
        return os.path.join(self.cache_dir, CACHE_FILE_NAME)
