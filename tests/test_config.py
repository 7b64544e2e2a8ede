from datetime import timedelta
import os

import pytest
from pytest import raises

from fedora_dists.base_config import ConfigError
from fedora_dists.config import Config, DEFAULT_PRODUCT_VERSIONS_URL
from .utils import write_config


def test_defaults():
    config = Config.defaults()

    assert config.cache_dir == os.path.expanduser("~/.fedora")
    assert config.cache_file == os.path.expanduser("~/.fedora/product-versions.json")
    assert config.product_versions_url == DEFAULT_PRODUCT_VERSIONS_URL
    assert config.cache_max_age == timedelta(seconds=20000)
    assert config.connect_timeout == 30
    assert config.read_timeout == 50


def test_from_path(tmp_path):
    os.environ["CACHE_BASE"] = str(tmp_path)
    config_path = write_config(tmp_path, {
        "cache_dir": "${CACHE_BASE}/cache",
        "product_versions_url": "https://pdc.example.com/product-versions/",
        "cache_max_age": "2h",
        "read_timeout": 10,
    })

    config = Config.from_path(config_path)
    assert config.cache_file == str(tmp_path / "cache" / "product-versions.json")
    assert config.product_versions_url == "https://pdc.example.com/product-versions/"
    assert config.cache_max_age == timedelta(hours=2)
    assert config.read_timeout == 10


def test_max_age_seconds():
    config = Config.from_str("cache_max_age: 600")
    assert config.cache_max_age == timedelta(minutes=10)


@pytest.mark.parametrize('content, message',
                         [("cache_max_age: 0", "cache_max_age must be a positive time interval"),
                          ("cache_max_age: 0s", "cache_max_age must be a positive time interval"),
                          ("product_versions_url: /tmp/foo.json",
                           "product_versions_url must be a http:// or https:// URL"),
                          ("connect_timeout: 0", "connect_timeout must be positive"),
                          ("read_timeout: -1", "read_timeout must be positive"),
                          ("cache_dir: 42", "cache_dir must be a string")])
def test_invalid(content, message):
    with raises(ConfigError, match=message):
        Config.from_str(content)
