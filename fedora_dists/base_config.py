from datetime import timedelta
from enum import Enum
import inspect
import os
import re
from typing import Any, Dict, Optional, Union

import yaml

from .utils import resolve_type, substitute_env_vars


"""
A small semi-declarative configuration system based on type annotations.
Configuration objects derive from BaseConfig, and configuration fields
are found by looking at the annotated attributes of the class.

Validity checks and special handling are implemented by overriding the __init__
method of the configuration class.

Example:
    ::
         class MyConfig(BaseConfig):
            x: int = 42   # field with a default
            y: str        # required field
            z: str = configfield(skip=True)

         def __init__(self, lookup):
             super().__init__(lookup)

             if self.x > 100:
                 raise ConfigError("x must be less than 100")

             self.z = lookup.get_str("z", default="z").upper()

        my_config = MyConfig.from_path("config.yaml")
"""


class ConfigError(Exception):
    pass


class Defaults(Enum):
    REQUIRED = 1


class ConfigField:
    def __init__(self, *, skip, default, extra):
        self.skip = skip
        self.default = default
        self.extra = extra


def configfield(*, skip=False, default=Defaults.REQUIRED, **kwargs) -> Any:
    return ConfigField(skip=skip, default=default, extra=kwargs)


class Lookup:
    def __init__(self, attrs: Dict[str, Any]):
        self.attrs = attrs

    def _get(self, key: str, default: Any):
        if default is Defaults.REQUIRED:
            try:
                return self.attrs[key]
            except KeyError:
                raise ConfigError("A value is required for {}".format(key)) \
                    from None
        else:
            return self.attrs.get(key, default)

    def get_str(
        self, key: str,
        default: Union[str, None, Defaults] = Defaults.REQUIRED,
        expand_user: bool = False
    ) -> Optional[str]:
        val = self._get(key, default)
        if val is None:
            return None

        if not isinstance(val, str):
            raise ConfigError("{} must be a string".format(key))

        val = substitute_env_vars(val)

        if expand_user:
            val = os.path.expanduser(val)

        return val

    def get_int(self, key: str, default: Union[int, Defaults] = Defaults.REQUIRED) -> int:
        val = self._get(key, default)
        # bool is a subclass of int, but "true" is not a number of seconds
        if not isinstance(val, int) or isinstance(val, bool):
            raise ConfigError("{} must be an integer".format(key))

        return val

    def get_timedelta(
        self, key: str,
        default: Union[timedelta, None, Defaults] = Defaults.REQUIRED,
        force_suffix: bool = True
    ) -> Optional[timedelta]:
        val = self._get(key, default=default)
        if val is None:
            return None

        if isinstance(val, timedelta):  # the default
            return val

        if isinstance(val, int) and not isinstance(val, bool) and not force_suffix:
            return timedelta(seconds=val)

        if isinstance(val, str):
            m = re.match(r'^(\d+)([dhms])$', val)
            if m:
                if m.group(2) == "d":
                    return timedelta(days=int(m.group(1)))
                elif m.group(2) == "h":
                    return timedelta(hours=int(m.group(1)))
                elif m.group(2) == "m":
                    return timedelta(minutes=int(m.group(1)))
                else:
                    return timedelta(seconds=int(m.group(1)))

        raise ConfigError("{} should be a time interval of the form <digits>[dhms]"
                          .format(key))


class BaseConfig:
    def __init__(self, lookup: Lookup):
        for klass in reversed(type(self).__mro__):
            for name, v in inspect.get_annotations(klass).items():
                self._load_field(lookup, name, v)

    def _load_field(self, lookup: Lookup, name: str, v: Any):
        resolved, _ = resolve_type(v)
        classval = getattr(type(self), name, Defaults.REQUIRED)
        if isinstance(classval, ConfigField):
            if classval.skip:
                return
            kwargs = {"default": classval.default}
            kwargs.update(classval.extra)
        else:
            kwargs = {"default": classval}

        if resolved == str:
            val: Any = lookup.get_str(name, **kwargs)
        elif resolved == int:
            val = lookup.get_int(name, **kwargs)
        elif resolved == timedelta:
            val = lookup.get_timedelta(name, **kwargs)
        else:
            raise RuntimeError(f"Don't know how to handle config field of type {v}")

        setattr(self, name, val)

    @classmethod
    def _from_yaml(cls, yml, what: str):
        if yml is None:
            yml = {}

        if not isinstance(yml, dict):
            raise ConfigError(f"Top level of {what} must be an object with keys")

        return cls(Lookup(yml))

    @classmethod
    def from_path(cls, path: str):
        with open(path, 'r') as f:
            yml = yaml.safe_load(f)

        return cls._from_yaml(yml, os.path.basename(path))

    @classmethod
    def from_str(cls, text: str):
        return cls._from_yaml(yaml.safe_load(text), "config")
