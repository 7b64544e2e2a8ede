from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from .base_config import BaseConfig, ConfigError, Lookup


_RETRY_MAX_TIMES = 3
_RETRY_STATUSES = (
    408,  # Request Timeout
    500,  # Internal Server Error
    502,  # Bad Gateway
    503,  # Service Unavailable
    504   # Gateway Timeout
)


class _DefaultTimeoutAdapter(HTTPAdapter):
    def __init__(self, default_timeout=None, **kwargs):
        super().__init__(**kwargs)
        self.default_timeout = default_timeout

    def send(self, request, **kwargs):
        arg_timeout = kwargs.get("timeout")
        if arg_timeout is None:
            kwargs["timeout"] = self.default_timeout

        return super().send(request, **kwargs)


class HttpConfig(BaseConfig):
    connect_timeout: int = 30
    read_timeout: int = 50

    def __init__(self, lookup: Lookup):
        super().__init__(lookup)

        if self.connect_timeout <= 0:
            raise ConfigError("connect_timeout must be positive")
        if self.read_timeout <= 0:
            raise ConfigError("read_timeout must be positive")

    def get_requests_session(self, backoff_factor: float = 3):
        """
        Get a requests.Session object that retries and has default timeouts

        Args:
            backoff_factor (float): factor by which to increase delay - here
                so we can override for tests.
        """

        # If we want to retry POST, etc, need to set allowed_methods here
        retry = Retry(
            backoff_factor=backoff_factor,
            raise_on_status=True,
            status_forcelist=_RETRY_STATUSES,
            total=_RETRY_MAX_TIMES,
        )
        session = Session()

        for prefix in ('http://', 'https://'):
            session.mount(
                prefix,
                _DefaultTimeoutAdapter(max_retries=retry,
                                       default_timeout=(self.connect_timeout, self.read_timeout))
            )

        return session
