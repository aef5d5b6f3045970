import inspect
import random
import time
from datetime import datetime
from email.utils import parsedate_to_datetime
from logging import getLogger
from typing import Any, Literal, Optional, Union

from httpx import (
    URL,
    Client,
    ConnectError,
    ConnectTimeout,
    Headers,
    HTTPStatusError,
    Response,
    TimeoutException,
    TransportError,
)
from tenacity import (
    RetryCallState,
    retry,
    stop_after_attempt,
    wait_exponential,
)

from .._config import Config
from .._utils import UiPathUrl, get_httpx_client_kwargs, user_agent_value
from .._utils._service_url_overrides import resolve_endpoint_override
from .._utils.constants import HEADER_USER_AGENT
from ..models.exceptions import EnrichedException


def is_retryable_exception(exception: BaseException) -> bool:
    if isinstance(exception, (TimeoutException, TransportError)):
        return True
    if isinstance(exception, EnrichedException):
        return exception.status_code is not None and 500 <= exception.status_code < 600
    return False


def is_connect_failure(exception: BaseException) -> bool:
    return isinstance(exception, (ConnectError, ConnectTimeout))


def should_retry_request(retry_state: RetryCallState) -> bool:
    """Requests sent with ``idempotent=False`` are only replayed when they
    never reached the server.
    """
    outcome = retry_state.outcome
    if outcome is None or not outcome.failed:
        return False
    exception = outcome.exception()
    if exception is None:
        return False
    if retry_state.kwargs.get("idempotent", True):
        return is_retryable_exception(exception)
    return is_connect_failure(exception)


class BaseService:
    MAX_RETRIES = 3

    def __init__(self, config: Config) -> None:
        self._logger = getLogger("uipath_trigger")
        self._config = config

        self._url = UiPathUrl(self._config.base_url)

        default_client_kwargs = get_httpx_client_kwargs()

        client_kwargs = {
            **default_client_kwargs,  # SSL, proxy, timeout, redirects
            "base_url": self._url.base_url,
            "headers": Headers(self.default_headers),
        }

        self._client = Client(**client_kwargs)

        super().__init__()

    def close(self) -> None:
        self._client.close()

    def _parse_retry_after(self, headers: Headers) -> float:
        """Parse Retry-After header (RFC 6585/7231).

        Args:
            headers: HTTP response headers

        Returns:
            float: Seconds to wait before retry (minimum 0.0, default 1.0 if missing/invalid).
                  RFC 7231 allows 0 to indicate immediate retry.
        """
        DEFAULT_RETRY_AFTER = 1.0
        retry_after = headers.get("Retry-After")
        if not retry_after:
            return DEFAULT_RETRY_AFTER

        try:
            # Clamp to non-negative to prevent ValueError in time.sleep()
            return max(float(retry_after), 0.0)
        except ValueError:
            pass

        try:
            retry_date = parsedate_to_datetime(retry_after)
            delta = (retry_date - datetime.now(retry_date.tzinfo)).total_seconds()
            return max(delta, 0.0)
        except (ValueError, TypeError):
            return DEFAULT_RETRY_AFTER

    @retry(
        retry=should_retry_request,
        wait=wait_exponential(multiplier=1, min=1, max=10),
        stop=stop_after_attempt(MAX_RETRIES + 1),
        reraise=True,
    )
    def request(
        self,
        method: str,
        url: Union[URL, str],
        *,
        scoped: Literal["host", "org", "tenant"] = "tenant",
        idempotent: bool = True,
        **kwargs: Any,
    ) -> Response:
        self._logger.debug(f"Request: {method} {url}")

        kwargs["headers"] = dict(kwargs.get("headers") or {})
        kwargs["headers"][HEADER_USER_AGENT] = user_agent_value(
            self._specific_component
        )

        override_url, override_headers = resolve_endpoint_override(str(url))
        if override_url is not None:
            target_url = override_url
            kwargs["headers"].update(override_headers)
        else:
            target_url = self._url.scope_url(str(url), scoped)

        for attempt in range(self.MAX_RETRIES + 1):
            response = self._client.request(method, target_url, **kwargs)

            if response.status_code == 429:
                if attempt < self.MAX_RETRIES:
                    retry_after = self._parse_retry_after(response.headers)
                    jitter = random.uniform(0, 0.1 * retry_after)
                    sleep_time = retry_after + jitter
                    self._logger.warning(
                        f"Rate limited (429). Retrying after {sleep_time:.2f}s "
                        f"(attempt {attempt + 1}/{self.MAX_RETRIES})"
                    )
                    response.close()
                    time.sleep(sleep_time)
                    continue
                break

            break

        self._logger.debug(f"Response: {response.status_code} {method} {target_url}")

        try:
            response.raise_for_status()
        except HTTPStatusError as e:
            # include the http response in the error message
            response.read()
            response.close()
            raise EnrichedException(e) from e

        return response

    @property
    def default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            **self.auth_headers,
            **self.custom_headers,
        }

    @property
    def auth_headers(self) -> dict[str, str]:
        header = f"Bearer {self._config.secret}"
        return {"Authorization": header}

    @property
    def custom_headers(self) -> dict[str, str]:
        return {}

    @property
    def _specific_component(self) -> str:
        """``Class.method`` of the first caller outside the request machinery."""
        frame: Optional[Any] = inspect.currentframe()
        try:
            while frame is not None:
                module = frame.f_globals.get("__name__", "")
                if module != __name__ and not module.startswith("tenacity"):
                    function_name = frame.f_code.co_name
                    if "self" in frame.f_locals:
                        module_name = type(frame.f_locals["self"]).__name__
                    elif "cls" in frame.f_locals:
                        module_name = frame.f_locals["cls"].__name__
                    else:
                        module_name = ""
                    if module_name and function_name:
                        return f"{module_name}.{function_name}"
                    return ""
                frame = frame.f_back
        finally:
            del frame
        return ""
