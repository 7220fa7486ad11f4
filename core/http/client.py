"""
HTTP Client

Thin requests-based client used to fetch allocation tables.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """
    Response from an HTTP request.
    """
    status_code: int
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """Check if request was successful (2xx status)."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """Get response content as text."""
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Parse response as JSON."""
        import json
        return json.loads(self.content)

    def raise_for_status(self) -> None:
        """Raise exception if status is not 2xx."""
        if not self.ok:
            raise HttpError(
                f"HTTP {self.status_code}",
                status_code=self.status_code,
                response=self,
            )


class HttpError(Exception):
    """HTTP request error."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[HttpResponse] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


RETRY_STATUSES = (429, 500, 502, 503, 504)


class HttpClient:
    """
    HTTP client whose session retries connection errors and transient
    statuses (429, 5xx) with exponential backoff.

    Usage:
        client = HttpClient(timeout=10.0)

        response = client.get("https://example.com/allocations.csv")
        if response.ok:
            text = response.text
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        default_headers: Optional[dict[str, str]] = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            timeout: Default request timeout in seconds
            max_retries: Retries after the first attempt (0 disables retrying)
            retry_delay: Backoff factor in seconds between retries
            default_headers: Headers to include in all requests
        """
        self.timeout = timeout
        self.max_retries = max(0, max_retries)
        self.retry_delay = retry_delay
        self.default_headers = default_headers or {}
        self._session: Optional[requests.Session] = None

    @classmethod
    def from_config(cls, config: Any) -> "HttpClient":
        """Build from an HttpConfig."""
        return cls(
            timeout=config.timeout,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
            default_headers={"User-Agent": config.user_agent},
        )

    def _retry_policy(self) -> Retry:
        return Retry(
            total=self.max_retries,
            connect=self.max_retries,
            read=self.max_retries,
            status=self.max_retries,
            status_forcelist=RETRY_STATUSES,
            backoff_factor=self.retry_delay,
            allowed_methods=("GET",),
            raise_on_status=False,
        )

    def _get_session(self) -> requests.Session:
        """Lazy-create the requests session with the retrying adapter mounted."""
        if self._session is None:
            session = requests.Session()
            adapter = HTTPAdapter(max_retries=self._retry_policy())
            session.mount("http://", adapter)
            session.mount("https://", adapter)
            session.headers.update(self.default_headers)
            self._session = session
        return self._session

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        """
        Make an HTTP request.

        Retrying happens inside the session adapter; once retries are
        exhausted on a transient status, the last response is returned.

        Raises:
            HttpError: If no response could be obtained
        """
        session = self._get_session()
        logger.debug(f"{method} {url}")

        try:
            response = session.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                timeout=timeout or self.timeout,
            )
        except requests.RequestException as e:
            raise HttpError(str(e)) from e

        return HttpResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
            url=str(response.url),
            elapsed_ms=response.elapsed.total_seconds() * 1000,
        )

    def get(
        self,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        """Make a GET request."""
        return self.request(
            "GET", url,
            headers=headers,
            params=params,
            timeout=timeout,
        )

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
