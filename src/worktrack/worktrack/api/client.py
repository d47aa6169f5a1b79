from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from ..core.constants import DEFAULT_API_TIMEOUT, DEFAULT_API_WORKERS
from ..core.exceptions import ApiError

logger = logging.getLogger(__name__)


@dataclass
class ApiConfig:
    base_url: str
    token: Optional[str] = None
    timeout: float = DEFAULT_API_TIMEOUT
    max_workers: int = DEFAULT_API_WORKERS


def _error_message(response: requests.Response) -> str:
    """Pull the backend's ``message`` out of an error body (string or list)."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        message = body["message"]
        if isinstance(message, list):
            return ", ".join(str(m) for m in message)
        return str(message)
    return f"Request failed with status {response.status_code}"


class ApiClient:
    """Thin JSON client for the dashboard REST backend.

    Note: ``requests.Session`` is not documented as thread-safe, so each
    ``fetch_all`` task runs on a session of its own from ``session_factory``.
    A caller-supplied ``session`` without a factory is shared as-is.
    """

    def __init__(
        self,
        config: ApiConfig,
        *,
        session: Optional[requests.Session] = None,
        session_factory: Optional[Callable[[], requests.Session]] = None,
    ):
        self._config = config
        if session_factory is None and session is None:
            session_factory = requests.Session
        self._session_factory = session_factory
        self._session = self._prepare(session or session_factory())
        self._local = threading.local()

    def _prepare(self, session: requests.Session) -> requests.Session:
        session.headers.update({"Accept": "application/json"})
        if self._config.token:
            session.headers.update({"Authorization": f"Bearer {self._config.token}"})
        return session

    def _current_session(self) -> requests.Session:
        return getattr(self._local, "session", None) or self._session

    def _run_isolated(self, fn: Callable[[], Any]) -> Any:
        if self._session_factory is None:
            return fn()
        session = self._prepare(self._session_factory())
        self._local.session = session
        try:
            return fn()
        finally:
            self._local.session = None
            session.close()

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(self, method: str, path: str, *, json: Any = None, params: Optional[dict] = None) -> Any:
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            response = self._current_session().request(
                method, url, json=json, params=params, timeout=self._config.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise ApiError(f"Could not reach API: {e}") from e

        if not response.ok:
            message = _error_message(response)
            logger.error("%s %s -> %s: %s", method, url, response.status_code, message)
            raise ApiError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON from {url}", status_code=response.status_code) from e

    def get(self, path: str, *, params: Optional[dict] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, payload: Any = None) -> Any:
        return self.request("POST", path, json=payload)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def fetch_all(self, **calls: Callable[[], Any]) -> dict[str, Any]:
        """Run independent fetches in parallel and return their results by name.

        The first failure is re-raised once every call has finished.
        """
        if not calls:
            return {}
        workers = max(1, min(int(self._config.max_workers), len(calls)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {name: pool.submit(self._run_isolated, fn) for name, fn in calls.items()}
            return {name: future.result() for name, future in futures.items()}


Gather = Callable[..., dict]


def run_sequentially(**calls: Callable[[], Any]) -> dict[str, Any]:
    """Same contract as ``ApiClient.fetch_all`` without threads (used by tests and scripts)."""
    return {name: fn() for name, fn in calls.items()}
