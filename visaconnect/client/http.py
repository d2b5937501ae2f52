from typing import Any, Optional
import requests
from loguru import logger

DEFAULT_TIMEOUT = 15.0


class ApiError(Exception):
    """A failed API call. ``status_code`` is None when no response arrived."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409


def _safe_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(response: requests.Response) -> str:
    body = _safe_json(response)
    if isinstance(body, dict):
        for key in ('message', 'error', 'detail'):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return f'Request failed with status {response.status_code}'


class ApiClient:
    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self._session = session or requests.Session()

    def _headers(self) -> dict:
        headers = {'Accept': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
    ) -> Any:
        url = f'{self.base_url}{path}'
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning('client.request_failed', method=method, url=url, error=str(exc))
            raise ApiError(f'Network error: {exc}') from exc

        if not response.ok:
            message = _error_message(response)
            logger.info('client.request_rejected', method=method, url=url, status=response.status_code, message=message)
            raise ApiError(message, status_code=response.status_code)
        if not response.content:
            return None
        return _safe_json(response)

    def get(self, path: str, params: Optional[dict] = None) -> Any:
        return self.request('GET', path, params=params)

    def post(self, path: str, json: Optional[dict] = None) -> Any:
        return self.request('POST', path, json=json)

    def patch(self, path: str, json: Optional[dict] = None) -> Any:
        return self.request('PATCH', path, json=json)
