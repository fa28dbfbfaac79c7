"""
Authenticated HTTP helpers.

``ApiClient`` wraps an ``httpx.Client``: it attaches the bearer token,
decodes JSON and turns every non-2xx response into an ``ApiError``.
A 401 or 403 also clears the stored token so the caller has to log in
again.
"""

import logging
from typing import Any, BinaryIO, Optional, Union

import httpx

from app.client.token_store import TokenStore, token_store

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api/v1"


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status: int, message: str, payload: Any = None):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message
        self.payload = payload

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            payload = response.json()
        except ValueError:
            payload = response.text or None

        message = None
        if isinstance(payload, dict):
            for key in ("detail", "error", "message"):
                if payload.get(key):
                    message = payload[key]
                    break
        if not isinstance(message, str):
            # FastAPI validation errors carry a list of problems
            message = str(message) if message else (response.reason_phrase or "Request failed")
        return cls(response.status_code, message, payload)


class ApiClient:
    """Thin authenticated wrapper over ``httpx.Client``."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, store: Optional[TokenStore] = None,
                 http_client: Optional[httpx.Client] = None, timeout: float = 15.0, ):
        self.store = store or token_store
        self.http_client = http_client or httpx.Client(timeout=timeout)
        self.base_url = base_url.rstrip("/")

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def request(self, method: str, path: str, *, json: Any = None, params: Optional[dict] = None,
                files: Optional[dict] = None, data: Optional[dict] = None, ) -> Any:
        headers = { }
        token = self.store.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        if params:
            params = { k: v for k, v in params.items() if v is not None }

        response = self.http_client.request(method, f"{self.base_url}/{path.lstrip('/')}", json=json, params=params,
                                            files=files, data=data, headers=headers, )

        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            if "application/json" in response.headers.get("content-type", ""):
                return response.json()
            return response.content

        if response.status_code in (401, 403):
            logger.info("Clearing stored token after %s on %s %s", response.status_code, method, path)
            self.store.clear()
        raise ApiError.from_response(response)

    def get(self, path: str, params: Optional[dict] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def upload(self, path: str, filename: str, content: Union[bytes, BinaryIO],
               content_type: str = "application/octet-stream", ) -> Any:
        """Send ``content`` as the multipart field ``file``."""
        return self.request("POST", path, files={ "file": (filename, content, content_type) })

    def upload_file(self, filename: str, content: Union[bytes, BinaryIO],
                    content_type: str = "application/octet-stream", ) -> dict:
        return self.upload("uploads", filename, content, content_type)

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def resource(self, path: str) -> "EntityResource":
        return EntityResource(self, path)

    def close(self) -> None:
        self.http_client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class EntityResource:
    """CRUD helpers for one REST collection such as ``stables``."""

    def __init__(self, client: ApiClient, path: str):
        self.client = client
        self.path = path.strip("/")

    def list(self) -> list:
        return self.client.get(self.path)

    def filter(self, **criteria) -> list:
        return self.client.get(self.path, params=criteria)

    def get(self, entity_id: Union[int, str]) -> dict:
        return self.client.get(f"{self.path}/{entity_id}")

    def create(self, data: dict) -> dict:
        return self.client.post(self.path, json=data)

    def update(self, entity_id: Union[int, str], data: dict) -> dict:
        return self.client.put(f"{self.path}/{entity_id}", json=data)

    def delete(self, entity_id: Union[int, str]) -> None:
        self.client.delete(f"{self.path}/{entity_id}")
