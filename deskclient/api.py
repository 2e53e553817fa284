"""HTTP access to the front-desk API over a ``requests`` session."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"


class ApiError(Exception):
    """A failed API call.  ``status`` is 0 when the server was not reached."""

    def __init__(self, status: int, message: str, code: str = ""):
        self.status = status
        self.message = message
        self.code = code
        super().__init__(f"{status} {code}: {message}" if code else f"{status}: {message}")


def _error_from(resp: requests.Response) -> ApiError:
    try:
        body = resp.json()
    except ValueError:
        return ApiError(resp.status_code, resp.text[:200] or resp.reason or "")
    err = body.get('error') if isinstance(body, dict) else None
    if isinstance(err, dict):
        message = err.get('message')
        if not isinstance(message, str):
            message = str(message)
        return ApiError(resp.status_code, message, err.get('code') or "")
    return ApiError(resp.status_code, str(body))


class ApiClient:
    """Thin JSON client.  No retries: a failure is raised to the caller."""

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None,
                 token: Optional[str] = None, timeout: float = 10.0):
        self.base_url = (base_url or os.getenv("DESK_API_URL") or DEFAULT_BASE_URL).rstrip('/')
        self.session = session or requests.Session()
        self.token = token
        self.timeout = timeout
        self.user: Optional[Dict[str, Any]] = None

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Token {self.token}"
        return headers

    def request(self, method: str, path: str, *, params=None, json=None):
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self.session.request(
                method, url, params=params, json=json, headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(0, str(e)) from e
        if not resp.ok:
            err = _error_from(resp)
            logger.info("%s %s -> %s", method, url, err)
            raise err
        if not resp.content:
            return None
        return resp.json()

    def get(self, path: str, params=None):
        return self.request("GET", path, params=params)

    def post(self, path: str, json=None):
        return self.request("POST", path, json=json)

    def put(self, path: str, json=None):
        return self.request("PUT", path, json=json)

    def delete(self, path: str, params=None):
        return self.request("DELETE", path, params=params)

    def login(self, username: str, password: str) -> Dict[str, Any]:
        data = self.post("users/login", {"username": username, "password": password})
        self.token = data["token"]
        self.user = data["user"]
        logger.info("logged in as %s", username)
        return self.user

    def logout(self) -> None:
        self.token = None
        self.user = None

    def health(self) -> bool:
        try:
            data = self.get("health")
        except ApiError:
            return False
        return bool(data) and data.get("status") == "ok"

    def dashboard(self) -> Dict[str, Any]:
        return self.get("dashboard")
