"""
Thin requests wrapper around the Userhub REST API.

Every method returns the ``data`` part of the response envelope and raises
``ApiError`` for anything that is not a success envelope, so the Streamlit
pages only deal with plain dicts and one exception type.
"""
import os
import logging
from typing import Dict, List, Optional
from urllib.parse import quote

import requests
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_API_URL = os.environ.get("API_URL", "http://localhost:8000")


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or {}

    def describe(self) -> str:
        """Message plus any field errors, for showing in the UI."""
        if not self.errors:
            return self.message
        details = "; ".join(
            f"{field}: {' '.join(messages)}" for field, messages in self.errors.items()
        )
        return f"{self.message} ({details})"


class ApiClient:
    def __init__(self, base_url: str = DEFAULT_API_URL, token: Optional[str] = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {str(e)}")
            raise ApiError("Error connecting to API") from e

        try:
            body = response.json()
        except ValueError:
            raise ApiError(f"Unexpected response from API ({response.status_code})", response.status_code)

        if not response.ok or body.get("success") is False:
            raise ApiError(
                body.get("message") or body.get("detail") or "Request failed",
                response.status_code,
                body.get("errors"),
            )
        return body

    # Auth
    def register(self, name: str, email: str, password: str, password_confirmation: str) -> Dict:
        data = self._request("POST", "/api/auth/register", json={
            "name": name,
            "email": email,
            "password": password,
            "password_confirmation": password_confirmation,
        })["data"]
        self.token = data["token"]
        return data

    def login(self, email: str, password: str) -> Dict:
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})["data"]
        self.token = data["token"]
        return data

    def me(self) -> Dict:
        return self._request("GET", "/api/auth/me")["data"]["user"]

    def logout(self):
        try:
            self._request("POST", "/api/auth/logout")
        finally:
            self.token = None

    def refresh(self) -> str:
        self.token = self._request("POST", "/api/auth/refresh")["data"]["token"]
        return self.token

    # Users
    def list_users(self, skip: int = 0, limit: int = 100) -> List[Dict]:
        return self._request("GET", "/api/users", params={"skip": skip, "limit": limit})["data"]

    def get_user(self, user_id: int) -> Dict:
        return self._request("GET", f"/api/users/{user_id}")["data"]

    def create_user(self, name: str, email: str, password: str) -> Dict:
        return self._request("POST", "/api/users", json={"name": name, "email": email, "password": password})["data"]

    def update_user(self, user_id: int, **fields) -> Dict:
        changes = {key: value for key, value in fields.items() if value}
        return self._request("PUT", f"/api/users/{user_id}", json=changes)["data"]

    def delete_user(self, user_id: int):
        self._request("DELETE", f"/api/users/{user_id}")

    def search_users(self, query: str) -> List[Dict]:
        return self._request("GET", f"/api/users/search/{quote(query, safe='')}")["data"]

    def stats(self) -> Dict:
        return self._request("GET", "/api/users/stats")["data"]

    def health(self) -> Dict:
        # Health is not wrapped in an envelope
        return self._request("GET", "/api/health")
