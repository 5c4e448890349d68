# app/client/api.py

import logging
from typing import Any, Optional
from uuid import UUID

import httpx

from app.schemas.contact_schema import ContactOut
from app.schemas.user_schema import UserOut

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error reported by the server (validation, conflict, auth, not found, internal)."""

    def __init__(self, status_code: int, message: str, field: Optional[str] = None,
                 fields: Optional[dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.field = field
        self.fields = fields or {}


class ConnectionFailed(Exception):
    """The request never got a response from the server."""

    def __init__(self, cause: Exception):
        super().__init__("connection error")
        self.cause = cause


def _error_from(response: httpx.Response) -> ApiError:
    try:
        detail = response.json().get("detail")
    except ValueError:
        detail = None
    if isinstance(detail, dict):
        return ApiError(
            response.status_code,
            detail.get("error") or response.reason_phrase,
            field=detail.get("field"),
            fields=detail.get("fields"),
        )
    return ApiError(response.status_code, str(detail or response.reason_phrase))


class ContactsApiClient:
    """Thin async client for the contacts HTTP API.

    ``transport`` lets callers plug in ``httpx.ASGITransport`` to talk to the
    app in-process.
    """

    def __init__(self, base_url: str, token: Optional[str] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = 10.0):
        self.token = token
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            response = await self._http.request(method, url, headers=headers, **kwargs)
        except httpx.TransportError as e:
            logger.warning("Request %s %s failed: %s", method, url, e)
            raise ConnectionFailed(e) from e
        if response.is_error:
            raise _error_from(response)
        return response.json()

    # ------------------ Auth ------------------ #

    async def login(self, email: str, password: str) -> tuple[str, UserOut]:
        data = await self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.token = data["token"]
        return self.token, UserOut.model_validate(data["user"])

    async def logout(self) -> None:
        try:
            await self._request("POST", "/api/auth/logout")
        finally:
            self.token = None
            self._http.cookies.clear()

    async def me(self) -> UserOut:
        return UserOut.model_validate(await self._request("GET", "/api/auth/me"))

    # ------------------ Contacts ------------------ #

    async def list_contacts(self) -> list[ContactOut]:
        data = await self._request("GET", "/api/contacts")
        return [ContactOut.model_validate(item) for item in data]

    async def create_contact(self, name: str, email: str, phone: str, address: str = "") -> ContactOut:
        body = {"name": name, "email": email, "phone": phone, "address": address}
        return ContactOut.model_validate(await self._request("POST", "/api/contacts", json=body))

    async def update_contact(self, contact_id: UUID, name: str, email: str, phone: str,
                             address: str = "") -> ContactOut:
        body = {"name": name, "email": email, "phone": phone, "address": address}
        data = await self._request("PUT", f"/api/contacts/{contact_id}", json=body)
        return ContactOut.model_validate(data)

    async def delete_contact(self, contact_id: UUID) -> str:
        data = await self._request("DELETE", f"/api/contacts/{contact_id}")
        return data["message"]

    async def validate(self, email: Optional[str] = None, phone: Optional[str] = None,
                       exclude_id: Optional[UUID] = None) -> bool:
        params = {}
        if email:
            params["email"] = email
        if phone:
            params["phone"] = phone
        if exclude_id:
            params["excludeId"] = str(exclude_id)
        data = await self._request("GET", "/api/contacts/validate", params=params)
        return bool(data.get("valid"))
