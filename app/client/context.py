# app/client/context.py

import logging
from collections import deque
from dataclasses import dataclass
from typing import Literal, Optional
from uuid import UUID

from app.client.api import ApiError, ConnectionFailed, ContactsApiClient
from app.client.view import ContactFilters, ContactView, compute_view
from app.schemas.contact_schema import ContactOut
from app.schemas.user_schema import UserOut

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Connection error. Check your network and try again."
LOCAL_LOGOUT_MESSAGE = "Signed out on this device; the server could not be reached."


@dataclass
class Toast:
    kind: Literal["success", "error", "warning", "info"]
    message: str


class AppContext:
    """Session, contact list, view state and toast queue for one client.

    Created once and passed around explicitly. ``init`` starts a session,
    ``logout`` tears it down. Every mutation is confirm-then-update: the
    local list only changes after the server has accepted the write.
    """

    def __init__(self, api: ContactsApiClient, page_size: int = 10):
        self.api = api
        self.default_page_size = page_size
        self.user: Optional[UserOut] = None
        self.contacts: list[ContactOut] = []
        self.toasts: deque[Toast] = deque()
        self.filters = ContactFilters()
        self.page = 1
        self.page_size = page_size
        self.last_error: Optional[Exception] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.api.token is not None

    # ------------------ Lifecycle ------------------ #

    async def init(self, token: Optional[str] = None) -> bool:
        """Restore a session from a stored token, if any."""
        self._reset()
        if not token:
            return False
        self.api.token = token
        try:
            self.user = await self.api.me()
        except (ApiError, ConnectionFailed) as e:
            self._report(e)
            self.api.token = None
            return False
        await self.refresh_contacts()
        return True

    async def login(self, email: str, password: str) -> bool:
        try:
            _, self.user = await self.api.login(email, password)
        except (ApiError, ConnectionFailed) as e:
            self._report(e)
            return False
        self.push_toast("success", f"Welcome, {self.user.name}")
        await self.refresh_contacts()
        return True

    async def logout(self) -> None:
        # The token is not revoked server-side; forgetting it is the whole logout.
        failure = None
        try:
            await self.api.logout()
        except (ApiError, ConnectionFailed) as e:
            logger.warning("Logout request failed, clearing local session anyway: %s", e)
            failure = e
        self._reset()
        if failure is not None:
            self.push_toast("warning", LOCAL_LOGOUT_MESSAGE)

    def _reset(self) -> None:
        self.user = None
        self.contacts = []
        self.toasts.clear()
        self.filters = ContactFilters()
        self.page = 1
        self.page_size = self.default_page_size
        self.last_error = None

    # ------------------ Toasts ------------------ #

    def push_toast(self, kind: str, message: str) -> None:
        self.toasts.append(Toast(kind, message))

    def drain_toasts(self) -> list[Toast]:
        toasts = list(self.toasts)
        self.toasts.clear()
        return toasts

    def _report(self, e: Exception) -> None:
        self.last_error = e
        if isinstance(e, ConnectionFailed):
            self.push_toast("error", CONNECTION_ERROR_MESSAGE)
            return
        self.push_toast("error", e.message)
        if e.status_code == 401:
            self.user = None
            self.api.token = None
            self.contacts = []

    # ------------------ Contacts ------------------ #

    async def refresh_contacts(self) -> bool:
        try:
            self.contacts = await self.api.list_contacts()
        except (ApiError, ConnectionFailed) as e:
            self._report(e)
            return False
        return True

    async def add_contact(self, name: str, email: str, phone: str, address: str = "") -> Optional[ContactOut]:
        try:
            contact = await self.api.create_contact(name, email, phone, address)
        except (ApiError, ConnectionFailed) as e:
            self._report(e)
            return None
        self.contacts.insert(0, contact)
        self.push_toast("success", f"Contact {contact.name} created")
        return contact

    async def update_contact(self, contact_id: UUID, name: str, email: str, phone: str,
                             address: str = "") -> Optional[ContactOut]:
        try:
            contact = await self.api.update_contact(contact_id, name, email, phone, address)
        except (ApiError, ConnectionFailed) as e:
            self._report(e)
            return None
        self.contacts = [contact if c.id == contact.id else c for c in self.contacts]
        self.push_toast("success", f"Contact {contact.name} updated")
        return contact

    async def remove_contact(self, contact_id: UUID) -> bool:
        try:
            await self.api.delete_contact(contact_id)
        except (ApiError, ConnectionFailed) as e:
            self._report(e)
            return False
        self.contacts = [c for c in self.contacts if c.id != contact_id]
        self.push_toast("success", "Contact deleted")
        return True

    async def check_contact_fields(self, email: Optional[str] = None, phone: Optional[str] = None,
                                   exclude_id: Optional[UUID] = None) -> Optional[str]:
        """Live form feedback; returns the conflict message, or None when the values are free."""
        try:
            await self.api.validate(email=email, phone=phone, exclude_id=exclude_id)
        except ApiError as e:
            if e.status_code == 409:
                return e.message
            self._report(e)
        except ConnectionFailed as e:
            self._report(e)
        return None

    # ------------------ View state ------------------ #

    def set_filters(self, search_query: Optional[str] = None, sort_by: Optional[str] = None,
                    sort_order: Optional[str] = None) -> None:
        update = {
            key: value for key, value in
            (("search_query", search_query), ("sort_by", sort_by), ("sort_order", sort_order))
            if value is not None
        }
        self.filters = ContactFilters(**{**self.filters.model_dump(), **update})
        self.page = 1

    def set_page_size(self, page_size: int) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.page_size = page_size
        self.page = 1

    def set_page(self, page: int) -> None:
        self.page = page

    def view(self) -> ContactView:
        view = compute_view(self.contacts, self.filters, self.page, self.page_size)
        self.page = view.current_page
        return view
