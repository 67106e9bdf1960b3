"""
Client-side state stores: one per catalog kind plus auth and the admin dashboard.

Each store keeps the last fetched data, a loading flag and the last error
message. Catalog mutations update the local lists in place so views do not
have to refetch.
"""

import logging
from typing import Any, Dict, List, Optional

from tuca.client.api import ApiError, TucaApiClient

logger = logging.getLogger(__name__)

Item = Dict[str, Any]


class CatalogStore:
    path: str = ""
    supports_featured: bool = True

    def __init__(self, api: TucaApiClient):
        self.api = api
        self.items: List[Item] = []
        self.featured: List[Item] = []
        self.is_loading = False
        self.error: Optional[str] = None

    def _fail(self, exc: ApiError) -> None:
        self.is_loading = False
        self.error = exc.message

    def load(self) -> None:
        self.is_loading, self.error = True, None
        try:
            self.items = self.api.get(self.path)
        except ApiError as e:
            self._fail(e)
            return
        self.is_loading = False

    def load_featured(self) -> None:
        if not self.supports_featured:
            self.featured = []
            return

        self.is_loading, self.error = True, None
        try:
            self.featured = self.api.get(f"{self.path}/featured")
        except ApiError as e:
            self._fail(e)
            return
        self.is_loading = False

    def get_by_id(self, item_id: int) -> Optional[Item]:
        try:
            return self.api.get(f"{self.path}/{item_id}")
        except ApiError as e:
            self.error = e.message
            return None

    def create(self, data: Item) -> Optional[Item]:
        self.is_loading, self.error = True, None
        try:
            item = self.api.post(self.path, json=data)
        except ApiError as e:
            self._fail(e)
            return None

        self.items = [*self.items, item]
        if item.get("featured"):
            self.featured = [*self.featured, item]
        self.is_loading = False
        return item

    def update(self, item_id: int, data: Item) -> Optional[Item]:
        self.is_loading, self.error = True, None
        try:
            item = self.api.patch(f"{self.path}/{item_id}", json=data)
        except ApiError as e:
            self._fail(e)
            return None

        self.items = [item if i["id"] == item_id else i for i in self.items]
        others = [i for i in self.featured if i["id"] != item_id]
        if item.get("featured"):
            if len(others) == len(self.featured):
                self.featured = [*self.featured, item]
            else:
                self.featured = [item if i["id"] == item_id else i for i in self.featured]
        else:
            self.featured = others
        self.is_loading = False
        return item

    def delete(self, item_id: int) -> bool:
        self.is_loading, self.error = True, None
        try:
            self.api.delete(f"{self.path}/{item_id}")
        except ApiError as e:
            self._fail(e)
            return False

        self.items = [i for i in self.items if i["id"] != item_id]
        self.featured = [i for i in self.featured if i["id"] != item_id]
        self.is_loading = False
        return True

    def clear_error(self) -> None:
        self.error = None


class ExperiencesStore(CatalogStore):
    path = "/api/experiences"


class AccommodationsStore(CatalogStore):
    path = "/api/accommodations"


class PackagesStore(CatalogStore):
    path = "/api/packages"


class VehiclesStore(CatalogStore):
    path = "/api/vehicles"
    supports_featured = False


class RestaurantsStore(CatalogStore):
    path = "/api/restaurants"


class AuthStore:
    def __init__(self, api: TucaApiClient):
        self.api = api
        self.is_authenticated = False
        self.user: Optional[Item] = None
        self.is_loading = False
        self.error: Optional[str] = None

    def _signed_out(self) -> None:
        self.is_authenticated = False
        self.user = None

    def init_auth(self) -> None:
        """Restore the session user; a missing session is not an error"""
        self.is_loading = True
        try:
            self.user = self.api.get("/api/auth/me")["user"]
            self.is_authenticated = True
        except ApiError as e:
            self._signed_out()
            if e.status_code not in (401, 404):
                self.error = e.message
        finally:
            self.is_loading = False

    def sign_up(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        preferences: Optional[Item] = None,
    ) -> Item:
        self.is_loading, self.error = True, None
        payload = {"email": email, "password": password, **(preferences or {})}
        if first_name:
            payload["firstName"] = first_name
        if last_name:
            payload["lastName"] = last_name

        try:
            result = self.api.post("/api/auth/register", json=payload)
        except ApiError as e:
            self.error = e.message
            raise
        finally:
            self.is_loading = False

        self.user = result["user"]
        self.is_authenticated = True
        return self.user

    def sign_in(self, email: str, password: str) -> Item:
        self.is_loading, self.error = True, None
        try:
            result = self.api.post("/api/auth/login", json={"email": email, "password": password})
        except ApiError as e:
            self._signed_out()
            self.error = e.message
            raise
        finally:
            self.is_loading = False

        self.user = result["user"]
        self.is_authenticated = True
        return self.user

    def sign_out(self) -> None:
        self.is_loading, self.error = True, None
        try:
            self.api.post("/api/auth/logout")
        except ApiError as e:
            self.error = e.message
            raise
        finally:
            self.is_loading = False
        self._signed_out()

    def update_profile(self, data: Item) -> Item:
        self.is_loading, self.error = True, None
        try:
            self.user = self.api.patch("/api/users/me", json=data)
        except ApiError as e:
            self.error = e.message
            raise
        finally:
            self.is_loading = False
        return self.user

    def change_password(self, current_password: str, new_password: str) -> None:
        self.is_loading, self.error = True, None
        try:
            self.api.post(
                "/api/users/me/change-password",
                json={"currentPassword": current_password, "newPassword": new_password},
            )
        except ApiError as e:
            self.error = e.message
            raise
        finally:
            self.is_loading = False

    def request_password_reset(self, email: str) -> str:
        self.is_loading, self.error = True, None
        try:
            return self.api.post("/api/auth/password-reset", json={"email": email})["message"]
        except ApiError as e:
            self.error = e.message
            raise
        finally:
            self.is_loading = False

    def confirm_password_reset(self, token: str, password: str) -> None:
        self.is_loading, self.error = True, None
        try:
            self.api.post("/api/auth/password-reset/confirm", json={"token": token, "password": password})
        except ApiError as e:
            self.error = e.message
            raise
        finally:
            self.is_loading = False

    def clear_error(self) -> None:
        self.error = None

    @property
    def is_admin(self) -> bool:
        return bool(self.user and self.user.get("role") == "admin")


class DashboardStore:
    def __init__(self, api: TucaApiClient):
        self.api = api
        self.stats: Optional[Item] = None
        self.is_loading = False
        self.error: Optional[str] = None

    def load(self) -> Optional[Item]:
        self.is_loading, self.error = True, None
        try:
            self.stats = self.api.get("/api/admin/stats")
        except ApiError as e:
            self.error = e.message
            return None
        finally:
            self.is_loading = False
        return self.stats
