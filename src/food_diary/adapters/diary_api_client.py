"""HTTP client for the remote food diary API."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from food_diary.domain.diary import ImageUpload
from food_diary.services.events import UNAUTHORIZED, EventBus

_AUTHORIZATION = "Authorization"

MultipartFields = list[tuple[str, tuple[str | bytes | None, ...]]]


class DiaryApiClient(Protocol):
    """Interface for the remote diary, auth and food analysis endpoints."""

    def set_auth_token(self, token: str) -> None:
        """Attach the bearer credential to every outgoing request."""

    def clear_auth_token(self) -> None:
        """Stop sending a bearer credential."""

    async def login(self, email: str, password: str) -> dict[str, object]:
        """Exchange credentials for a token and user."""

    async def register(self, email: str, password: str) -> dict[str, object]:
        """Create an account and return a token and user."""

    async def refresh_token(self, refresh_token: str) -> dict[str, object]:
        """Exchange a refresh token for a new token pair."""

    async def logout(self) -> None:
        """Invalidate the session server-side."""

    async def me(self) -> dict[str, object]:
        """Return the user owning the current bearer credential."""

    async def list_diaries(self) -> list[dict[str, object]]:
        """Return the current user's diary entries."""

    async def get_diary(self, diary_id: str) -> dict[str, object]:
        """Return a single diary entry."""

    async def create_diary(
        self,
        content: str,
        image: ImageUpload | None = None,
        total_calories: str | None = None,
        calorie_breakdown: str | None = None,
    ) -> dict[str, object]:
        """Create a diary entry from multipart fields."""

    async def delete_diary(self, diary_id: str) -> None:
        """Delete a diary entry."""

    async def analyze_food(
        self, image: ImageUpload, description: str
    ) -> dict[str, object]:
        """Submit a meal photo for calorie and nutrient analysis."""


@dataclass
class HttpxDiaryApiClient(DiaryApiClient):
    """HTTPX-backed client bound to a single API base URL."""

    http_client: httpx.AsyncClient
    events: EventBus
    analysis_timeout: float = 30.0

    def __post_init__(self) -> None:
        hooks = self.http_client.event_hooks
        hooks["response"] = [*hooks.get("response", []), self._on_response]
        self.http_client.event_hooks = hooks

    @classmethod
    def create(
        cls,
        base_url: str,
        events: EventBus,
        timeout: float = 10.0,
        analysis_timeout: float = 30.0,
    ) -> "HttpxDiaryApiClient":
        """Create an API client with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(base_url=base_url, timeout=timeout),
            events=events,
            analysis_timeout=analysis_timeout,
        )

    async def _on_response(self, response: httpx.Response) -> None:
        # The caller still receives the error via raise_for_status.
        if response.status_code == httpx.codes.UNAUTHORIZED:
            self.events.emit(UNAUTHORIZED)

    @property
    def auth_header(self) -> str | None:
        """Return the bearer header currently attached to requests."""
        return self.http_client.headers.get(_AUTHORIZATION)

    def set_auth_token(self, token: str) -> None:
        """Attach the bearer credential to every outgoing request."""
        self.http_client.headers[_AUTHORIZATION] = f"Bearer {token}"

    def clear_auth_token(self) -> None:
        """Stop sending a bearer credential."""
        self.http_client.headers.pop(_AUTHORIZATION, None)

    async def login(self, email: str, password: str) -> dict[str, object]:
        """Exchange credentials for a token and user."""
        response = await self.http_client.post(
            "/auth/login", json={"email": email, "password": password}
        )
        response.raise_for_status()
        return response.json()

    async def register(self, email: str, password: str) -> dict[str, object]:
        """Create an account and return a token and user."""
        response = await self.http_client.post(
            "/auth/register", json={"email": email, "password": password}
        )
        response.raise_for_status()
        return response.json()

    async def refresh_token(self, refresh_token: str) -> dict[str, object]:
        """Exchange a refresh token for a new token pair."""
        response = await self.http_client.post(
            "/auth/refresh-token", json={"refreshToken": refresh_token}
        )
        response.raise_for_status()
        return response.json()

    async def logout(self) -> None:
        """Invalidate the session server-side."""
        response = await self.http_client.post("/auth/logout")
        response.raise_for_status()

    async def me(self) -> dict[str, object]:
        """Return the user owning the current bearer credential."""
        response = await self.http_client.get("/auth/me")
        response.raise_for_status()
        return response.json()

    async def list_diaries(self) -> list[dict[str, object]]:
        """Return the current user's diary entries."""
        response = await self.http_client.get("/diary")
        response.raise_for_status()
        return response.json()

    async def get_diary(self, diary_id: str) -> dict[str, object]:
        """Return a single diary entry."""
        response = await self.http_client.get(f"/diary/{diary_id}")
        response.raise_for_status()
        return response.json()

    async def create_diary(
        self,
        content: str,
        image: ImageUpload | None = None,
        total_calories: str | None = None,
        calorie_breakdown: str | None = None,
    ) -> dict[str, object]:
        """Create a diary entry from multipart fields."""
        fields: MultipartFields = [("content", (None, content))]
        if image is not None:
            fields.append(("image", _file_part(image)))
        if total_calories is not None:
            fields.append(("totalCalories", (None, total_calories)))
        if calorie_breakdown is not None:
            fields.append(("calorieBreakdown", (None, calorie_breakdown)))
        response = await self.http_client.post("/diary", files=fields)
        response.raise_for_status()
        return response.json()

    async def delete_diary(self, diary_id: str) -> None:
        """Delete a diary entry."""
        response = await self.http_client.delete(f"/diary/{diary_id}")
        response.raise_for_status()

    async def analyze_food(
        self, image: ImageUpload, description: str
    ) -> dict[str, object]:
        """Submit a meal photo for calorie and nutrient analysis."""
        fields: MultipartFields = [
            ("image", _file_part(image)),
            ("description", (None, description)),
        ]
        response = await self.http_client.post(
            "/food/analyze", files=fields, timeout=self.analysis_timeout
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _file_part(image: ImageUpload) -> tuple[str, bytes, str]:
    """Build a multipart file tuple for an image upload."""
    return (image.filename, image.content, image.content_type)
