"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import httpx
import pytest

from food_diary.adapters.diary_api_client import HttpxDiaryApiClient
from food_diary.config import Settings
from food_diary.containers import AppContainer
from food_diary.services.diary import DiaryService
from food_diary.services.events import EventBus
from food_diary.services.food_analysis import FoodAnalysisService
from food_diary.services.sessions import SessionService
from food_diary.services.token_store import InMemoryTokenStore

BASE_URL = "https://api.test"
VALID_TOKEN = "token-123"


def diary_payload(
    diary_id: str = "d-1", content: str = "porridge"
) -> dict[str, object]:
    """Return a diary entry as the remote API serializes it."""
    return {
        "id": diary_id,
        "content": content,
        "imageUrl": None,
        "totalCalories": None,
        "calorieBreakdown": None,
        "createdAt": "2024-05-01T08:30:00Z",
        "updatedAt": "2024-05-01T08:30:00Z",
        "userId": "u-1",
    }


def analysis_payload() -> dict[str, object]:
    """Return a food analysis response."""
    return {
        "totalCalories": 500,
        "breakdown": {
            "rice": {
                "protein": {"amount": 4, "unit": "g", "calories": 16},
                "fat": {"amount": 0.5, "unit": "g", "calories": 4.5},
                "carbohydrate": {"amount": 45, "unit": "g", "calories": 180},
            },
            "chicken": {
                "protein": {"amount": 31, "unit": "g", "calories": 124},
                "fat": {"amount": 8, "unit": "g", "calories": 72},
                "carbohydrate": {"amount": 0, "unit": "g", "calories": 0},
            },
        },
    }


@dataclass
class FakeRemoteApi:
    """Scripted remote API served through httpx.MockTransport."""

    user: dict[str, str] = field(
        default_factory=lambda: {"id": "u-1", "email": "a@x.com"}
    )
    password: str = "pw"
    diaries: list[dict[str, object]] = field(
        default_factory=lambda: [diary_payload()]
    )
    analysis: dict[str, object] = field(default_factory=analysis_payload)
    failures: dict[tuple[str, str], int] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        """Return recorded requests for an endpoint."""
        return [
            request
            for request in self.requests
            if request.method == method and request.url.path == path
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:  # noqa: PLR0911
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.failures:
            return httpx.Response(self.failures[key], json={"message": "error"})

        path = request.url.path
        if key in {("POST", "/auth/login"), ("POST", "/auth/register")}:
            payload = json.loads(request.content.decode())
            if payload.get("password") != self.password:
                return httpx.Response(401, json={"message": "Invalid credentials"})
            return httpx.Response(
                200,
                json={
                    "accessToken": VALID_TOKEN,
                    "refreshToken": "refresh-123",
                    "user": {**self.user, "email": payload["email"]},
                },
            )
        if key == ("POST", "/auth/logout"):
            return httpx.Response(204)
        if key == ("POST", "/auth/refresh-token"):
            return httpx.Response(
                200,
                json={
                    "accessToken": "token-456",
                    "refreshToken": "refresh-456",
                    "user": self.user,
                },
            )

        if request.headers.get("Authorization") != f"Bearer {VALID_TOKEN}":
            return httpx.Response(401, json={"message": "Unauthorized"})

        if key == ("GET", "/auth/me"):
            return httpx.Response(200, json=self.user)
        if key == ("GET", "/diary"):
            return httpx.Response(200, json=self.diaries)
        if key == ("POST", "/diary"):
            created = diary_payload("d-new", "created")
            self.diaries.insert(0, created)
            return httpx.Response(201, json=created)
        if key == ("POST", "/food/analyze"):
            return httpx.Response(200, json=self.analysis)
        if path.startswith("/diary/"):
            diary_id = path.removeprefix("/diary/")
            entry = next((d for d in self.diaries if d["id"] == diary_id), None)
            if entry is None:
                return httpx.Response(404, json={"message": "Not found"})
            if request.method == "DELETE":
                self.diaries.remove(entry)
                return httpx.Response(204)
            return httpx.Response(200, json=entry)
        return httpx.Response(404, json={"message": "Not found"})


class SeededTokenStore(InMemoryTokenStore):
    """In-memory token store that can start with a saved token."""

    def __init__(self, token: str | None = None) -> None:
        super().__init__()
        if token is not None:
            self.set("token", token)


def multipart_fields(request: httpx.Request) -> dict[str, bytes]:
    """Parse the form fields of a multipart request body."""
    content_type = request.headers["Content-Type"]
    boundary = content_type.split("boundary=", 1)[1].encode()
    fields: dict[str, bytes] = {}
    for part in request.content.split(b"--" + boundary):
        if b"\r\n\r\n" not in part:
            continue
        headers, body = part.split(b"\r\n\r\n", 1)
        name = headers.split(b'name="', 1)[1].split(b'"', 1)[0].decode()
        fields[name] = body.removesuffix(b"\r\n")
    return fields


@pytest.fixture
def remote_api() -> FakeRemoteApi:
    return FakeRemoteApi()


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def api_client(remote_api: FakeRemoteApi, events: EventBus) -> HttpxDiaryApiClient:
    http_client = httpx.AsyncClient(
        base_url=BASE_URL, transport=httpx.MockTransport(remote_api.handler)
    )
    return HttpxDiaryApiClient(http_client=http_client, events=events)


@pytest.fixture
def token_store() -> SeededTokenStore:
    return SeededTokenStore()


@pytest.fixture
def session_service(
    api_client: HttpxDiaryApiClient,
    token_store: SeededTokenStore,
    events: EventBus,
) -> SessionService:
    return SessionService(api_client=api_client, token_store=token_store, events=events)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        api_base_url=f"{BASE_URL}/",
        token_store_path=str(tmp_path / "storage.json"),
    )


@pytest.fixture
def container(
    settings: Settings,
    events: EventBus,
    api_client: HttpxDiaryApiClient,
    session_service: SessionService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        events=events,
        api_client=api_client,
        session_service=session_service,
        diary_service=DiaryService(api_client),
        food_analysis_service=FoodAnalysisService(api_client),
        close_resources=close_resources,
    )
