"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path

from food_diary.adapters.diary_api_client import DiaryApiClient, HttpxDiaryApiClient
from food_diary.adapters.file_token_store import FileTokenStore
from food_diary.config import Settings, normalize_base_url
from food_diary.services.diary import DiaryService
from food_diary.services.events import UNAUTHORIZED, EventBus
from food_diary.services.food_analysis import FoodAnalysisService
from food_diary.services.sessions import SessionService
from food_diary.views.diary_create import DiaryCreateForm


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    events: EventBus
    api_client: DiaryApiClient
    session_service: SessionService
    diary_service: DiaryService
    food_analysis_service: FoodAnalysisService
    close_resources: Callable[[], Awaitable[None]]
    create_form: DiaryCreateForm = field(default_factory=DiaryCreateForm)

    def __post_init__(self) -> None:
        # The draft belongs to one session; drop it on a forced sign-out.
        self.events.subscribe(UNAUTHORIZED, self.create_form.reset)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    events = EventBus()
    api_client = HttpxDiaryApiClient.create(
        base_url=normalize_base_url(resolved_settings.api_base_url),
        events=events,
        timeout=resolved_settings.request_timeout_seconds,
        analysis_timeout=resolved_settings.analysis_timeout_seconds,
    )
    session_service = SessionService(
        api_client=api_client,
        token_store=FileTokenStore(Path(resolved_settings.token_store_path)),
        events=events,
        token_key=resolved_settings.token_key,
    )

    async def close_resources() -> None:
        await api_client.close()

    return AppContainer(
        settings=resolved_settings,
        events=events,
        api_client=api_client,
        session_service=session_service,
        diary_service=DiaryService(api_client),
        food_analysis_service=FoodAnalysisService(api_client),
        close_resources=close_resources,
    )
