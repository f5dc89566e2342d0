"""Tests for container wiring."""

import asyncio

from food_diary.adapters.diary_api_client import HttpxDiaryApiClient
from food_diary.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.session_service.state.is_loading
    assert isinstance(container.api_client, HttpxDiaryApiClient)
    assert str(container.api_client.http_client.base_url).rstrip("/") == (
        "https://api.test"
    )
    asyncio.run(container.close_resources())


def test_container_logout_on_unauthorized_event(settings) -> None:
    container = build_container(settings)
    container.session_service.token_store.set("token", "abc")
    container.api_client.set_auth_token("abc")

    container.events.emit("unauthorized")

    assert container.session_service.token_store.get("token") is None
    assert container.api_client.auth_header is None
    asyncio.run(container.close_resources())


def test_container_unauthorized_event_resets_create_form(settings) -> None:
    container = build_container(settings)
    container.create_form.content = "Dinner"
    container.create_form.error = "Food analysis failed. Please try again."

    container.events.emit("unauthorized")

    assert container.create_form.content == ""
    assert container.create_form.error is None
    asyncio.run(container.close_resources())
