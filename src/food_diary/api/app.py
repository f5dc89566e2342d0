"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pydantic import BaseModel

from food_diary.app_logging import configure_logging
from food_diary.containers import AppContainer
from food_diary.domain.diary import ImageUpload
from food_diary.domain.results import Loading, Redirect, Render, ViewResult
from food_diary.views.auth import (
    login_form_view,
    login_view,
    logout_view,
    register_form_view,
    register_view,
)
from food_diary.views.diary import (
    diary_delete_view,
    diary_detail_view,
    diary_list_view,
)
from food_diary.views.diary_create import (
    diary_analyze_view,
    diary_create_view,
    diary_submit_view,
)
from food_diary.views.home import home_view


class CredentialsForm(BaseModel):
    """Login and registration form payload."""

    email: str = ""
    password: str = ""


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state = await app.state.container.session_service.check_auth()
        logger.info("Session resolved, authenticated=%s", state.is_authenticated)
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/")
    async def home(request: Request) -> Response:
        """Landing page."""
        state_container: AppContainer = request.app.state.container
        return _to_response(home_view(state_container.session_service.state))

    @app.get("/login")
    async def login_form(request: Request) -> Response:
        """Login form."""
        state_container: AppContainer = request.app.state.container
        return _to_response(login_form_view(state_container.session_service))

    @app.post("/login")
    async def login(form: CredentialsForm, request: Request) -> Response:
        """Submit credentials."""
        state_container: AppContainer = request.app.state.container
        result = await login_view(
            state_container.session_service, form.email, form.password
        )
        return _to_response(result)

    @app.get("/register")
    async def register_form(request: Request) -> Response:
        """Registration form."""
        state_container: AppContainer = request.app.state.container
        return _to_response(register_form_view(state_container.session_service))

    @app.post("/register")
    async def register(form: CredentialsForm, request: Request) -> Response:
        """Create an account."""
        state_container: AppContainer = request.app.state.container
        result = await register_view(
            state_container.session_service, form.email, form.password
        )
        return _to_response(result)

    @app.post("/logout")
    async def logout(request: Request) -> Response:
        """End the session."""
        state_container: AppContainer = request.app.state.container
        state_container.create_form.reset()
        result = await logout_view(
            state_container.session_service, state_container.api_client
        )
        return _to_response(result)

    @app.get("/diary")
    async def diary_list(request: Request) -> Response:
        """List diary entries."""
        state_container: AppContainer = request.app.state.container
        result = await diary_list_view(
            state_container.session_service, state_container.diary_service
        )
        return _to_response(result)

    @app.get("/diary/create")
    async def diary_create(request: Request) -> Response:
        """Show the create form."""
        state_container: AppContainer = request.app.state.container
        result = diary_create_view(
            state_container.session_service, state_container.create_form
        )
        return _to_response(result)

    @app.post("/diary/create/analyze")
    async def diary_analyze(
        request: Request,
        analysis_image: UploadFile | None = File(default=None),
        description: str = Form(default=""),
        content: str | None = Form(default=None),
    ) -> Response:
        """Run food analysis on an uploaded photo."""
        state_container: AppContainer = request.app.state.container
        result = await diary_analyze_view(
            state_container.session_service,
            state_container.create_form,
            state_container.food_analysis_service,
            image=await _read_upload(analysis_image),
            description=description,
            content=content,
        )
        return _to_response(result)

    @app.post("/diary/create")
    async def diary_submit(
        request: Request,
        content: str = Form(default=""),
        image: UploadFile | None = File(default=None),
    ) -> Response:
        """Create a diary entry."""
        state_container: AppContainer = request.app.state.container
        result = await diary_submit_view(
            state_container.session_service,
            state_container.create_form,
            state_container.diary_service,
            content=content,
            image=await _read_upload(image),
        )
        return _to_response(result)

    @app.get("/diary/{diary_id}")
    async def diary_detail(diary_id: str, request: Request) -> Response:
        """Show a diary entry."""
        state_container: AppContainer = request.app.state.container
        result = await diary_detail_view(
            state_container.session_service, state_container.diary_service, diary_id
        )
        return _to_response(result)

    @app.post("/diary/{diary_id}/delete")
    async def diary_delete(diary_id: str, request: Request) -> Response:
        """Delete a diary entry."""
        state_container: AppContainer = request.app.state.container
        result = await diary_delete_view(
            state_container.session_service, state_container.diary_service, diary_id
        )
        return _to_response(result)

    return app


def _to_response(result: ViewResult) -> Response:
    """Translate a view result into an HTTP response."""
    if isinstance(result, Redirect):
        return RedirectResponse(result.location, status_code=303)
    if isinstance(result, Loading):
        return JSONResponse({"view": "loading"})
    if isinstance(result, Render):
        return JSONResponse(jsonable_encoder({"view": result.view, **result.context}))
    raise TypeError(f"Unsupported view result: {result!r}")


async def _read_upload(upload: UploadFile | None) -> ImageUpload | None:
    """Read an uploaded file, treating an empty file input as no file."""
    if upload is None or not upload.filename:
        return None
    content = await upload.read()
    if not content:
        return None
    return ImageUpload(
        filename=upload.filename,
        content=content,
        content_type=upload.content_type or "image/jpeg",
    )
