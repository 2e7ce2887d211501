from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from domain.models import InvalidParameterValueError, StoreOutcome
from domain.schemas import (
    AddProfileRequest,
    MessageResponse,
    ProfileResponse,
    UpdateProfileRequest,
    ValidationResponse,
)
from infrastructure.profiles.store import ProfileStore
from interface.cli import build_store, build_toggler
from interface.settings import AppSettings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: AppSettings = app.state.settings
    toggler = None
    if settings.toggle_enabled:
        toggler = build_toggler(app.state.store, settings)
        toggler.start()
    app.state.toggler = toggler
    try:
        yield
    finally:
        if toggler is not None:
            await toggler.stop()
        logger.info("Profile API shut down")


def get_store(request: Request) -> ProfileStore:
    return request.app.state.store


def _internal_error(exc: Exception) -> HTTPException:
    return HTTPException(status_code=500, detail=f"Internal Server Error: {exc}")


def _require(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise HTTPException(status_code=400, detail=f"{label} is required.")
    return value


def create_app(settings: AppSettings | None = None, store: ProfileStore | None = None) -> FastAPI:
    settings = settings or AppSettings.from_env()
    app = FastAPI(title="Profile Permissions API", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store if store is not None else build_store()
    app.state.toggler = None

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Rejected malformed request path=%s errors=%d", request.url.path, len(exc.errors()))
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/profiles")
    async def list_profiles(store: ProfileStore = Depends(get_store)) -> dict[str, ProfileResponse]:
        try:
            profiles = await store.list_profiles()
        except Exception as exc:
            logger.exception("Error when retrieving profiles data")
            raise _internal_error(exc) from exc
        return {name: ProfileResponse.from_profile(profile) for name, profile in profiles.items()}

    @app.get("/api/profiles/{profile_name}")
    async def get_profile(profile_name: str, store: ProfileStore = Depends(get_store)) -> ProfileResponse:
        _require(profile_name, "Profile name")
        try:
            profile = await store.get_profile(profile_name)
        except Exception as exc:
            logger.exception("Error when getting profile=%s data", profile_name)
            raise _internal_error(exc) from exc
        if profile is None:
            raise HTTPException(status_code=404, detail=f"Profile '{profile_name}' not found.")
        return ProfileResponse.from_profile(profile)

    @app.post("/api/profiles")
    async def add_profile(
        request: AddProfileRequest,
        store: ProfileStore = Depends(get_store),
    ) -> MessageResponse:
        name = _require(request.profile_name, "Profile name")
        try:
            outcome = await store.create_profile(name, request.parameters)
        except InvalidParameterValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Error when adding profile=%s data", name)
            raise _internal_error(exc) from exc
        if outcome is StoreOutcome.ALREADY_EXISTS:
            raise HTTPException(status_code=409, detail=f"Profile '{name}' already exists.")
        return MessageResponse(message="Profile added successfully")

    @app.put("/api/profiles/{profile_name}")
    async def update_profile(
        profile_name: str,
        request: UpdateProfileRequest,
        store: ProfileStore = Depends(get_store),
    ) -> MessageResponse:
        _require(profile_name, "Profile name")
        try:
            outcome = await store.update_profile(profile_name, request.parameters)
        except InvalidParameterValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Error when updating profile=%s data", profile_name)
            raise _internal_error(exc) from exc
        if outcome is StoreOutcome.NOT_FOUND:
            raise HTTPException(status_code=404, detail=f"Profile '{profile_name}' not found.")
        return MessageResponse(message="Profile updated successfully")

    @app.delete("/api/profiles/{profile_name}")
    async def delete_profile(profile_name: str, store: ProfileStore = Depends(get_store)) -> MessageResponse:
        _require(profile_name, "Profile name")
        try:
            outcome = await store.delete_profile(profile_name)
        except Exception as exc:
            logger.exception("Error when deleting profile=%s", profile_name)
            raise _internal_error(exc) from exc
        if outcome is StoreOutcome.NOT_FOUND:
            raise HTTPException(status_code=404, detail=f"Profile '{profile_name}' not found.")
        return MessageResponse(message="Profile deleted successfully")

    @app.get("/api/profiles/{profile_name}/validate")
    async def validate_profile(
        profile_name: str,
        action: str | None = Query(default=None),
        store: ProfileStore = Depends(get_store),
    ) -> ValidationResponse:
        _require(profile_name, "Profile name")
        _require(action, "Action")
        try:
            is_valid = await store.validate_permission(profile_name, action)
        except Exception as exc:
            logger.exception("Error when validating profile=%s action=%s", profile_name, action)
            raise _internal_error(exc) from exc
        if is_valid is None:
            raise HTTPException(
                status_code=400,
                detail=f"Action: {action} does not exist for profile: {profile_name}",
            )
        return ValidationResponse(profile_name=profile_name, action=action, is_valid=is_valid)

    return app


app = create_app()
