from __future__ import annotations

import logging

from application.toggler import PermissionToggler
from infrastructure.profiles.store import ProfileStore
from interface.settings import AppSettings


def build_store() -> ProfileStore:
    return ProfileStore()


def build_toggler(store: ProfileStore, settings: AppSettings) -> PermissionToggler:
    return PermissionToggler(
        store,
        profile_name=settings.toggle_profile,
        permission=settings.toggle_permission,
        interval_seconds=settings.toggle_interval_seconds,
    )


def main() -> None:
    import uvicorn

    settings = AppSettings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "interface.api:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
