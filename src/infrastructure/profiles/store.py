from __future__ import annotations

import asyncio
import logging
from typing import Mapping

from domain.models import (
    DEFAULT_PROFILES,
    InvalidParameterValueError,
    Profile,
    StoreOutcome,
    format_bool,
    parse_bool,
)

logger = logging.getLogger(__name__)


class ProfileStore:
    """In-memory profile registry shared by the API and the background toggler.

    Every operation runs under a single ``asyncio.Lock``, so writes never
    interleave and reads never see a profile mid-update. Reads hand out
    copies; the only way to change stored data is through this class.
    """

    def __init__(self, seed: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self._lock = asyncio.Lock()
        self._profiles: dict[str, Profile] = {}
        for name, parameters in (DEFAULT_PROFILES if seed is None else seed).items():
            self._profiles[name] = Profile(name=name, parameters=_normalize(parameters))

    async def list_profiles(self) -> dict[str, Profile]:
        async with self._lock:
            return {name: profile.copy() for name, profile in self._profiles.items()}

    async def get_profile(self, name: str) -> Profile | None:
        async with self._lock:
            profile = self._profiles.get(name)
            return profile.copy() if profile is not None else None

    async def create_profile(self, name: str, parameters: Mapping[str, str]) -> StoreOutcome:
        async with self._lock:
            if name in self._profiles:
                logger.warning("ProfileStore create rejected, profile=%s already exists", name)
                return StoreOutcome.ALREADY_EXISTS
            self._profiles[name] = Profile(name=name, parameters=_normalize(parameters))
        logger.info("ProfileStore created profile=%s parameters=%d", name, len(parameters))
        return StoreOutcome.OK

    async def update_profile(self, name: str, parameters: Mapping[str, str]) -> StoreOutcome:
        async with self._lock:
            if name not in self._profiles:
                logger.warning("ProfileStore update rejected, profile=%s not found", name)
                return StoreOutcome.NOT_FOUND
            # Full replacement, not a merge.
            self._profiles[name] = Profile(name=name, parameters=_normalize(parameters))
        logger.info("ProfileStore updated profile=%s parameters=%d", name, len(parameters))
        return StoreOutcome.OK

    async def delete_profile(self, name: str) -> StoreOutcome:
        async with self._lock:
            if self._profiles.pop(name, None) is None:
                logger.warning("ProfileStore delete rejected, profile=%s not found", name)
                return StoreOutcome.NOT_FOUND
        logger.info("ProfileStore deleted profile=%s", name)
        return StoreOutcome.OK

    async def validate_permission(self, name: str, permission: str) -> bool | None:
        """Return the permission's value, or None when it cannot be determined."""
        async with self._lock:
            profile = self._profiles.get(name)
            value = profile.parameters.get(permission) if profile is not None else None
        allowed = parse_bool(value)
        if allowed is None:
            logger.warning("Validation failed for profile=%s action=%s", name, permission)
        return allowed

    async def toggle_bool_permission(self, name: str, permission: str) -> None:
        async with self._lock:
            profile = self._profiles.get(name)
            if profile is None:
                logger.warning("ProfileStore toggle skipped, no profile=%s", name)
                return
            if permission not in profile.parameters:
                logger.warning("ProfileStore toggle skipped, no permission=%s on profile=%s", permission, name)
                return
            current = parse_bool(profile.parameters[permission])
            if current is None:
                logger.warning(
                    "ProfileStore toggle skipped, profile=%s permission=%s value=%r is not a bool",
                    name,
                    permission,
                    profile.parameters[permission],
                )
                return
            profile.parameters[permission] = format_bool(not current)
        logger.info("ProfileStore toggled profile=%s permission=%s to %s", name, permission, format_bool(not current))


def _normalize(parameters: Mapping[str, str]) -> dict[str, str]:
    invalid = [value for value in parameters.values() if parse_bool(value) is None]
    if invalid:
        for value in invalid:
            logger.warning("%r is not a valid input", value)
        raise InvalidParameterValueError(invalid)
    return {key: format_bool(parse_bool(value)) for key, value in parameters.items()}
