"""Update checks, gated by the auto-update-check setting."""

from __future__ import annotations

import asyncio
import logging
import urllib.parse
from typing import Final

import requests
from pydantic import BaseModel, ValidationError
from requests.exceptions import RequestException

from convsync.errors import UpdateCheckError
from convsync.settings.sync import SettingsSynchronizer

logger: Final = logging.getLogger(__name__)


class UpdateInfo(BaseModel):
    """Release advertised by the update endpoint."""

    version: str
    url: str | None = None
    notes: str | None = None


def parse_version(version: str) -> tuple[int, int, int]:
    """Parse ``"major.minor.patch"``; missing or non-numeric parts count as 0.

    A leading ``v`` is ignored.
    """
    parts = version.strip().lstrip("vV").split(".")
    numbers: list[int] = []
    for part in (parts + ["0", "0", "0"])[:3]:
        digits = "".join(ch for ch in part if ch.isdigit())
        numbers.append(int(digits) if digits else 0)
    return numbers[0], numbers[1], numbers[2]


def is_newer(current: str, latest: str) -> bool:
    """Whether ``latest`` is a strictly higher version than ``current``."""
    return parse_version(latest) > parse_version(current)


class HttpUpdateChecker:
    """Query an HTTP endpoint for the latest released version."""

    def __init__(self, url: str, current_version: str, timeout: float = 5.0) -> None:
        """Initialize with the endpoint to check.

        Args:
            url: URL returning {"version": ..., "url": ..., "notes": ...}
            current_version: Version of the running application
            timeout: Timeout for HTTP request in seconds
        """
        parsed = urllib.parse.urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid URL: {url}")

        self.url = url
        self.current_version = current_version
        self.timeout = timeout

    def fetch_latest(self) -> UpdateInfo:
        """Fetch the advertised release.

        Raises:
            UpdateCheckError: On network failure, non-200 status or bad body
        """
        try:
            resp = requests.get(self.url, timeout=self.timeout)
        except RequestException as exc:
            raise UpdateCheckError(f"Update request failed: {exc}", exc) from exc

        if resp.status_code != 200:
            raise UpdateCheckError(f"HTTP {resp.status_code} from {self.url}")

        try:
            return UpdateInfo.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:  # JSON parse / schema error
            raise UpdateCheckError(f"Malformed update response: {exc}", exc) from exc

    def check(self) -> UpdateInfo | None:
        """Return the advertised release if it is newer than the running one."""
        latest = self.fetch_latest()
        if is_newer(self.current_version, latest.version):
            logger.info("Update available: %s -> %s", self.current_version, latest.version)
            return latest
        logger.debug("Up to date (%s)", self.current_version)
        return None


async def check_for_updates(
    settings: SettingsSynchronizer, checker: HttpUpdateChecker
) -> UpdateInfo | None:
    """Run the update check unless the user switched it off.

    Failures are logged and reported as "no update"; they never block the
    caller.
    """
    if not await settings.load_auto_update_check():
        logger.info("Automatic update check disabled")
        return None

    try:
        return await asyncio.to_thread(checker.check)
    except UpdateCheckError as exc:
        logger.warning("Update check failed: %s", exc)
        return None
