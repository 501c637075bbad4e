from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Union

import httpx

from ._logging import get_component_logger
from .types import ErrorCategory, SelectorError, Version


class VersionDetector(ABC):
    @abstractmethod
    async def detect(self) -> Version:
        ...


class StaticVersionDetector(VersionDetector):
    def __init__(self, version: Union[Version, str]):
        self._version = version if isinstance(version, Version) else Version.parse(version)

    async def detect(self) -> Version:
        return self._version


class HttpVersionDetector(VersionDetector):
    """
    Reads the version a search cluster reports on its root endpoint.

    Expects the Elasticsearch/OpenSearch root document:
        {"version": {"number": "7.10.2", ...}, ...}

    With major_only (the default) the result is reduced to its major
    release line, e.g. 7.10.2 -> 7.0.0.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        major_only: bool = True,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[Any] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.major_only = major_only
        self._client = client
        self._logger = get_component_logger("HttpVersionDetector", logger)

    async def detect(self) -> Version:
        url = self.base_url.rstrip("/") + "/"

        if self._client is not None:
            resp = await self._get(self._client, url)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await self._get(client, url)

        if resp.status_code >= 400:
            raise SelectorError(
                ErrorCategory.DETECTION,
                f"Version probe failed with HTTP {resp.status_code} from {url}",
                raw=resp.text,
            )

        version = self._parse_version(resp)
        if self.major_only:
            version = version.major_line()

        self._logger.info("version_detected", url=url, version=str(version))
        return version

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        try:
            return await client.get(url, timeout=self.timeout)
        except httpx.TimeoutException as exc:
            raise SelectorError(
                ErrorCategory.DETECTION, f"Version probe timed out: {url}", raw=exc
            ) from exc
        except httpx.HTTPError as exc:
            raise SelectorError(
                ErrorCategory.DETECTION,
                f"Version probe connection error: {type(exc).__name__}: {exc}",
                raw=exc,
            ) from exc
        except httpx.InvalidURL as exc:
            raise SelectorError(
                ErrorCategory.DETECTION, f"Invalid version probe URL {url!r}: {exc}", raw=exc
            ) from exc

    def _parse_version(self, resp: httpx.Response) -> Version:
        try:
            body = resp.json()
        except ValueError as exc:
            raise SelectorError(
                ErrorCategory.DETECTION, "Version probe returned a non-JSON body", raw=resp.text
            ) from exc

        number = None
        if isinstance(body, dict) and isinstance(body.get("version"), dict):
            number = body["version"].get("number")
        if not isinstance(number, str):
            raise SelectorError(
                ErrorCategory.DETECTION, "Version probe response has no version.number", raw=body
            )

        try:
            return Version.parse(number)
        except SelectorError as exc:
            raise SelectorError(
                ErrorCategory.DETECTION, f'Remote reported invalid version "{number}"', raw=body
            ) from exc
