"""Opening-narration service.

At campaign creation the engine asks a narration service for an opening
scene:

    request  {"universe": {"name", "tone", "themes", "description"}}
    response {"opening": "..."}

Real AI narration is out of scope; ``PlaceholderOpeningNarrator`` answers
in-process with a fixed scene, and ``HttpOpeningNarrator`` talks to any
service that speaks the same JSON. Callers go through ``fetch_opening``,
which never raises: transport or validation failures degrade to
``FALLBACK_OPENING``.
"""

from __future__ import annotations

from typing import Protocol

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from mythweaver.core.config import NarrationSettings
from mythweaver.core.constants import FALLBACK_OPENING, PLACEHOLDER_OPENING
from mythweaver.core.exceptions import NarrationServiceError
from mythweaver.core.logging import get_logger
from mythweaver.models.campaign import Universe


logger = get_logger(__name__)


class OpeningRequest(BaseModel):
    """Body sent to the opening service."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    universe: Universe


class OpeningResponse(BaseModel):
    """Body expected back from the opening service."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    opening: str = Field(min_length=1)


class OpeningNarrator(Protocol):
    """Anything that can write an opening scene for a universe.

    Implementations raise NarrationServiceError on failure.
    """

    async def generate(self, universe: Universe) -> str: ...


class PlaceholderOpeningNarrator:
    """Stand-in for AI narration: a fixed, atmospheric scene.

    Like a real endpoint it rejects a universe without a description.
    """

    async def generate(self, universe: Universe) -> str:
        if not universe.description.strip():
            raise NarrationServiceError("Universe description required", status_code=400)
        return PLACEHOLDER_OPENING


class HttpOpeningNarrator:
    """Client for a remote opening service.

    Transport errors are retried up to ``max_retries`` attempts with
    exponential backoff; HTTP errors and malformed bodies are not.

    Args:
        url: Service endpoint (POST).
        timeout_seconds: Per-request timeout.
        max_retries: Total attempts on transport errors.
        client: Optional shared client, mainly for tests.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 10.0,
        max_retries: int = 1,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self._client = client

    async def _post(self, client: httpx.AsyncClient, body: dict[str, object]) -> httpx.Response:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(httpx.TransportError),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            reraise=True,
        ):
            with attempt:
                return await client.post(self.url, json=body, timeout=self.timeout_seconds)
        raise NarrationServiceError("No attempt was made", url=self.url)

    async def generate(self, universe: Universe) -> str:
        body = OpeningRequest(universe=universe).model_dump(mode="json")
        try:
            if self._client is not None:
                response = await self._post(self._client, body)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, body)
            response.raise_for_status()
            return OpeningResponse.model_validate(response.json()).opening
        except httpx.HTTPStatusError as exc:
            raise NarrationServiceError(
                "Opening service returned an error",
                url=self.url,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise NarrationServiceError(
                f"Opening service unreachable: {exc}",
                url=self.url,
            ) from exc
        except (PydanticValidationError, ValueError) as exc:
            raise NarrationServiceError(
                "Opening service returned a malformed body",
                url=self.url,
            ) from exc


def build_narrator(settings: NarrationSettings) -> OpeningNarrator:
    """HTTP narrator when a URL is configured, otherwise the placeholder."""
    if settings.opening_url:
        return HttpOpeningNarrator(
            settings.opening_url,
            timeout_seconds=settings.timeout_seconds,
            max_retries=settings.max_retries,
        )
    return PlaceholderOpeningNarrator()


async def fetch_opening(narrator: OpeningNarrator, universe: Universe) -> str:
    """Ask for an opening scene; any failure yields the fallback opening."""
    try:
        opening = await narrator.generate(universe)
    except NarrationServiceError as exc:
        logger.warning("Opening narration failed, using fallback", error=str(exc))
        return FALLBACK_OPENING
    logger.info("Opening narration received", length=len(opening))
    return opening


__all__ = [
    "OpeningRequest",
    "OpeningResponse",
    "OpeningNarrator",
    "PlaceholderOpeningNarrator",
    "HttpOpeningNarrator",
    "build_narrator",
    "fetch_opening",
]
