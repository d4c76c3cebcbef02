"""Remote icon generation through an OpenAI-compatible images API."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI, OpenAIError

from favicon_studio.config import Settings
from favicon_studio.errors import InvalidArgument, UpstreamGenerationFailure

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "A professional, modern, square app icon. Vector art style. Centered object. "
    'The icon should represent: "{prompt}". '
    "The background should be a simple, solid color or a very subtle gradient that complements "
    "the main object. The icon must be clear, simple, and easily recognizable at small sizes. "
    "No text unless specified."
)


def build_prompt(user_prompt: str) -> str:
    return PROMPT_TEMPLATE.format(prompt=user_prompt.strip())


class IconGenerator:
    """One configured client, constructed once and passed explicitly."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = "dall-e-3",
        image_size: str = "1024x1024",
    ) -> None:
        self._client = client
        self._model = model
        self._image_size = image_size

    @classmethod
    def from_settings(cls, settings: Settings) -> "IconGenerator":
        if not settings.api_key:
            raise UpstreamGenerationFailure("API key is not configured (set API_KEY)")
        client = AsyncOpenAI(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.request_timeout,
        )
        return cls(client, model=settings.image_model, image_size=settings.image_size)

    async def generate_icon(self, prompt: str) -> str:
        """Return base64 PNG bytes of exactly one generated icon."""
        if not prompt or not prompt.strip():
            raise InvalidArgument("prompt is empty")
        try:
            resp = await self._client.images.generate(
                model=self._model,
                prompt=build_prompt(prompt),
                n=1,
                size=self._image_size,
                response_format="b64_json",
            )
        except OpenAIError as exc:
            logger.warning("image generation request failed: %s", exc)
            raise UpstreamGenerationFailure("image generation request failed") from exc

        if not resp.data:
            raise UpstreamGenerationFailure("API did not return any images")
        payload = resp.data[0].b64_json
        if not payload:
            raise UpstreamGenerationFailure("API returned an image without data")
        logger.info("generated icon", extra={"model": self._model, "payload_chars": len(payload)})
        return payload
