"""Tests for IconGenerator (mocked OpenAI client)."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from openai import OpenAIError

from favicon_studio.config import Settings
from favicon_studio.errors import InvalidArgument, UpstreamGenerationFailure
from favicon_studio.services.generation_service import IconGenerator, build_prompt
from favicon_studio.services.package_service import PackageService


def _client(response=None, error=None):
    client = MagicMock()
    client.images.generate = AsyncMock(return_value=response, side_effect=error)
    return client


def _response(*payloads):
    return SimpleNamespace(data=[SimpleNamespace(b64_json=p) for p in payloads])


def test_build_prompt_wraps_user_text():
    prompt = build_prompt("  a blue rocket ")
    assert 'The icon should represent: "a blue rocket".' in prompt
    assert prompt.startswith("A professional, modern, square app icon.")


@pytest.mark.asyncio
async def test_generate_icon_returns_payload(solid_png_b64):
    client = _client(_response(solid_png_b64))
    gen = IconGenerator(client, model="test-model", image_size="512x512")
    out = await gen.generate_icon("rocket")
    assert out == solid_png_b64
    kwargs = client.images.generate.call_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["n"] == 1
    assert kwargs["size"] == "512x512"
    assert kwargs["response_format"] == "b64_json"
    assert '"rocket"' in kwargs["prompt"]


@pytest.mark.asyncio
async def test_generate_icon_blank_prompt():
    client = _client(_response("x"))
    with pytest.raises(InvalidArgument):
        await IconGenerator(client).generate_icon("   ")
    client.images.generate.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [_response(), _response(None), _response("")])
async def test_generate_icon_without_image(response):
    with pytest.raises(UpstreamGenerationFailure):
        await IconGenerator(_client(response)).generate_icon("rocket")


@pytest.mark.asyncio
async def test_generate_icon_sdk_error():
    with pytest.raises(UpstreamGenerationFailure) as excinfo:
        await IconGenerator(_client(error=OpenAIError("boom"))).generate_icon("rocket")
    assert isinstance(excinfo.value.__cause__, OpenAIError)


@pytest.mark.asyncio
async def test_no_images_never_invokes_packaging():
    packager = MagicMock(spec=PackageService)
    gen = IconGenerator(_client(_response()))
    with pytest.raises(UpstreamGenerationFailure):
        payload = await gen.generate_icon("rocket")
        packager.create_package_from_base64(payload)
    packager.create_package_from_base64.assert_not_called()
    packager.create_package.assert_not_called()


def test_from_settings_requires_api_key():
    with pytest.raises(UpstreamGenerationFailure):
        IconGenerator.from_settings(Settings())


def test_from_settings_builds_client_once():
    settings = Settings(api_key="k-123", base_url="http://test/v1", image_model="m", image_size="256x256")
    with patch("favicon_studio.services.generation_service.AsyncOpenAI") as mock_cls:
        IconGenerator.from_settings(settings)
    mock_cls.assert_called_once_with(api_key="k-123", base_url="http://test/v1", timeout=120.0)
