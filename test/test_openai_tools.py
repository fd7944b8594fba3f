from __future__ import annotations

import json

import httpx
import pytest

from pyquarto.config.models import Settings
from pyquarto.errors import ExternalCollaboratorError
from pyquarto.tools.base import ToolContext
from pyquarto.tools.builtin_tools.openai_tools import parse_theme_reply

PALETTE = {
    "font_family": "Lora",
    "primary_color": "#0b3d91",
    "secondary_color": "#f4a261",
    "accent_color": "#e76f51",
}


def _chat_response(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


def _ctx(tmp_path, handler) -> ToolContext:
    return ToolContext(cwd=str(tmp_path), settings=Settings(), transport=httpx.MockTransport(handler))


async def run(registry, ctx, name, **params):
    return (await registry.execute(name, params, ctx)).to_dict()


def test_parse_theme_reply_tolerates_prose():
    reply = "Sure! Here is a palette:\n```json\n" + json.dumps(PALETTE) + "\n```\nEnjoy."
    assert parse_theme_reply(reply) == PALETTE


def test_parse_theme_reply_takes_first_object():
    reply = json.dumps(PALETTE) + "\nTip: use {primary_color} for links and {accent_color} sparingly."
    assert parse_theme_reply(reply) == PALETTE


def test_parse_theme_reply_missing_field():
    with pytest.raises(ExternalCollaboratorError) as exc:
        parse_theme_reply(json.dumps({"font_family": "Lora"}))
    assert "primary_color" in str(exc.value)


def test_parse_theme_reply_without_json():
    with pytest.raises(ExternalCollaboratorError):
        parse_theme_reply("I cannot help with that.")


@pytest.mark.asyncio
async def test_theme_recommendations(registry, tmp_path):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        seen["body"] = json.loads(request.content)
        return _chat_response("Here you go: " + json.dumps(PALETTE))

    out = await run(
        registry, _ctx(tmp_path, handler), "openai_generate_theme_recommendations",
        api_key="sk-test", user_theme_input="ocean sunset",
    )
    assert out["theme_data"] == PALETTE
    assert seen["body"]["model"] == "gpt-4"
    assert '"ocean sunset"' in seen["body"]["messages"][0]["content"]


@pytest.mark.asyncio
async def test_theme_recommendations_http_error(registry, tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "bad key"}})

    with pytest.raises(ExternalCollaboratorError) as exc:
        await run(
            registry, _ctx(tmp_path, handler), "openai_generate_theme_recommendations",
            api_key="sk-bad", user_theme_input="forest",
        )
    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_generate_image_downloads_result(registry, tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v1/images/generations":
            body = json.loads(request.content)
            assert body["model"] == "dall-e-3"
            assert body["prompt"] == "a lighthouse"
            return httpx.Response(200, json={"data": [{"url": "https://images.example.com/out.png"}]})
        assert str(request.url) == "https://images.example.com/out.png"
        return httpx.Response(200, content=b"\x89PNG fake")

    out = await run(
        registry, _ctx(tmp_path, handler), "openai_generate_image",
        api_key="sk-test", prompt="a lighthouse", output_file_path="img/hero.png",
    )
    assert (tmp_path / "img" / "hero.png").read_bytes() == b"\x89PNG fake"
    assert out["bytes_written"] == len(b"\x89PNG fake")
    assert out["image_url"] == "https://images.example.com/out.png"


@pytest.mark.asyncio
async def test_custom_scss_tool(registry, ctx, tmp_path):
    out = await run(
        registry, ctx, "quarto_generate_custom_scss",
        target_folder="theme", font_family="Lora", primary_color="#111", secondary_color="#222", accent_color="#333",
    )
    content = (tmp_path / "theme" / "custom.scss").read_text()
    assert content == out["scss_content"]
    assert "$accent: #333 !default;" in content
    assert out["font_url"].startswith("https://fonts.googleapis.com/css2?family=Lora")
