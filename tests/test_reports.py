from __future__ import annotations

import asyncio
import io
import json

import aiohttp
import pytest
from PIL import Image

from reports import NarrativeClient, ReportGenerator, build_prompt, build_summary, build_title, fallback_analysis

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def tai_result(calculator, make_question):
    # 地天泰: heaven below, earth above
    return calculator.by_coins(make_question(category="career"), [3, 3, 3, 0, 0, 0])


def _client(api_key: str | None = "test-key") -> NarrativeClient:
    return NarrativeClient(base_url="https://example.invalid/", api_key=api_key, model="test-model")


def test_title_and_summary(tai_result) -> None:
    assert build_title(tai_result.question) == "事业工作 - will my project succeed"
    assert build_summary(tai_result) == (
        f"地天泰，大吉。综合评分{tai_result.scores.overall_score}分。{tai_result.interpretation.advice}"
    )


def test_text_report_contains_reading(tai_result) -> None:
    report = ReportGenerator().generate_text_report(tai_result, ai_analysis="  深度解读  ")

    assert "地天泰（第11卦）" in report
    assert "上卦：坤 ☷" in report
    assert "下卦：乾 ☰" in report
    assert f"综合评分：{tai_result.scores.overall_score}" in report
    assert "深度解读\n" in report


def test_text_report_without_ai(tai_result) -> None:
    assert "深度分析" not in ReportGenerator().generate_text_report(tai_result)


def test_visual_hexagram_draws_lines_bottom_up(tai_result) -> None:
    data = ReportGenerator().generate_visual_hexagram(tai_result)

    assert data.startswith(PNG_SIGNATURE)
    image = Image.open(io.BytesIO(data)).convert("RGB")
    # top line belongs to earth (yin, broken in the middle)
    assert image.getpixel((200, 65)) == (255, 255, 255)
    assert image.getpixel((100, 65)) == (0, 0, 0)
    # bottom line belongs to heaven (yang, solid)
    assert image.getpixel((200, 355)) == (0, 0, 0)


def test_prompt_includes_question_and_result(tai_result) -> None:
    prompt = build_prompt(tai_result.question, tai_result)

    assert "问题：will my project succeed" in prompt
    assert "类别：事业工作" in prompt
    assert "紧急程度：紧急重要" in prompt
    assert "卦名：地天泰" in prompt
    assert f"综合评分：{tai_result.scores.overall_score}分" in prompt


def test_client_without_key_returns_fallback(tai_result) -> None:
    client = _client(api_key=None)

    text = asyncio.run(client.generate(tai_result.question, tai_result))

    assert text == fallback_analysis(tai_result)
    assert text.startswith("系统分析：根据地天泰的卦象")


def test_client_returns_model_content(tai_result, monkeypatch) -> None:
    client = _client()
    prompts = []

    async def fake_request(prompt: str) -> str:
        prompts.append(prompt)
        return "深度分析内容"

    monkeypatch.setattr(client, "_request_completion", fake_request)

    assert asyncio.run(client.generate(tai_result.question, tai_result)) == "深度分析内容"
    assert prompts == [build_prompt(tai_result.question, tai_result)]


def test_client_falls_back_on_network_error(tai_result, monkeypatch) -> None:
    client = _client()

    async def failing_request(prompt: str) -> str:
        raise aiohttp.ClientConnectionError("connection refused")

    monkeypatch.setattr(client, "_request_completion", failing_request)

    assert asyncio.run(client.generate(tai_result.question, tai_result)) == fallback_analysis(tai_result)


def test_client_falls_back_on_empty_content(tai_result, monkeypatch) -> None:
    client = _client()

    async def empty_request(prompt: str) -> None:
        return None

    monkeypatch.setattr(client, "_request_completion", empty_request)

    assert asyncio.run(client.generate(tai_result.question, tai_result)) == fallback_analysis(tai_result)


class _StubResponse:
    status = 200

    def __init__(self, body) -> None:
        self._body = body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class _StubSession:
    def __init__(self, body) -> None:
        self._body = body

    def __call__(self, *args, **kwargs):
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    def post(self, *args, **kwargs) -> _StubResponse:
        return _StubResponse(self._body)


@pytest.mark.parametrize(
    "body",
    [
        json.JSONDecodeError("Expecting property name enclosed in double quotes", "{not json", 1),
        ["not", "an", "object"],
        {"choices": [{"message": None}]},
        {"choices": ["text"]},
        {"choices": {"message": {"content": "x"}}},
        {"choices": [{"message": {"content": None}}]},
    ],
)
def test_client_falls_back_on_malformed_response(tai_result, monkeypatch, body) -> None:
    monkeypatch.setattr(aiohttp, "ClientSession", _StubSession(body))

    text = asyncio.run(_client().generate(tai_result.question, tai_result))

    assert text == fallback_analysis(tai_result)


def test_client_reads_content_from_response(tai_result, monkeypatch) -> None:
    body = {"choices": [{"message": {"role": "assistant", "content": "深度分析内容"}}]}
    monkeypatch.setattr(aiohttp, "ClientSession", _StubSession(body))

    assert asyncio.run(_client().generate(tai_result.question, tai_result)) == "深度分析内容"


def test_client_request_shape() -> None:
    client = _client()

    assert client.api_url == "https://example.invalid/chat/completions"
    assert client._prepare_headers()["Authorization"] == "Bearer test-key"
    payload = client._prepare_payload([{"role": "user", "content": "hi"}])
    assert payload["model"] == "test-model"
    assert payload["max_tokens"] == 1500


def test_enhanced_report(tai_result) -> None:
    generator = ReportGenerator(_client(api_key=None))

    report = asyncio.run(generator.generate_enhanced_report(tai_result))

    assert report["ai_analysis"] == fallback_analysis(tai_result)
    assert report["visual_hexagram"].startswith(PNG_SIGNATURE)
    assert report["summary"] == build_summary(tai_result)
    assert report["ai_analysis"] in report["text_report"]
