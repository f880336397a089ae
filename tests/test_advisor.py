import json

import pytest
import requests

from mountmaster import advisor
from mountmaster.advisor import (MountAdvisor, AdvisorError, MissingCredentialError,
                                 MalformedResponseError, build_prompt, parse_advice)
from mountmaster.constants import MODE_CUSTOM_BORDERS
from mountmaster.models import MountConfig, BorderConfig, apply_suggestion
from mountmaster.utils import UNIT_MM, UNIT_INCH

REPLY = {
    "suggestion": "Go wide with a weighted bottom.",
    "reasoning": "Monochrome portraits breathe with generous margins.",
    "suggestedValues": {"photoBorder": 0.25, "mountOffset": 0.5,
                        "topBorder": 2, "bottomBorder": 2.5, "sideBorder": 2},
}


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if isinstance(self.payload, Exception): raise self.payload
        return self.payload


def gemini_body(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def no_env_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)


class TestParse:
    def test_inches_converted_to_mm(self):
        advice = parse_advice(json.dumps(REPLY), UNIT_INCH)
        s = advice.suggested_config
        assert advice.suggestion == REPLY["suggestion"]
        assert s["photo_border"] == pytest.approx(6.35)
        assert s["mount_offset"] == pytest.approx(12.7)
        b = s["manual_borders"]
        assert b.top == pytest.approx(50.8)
        assert b.bottom == pytest.approx(63.5)
        assert b.left == b.right == pytest.approx(50.8)

    def test_millimetres_unchanged(self):
        s = parse_advice(json.dumps(REPLY), UNIT_MM).suggested_config
        assert s["photo_border"] == 0.25
        assert s["manual_borders"] == BorderConfig(2, 2.5, 2, 2)

    def test_missing_values_rejected(self):
        with pytest.raises(MalformedResponseError):
            parse_advice(json.dumps({"suggestion": "x", "reasoning": "y"}), UNIT_MM)

    @pytest.mark.parametrize("text", ["", "nope", "[]"])
    def test_not_an_object(self, text):
        with pytest.raises(MalformedResponseError):
            parse_advice(text, UNIT_MM)

    def test_non_numeric_value(self):
        bad = dict(REPLY, suggestedValues={"photoBorder": "wide"})
        with pytest.raises(MalformedResponseError):
            parse_advice(json.dumps(bad), UNIT_MM)

    def test_overlay_switches_mode(self):
        s = parse_advice(json.dumps(REPLY), UNIT_MM).suggested_config
        cfg = apply_suggestion(MountConfig(), s)
        assert cfg.mode == MODE_CUSTOM_BORDERS
        assert cfg.manual_borders.left == 2

    def test_partial_borders_keep_current(self):
        partial = dict(REPLY, suggestedValues={"topBorder": 30})
        s = parse_advice(json.dumps(partial), UNIT_MM).suggested_config
        cfg = apply_suggestion(MountConfig(), s)
        assert cfg.manual_borders == BorderConfig(30, 50, 50, 50)


def test_prompt_uses_display_unit():
    prompt = build_prompt("B&W portrait", MountConfig(), UNIT_INCH)
    assert "B&W portrait" in prompt
    assert "8.0 x 10.0 inch" in prompt
    assert "Values should be in inch." in prompt


class TestMountAdvisor:
    def test_missing_key(self, no_env_key):
        with pytest.raises(MissingCredentialError):
            MountAdvisor().get_mount_advice("sunset", MountConfig(), UNIT_MM)

    def test_key_from_environment(self, monkeypatch, no_env_key):
        monkeypatch.setenv("API_KEY", "from-env")
        assert MountAdvisor().api_key == "from-env"
        monkeypatch.setenv("GEMINI_API_KEY", "gemini")
        assert MountAdvisor().api_key == "gemini"

    def test_request_and_response(self, monkeypatch):
        calls = {}
        reply = FakeResponse(gemini_body(json.dumps(REPLY)))

        def fake_post(url, **kwargs):
            calls.update(url=url, headers=kwargs["headers"], body=kwargs["json"])
            return reply

        monkeypatch.setattr(advisor.requests, "post", fake_post)
        advice = MountAdvisor(api_key="k", model="m").get_mount_advice("sunset", MountConfig(), UNIT_MM)

        assert calls["url"].endswith("/models/m:generateContent")
        assert calls["headers"]["x-goog-api-key"] == "k"
        assert calls["body"]["generationConfig"]["responseMimeType"] == "application/json"
        assert "sunset" in calls["body"]["contents"][0]["parts"][0]["text"]
        assert advice.reasoning == REPLY["reasoning"]
        assert advice.suggested_config["mount_offset"] == 0.5

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(advisor.requests, "post", lambda *a, **kw: FakeResponse({}, status=503))
        with pytest.raises(AdvisorError):
            MountAdvisor(api_key="k").get_mount_advice("x", MountConfig(), UNIT_MM)

    def test_connection_error(self, monkeypatch):
        def boom(*a, **kw): raise requests.ConnectionError("offline")
        monkeypatch.setattr(advisor.requests, "post", boom)
        with pytest.raises(AdvisorError):
            MountAdvisor(api_key="k").get_mount_advice("x", MountConfig(), UNIT_MM)

    @pytest.mark.parametrize("payload", [{}, {"candidates": []}, ValueError("bad json")])
    def test_malformed(self, monkeypatch, payload):
        monkeypatch.setattr(advisor.requests, "post", lambda *a, **kw: FakeResponse(payload))
        with pytest.raises(MalformedResponseError):
            MountAdvisor(api_key="k").get_mount_advice("x", MountConfig(), UNIT_MM)
