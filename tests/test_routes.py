"""Tests for Flask web routes."""

import json
from unittest.mock import patch

import pytest

from core.document import format_text
from web.app import create_app


@pytest.fixture
def client():
    app = create_app()
    app.config["TESTING"] = True
    with patch.dict("os.environ", {}, clear=True):
        with app.test_client() as c:
            yield c


def _post(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


class TestPlatforms:
    def test_lists_platforms(self, client):
        resp = client.get("/api/platforms")
        assert resp.status_code == 200
        data = resp.get_json()
        assert [p["key"] for p in data] == ["narou", "kakuyomu", "novelup", "html"]
        assert data[0]["emphasis"] == "ruby"
        assert data[1]["id"] == 2


class TestConfigDefaults:
    def test_defaults(self, client):
        resp = client.get("/api/config/defaults")
        assert resp.status_code == 200
        assert resp.get_json()["paragraphIndentNum"] == 1

    def test_defaults_from_env(self, client):
        with patch.dict("os.environ", {"NOVEL_FORMAT_EMPHASIS_MARK": "●"}):
            resp = client.get("/api/config/defaults")
        assert resp.get_json()["emphasisMark"] == "●"

    def test_invalid_env(self, client):
        with patch.dict("os.environ", {"NOVEL_FORMAT_DIALOGUE_INDENT_NUM": "-2"}):
            resp = client.get("/api/config/defaults")
        assert resp.status_code == 500
        assert "error" in resp.get_json()


class TestFormat:
    def test_format_narou(self, client):
        resp = _post(client, "/api/format", {
            "text": "《《すごい》》",
            "platform": "narou",
            "config": {"paragraphIndentNum": 0, "emphasisMark": "●"},
        })
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["text"] == "｜す《●》｜ご《●》｜い《●》"
        assert data["platform"] == "narou"
        assert "emphasis" in data["rules"]

    def test_format_by_numeric_id(self, client):
        resp = _post(client, "/api/format", {"text": "本文", "platform": 2})
        assert resp.status_code == 200
        assert resp.get_json() == {
            "text": "　本文",
            "platform": "kakuyomu",
            "rules": [
                "strip_indent",
                "paragraph_indent",
                "emphasis",
                "move_space_after_ruby",
                "strip_space_before_closing_bracket",
            ],
        }

    def test_env_defaults_apply(self, client):
        with patch.dict("os.environ", {"NOVEL_FORMAT_PARAGRAPH_INDENT_NUM": "0"}):
            resp = _post(client, "/api/format", {"text": "本文", "platform": "html"})
        assert resp.get_json()["text"] == "本文"

    def test_missing_platform(self, client):
        resp = _post(client, "/api/format", {"text": "本文"})
        assert resp.status_code == 400

    def test_unknown_platform(self, client):
        resp = _post(client, "/api/format", {"text": "本文", "platform": "pixiv"})
        assert resp.status_code == 400
        assert "Unknown platform" in resp.get_json()["error"]

    def test_invalid_config(self, client):
        resp = _post(client, "/api/format", {
            "text": "本文",
            "platform": "narou",
            "config": {"periodAtEndOfDialogue": "sometimes"},
        })
        assert resp.status_code == 400
        assert "periodAtEndOfDialogue" in resp.get_json()["error"]

    def test_text_must_be_string(self, client):
        resp = _post(client, "/api/format", {"text": ["a"], "platform": "narou"})
        assert resp.status_code == 400

    def test_non_json_body(self, client):
        resp = client.post("/api/format", data="text", content_type="text/plain")
        assert resp.status_code == 400

    def test_uses_document_driver(self, client):
        with patch("web.routes.format_document_text", wraps=format_text) as mock_format:
            resp = _post(client, "/api/format", {"text": "一\n二", "platform": "html"})
        mock_format.assert_called_once()
        assert resp.get_json()["text"] == "　一\n　二"


class TestPreview:
    def test_preview_multiple_platforms(self, client):
        resp = _post(client, "/api/preview", {
            "text": "《《強調》》",
            "platforms": ["narou", "kakuyomu"],
            "config": {"paragraphIndentNum": 0, "emphasisMark": "●"},
        })
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["narou"]["text"] == "｜強《●》｜調《●》"
        assert data["kakuyomu"]["text"] == "《《強調》》"

    def test_preview_skips_unknown(self, client):
        resp = _post(client, "/api/preview", {"text": "本文", "platforms": ["pixiv", "html"]})
        data = resp.get_json()
        assert list(data) == ["html"]

    def test_preview_invalid_config(self, client):
        resp = _post(client, "/api/preview", {
            "text": "本文",
            "platforms": ["narou"],
            "config": {"paragraphIndentNum": -1},
        })
        assert resp.status_code == 400
