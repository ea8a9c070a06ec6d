"""Route handlers for the Novel Formatter web app."""

import logging

from flask import Blueprint, request, jsonify

from core.config import FormatConfig
from core.document import format_text as format_document_text
from core.pipeline import build_pipeline
from core.platforms import PLATFORM_CONFIGS, resolve_platform

logger = logging.getLogger(__name__)

bp = Blueprint("main", __name__)

MAX_TEXT_CHARS = 1_000_000


def _request_config(data: dict) -> FormatConfig:
    """Overlay request settings on the environment defaults."""
    return FormatConfig.from_mapping(data.get("config") or {}, base=FormatConfig.from_env())


def _format(text: str, platform, config: FormatConfig) -> dict:
    pipeline = build_pipeline(config, platform)
    return {
        "text": format_document_text(text, pipeline),
        "platform": resolve_platform(platform).key,
        "rules": pipeline.describe(),
    }


@bp.route("/api/platforms")
def platforms():
    """List the supported platforms."""
    return jsonify([
        {
            "key": config.key,
            "id": int(config.platform),
            "title": config.title,
            "emphasis": config.emphasis_style.value,
        }
        for config in PLATFORM_CONFIGS.values()
    ])


@bp.route("/api/config/defaults")
def config_defaults():
    """Return the settings used when a request omits them."""
    try:
        config = FormatConfig.from_env()
    except ValueError as e:
        logger.info("Invalid environment configuration: %s", e)
        return jsonify({"error": str(e)}), 500
    return jsonify(config.to_mapping())


@bp.route("/api/format", methods=["POST"])
def format_text():
    """Format text for a single platform."""
    data = request.get_json(silent=True) or {}
    text = data.get("text", "")
    platform = data.get("platform")

    if not isinstance(text, str):
        return jsonify({"error": "Text must be a string"}), 400
    if len(text) > MAX_TEXT_CHARS:
        return jsonify({"error": f"Text too long. Max {MAX_TEXT_CHARS} characters."}), 400
    if platform is None:
        return jsonify({"error": "No platform provided"}), 400

    try:
        result = _format(text, platform, _request_config(data))
    except ValueError as e:
        logger.info("Rejected format request: %s", e)
        return jsonify({"error": str(e)}), 400

    return jsonify(result)


@bp.route("/api/preview", methods=["POST"])
def preview():
    """Return formatted text for all requested platforms."""
    data = request.get_json(silent=True) or {}
    text = data.get("text", "")
    keys = data.get("platforms", [])

    if not isinstance(text, str):
        return jsonify({"error": "Text must be a string"}), 400

    try:
        config = _request_config(data)
    except ValueError as e:
        logger.info("Rejected preview request: %s", e)
        return jsonify({"error": str(e)}), 400

    result = {}
    for key in keys:
        if not isinstance(key, str) or key not in PLATFORM_CONFIGS:
            continue
        result[key] = _format(text, key, config)

    return jsonify(result)
