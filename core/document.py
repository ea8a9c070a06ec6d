"""Format whole documents line by line."""

import logging
from typing import Iterable, Optional, Union

from core.config import FormatConfig
from core.pipeline import Pipeline, build_pipeline
from core.platforms import Platform, PlatformConfig

logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\n"


def format_lines(lines: Iterable[str], pipeline: Pipeline) -> list[str]:
    """Apply pipeline to each line on its own, keeping order."""
    return [pipeline.apply(line) for line in lines]


def format_text(text: str, pipeline: Pipeline) -> str:
    """Split text into lines, run pipeline over them and rejoin."""
    lines = text.split(LINE_SEPARATOR)
    logger.debug("Formatting %d lines with %d rules", len(lines), len(pipeline))
    return LINE_SEPARATOR.join(format_lines(lines, pipeline))


def format_document(
    text: str,
    platform: Union[Platform, PlatformConfig, str, int],
    config: Optional[FormatConfig] = None,
) -> str:
    """Rewrite a manuscript for a platform.

    Args:
        text: The full document text.
        platform: Target platform (enum member, record, key or numeric id).
        config: Formatting preferences. Defaults to FormatConfig().

    Returns:
        The formatted document. Line count and order are unchanged.

    Raises:
        ConfigurationError: Invalid configuration, raised before any line is touched.
        UnknownPlatformError: Unrecognized platform.
    """
    pipeline = build_pipeline(config if config is not None else FormatConfig(), platform)
    return format_text(text, pipeline)
