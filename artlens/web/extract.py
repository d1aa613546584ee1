"""Readable-text extraction from HTML."""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Never part of the readable content
NOISE_TAGS = ["script", "style", "nav", "footer", "header", "aside", "iframe", "noscript"]

# Checked in order; <body> is the last resort
CONTENT_SELECTORS = ["article", "main", "[role=main]", ".content", "#content", "body"]

_WS_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def extract_text(html: str, max_chars: int = 10_000) -> str:
    """Plain text of the main content of ``html``, whitespace-collapsed and truncated."""
    if not html or not html.strip():
        return ""

    try:
        soup = BeautifulSoup(html, "html.parser")
    except Exception:
        logger.warning("Failed to parse HTML (%d bytes)", len(html), exc_info=True)
        return ""

    for tag in soup(NOISE_TAGS):
        tag.decompose()

    text = ""
    for selector in CONTENT_SELECTORS:
        node = soup.select_one(selector)
        if node is None:
            continue
        text = collapse_whitespace(node.get_text(separator=" "))
        if text:
            break
    else:
        text = collapse_whitespace(soup.get_text(separator=" "))

    return text[:max_chars]
