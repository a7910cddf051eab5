"""
Rich text helpers for standard descriptions.

Source descriptions are HTML fragments that may reference images by relative
path and embed TeX math as \\( inline \\) or \\[ display \\] spans.
"""

import re

from ..config import DEFAULT_IMAGE_BASE_URL

_IMAGE_SRC = re.compile(r"""src=["']images/(.*?)["']""")
_INLINE_MATH = re.compile(r"\\\((.*?)\\\)")
_DISPLAY_MATH = re.compile(r"\\\[(.*?)\\\]")


def _attr(formula: str) -> str:
    return formula.replace('"', "&quot;")


def transform_content(html: str, image_base_url: str = DEFAULT_IMAGE_BASE_URL) -> str:
    """Point relative image sources at the hosted image bucket."""
    if not html:
        return ""
    base = image_base_url if image_base_url.endswith("/") else image_base_url + "/"
    return _IMAGE_SRC.sub(lambda m: f'src="{base}{m.group(1)}"', html)


def prepare_content(raw: str, image_base_url: str = DEFAULT_IMAGE_BASE_URL) -> str:
    """
    Full rendering pipeline for a description.

    Image paths are rewritten, then TeX delimiters become math-tex elements
    carrying the formula in a data-formula attribute.
    """
    text = transform_content(raw, image_base_url)

    text = _INLINE_MATH.sub(
        lambda m: f'<span class="math-tex" data-formula="{_attr(m.group(1))}">{m.group(1)}</span>',
        text,
    )
    text = _DISPLAY_MATH.sub(
        lambda m: f'<div class="math-tex" data-formula="{_attr(m.group(1))}">{m.group(1)}</div>',
        text,
    )
    return text
