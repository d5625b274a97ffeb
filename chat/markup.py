"""Emphasis markup normalization for transcript content."""

from .constants import MARKUP_REPLACEMENTS


def normalize_markup(content: str) -> str:
    """Rewrite <b>/<i> tags to <strong>/<em>; everything else is left as is."""

    for source, target in MARKUP_REPLACEMENTS:
        content = content.replace(source, target)
    return content
