"""DocC markdown cleanup and title extraction."""

import re
from typing import Optional

from pfdocs.models import SourceType

# Block directives with a body: @Metadata { ... }, @Options(scope: local) { ... }
# One level of nested braces is allowed inside the body.
_BLOCK_DIRECTIVE = re.compile(r"@\w+(?:\([^)]*\))?\s*\{(?:[^{}]|\{[^{}]*\})*\}")

# ``Symbol`` -> Symbol
_SYMBOL_REFERENCE = re.compile(r"``([^`]+)``")

# <doc:ArticleName> -> [ArticleName]
_DOC_LINK = re.compile(r"<doc:([^>]+)>")

# Layout directives that may appear with or without a body
_LAYOUT_DIRECTIVE = re.compile(
    r"@(?:Row|Column|Image|Video|Links|TabNavigator|Tab)\b(?:\([^)]*\))?(?:\s*\{[^}]*\})?"
)

# Three or more line breaks, allowing whitespace-only lines in between
_EXCESS_BLANK_LINES = re.compile(r"\n(?:[ \t]*\n){2,}")

_DOCC_TITLE = re.compile(r"^#[ \t]+``([^`]+)``", re.MULTILINE)
_H1_TITLE = re.compile(r"^#[ \t]+(.+)$", re.MULTILINE)
_FRONT_MATTER_TITLE = re.compile(r"---[ \t]*\n.*?title:[ \t]*(.+?)\n.*?---", re.DOTALL)


def extract_title(content: str) -> Optional[str]:
    """Extract a title from raw markdown.

    Tries, in order: a DocC symbol heading (# ``Symbol``), any level-1
    heading, then a `title:` field in leading front matter.
    """
    match = _DOCC_TITLE.search(content)
    if match:
        return match.group(1)

    match = _H1_TITLE.search(content)
    if match:
        return match.group(1).strip()

    match = _FRONT_MATTER_TITLE.match(content)
    if match:
        return re.sub(r"^[\"']|[\"']$", "", match.group(1).strip())

    return None


def clean_markdown(content: str) -> str:
    """Strip DocC markup so the text reads (and searches) as plain markdown."""
    cleaned = _BLOCK_DIRECTIVE.sub("", content)
    cleaned = _SYMBOL_REFERENCE.sub(r"\1", cleaned)
    cleaned = _DOC_LINK.sub(r"[\1]", cleaned)
    cleaned = _LAYOUT_DIRECTIVE.sub("", cleaned)
    cleaned = _EXCESS_BLANK_LINES.sub("\n\n", cleaned)
    return cleaned.strip()


def clean_content(content: str, source_type: SourceType) -> str:
    """Normalize content for indexing. Code sources are kept verbatim."""
    if source_type is SourceType.DOCS:
        return clean_markdown(content)
    return content
