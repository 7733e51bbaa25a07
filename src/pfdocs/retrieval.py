"""Document retrieval with content-type-aware preview."""

from typing import Optional

from pfdocs.models import Document, Preview, RetrievedDocument
from pfdocs.storage import IndexStore

DEFAULT_PREVIEW_LINES = 50


def truncate_lines(content: str, limit: int) -> Preview:
    """Keep the first `limit` lines of content."""
    lines = content.split("\n")
    total = len(lines)
    if total <= limit:
        return Preview(text=content, truncated=False, total_lines=total, shown_lines=total)
    return Preview(
        text="\n".join(lines[:limit]),
        truncated=True,
        total_lines=total,
        shown_lines=limit,
    )


def format_header(doc: Document) -> str:
    return f"# {doc.title}\n\n> Library: {doc.library}\n> Path: {doc.path}\n\n---\n\n"


def format_document(doc: Document) -> str:
    """Render a document as markdown with a title/library/path header."""
    return format_header(doc) + doc.content


def preview_notice(preview: Preview) -> str:
    return (
        f"\n\n... ({preview.shown_lines} of {preview.total_lines} lines shown. "
        f"Use --raw for the full file or --lines <n> to see more.)"
    )


def render(
    doc: Document,
    raw: bool = False,
    preview: bool = False,
    lines: Optional[int] = None,
    default_lines: int = DEFAULT_PREVIEW_LINES,
) -> RetrievedDocument:
    """Format a document for display.

    Documentation is shown in full with a header. Code files are
    previewed to `default_lines` unless `raw` is set. An explicit `lines`
    limit, or `preview`, truncates any document type. `raw` output has
    no header.
    """
    if raw and lines is None and not preview:
        return RetrievedDocument(document=doc, output=doc.content)

    limit: Optional[int] = None
    if lines is not None:
        limit = lines
    elif preview or doc.source_type.is_code:
        limit = default_lines

    if limit is None:
        return RetrievedDocument(document=doc, output=format_document(doc))

    shown = truncate_lines(doc.content, max(limit, 0))
    body = shown.text
    if shown.truncated:
        body += preview_notice(shown)
    output = body if raw else format_header(doc) + body
    return RetrievedDocument(document=doc, output=output, preview=shown)


def retrieve(
    store: IndexStore,
    path: str,
    raw: bool = False,
    preview: bool = False,
    lines: Optional[int] = None,
    default_lines: int = DEFAULT_PREVIEW_LINES,
) -> Optional[RetrievedDocument]:
    """Fetch a document by logical path and format it. None if not found."""
    doc = store.get_document(path)
    if doc is None:
        return None
    return render(doc, raw=raw, preview=preview, lines=lines, default_lines=default_lines)
