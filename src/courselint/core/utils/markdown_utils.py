"""Minimal Markdown scanning for the content model.

Only the constructs the model needs are recognized: ATX headings, list
items, inline links and images, and fenced code blocks. Everything inside a
fenced block is opaque.
"""

import logging
import re
from pathlib import Path
from urllib.parse import unquote, urlsplit

from attrs import Factory, frozen

logger = logging.getLogger(__name__)

HEADING_REGEX = re.compile(r"^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
# Fences nested in list items may be indented any amount
FENCE_REGEX = re.compile(r"^(\s*)(`{3,}|~{3,})\s*([^`\s]*)?.*$")
LIST_ITEM_REGEX = re.compile(r"^\s*(?:([-*+])|(\d+)[.)])\s+(.*)$")
# Targets may be wrapped in <...> to allow spaces
LINK_REGEX = re.compile(
    r"(!?)\[([^\]]*)\]\(\s*(?:<([^>\n]*)>|([^)\s]+))(?:\s+[\"'][^)]*[\"'])?\s*\)"
)
INLINE_CODE_REGEX = re.compile(r"`[^`]*`")
SCHEME_REGEX = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


@frozen
class Link:
    text: str
    target: str
    line: int
    is_image: bool = False

    @property
    def is_external(self) -> bool:
        return bool(SCHEME_REGEX.match(self.target)) or self.target.startswith("//")

    @property
    def is_fragment(self) -> bool:
        return self.target.startswith("#")

    @property
    def host(self) -> str:
        if not self.is_external:
            return ""
        return (urlsplit(self.target).hostname or "").lower()

    def local_path(self) -> Path | None:
        """Return the link target as a relative path, or None for external,
        site-absolute and same-document links."""
        if self.is_external or self.is_fragment or not self.target:
            return None
        # Site-absolute targets depend on where the content is published
        if self.target.startswith("/"):
            return None
        path = self.target.split("#", 1)[0].split("?", 1)[0]
        if not path:
            return None
        return Path(unquote(path))

    def resolve(self, base_dir: Path) -> Path | None:
        local = self.local_path()
        if local is None:
            return None
        return base_dir / local


@frozen
class CodeBlock:
    language: str
    code: str
    line: int


@frozen
class Heading:
    level: int
    text: str
    line: int


@frozen
class ListItem:
    text: str
    line: int
    ordered: bool
    number: int | None = None


@frozen
class MarkdownDocument:
    headings: list[Heading] = Factory(list)
    links: list[Link] = Factory(list)
    code_blocks: list[CodeBlock] = Factory(list)
    list_items: list[ListItem] = Factory(list)
    # (line number, text) for every line outside fenced blocks
    text_lines: list[tuple[int, str]] = Factory(list)
    unclosed_fence_line: int | None = None

    def first_heading(self, level: int) -> Heading | None:
        for heading in self.headings:
            if heading.level == level:
                return heading
        return None

    def section_span(self, heading: Heading) -> tuple[int, int]:
        """Line range `[start, end)` owned by a heading."""
        end = 10**9
        for other in self.headings:
            if other.line > heading.line and other.level <= heading.level:
                end = other.line
                break
        return heading.line, end

    def in_span(self, items, span: tuple[int, int]) -> list:
        start, end = span
        return [item for item in items if start < item.line < end]

    def find_heading(self, predicate) -> Heading | None:
        for heading in self.headings:
            if predicate(heading.text):
                return heading
        return None

    def last_text_line(self) -> tuple[int, str] | None:
        for line_no, text in reversed(self.text_lines):
            if text.strip():
                return line_no, text.strip()
        return None


def find_links(text: str, line: int) -> list[Link]:
    text = INLINE_CODE_REGEX.sub("", text)
    return [
        Link(
            text=match[2].strip(),
            target=(match[3] if match[3] is not None else match[4]).strip(),
            line=line,
            is_image=bool(match[1]),
        )
        for match in LINK_REGEX.finditer(text)
    ]


def parse_markdown(text: str, first_line: int = 1) -> MarkdownDocument:
    """Scan Markdown text.

    `first_line` is the file line number of the first line of `text`, so
    positions stay correct when a front matter block has been split off.
    """
    doc = MarkdownDocument()
    fence: str | None = None
    fence_start = 0
    fence_language = ""
    fence_lines: list[str] = []

    for offset, line in enumerate(text.splitlines()):
        line_no = first_line + offset
        fence_match = FENCE_REGEX.match(line)
        if fence is not None:
            stripped = line.strip()
            if stripped.startswith(fence[0] * len(fence)) and not stripped.strip(fence[0]):
                doc.code_blocks.append(
                    CodeBlock(language=fence_language, code="\n".join(fence_lines), line=fence_start)
                )
                fence = None
            else:
                fence_lines.append(line)
            continue
        if fence_match:
            fence = fence_match[2]
            fence_start = line_no
            fence_language = (fence_match[3] or "").strip().lower()
            fence_lines = []
            continue

        doc.text_lines.append((line_no, line))
        heading_match = HEADING_REGEX.match(line)
        if heading_match:
            doc.headings.append(
                Heading(level=len(heading_match[1]), text=heading_match[2].strip(), line=line_no)
            )
        item_match = LIST_ITEM_REGEX.match(line)
        if item_match:
            number = int(item_match[2]) if item_match[2] else None
            doc.list_items.append(
                ListItem(
                    text=item_match[3].strip(),
                    line=line_no,
                    ordered=number is not None,
                    number=number,
                )
            )
        doc.links.extend(find_links(line, line_no))

    if fence is not None:
        logger.debug(f"Unclosed code fence opened at line {fence_start}")
        doc.code_blocks.append(
            CodeBlock(language=fence_language, code="\n".join(fence_lines), line=fence_start)
        )
        doc = MarkdownDocument(
            headings=doc.headings,
            links=doc.links,
            code_blocks=doc.code_blocks,
            list_items=doc.list_items,
            text_lines=doc.text_lines,
            unclosed_fence_line=fence_start,
        )
    return doc


def first_paragraph_after(doc: MarkdownDocument, heading: Heading | None) -> str:
    """First non-empty plain text line after a heading, with quote markers
    removed."""
    start = heading.line if heading else 0
    for line_no, text in doc.text_lines:
        if line_no <= start:
            continue
        stripped = text.strip()
        if not stripped:
            continue
        if HEADING_REGEX.match(stripped) or LIST_ITEM_REGEX.match(stripped):
            return ""
        stripped = stripped.lstrip(">").strip()
        if stripped and not LINK_REGEX.fullmatch(stripped):
            return stripped
    return ""


def read_text_file(path: Path) -> tuple[str | None, str | None]:
    """Read a UTF-8 file.

    Returns `(text, None)` on success and `(None, reason)` when the file
    cannot be read or decoded.
    """
    try:
        return path.read_text(encoding="utf-8-sig"), None
    except UnicodeDecodeError as e:
        logger.debug(f"Cannot decode {path}: {e}")
        return None, f"not valid UTF-8 ({e.reason} at byte {e.start})"
    except OSError as e:
        logger.debug(f"Cannot read {path}: {e}")
        return None, f"cannot be read ({e.strerror or e})"
