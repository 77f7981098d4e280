from pathlib import Path

from courselint.core.utils.markdown_utils import (
    Link,
    find_links,
    first_paragraph_after,
    parse_markdown,
    read_text_file,
)

DOCUMENT = """# 🪝 Hooks

> Learn the basics of hooks.

## Lessons

1. [useState](01-use-state.md)
2. [useEffect](02-use-effect.md "Effects")
- ![Diagram](images/flow.png)

```python
# not a heading
print("[not a link](nowhere.md)")
```

~~~
plain
~~~

Text with `[code](ignored.md)` and [a link](https://stanza.dev/x).
"""


class TestParseMarkdown:
    def test_headings(self):
        doc = parse_markdown(DOCUMENT)
        assert [(h.level, h.text, h.line) for h in doc.headings] == [
            (1, "🪝 Hooks", 1),
            (2, "Lessons", 5),
        ]

    def test_list_items(self):
        doc = parse_markdown(DOCUMENT)
        items = [(item.line, item.ordered, item.number) for item in doc.list_items]
        assert items == [(7, True, 1), (8, True, 2), (9, False, None)]

    def test_links_skip_code(self):
        doc = parse_markdown(DOCUMENT)
        targets = [link.target for link in doc.links]
        assert targets == [
            "01-use-state.md",
            "02-use-effect.md",
            "images/flow.png",
            "https://stanza.dev/x",
        ]
        assert doc.links[2].is_image

    def test_code_blocks(self):
        doc = parse_markdown(DOCUMENT)
        assert [(block.language, block.line) for block in doc.code_blocks] == [
            ("python", 11),
            ("", 16),
        ]
        assert doc.code_blocks[0].code == '# not a heading\nprint("[not a link](nowhere.md)")'
        assert doc.unclosed_fence_line is None

    def test_unclosed_fence(self):
        doc = parse_markdown("# Title\n\n```go\nfunc main() {}\n")
        assert doc.unclosed_fence_line == 3
        assert doc.code_blocks[0].language == "go"

    def test_first_line_offset(self):
        doc = parse_markdown("# Title\n", first_line=5)
        assert doc.headings[0].line == 5

    def test_section_span_and_last_text_line(self):
        doc = parse_markdown("# A\n## B\ntext\n## C\nmore\n\n")
        b = doc.find_heading(lambda text: text == "B")
        assert doc.section_span(b) == (2, 4)
        assert doc.last_text_line() == (5, "more")

    def test_closing_hashes_need_a_space(self):
        doc = parse_markdown("# Learning C#\n## F#\n### Closed ###\n")
        assert [h.text for h in doc.headings] == ["Learning C#", "F#", "Closed"]

    def test_fence_nested_in_list_item(self):
        doc = parse_markdown(
            "- Events:\n"
            "    - Call the first handler:\n"
            "\n"
            "        ```js\n"
            "        handlers[0](event);\n"
            "        ```\n"
            "- Done\n"
        )
        assert [(block.language, block.line) for block in doc.code_blocks] == [("js", 4)]
        assert doc.code_blocks[0].code.strip() == "handlers[0](event);"
        assert doc.links == []
        assert [item.line for item in doc.list_items] == [1, 2, 7]

    def test_first_paragraph_after_heading(self):
        doc = parse_markdown(DOCUMENT)
        assert first_paragraph_after(doc, doc.first_heading(1)) == "Learn the basics of hooks."


class TestLink:
    def test_local_path_strips_fragment_and_decodes(self):
        link = Link(text="x", target="my%20lesson.md#intro", line=1)
        assert link.local_path() == Path("my lesson.md")

    def test_external_and_fragment_links_have_no_local_path(self):
        assert Link(text="x", target="https://stanza.dev", line=1).local_path() is None
        assert Link(text="x", target="mailto:me@example.com", line=1).local_path() is None
        assert Link(text="x", target="#summary", line=1).local_path() is None

    def test_site_absolute_links_have_no_local_path(self):
        link = Link(text="x", target="/react/react-hooks-deep-dive/README.md", line=1)
        assert link.local_path() is None
        assert link.resolve(Path("/content")) is None

    def test_host(self):
        assert Link(text="x", target="https://Stanza.dev/c", line=1).host == "stanza.dev"
        assert Link(text="x", target="lesson.md", line=1).host == ""

    def test_resolve(self, tmp_path):
        link = Link(text="x", target="../README.md", line=1)
        assert link.resolve(tmp_path / "section") == tmp_path / "section" / "../README.md"

    def test_find_links_with_angle_brackets(self):
        links = find_links("see [lesson](<01 intro.md>)", 3)
        assert links == [Link(text="lesson", target="01 intro.md", line=3)]


class TestReadTextFile:
    def test_reads_utf8_with_bom(self, tmp_path):
        path = tmp_path / "a.md"
        path.write_bytes("\ufeff# Title".encode("utf-8"))
        assert read_text_file(path) == ("# Title", None)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "a.md"
        path.write_bytes(b"# Caf\xe9")
        text, error = read_text_file(path)
        assert text is None
        assert "not valid UTF-8" in error

    def test_missing_file(self, tmp_path):
        text, error = read_text_file(tmp_path / "missing.md")
        assert text is None
        assert "cannot be read" in error
