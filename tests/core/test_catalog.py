import json

from courselint.core.catalog import code_languages, corpus_to_dict, course_stats
from courselint.core.corpus import Corpus


def test_corpus_to_dict_structure(content_root):
    data = corpus_to_dict(Corpus.from_dir(content_root))
    (course,) = data["courses"]
    assert course["slug"] == "react-hooks-deep-dive"
    assert course["path"] == "react/react-hooks-deep-dive"
    assert course["lesson_count"] == 3
    assert course["declared_lesson_count"] == 3

    section = course["sections"][0]
    assert section["title"] == "Hooks Fundamentals"
    assert section["practice_challenge_count"] == 2
    assert section["call_to_action"] == ["https://stanza.dev/courses/react-hooks-deep-dive"]

    lesson = section["lessons"][0]
    assert lesson["path"].endswith("01-hooks-fundamentals/01-use-state-basics.md")
    assert lesson["source_lesson"] == "use-state-basics"
    assert [(block["language"], block["lines"]) for block in lesson["code_examples"]] == [
        ("jsx", 1)
    ]
    assert lesson["footer"].startswith("*This lesson")


def test_catalog_is_json_serializable(content_root, course_dir):
    (course_dir / "01-hooks-fundamentals" / "03-dated.md").write_text(
        "---\nsource_course: react-hooks-deep-dive\nsource_lesson: dated\n"
        "updated: 2024-05-01\n---\n",
        encoding="utf-8",
    )
    data = corpus_to_dict(Corpus.from_dir(content_root))
    text = json.dumps(data)
    assert '"updated": "2024-05-01"' in text


def test_course_stats(course_dir):
    course = Corpus.from_dir(course_dir).courses[0]
    stats = course_stats(course)
    assert stats["sections"] == 2
    assert stats["lessons"] == 3
    assert stats["code_examples"] == 3
    assert stats["practice_challenges"] == 4
    assert stats["languages"] == {"jsx": 2, "tsx": 1}
    assert code_languages(course)["jsx"] == 2
