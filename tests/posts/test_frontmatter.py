"""Tests for the front-matter codec."""

from datetime import date

import yaml
from carnet.posts.frontmatter import (
    extract_body,
    first_heading,
    has_frontmatter,
    parse_frontmatter,
    render_frontmatter,
)

SAMPLE_POST = """\
---
layout: post
title: "Les pseudo-types : alias ou nouveau type ?"
date: 2017-03-02 09:15:00 +0100
category: typage  # used for the index
lang: fr
tags:
  - python
  - typing
keywords: [types, 'NewType', "alias"]
---

# Les pseudo-types

Un alias ne crée pas un nouveau type.

---

Footer after a rule.
"""


class TestParseFrontmatter:
    def test_basic_parsing(self):
        fm = parse_frontmatter(SAMPLE_POST)
        assert fm["layout"] == "post"
        assert fm["lang"] == "fr"
        assert fm["date"] == "2017-03-02 09:15:00 +0100"

    def test_quoted_value_keeps_colons(self):
        fm = parse_frontmatter(SAMPLE_POST)
        assert fm["title"] == "Les pseudo-types : alias ou nouveau type ?"

    def test_trailing_comment_stripped(self):
        fm = parse_frontmatter(SAMPLE_POST)
        assert fm["category"] == "typage"

    def test_block_list(self):
        fm = parse_frontmatter(SAMPLE_POST)
        assert fm["tags"] == ["python", "typing"]

    def test_inline_list(self):
        fm = parse_frontmatter(SAMPLE_POST)
        assert fm["keywords"] == ["types", "NewType", "alias"]

    def test_single_quotes_unescaped(self):
        fm = parse_frontmatter("---\ntitle: 'L''injection'\n---\n")
        assert fm["title"] == "L'injection"

    def test_empty_value_without_items(self):
        fm = parse_frontmatter("---\ntitle:\nlang: en\n---\n")
        assert fm["title"] == ""
        assert fm["lang"] == "en"

    def test_no_frontmatter(self):
        assert parse_frontmatter("Just some text with no frontmatter") == {}

    def test_empty_frontmatter(self):
        assert parse_frontmatter("---\n---\nBody text") == {}

    def test_unterminated_frontmatter(self):
        assert parse_frontmatter("---\ntitle: Oops\nBody text") == {}

    def test_byte_order_mark(self):
        fm = parse_frontmatter("\ufeff---\ntitle: Hello\n---\n")
        assert fm["title"] == "Hello"

    def test_quoted_value_with_trailing_comment(self):
        fm = parse_frontmatter('---\ntitle: "Hello" # note\nlang: \'en\'  # short code\n---\n')
        assert fm["title"] == "Hello"
        assert fm["lang"] == "en"

    def test_quote_inside_value_is_not_stripped(self):
        fm = parse_frontmatter('---\ntitle: "Yes" she said "no"\n---\n')
        assert fm["title"] == '"Yes" she said "no"'

    def test_inline_list_with_quoted_commas(self):
        fm = parse_frontmatter('---\ntags: ["a, b", c, \'it\'\'s, ok\']\n---\n')
        assert fm["tags"] == ["a, b", "c", "it's, ok"]


class TestExtractBody:
    def test_strips_header(self):
        body = extract_body(SAMPLE_POST)
        assert body.startswith("# Les pseudo-types")
        assert "layout:" not in body

    def test_keeps_horizontal_rules_in_body(self):
        body = extract_body(SAMPLE_POST)
        assert "Footer after a rule." in body

    def test_without_header(self):
        assert extract_body("  plain text\n") == "plain text"


class TestFirstHeading:
    def test_finds_heading(self):
        assert first_heading("intro\n# Title\n## Sub") == "Title"

    def test_ignores_code_comments(self):
        body = "```python\n# not a title\n```\n# Real title\n"
        assert first_heading(body) == "Real title"

    def test_none(self):
        assert first_heading("## Only a subheading") == ""


class TestRenderFrontmatter:
    def test_output_is_valid_yaml(self):
        text = render_frontmatter(
            {
                "layout": "post",
                "title": "Async: a primer",
                "date": date(2017, 9, 20),
                "category": "concurrency",
                "lang": "en",
                "tags": ["async", "python"],
                "draft": False,
            }
        )
        assert text.startswith("---\n")
        header = text.split("---")[1]
        data = yaml.safe_load(header)
        assert data["title"] == "Async: a primer"
        assert data["date"] == date(2017, 9, 20)
        assert data["tags"] == ["async", "python"]
        assert data["draft"] is False

    def test_reparses_with_own_parser(self):
        fields = {
            "title": 'Le mot "type"',
            "category": "typage",
            "tags": ["a", "b"],
        }
        fm = parse_frontmatter(render_frontmatter(fields))
        assert fm == fields

    def test_plain_values_unquoted(self):
        text = render_frontmatter({"category": "architecture"})
        assert "category: architecture\n" in text

    def test_quotes_scalars_yaml_would_retype(self):
        text = render_frontmatter({"title": "2048", "ref": "yes", "order": 3})
        data = yaml.safe_load(text.split("---")[1])
        assert data == {"title": "2048", "ref": "yes", "order": 3}


class TestHasFrontmatter:
    def test_complete(self):
        assert has_frontmatter(SAMPLE_POST)

    def test_unterminated(self):
        assert not has_frontmatter("---\ntitle: x\n")

    def test_missing(self):
        assert not has_frontmatter("# Title\n")
