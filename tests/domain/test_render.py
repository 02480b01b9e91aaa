"""Tests for block rendering and document loading."""

from __future__ import annotations

from markupsafe import Markup

from mdsite.domain.document import load_document
from mdsite.domain.parser import parse_blocks
from mdsite.domain.references import ReferenceTable
from mdsite.domain.render import RenderOptions, render_blocks, render_document, slugify

PRESENTERS = """\
---
title: Presenters
---
# Presenters

Compare with [decorators][decorator-object].

```ruby
class UserPresenter < SimpleDelegator
end
```

[decorator-object]: decorators.md
"""


def _html(text: str, options: RenderOptions | None = None) -> str:
    blocks = parse_blocks(text)
    return str(render_blocks(blocks, ReferenceTable.from_blocks(blocks), options).html)


class TestLoadDocument:
    def test_title_and_body(self) -> None:
        doc = load_document(PRESENTERS, source="presenters.md")
        assert doc.title == "Presenters"
        assert doc.source == "presenters.md"
        assert len(doc.body) == 4
        assert [d.alias for d in doc.reference_definitions()] == ["decorator-object"]

    def test_missing_frontmatter(self) -> None:
        doc = load_document("# Heading only\n")
        assert doc.title == ""
        assert doc.frontmatter == {}

    def test_broken_frontmatter_is_not_fatal(self) -> None:
        doc = load_document("---\ntitle: [oops\n---\nBody\n")
        assert doc.title == ""
        assert len(doc.body) == 1

    def test_frontmatter_extras_kept(self) -> None:
        doc = load_document("---\ntitle: A\nauthor: Jane\n---\n")
        assert doc.frontmatter["author"] == "Jane"
        assert doc.body == ()


class TestRenderDocument:
    def test_presenters_article(self) -> None:
        body = render_document(load_document(PRESENTERS))
        assert isinstance(body.html, Markup)
        assert str(body.html) == (
            "<h1>Presenters</h1>\n"
            '<p>Compare with <a href="decorators.html">decorators</a>.</p>\n'
            '<pre><code class="language-ruby">class UserPresenter &lt; SimpleDelegator\n'
            "end\n</code></pre>\n"
        )
        assert body.warnings == ()

    def test_deterministic(self) -> None:
        doc = load_document(PRESENTERS)
        assert render_document(doc) == render_document(doc)

    def test_definitions_produce_no_output(self) -> None:
        assert _html("[a]: a.md") == ""

    def test_empty_document(self) -> None:
        assert _html("") == ""

    def test_nul_in_body(self) -> None:
        assert _html("# T\x00\n\n`x` \x000\x00") == (
            "<h1>T\ufffd</h1>\n<p><code>x</code> \ufffd0\ufffd</p>\n"
        )

    def test_undefined_alias_warning(self) -> None:
        blocks = parse_blocks("[x][m] and [y][m]")
        body = render_blocks(blocks, ReferenceTable.from_blocks(blocks))
        assert str(body.html) == "<p>x and y</p>\n"
        assert body.warnings == ("Undefined reference alias: 'm'",)

    def test_duplicate_definition_warning(self) -> None:
        blocks = parse_blocks("[a]: x.md\n[a]: y.md\n\n[t][a]")
        body = render_blocks(blocks, ReferenceTable.from_blocks(blocks))
        assert str(body.html) == '<p><a href="x.html">t</a></p>\n'
        assert body.warnings == ("Duplicate reference definition: 'a'",)

    def test_definition_after_use_resolves(self) -> None:
        assert _html("[t][late]\n\n[late]: late.md") == '<p><a href="late.html">t</a></p>\n'

    def test_rewrite_option(self) -> None:
        html = _html("[a](a.md)", RenderOptions(rewrite_md_links=False))
        assert html == '<p><a href="a.md">a</a></p>\n'


class TestBlocks:
    def test_heading_levels(self) -> None:
        assert _html("## Two\n###### Six") == "<h2>Two</h2>\n<h6>Six</h6>\n"

    def test_code_block_escaped_without_language(self) -> None:
        assert _html("```\n<b>&</b>\n```") == "<pre><code>&lt;b&gt;&amp;&lt;/b&gt;\n</code></pre>\n"

    def test_thematic_break(self) -> None:
        assert _html("a\n\n---\n\nb") == "<p>a</p>\n<hr>\n<p>b</p>\n"

    def test_bullet_list(self) -> None:
        assert _html("- one\n- two") == "<ul>\n<li>one</li>\n<li>two</li>\n</ul>\n"

    def test_ordered_list_start(self) -> None:
        assert _html("3. three") == '<ol start="3">\n<li>three</li>\n</ol>\n'
        assert _html("1. one") == "<ol>\n<li>one</li>\n</ol>\n"

    def test_nested_list(self) -> None:
        assert _html("- parent\n  - child") == (
            "<ul>\n<li>parent\n<ul>\n<li>child</li>\n</ul></li>\n</ul>\n"
        )

    def test_multi_paragraph_item(self) -> None:
        assert _html("- one\n\n  more") == "<ul>\n<li>\n<p>one</p>\n<p>more</p>\n</li>\n</ul>\n"


class TestHeadingAnchors:
    def test_off_by_default(self) -> None:
        assert _html("# Intro") == "<h1>Intro</h1>\n"

    def test_unique_ids(self) -> None:
        html = _html("# Intro\n\n## Intro", RenderOptions(heading_anchors=True))
        assert html == '<h1 id="intro">Intro</h1>\n<h2 id="intro-1">Intro</h2>\n'

    def test_suffixed_id_does_not_collide_with_literal_heading(self) -> None:
        html = _html("# A\n\n# A\n\n# A 1", RenderOptions(heading_anchors=True))
        assert html == (
            '<h1 id="a">A</h1>\n<h1 id="a-1">A</h1>\n<h1 id="a-1-1">A 1</h1>\n'
        )

    def test_literal_heading_first_still_unique(self) -> None:
        html = _html("# A 1\n\n# A\n\n# A", RenderOptions(heading_anchors=True))
        assert html == (
            '<h1 id="a-1">A 1</h1>\n<h1 id="a">A</h1>\n<h1 id="a-2">A</h1>\n'
        )


class TestSlugify:
    def test_punctuation(self) -> None:
        assert slugify("Decorator Objects & Presenters") == "decorator-objects-presenters"

    def test_inline_markup_stripped(self) -> None:
        assert slugify("`code` *em*") == "code-em"

    def test_empty_fallback(self) -> None:
        assert slugify("!!!") == "section"
