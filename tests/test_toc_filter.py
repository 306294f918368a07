"""Tests for heading anchors, slugs and the table of contents."""

import pytest

from html_pipeline import Pipeline, TableOfContentsFilter
from html_pipeline.filters.toc import SlugRegistry, generate_anchors, slugify_heading
from html_pipeline.filters.utils import parse_html

SIX_HEADINGS = """<h1>"Funky President" by James Brown</h1>
<h2>"It's My Thing" by Marva Whitney</h2>
<h3>"Boogie Back" by Roy Ayers</h3>
<h4>"Feel Good" by Fancy</h4>
<h5>"Funky Drummer" by James Brown</h5>
<h6>"Ruthless Villain" by Eazy-E</h6>
<h7>"Be Thankful for What You Got" by William DeVaughn</h7>"""


@pytest.fixture
def pipeline():
    return Pipeline([TableOfContentsFilter], default_context={})


def toc(pipeline, html, **context):
    return pipeline.run(html, context).get("toc")


class TestSlugifyHeading:
    def test_lowercases_and_hyphenates(self):
        assert slugify_heading("Ice Cube") == "ice-cube"
        assert slugify_heading("Dr Dre") == "dr-dre"

    def test_keeps_hyphens_and_underscores(self):
        assert slugify_heading("Eazy-E") == "eazy-e"
        assert slugify_heading("snake_case") == "snake_case"

    def test_strips_punctuation(self):
        assert slugify_heading('"It\'s My Thing" by Marva Whitney') == "its-my-thing-by-marva-whitney"

    def test_collapses_and_trims_whitespace(self):
        assert slugify_heading("\n  Straight   Outta\tCompton  ") == "straight-outta-compton"

    def test_keeps_unicode_letters(self):
        assert slugify_heading("日本語") == "日本語"
        assert slugify_heading("Русский") == "русский"

    def test_keeps_combining_marks(self):
        assert slugify_heading("हिन्दी") == "हिन्दी"
        assert slugify_heading("Café Crème") == "café-crème"

    def test_punctuation_between_words_leaves_one_hyphen(self):
        assert slugify_heading("Rock & Roll") == "rock-roll"

    def test_empty_slug_falls_back(self):
        assert slugify_heading("!!!") == "section"


class TestSlugRegistry:
    def test_suffixes_duplicates(self):
        registry = SlugRegistry()
        assert [registry.issue("dopeman") for _ in range(3)] == ["dopeman", "dopeman-1", "dopeman-2"]

    def test_avoids_literal_collisions(self):
        registry = SlugRegistry()
        assert registry.issue("foo") == "foo"
        assert registry.issue("foo-1") == "foo-1"
        assert registry.issue("foo") == "foo-2"

    def test_reset(self):
        registry = SlugRegistry()
        registry.issue("foo")
        registry.reset()
        assert registry.issue("foo") == "foo"


class TestGenerateAnchors:
    def test_inserts_anchor_as_first_child(self):
        doc, _ = generate_anchors(parse_html("<h1>Ice cube</h1>"))
        anchor = doc.find("h1").contents[0]

        assert anchor.name == "a"
        assert anchor["id"] == "ice-cube"
        assert anchor["href"] == "#ice-cube"
        assert anchor["class"] == ["anchor"]
        assert anchor["aria-hidden"] == "true"
        assert anchor.find("span", class_="octicon-link") is not None
        assert doc.find("h1").get_text() == "Ice cube"

    def test_custom_anchor_icon(self):
        doc, _ = generate_anchors(parse_html("<h1>Ice cube</h1>"), anchor_icon="#")
        assert doc.find("a").get_text() == "#"
        assert doc.find("span") is None

    def test_no_headings(self):
        doc, toc_html = generate_anchors(parse_html("<p>nothing here</p>"))
        assert toc_html == ""
        assert doc.find("a") is None

    def test_registry_does_not_leak_between_calls(self):
        _, first = generate_anchors(parse_html("<h1>Dopeman</h1>"))
        _, second = generate_anchors(parse_html("<h1>Dopeman</h1>"))
        assert first == second
        assert '"#dopeman"' in second

    def test_utf8_headings(self):
        doc, toc_html = generate_anchors(parse_html("<h1>日本語</h1><h1>Русский</h1>"))
        anchors = doc.find_all("a")

        assert anchors[0]["id"] == "日本語"
        assert anchors[0]["href"] == "#%E6%97%A5%E6%9C%AC%E8%AA%9E"
        assert anchors[1]["id"] == "русский"
        assert anchors[1]["href"] == "#%D1%80%D1%83%D1%81%D1%81%D0%BA%D0%B8%D0%B9"
        assert '<a href="#%E6%97%A5%E6%9C%AC%E8%AA%9E">日本語</a>' in toc_html
        assert ">Русский</a>" in toc_html

    def test_multiline_heading(self):
        doc, _ = generate_anchors(parse_html("<h1>Straight\nOutta</h1><h2>हिन्दी</h2>"))
        assert [a["id"] for a in doc.find_all("a")] == ["straight-outta", "हिन्दी"]


class TestTableOfContentsFilter:
    def test_anchors_have_sane_names(self, pipeline):
        doc = pipeline.to_document("<h1>Dr Dre</h1><h1>Ice Cube</h1><h1>Eazy-E</h1><h1>MC Ren</h1>")
        assert [a["id"] for a in doc.find_all("a")] == ["dr-dre", "ice-cube", "eazy-e", "mc-ren"]

    def test_toc_list_added(self, pipeline):
        html = "<h1>Ice cube</h1><p>Will swarm on any motherfucker in a blue uniform</p>"
        assert toc(pipeline, html).startswith('<ul class="section-nav">\n<li><a href="')

    def test_no_toc_without_headings(self, pipeline):
        result = pipeline.run("<p>plain</p>")
        assert "toc" not in result

    def test_duplicate_headings_get_unique_ids_regardless_of_level(self, pipeline):
        html = """<h1>Straight Outta Compton</h1>
                  <h2>Dopeman</h2>
                  <h3>Express Yourself</h3>
                  <h1>Dopeman</h1>"""
        result = pipeline.run(html)
        doc = pipeline.to_document(html)

        assert [a["id"] for a in doc.find_all("a")] == [
            "straight-outta-compton",
            "dopeman",
            "express-yourself",
            "dopeman-1",
        ]
        assert result["toc"].index('"#dopeman"') < result["toc"].index('"#dopeman-1"')

    def test_toc_is_flat_and_complete(self, pipeline):
        expected = (
            '<ul class="section-nav">\n'
            '<li><a href="#funky-president-by-james-brown">&quot;Funky President&quot; by James Brown</a></li>\n'
            '<li><a href="#its-my-thing-by-marva-whitney">&quot;It&#x27;s My Thing&quot; by Marva Whitney</a></li>\n'
            '<li><a href="#boogie-back-by-roy-ayers">&quot;Boogie Back&quot; by Roy Ayers</a></li>\n'
            '<li><a href="#feel-good-by-fancy">&quot;Feel Good&quot; by Fancy</a></li>\n'
            '<li><a href="#funky-drummer-by-james-brown">&quot;Funky Drummer&quot; by James Brown</a></li>\n'
            '<li><a href="#ruthless-villain-by-eazy-e">&quot;Ruthless Villain&quot; by Eazy-E</a></li>\n'
            "</ul>"
        )
        assert toc(pipeline, SIX_HEADINGS) == expected

    def test_invalid_heading_levels_are_ignored(self, pipeline):
        doc = pipeline.to_document(SIX_HEADINGS)

        assert len(doc.find_all("a")) == 6
        assert doc.find("h7").find("a") is None

    def test_toc_escapes_heading_text(self, pipeline):
        html = '<h1>&lt;img src="x" onerror="alert(42)"&gt;</h1>'
        result = pipeline.run(html)

        assert "<img" not in result["toc"]
        assert "&lt;img src=&quot;x&quot; onerror=&quot;alert(42)&quot;&gt;" in result["toc"]
        assert "<img" not in result["output"]

    def test_anchor_icon_from_context(self, pipeline):
        doc = pipeline.to_document("<h1>Ice cube</h1>", {"anchor_icon": "#"})
        assert doc.find("h1").find("a").get_text() == "#"

    def test_ice_cube_end_to_end(self, pipeline):
        result = pipeline.run("<h1>Ice cube</h1><h1>Ice cube</h1>")
        doc = parse_html(result["output"])

        assert [a["id"] for a in doc.find_all("a")] == ["ice-cube", "ice-cube-1"]
        assert result["toc"] == (
            '<ul class="section-nav">\n'
            '<li><a href="#ice-cube">Ice cube</a></li>\n'
            '<li><a href="#ice-cube-1">Ice cube</a></li>\n'
            "</ul>"
        )
