"""Tests for the allow-list README sanitizer."""

import pytest

from npmview.readme.renderer import render_readme_html
from npmview.readme.sanitizer import SanitizerPolicy, sanitize_html


class TestTagsAndAttributes:
    """Allow-listed tags and attributes."""

    def test_script_removed_with_content(self):
        out = sanitize_html("<p>hi</p><script>alert(1)</script>")
        assert out == "<p>hi</p>"

    @pytest.mark.parametrize("tag", ["style", "iframe", "textarea", "noscript"])
    def test_dangerous_containers_removed_with_content(self, tag):
        out = sanitize_html(f"<p>a</p><{tag}>payload</{tag}>")
        assert "payload" not in out
        assert tag not in out

    def test_disallowed_tags_are_unwrapped(self):
        out = sanitize_html("<h1>Big <u>title</u></h1>")
        assert out == "Big title"

    def test_disallowed_attributes_stripped(self):
        assert sanitize_html('<p align="center" onclick="x()">x</p>') == "<p>x</p>"

    def test_event_handler_on_image_stripped(self):
        out = sanitize_html('<img src="https://example.com/a.png" onerror="alert(1)">')
        assert "onerror" not in out
        assert 'src="https://example.com/a.png"' in out

    def test_comments_removed(self):
        assert sanitize_html("<p>a<!-- secret --></p>") == "<p>a</p>"

    def test_heading_attributes_kept(self):
        out = sanitize_html('<h3 data-level="1" class="x">T</h3>')
        assert out == '<h3 data-level="1">T</h3>'

    def test_callout_attribute_kept(self):
        out = sanitize_html('<blockquote data-callout="note"><p>n</p></blockquote>')
        assert out == '<blockquote data-callout="note"><p>n</p></blockquote>'

    def test_unsafe_style_dropped(self):
        out = sanitize_html('<span style="background: url(https://evil.example/x)">a</span>')
        assert out == "<span>a</span>"

    def test_empty_input(self):
        assert sanitize_html("") == ""


class TestUrls:
    """Scheme filtering and README URL handling."""

    def test_javascript_href_removed(self):
        out = sanitize_html('<a href="javascript:alert(1)">x</a>')
        assert "javascript" not in out
        assert "href" not in out
        assert ">x</a>" in out

    def test_obfuscated_javascript_href_removed(self):
        out = sanitize_html('<a href="java\tscript:alert(1)">x</a>')
        assert "script" not in out

    def test_data_image_removed(self):
        out = sanitize_html('<img src="data:image/svg+xml;base64,PHN2Zz4=">')
        assert "data:" not in out

    def test_mailto_allowed(self):
        out = sanitize_html('<a href="mailto:me@example.com">mail</a>')
        assert 'href="mailto:me@example.com"' in out

    def test_external_link_hardened(self):
        out = sanitize_html('<a href="https://example.com">x</a>')
        assert out == '<a href="https://example.com" rel="nofollow noreferrer noopener" target="_blank">x</a>'

    def test_relative_link_not_hardened(self):
        assert sanitize_html('<a href="#usage">u</a>') == '<a href="#usage">u</a>'

    def test_relative_image_resolved_for_package(self):
        out = sanitize_html('<img src="./logo.png">', "foo")
        assert out == '<img src="https://cdn.jsdelivr.net/npm/foo/logo.png"/>'

    def test_relative_image_kept_without_package(self):
        assert sanitize_html('<img src="./logo.png">') == '<img src="./logo.png"/>'

    def test_github_blob_image_rewritten(self):
        out = sanitize_html('<img src="https://github.com/o/r/blob/main/a.png">')
        assert 'src="https://github.com/o/r/raw/main/a.png"' in out

    def test_srcset_with_bad_candidate_dropped(self):
        html = '<picture><source srcset="https://a/x.png 1x, javascript:alert(1) 2x"></picture>'
        assert "srcset" not in sanitize_html(html)

    def test_custom_schemes(self):
        policy = SanitizerPolicy(allowed_schemes=["https"])
        assert "href" not in policy.sanitize('<a href="mailto:me@example.com">m</a>')


def test_sanitizing_twice_changes_nothing():
    html = (
        '<h3 data-level="1">Title</h3>\n'
        '<p>Text with <a href="https://example.com">link</a> and '
        '<img src="./a.png" alt="a" onload="x()"> <b>bold</b></p>\n'
        "<script>bad()</script><!-- c -->\n"
        '<div class="highlight" style="background: #0d1117"><pre style="line-height: 125%;">'
        '<span></span><code><span style="color: #ff7b72">const</span> a</code></pre></div>\n'
        '<blockquote data-callout="tip"><p>ok</p></blockquote>'
    )
    once = sanitize_html(html, "pkg")
    assert sanitize_html(once, "pkg") == once


class TestWhitespaceAfterRemoval:
    """Text left next to removed nodes serializes as a fresh parse would."""

    def test_removed_block_between_newlines(self):
        once = sanitize_html("<div>\n<script>x</script>\n</div>")
        assert once == "<div>\n</div>"
        assert sanitize_html(once) == once

    def test_removed_comment_between_paragraphs(self):
        once = sanitize_html("<p>a</p>\n<!-- note -->\n<p>b</p>")
        assert once == "<p>a</p>\n<p>b</p>"

    def test_unwrapped_empty_element(self):
        once = sanitize_html("<p>a</p>\n<section>\n</section>\n<p>b</p>")
        assert sanitize_html(once) == once

    def test_preformatted_whitespace_kept(self):
        html = "<pre><code>a\n<script>x</script>\n\n</code></pre>"
        assert sanitize_html(html) == "<pre><code>a\n\n\n</code></pre>"

    def test_rendered_readme_with_script_block(self):
        source = "a\n\n<script>alert(1)</script>\n\n| a |\n|--|\n| b |\n"
        once = render_readme_html(source, "foo")
        assert "\n\n" not in once
        assert sanitize_html(once, "foo") == once
