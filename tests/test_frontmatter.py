"""
Front matter tests

Tests splitting of YAML headers from markdown bodies.
"""

import pytest

from mangen.lib.frontmatter import (
    frontMatter_split,
    body_extract,
    document_read,
    FrontMatterError,
)


class TestFrontMatterSplit:
    """Test header detection and body extraction"""

    def test_no_front_matter(self):
        """Text without a fence is returned unchanged"""
        doc = frontMatter_split("# NAME\n\ndoveadm - admin tool\n")
        assert doc.frontmatter == {}
        assert doc.body == "# NAME\n\ndoveadm - admin tool\n"

    def test_simple_header(self):
        """Header is parsed and dropped from the body"""
        doc = frontMatter_split("---\ntitle: doveadm\nlayout: man\n---\n# NAME\n")
        assert doc.frontmatter == {"title": "doveadm", "layout": "man"}
        assert doc.body == "# NAME\n"

    def test_header_without_trailing_newline(self):
        """Closing fence at end of file leaves an empty body"""
        doc = frontMatter_split("---\ntitle: x\n---")
        assert doc.frontmatter == {"title": "x"}
        assert doc.body == ""

    def test_only_one_line_break_dropped(self):
        """Blank lines after the closing fence beyond the first are kept"""
        assert body_extract("---\na: 1\n---\n\nBody") == "\nBody"

    def test_crlf_after_closing_fence(self):
        """CRLF after the closing fence is dropped as a unit"""
        assert body_extract("---\na: 1\n---\r\nBody") == "Body"

    def test_empty_header(self):
        """Empty header parses to an empty mapping"""
        doc = frontMatter_split("---\n---\nBody")
        assert doc.frontmatter == {}
        assert doc.body == "Body"

    def test_unterminated_header(self):
        """A header that never closes swallows the file"""
        doc = frontMatter_split("---\ntitle: x\nsection: 1\n")
        assert doc.body == ""

    def test_four_dashes_is_not_a_fence(self):
        """A horizontal rule of four dashes is body text"""
        text = "----\nnot front matter\n"
        assert body_extract(text) == text

    def test_fence_not_at_start(self):
        """Fences later in the file are ignored"""
        text = "Intro\n---\ntitle: x\n---\n"
        assert body_extract(text) == text

    def test_byte_order_mark(self):
        """Leading BOM does not hide the header"""
        assert body_extract("\ufeff---\ntitle: x\n---\nBody") == "Body"

    def test_language_tag_on_fence(self):
        """Opening fence may carry a language tag"""
        doc = frontMatter_split("---yaml\ntitle: x\n---\nBody")
        assert doc.frontmatter == {"title": "x"}
        assert doc.body == "Body"

    def test_scalar_header_ignored(self):
        """Non-mapping YAML yields empty front matter"""
        assert frontMatter_split("---\njust a string\n---\nBody").frontmatter == {}

    def test_invalid_yaml_raises(self):
        """Broken YAML is reported with the file name"""
        with pytest.raises(FrontMatterError, match="broken.md"):
            frontMatter_split("---\ntitle: [unclosed\n---\nBody", path="broken.md")


class TestDocumentRead:
    """Test reading sources from disk"""

    def test_read_utf8(self, tmp_path):
        """File is read as UTF-8 and split"""
        source = tmp_path / "doveadm.1.md"
        source.write_text("---\ntitle: doveadm\n---\nGrüße\n", encoding="utf-8")

        doc = document_read(source)

        assert doc.path == source
        assert doc.frontmatter["title"] == "doveadm"
        assert doc.body == "Grüße\n"

    def test_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError"""
        with pytest.raises(FileNotFoundError):
            document_read(tmp_path / "nope.md")
