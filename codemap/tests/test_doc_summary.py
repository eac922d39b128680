"""
Unit tests for doc_summary.py

Tests doc comment detection, marker cleanup, summary extraction and truncation.
"""

import unittest

from codemap.doc_summary import (
    clean_doc_comment,
    extract_doc_summary,
    get_doc_comments,
    is_doc_comment,
    summarize_doc_text,
    truncate_summary,
)
from codemap.parser import parse_bytes


def first_class(source: bytes):
    tree = parse_bytes(source)
    for child in tree.root_node.named_children:
        if child.type == "class_declaration":
            return child
    raise AssertionError("class_declaration not found")


class TestDocCommentDetection(unittest.TestCase):
    def test_triple_slash(self):
        self.assertTrue(is_doc_comment("/// <summary>x</summary>"))

    def test_block_doc(self):
        self.assertTrue(is_doc_comment("/** <summary>x</summary> */"))

    def test_regular_comments(self):
        self.assertFalse(is_doc_comment("// note"))
        self.assertFalse(is_doc_comment("/* note */"))
        self.assertFalse(is_doc_comment("//// banner"))
        self.assertFalse(is_doc_comment("/**/"))


class TestCleanDocComment(unittest.TestCase):
    def test_block_markers_removed(self):
        cleaned = clean_doc_comment("/**\n * <summary>Hi</summary>\n */")
        self.assertEqual(cleaned.strip(), "<summary>Hi</summary>")

    def test_line_marker_removed(self):
        self.assertEqual(clean_doc_comment("/// <summary>Hi</summary>"), "<summary>Hi</summary>")


class TestSummarizeDocText(unittest.TestCase):
    def test_summary_text_collapsed(self):
        body = "<summary>\n  Gets the\n  current user.\n</summary>\n<returns>User</returns>"
        self.assertEqual(summarize_doc_text(body), "Gets the current user.")

    def test_nested_markup_is_stripped(self):
        body = '<summary>Wraps a <see cref="Stream"/> with <c>buffering</c></summary>'
        self.assertEqual(summarize_doc_text(body), "Wraps a with buffering")

    def test_adjacent_paragraphs_separated(self):
        body = "<summary><para>First</para><para>Second</para></summary>"
        self.assertEqual(summarize_doc_text(body), "First Second")

    def test_inline_code_without_surrounding_spaces(self):
        body = "<summary>Use<c>Foo</c>now</summary>"
        self.assertEqual(summarize_doc_text(body), "Use Foo now")

    def test_no_summary_element(self):
        self.assertIsNone(summarize_doc_text("<remarks>Only remarks.</remarks>"))

    def test_empty_summary_is_none(self):
        self.assertIsNone(summarize_doc_text("<summary>   </summary>"))

    def test_malformed_xml_falls_back_to_regex(self):
        body = "<summary>Compares a & b <br> quickly</summary>"
        self.assertEqual(summarize_doc_text(body), "Compares a & b quickly")


class TestTruncation(unittest.TestCase):
    def test_long_text_without_period(self):
        text = "a" * 150
        result = truncate_summary(text)
        self.assertEqual(result, "a" * 100 + "...")

    def test_period_at_offset_40(self):
        text = "b" * 40 + "." + "c" * 80
        result = truncate_summary(text)
        self.assertEqual(result, "b" * 40 + ".")
        self.assertEqual(len(result), 41)

    def test_short_text_preserved(self):
        text = "Short summary without a period"
        self.assertEqual(truncate_summary(text), text)

    def test_period_after_limit_truncates_to_limit(self):
        text = "d" * 120 + "."
        self.assertEqual(truncate_summary(text), "d" * 100 + "...")


class TestExtractDocSummary(unittest.TestCase):
    def test_triple_slash_summary(self):
        source = b"""
/// <summary>
/// Handles user accounts. Also more.
/// </summary>
public class Users { }
"""
        self.assertEqual(extract_doc_summary(first_class(source)), "Handles user accounts.")

    def test_block_summary(self):
        source = b"""
/**
 * <summary>Block style docs</summary>
 */
public class Users { }
"""
        self.assertEqual(extract_doc_summary(first_class(source)), "Block style docs")

    def test_summary_before_attributes(self):
        source = b"""
/// <summary>Controller for orders</summary>
[ApiController]
public class Orders { }
"""
        self.assertEqual(extract_doc_summary(first_class(source)), "Controller for orders")

    def test_regular_comment_is_ignored(self):
        source = b"""
// <summary>Not a doc comment</summary>
public class Users { }
"""
        self.assertIsNone(extract_doc_summary(first_class(source)))

    def test_blank_line_gap_detaches_comment(self):
        source = b"""
/// <summary>Detached</summary>

public class Users { }
"""
        self.assertEqual(get_doc_comments(first_class(source)), [])
        self.assertIsNone(extract_doc_summary(first_class(source)))


if __name__ == "__main__":
    unittest.main()
