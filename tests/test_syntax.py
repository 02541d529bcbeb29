"""Single-row highlight classification and grammar lookup."""

import unittest

from bolt.constants import Highlight
from bolt.models import Grammar, Keyword, Row
from bolt.syntax import (
    HLDB,
    highlight_line,
    is_separator,
    parse_keywords,
    select_grammar,
    syntax_to_color,
    update_syntax,
)

N = Highlight.NORMAL
C = Highlight.COMMENT
K1 = Highlight.KEYWORD1
K2 = Highlight.KEYWORD2
S = Highlight.STRING
D = Highlight.NUMBER

TEST_GRAMMAR = Grammar(
    filetype="test",
    filematch=(".t",),
    keywords=(Keyword("int"), Keyword("if"), Keyword("char", secondary=True)),
    comment_start="//",
)


class SeparatorTests(unittest.TestCase):
    def test_punctuation_whitespace_and_nul(self) -> None:
        for c in ",.()+-/*=~%<>[]; \t\0":
            self.assertTrue(is_separator(c), repr(c))
        self.assertTrue(is_separator(""))

    def test_identifier_characters_are_not_separators(self) -> None:
        for c in "aZ_09{}\"'":
            self.assertFalse(is_separator(c), repr(c))

    def test_latin1_space_is_not_a_separator(self) -> None:
        self.assertFalse(is_separator("\xa0"))


class KeywordTests(unittest.TestCase):
    def test_keyword_followed_by_separator(self) -> None:
        self.assertEqual(highlight_line("int x", TEST_GRAMMAR), [K1, K1, K1, N, N])

    def test_keyword_prefix_of_identifier_is_not_highlighted(self) -> None:
        self.assertEqual(highlight_line("integer", TEST_GRAMMAR), [N] * 7)

    def test_keyword_at_end_of_row(self) -> None:
        self.assertEqual(highlight_line("x=int", TEST_GRAMMAR), [N, N, K1, K1, K1])

    def test_keyword_must_start_after_separator(self) -> None:
        self.assertEqual(highlight_line("xint", TEST_GRAMMAR), [N] * 4)

    def test_secondary_keyword(self) -> None:
        self.assertEqual(highlight_line("(char)", TEST_GRAMMAR), [N, K2, K2, K2, K2, N])

    def test_keyword_boundary_uses_punctuation(self) -> None:
        self.assertEqual(highlight_line("if(x)", TEST_GRAMMAR)[:2], [K1, K1])
        self.assertEqual(highlight_line("a<int>", TEST_GRAMMAR)[2:5], [K1, K1, K1])


class NumberTests(unittest.TestCase):
    def test_number_after_separator(self) -> None:
        self.assertEqual(highlight_line("x = 42;", TEST_GRAMMAR), [N, N, N, N, D, D, N])

    def test_decimal_point_continues_number(self) -> None:
        self.assertEqual(highlight_line("3.14", TEST_GRAMMAR), [D, D, D, D])

    def test_digits_inside_identifier_are_normal(self) -> None:
        self.assertEqual(highlight_line("x1", TEST_GRAMMAR), [N, N])

    def test_numbers_can_be_disabled(self) -> None:
        grammar = Grammar("t", (), (), "", numbers=False)
        self.assertEqual(highlight_line("42", grammar), [N, N])


class StringTests(unittest.TestCase):
    def test_double_quoted_string(self) -> None:
        self.assertEqual(highlight_line('a "b" c', TEST_GRAMMAR), [N, N, S, S, S, N, N])

    def test_string_closes_only_on_opening_quote(self) -> None:
        self.assertEqual(highlight_line("'a\"b'", TEST_GRAMMAR), [S] * 5)

    def test_unterminated_string_runs_to_end_of_row(self) -> None:
        self.assertEqual(highlight_line('"abc', TEST_GRAMMAR), [S] * 4)

    def test_comment_marker_inside_string_is_ignored(self) -> None:
        self.assertEqual(highlight_line('"//"', TEST_GRAMMAR), [S] * 4)

    def test_keyword_directly_after_string(self) -> None:
        self.assertEqual(highlight_line('"a"int', TEST_GRAMMAR), [S, S, S, K1, K1, K1])

    def test_strings_can_be_disabled(self) -> None:
        grammar = Grammar("t", (), (), "", strings=False)
        self.assertEqual(highlight_line('"a"', grammar), [N, N, N])


class CommentTests(unittest.TestCase):
    def test_comment_runs_to_end_of_row(self) -> None:
        self.assertEqual(highlight_line("x // int 1", TEST_GRAMMAR), [N, N] + [C] * 8)

    def test_comment_at_start(self) -> None:
        self.assertEqual(highlight_line("//", TEST_GRAMMAR), [C, C])

    def test_single_slash_is_not_a_comment(self) -> None:
        self.assertEqual(highlight_line("a/b", TEST_GRAMMAR), [N, N, N])


class GrammarlessTests(unittest.TestCase):
    def test_no_grammar_is_all_normal(self) -> None:
        self.assertEqual(highlight_line('int x = "1"; // c', None), [N] * 17)

    def test_empty_row(self) -> None:
        self.assertEqual(highlight_line("", TEST_GRAMMAR), [])


class UpdateSyntaxTests(unittest.TestCase):
    def test_lengths_match_and_reclassification_is_idempotent(self) -> None:
        row = Row(chars="int x = 1; // c", render="int x = 1; // c")
        update_syntax(row, TEST_GRAMMAR)
        first = list(row.hl)
        update_syntax(row, TEST_GRAMMAR)
        self.assertEqual(row.hl, first)
        self.assertEqual(len(row.hl), row.rsize)

    def test_classifier_never_emits_match(self) -> None:
        hl = highlight_line('if (x == "y") return 1.5; // done', HLDB[0])
        self.assertNotIn(Highlight.MATCH, hl)


class GrammarTableTests(unittest.TestCase):
    def test_parse_keywords(self) -> None:
        self.assertEqual(parse_keywords(["if", "int|"]), (Keyword("if"), Keyword("int", True)))

    def test_select_by_extension(self) -> None:
        self.assertEqual(select_grammar("main.c").filetype, "c")
        self.assertEqual(select_grammar("src/app.py").filetype, "python")

    def test_extension_must_be_a_suffix(self) -> None:
        self.assertIsNone(select_grammar("notes.c.txt"))
        self.assertIsNone(select_grammar("README"))

    def test_non_dotted_pattern_matches_substring(self) -> None:
        grammar = Grammar("make", ("Makefile",), (), "#")
        self.assertIs(select_grammar("sub/Makefile.am", [grammar]), grammar)

    def test_python_grammar_uses_hash_comments(self) -> None:
        hl = highlight_line("def f(): # x", select_grammar("a.py"))
        self.assertEqual(hl[:3], [K1, K1, K1])
        self.assertEqual(hl[-3:], [C, C, C])

    def test_colors(self) -> None:
        self.assertEqual(syntax_to_color(Highlight.KEYWORD1), 33)
        self.assertEqual(syntax_to_color(Highlight.MATCH), 34)
        self.assertEqual(syntax_to_color(Highlight.NORMAL), 37)


if __name__ == "__main__":
    unittest.main()
