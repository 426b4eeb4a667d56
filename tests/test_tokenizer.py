"""Tests for the binasc tokenizer."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from binasc.encoding.tokenizer import Token, TokenKind, classify_word, tokenize_line


class TestClassifyWord:
    """Test cases for word classification."""

    def test_prefix_characters(self):
        """Leading +, v, p and t pick the kind on their own."""
        assert classify_word("+a") == TokenKind.ASCII_LITERAL
        assert classify_word("v120") == TokenKind.VARIABLE_LENGTH_VALUE
        assert classify_word("p0.5") == TokenKind.PITCH_BEND
        assert classify_word("t120") == TokenKind.TEMPO

    def test_quote_means_decimal(self):
        assert classify_word("'12") == TokenKind.DECIMAL
        assert classify_word("2u'-300") == TokenKind.DECIMAL
        # A quote wins over the binary rules
        assert classify_word("4'1,000") == TokenKind.DECIMAL

    def test_comma_or_length_means_binary(self):
        assert classify_word("1,1") == TokenKind.BINARY
        assert classify_word("101") == TokenKind.BINARY
        assert classify_word("123") == TokenKind.BINARY

    def test_short_words_are_hex(self):
        assert classify_word("7f") == TokenKind.HEX
        assert classify_word("a") == TokenKind.HEX
        assert classify_word("12") == TokenKind.HEX


class TestTokenizeLine:
    """Test cases for splitting lines into tokens."""

    def test_whitespace_separated(self):
        tokens = tokenize_line("ff\t1010  '12 +a v3 p0.5 t120\r\n", 7)

        assert [t.text for t in tokens] == ["ff", "1010", "'12", "+a", "v3", "p0.5", "t120"]
        assert [t.kind for t in tokens] == [
            TokenKind.HEX,
            TokenKind.BINARY,
            TokenKind.DECIMAL,
            TokenKind.ASCII_LITERAL,
            TokenKind.VARIABLE_LENGTH_VALUE,
            TokenKind.PITCH_BEND,
            TokenKind.TEMPO,
        ]
        assert all(t.line_number == 7 for t in tokens)

    def test_comment_markers(self):
        """;, # and / end the line where a token begins."""
        assert [t.text for t in tokenize_line("ff 00 ; ff ff")] == ["ff", "00"]
        assert tokenize_line("# whole line") == []
        assert tokenize_line("  / also a comment") == []
        assert [t.text for t in tokenize_line("01;02")] == ["01;02"]

    def test_empty_and_blank_lines(self):
        assert tokenize_line("") == []
        assert tokenize_line(" \t \n") == []

    def test_quoted_string(self):
        tokens = tokenize_line('"MThd" 4\'6')

        assert tokens[0] == Token("MThd", TokenKind.QUOTED_STRING, 0)
        assert tokens[1].text == "4'6"

    def test_quoted_string_keeps_spaces_and_comment_chars(self):
        tokens = tokenize_line('"a b; c # d" ; comment')

        assert len(tokens) == 1
        assert tokens[0].text == "a b; c # d"

    def test_escaped_quote(self):
        tokens = tokenize_line('x "say \\"hi\\"" y')

        assert [t.text for t in tokens] == ["x", 'say "hi"', "y"]
        assert tokens[1].kind == TokenKind.QUOTED_STRING

    def test_unterminated_string_runs_to_end_of_line(self):
        tokens = tokenize_line('01 "abc ; def')

        assert len(tokens) == 2
        assert tokens[1].text == "abc ; def"

    def test_empty_string(self):
        tokens = tokenize_line('"" ff')

        assert tokens[0].text == ""
        assert tokens[0].kind == TokenKind.QUOTED_STRING
        assert tokens[1].text == "ff"

    def test_ascii_literal_takes_comment_character(self):
        tokens = tokenize_line("+; +#")

        assert [t.text for t in tokens] == ["+;", "+#"]
