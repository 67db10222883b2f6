r"""
Parser escaping and error tests

Tests backslash escaping of quotes (the backslash is kept in the
argument) and MalformedDirective for every way the scan can fail.
"""

import pytest

from scriptlet.lib.parser import MalformedDirective, directive_parse


class TestEscaping:
    """Test backslash-escaped quotes"""

    def test_escaped_quote_keeps_backslash(self):
        r"""\' does not close the argument and the backslash stays"""
        result = directive_parse("//scriptlet('foo','a\\'b')")

        assert result.name == "foo"
        assert result.args == ["a\\'b"]

    def test_escaped_double_quote(self):
        r"""\" inside a double-quoted argument"""
        result = directive_parse('//scriptlet("foo", "say \\"hi\\"")')
        assert result.args == ['say \\"hi\\"']

    def test_backslash_before_other_character(self):
        """A backslash before an ordinary character is plain text"""
        result = directive_parse("//scriptlet('foo', 'a\\nb')")
        assert result.args == ["a\\nb"]

    def test_backslash_before_closing_quote_never_closes(self):
        """An argument ending in a backslash cannot be closed"""
        with pytest.raises(MalformedDirective):
            directive_parse("//scriptlet('foo', 'a\\')")


class TestMalformed:
    """Test rejection of malformed directive text"""

    def test_missing_closing_parenthesis(self):
        """No ')' as last character"""
        with pytest.raises(MalformedDirective):
            directive_parse("//scriptlet('foo'")

    def test_unterminated_quote(self):
        """Quote never closed, ')' swallowed by the argument"""
        with pytest.raises(MalformedDirective):
            directive_parse("//scriptlet('foo)")

    def test_trailing_text_after_parenthesis(self):
        """')' must be the last character"""
        with pytest.raises(MalformedDirective):
            directive_parse("//scriptlet('foo') ")

    def test_unquoted_argument(self):
        """Characters outside quotes other than separators are invalid"""
        with pytest.raises(MalformedDirective):
            directive_parse("//scriptlet(foo)")

    def test_stray_character_between_arguments(self):
        """A stray character fails even if ')' follows at the end"""
        with pytest.raises(MalformedDirective):
            directive_parse("//scriptlet('foo' x 'bar')")

    def test_nothing_after_marker(self):
        """Marker with no directive text"""
        with pytest.raises(MalformedDirective):
            directive_parse("example.org#%#//scriptlet")

    def test_no_arguments(self):
        """Closed list without any quoted argument has no name"""
        with pytest.raises(MalformedDirective, match="name is missing"):
            directive_parse("//scriptlet()")

    def test_error_carries_directive_text(self):
        """Error exposes the text after the marker"""
        with pytest.raises(MalformedDirective) as excinfo:
            directive_parse("example.org#%#//scriptlet('foo'")

        assert excinfo.value.text == "('foo'"
        assert "('foo'" in str(excinfo.value)

    def test_is_syntax_error(self):
        """MalformedDirective can be caught as SyntaxError"""
        with pytest.raises(SyntaxError):
            directive_parse("//scriptlet('foo)")
