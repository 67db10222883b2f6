"""
Custom Pygments lexer for scriptlet filter rules

Highlights scriptlet rules when reporting them on the terminal.

Token types:
- Comment: '!' comment lines
- Name.Attribute: Domains before the rule mask
- Operator: '~' domain exclusion
- Keyword: Rule masks (#%# and #@%#)
- Name.Tag: The //scriptlet marker
- Punctuation: Parentheses and commas
- String: Quoted scriptlet name and arguments
"""

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer, include
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Keyword,
    Operator,
    Comment,
    Error,
)


class ScriptletRuleLexer(RegexLexer):
    """
    Lexer for scriptlet filter rules

    Example:
        example.org,~ads.example.org#%#//scriptlet('log', 'x')

    Tokens:
        example.org → Name.Attribute
        ~ → Operator
        #%# → Keyword
        //scriptlet → Name.Tag
        'log' → String.Single
    """

    name = 'Scriptlet rule'
    aliases = ['scriptlet', 'adblock-scriptlet']
    filenames = ['*.txt']

    tokens = {
        'root': [
            # Comment lines
            (r'^!.*$', Comment.Single),

            # Rule masks, exception first
            (r'#@%#', Keyword.Reserved),
            (r'#%#', Keyword),

            # Scriptlet marker opens the argument list
            (r'//scriptlet', Name.Tag, 'arguments'),

            include('domains'),

            (r'\s+', Text),
            (r'.', Text),
        ],

        'domains': [
            (r'~', Operator),
            (r',', Punctuation),
            (r'[\w.*-]+', Name.Attribute),
        ],

        'arguments': [
            (r'[(),]', Punctuation),
            (r"'", String.Single, 'single'),
            (r'"', String.Double, 'double'),
            (r'\n', Text, '#pop'),
            (r'[ \t]+', Text),
            # Anything else outside quotes makes the rule malformed
            (r'.', Error),
        ],

        'single': [
            (r"\\.", String.Escape),
            (r"'", String.Single, '#pop'),
            (r"[^'\\]+", String.Single),
            (r"\\", String.Single),
        ],

        'double': [
            (r'\\.', String.Escape),
            (r'"', String.Double, '#pop'),
            (r'[^"\\]+', String.Double),
            (r'\\', String.Double),
        ],
    }


def get_lexer() -> ScriptletRuleLexer:
    """
    Get the ScriptletRuleLexer instance

    Returns:
        ScriptletRuleLexer instance ready for use with Pygments
    """
    return ScriptletRuleLexer()


def rule_highlight(ruleText: str) -> str:
    """Return a rule line with terminal color codes"""
    return highlight(ruleText, get_lexer(), TerminalFormatter()).rstrip("\n")
