"""Pygments lexer for axiomatic definition files."""

from pygments.lexer import RegexLexer, bygroups, words
from pygments.token import (
    Error,
    Keyword,
    Name,
    Operator,
    Punctuation,
    Text,
)


class AxiomaticLexer(RegexLexer):
    """Pygments lexer for algebraic-structure definitions."""

    name = "Axiomatic"
    aliases = ["axiomatic", "axm"]
    filenames = ["*.axm"]
    mimetypes = ["text/x-axiomatic"]

    tokens = {
        "root": [
            # Whitespace
            (r"\s+", Text),
            # Definition keyword
            (r"\bdef\b", Keyword.Declaration),
            # Quantifiers
            (words(("forall", "exists"), prefix=r"\b", suffix=r"\b"), Keyword),
            # Word connectives
            (words(("and", "or"), prefix=r"\b", suffix=r"\b"), Operator.Word),
            # Membership predicate
            (r"\bin(?=\()", Name.Builtin),
            # Type literals: type[name]
            (r"(type)(\[)([^\]]*)(\])", bygroups(Keyword.Type, Punctuation, Name.Class, Punctuation)),
            # Symbolic connectives (longest first)
            (r"<=>|=>", Operator),
            (r"[=!]", Operator),
            # Function names
            (r"[A-Za-z0-9+\-*/^_\\]+(?=\()", Name.Function),
            # Symbols
            (r"[A-Za-z0-9+\-*/^_\\]+", Name.Variable),
            # Punctuation
            (r"[(){},]", Punctuation),
            # Anything the tokenizer would reject
            (r".", Error),
        ],
    }
