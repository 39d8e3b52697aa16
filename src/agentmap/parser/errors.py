"""Parse failures. Any of these means the file is skipped, never the scan."""


class ParseFailure(Exception):
    """Base class for a file that could not be turned into a syntax tree."""


class UnsupportedLanguage(ParseFailure):
    """No grammar is registered or installed for the requested language."""


class ParseError(ParseFailure):
    """The grammar was available but parsing the source failed."""
