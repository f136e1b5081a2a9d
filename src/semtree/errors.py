class ExtractionError(Exception):
    """Fatal failure while turning a source file into a semantic document."""


class ParseError(ExtractionError):
    """The source could not be decoded or parsed into a usable syntax tree."""
