"""Custom exceptions for Citeswap."""


class CiteswapError(Exception):
    """Base exception for all Citeswap errors."""

    pass


class ConfigurationError(CiteswapError):
    """Raised when configuration is invalid or missing."""

    pass


class BibTeXError(CiteswapError):
    """Raised when the BibTeX bibliography cannot be read or parsed."""

    pass


class DocumentError(CiteswapError):
    """Raised when a .docx container or one of its parts cannot be read."""

    pass


class ConversionError(CiteswapError):
    """Raised when the patched document cannot be written."""

    pass


class PayloadDecodeError(CiteswapError):
    """Raised when a placeholder payload is not valid Base64 or JSON."""

    pass


class MetadataShapeError(CiteswapError):
    """Raised when decoded placeholder metadata lacks the expected structure."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
