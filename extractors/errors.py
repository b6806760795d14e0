"""Error types raised while extracting a spreadsheet."""


class ExtractionError(Exception):
    """Base error for a failed extraction run."""


class ContentNotFoundError(ExtractionError):
    """Raised when the spreadsheet payload cannot be located or opened."""


class UnsupportedFormatError(ExtractionError):
    """Raised when the input is not an OpenDocument spreadsheet container."""


class NoSpreadsheetError(ExtractionError):
    """Raised when the payload has no ``<office:spreadsheet>`` element."""


class OutputError(ExtractionError):
    """Raised when a destination file cannot be opened for writing."""


class ConversionError(ExtractionError):
    """Raised when converting a foreign format through LibreOffice fails."""
