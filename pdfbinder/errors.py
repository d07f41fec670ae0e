"""Exception hierarchy shared across PDF Binder."""


class PdfBinderError(Exception):
    """Base class for application errors."""


class ImageLoadError(PdfBinderError):
    """Raised when a source file cannot be decoded into an image record."""


class DuplicateRecordError(PdfBinderError):
    """Raised when a record id is already present in a collection."""


class ConversionError(PdfBinderError):
    """Raised when a document cannot be assembled or encoded."""
