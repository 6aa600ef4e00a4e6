class FormDataError(ValueError):
    """Base error class for everything raised by this package."""
    pass


class ParseError(FormDataError):
    """This exception (or a subclass) is raised when there is an error while
    parsing a multipart/form-data payload.
    """

    #: This is the offset in the payload at which the parse error was
    #: detected.  It will be -1 if not specified.
    offset = -1


class StructuralError(ParseError):
    """Raised when the framing of the payload is broken: the boundary is never
    found, a header block or quoted parameter is never terminated, or the
    payload ends before the next boundary line.
    """
    pass


class MissingFieldError(ParseError):
    """Raised when a part's header block ends without a ``name`` parameter."""
    pass


class ContentDecodeError(ParseError):
    """Raised when a content processor fails on a part body - for example
    when the ``application/json`` processor is given malformed JSON.  The
    original exception is available as ``__cause__``.
    """
    pass


class BoundaryError(FormDataError):
    """Raised when a Content-Type header value carries no boundary."""
    pass
