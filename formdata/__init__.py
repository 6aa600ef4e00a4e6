# We get the version from a sub-file that can be automatically generated.
from ._version import __version__

from .boundary import read_boundary
from .exceptions import (
    BoundaryError,
    ContentDecodeError,
    FormDataError,
    MissingFieldError,
    ParseError,
    StructuralError,
)
from .formdata import FormDataParser, FormDataState, parse_form, parse_form_data
from .processors import DEFAULT_PROCESSORS, build_registry, process_content
from .result import Entry, add_entry

__all__ = (
    "BoundaryError",
    "ContentDecodeError",
    "DEFAULT_PROCESSORS",
    "Entry",
    "FormDataError",
    "FormDataParser",
    "FormDataState",
    "MissingFieldError",
    "ParseError",
    "StructuralError",
    "__version__",
    "add_entry",
    "build_registry",
    "parse_form",
    "parse_form_data",
    "process_content",
    "read_boundary",
)
