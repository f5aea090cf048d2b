"""Fill PDF form fields from a name/value mapping.

Values are encoded as FDF and merged into the form by ``pdftk`` (or, when
configured, in process by pypdf).
"""
import logging

from .backends import FormBackend, PdftkBackend, PypdfBackend, get_backend
from .config import FillerSettings, get_settings
from .errors import (
    FdfWriteError,
    FillExecutionError,
    FillTimeoutError,
    FormFillError,
    PathResolutionError,
    TemplateAccessError,
    TemplateNotFoundError,
    TempResourceError,
    ToolMissingError,
)
from .filler import FormFiller, fill, fill_from_stream
from .utils.fdf import encode_fdf, encode_value, write_fdf

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "FillerSettings",
    "get_settings",
    "FormBackend",
    "PdftkBackend",
    "PypdfBackend",
    "get_backend",
    "FormFiller",
    "fill",
    "fill_from_stream",
    "encode_fdf",
    "encode_value",
    "write_fdf",
    "FormFillError",
    "PathResolutionError",
    "TemplateNotFoundError",
    "TemplateAccessError",
    "ToolMissingError",
    "TempResourceError",
    "FdfWriteError",
    "FillExecutionError",
    "FillTimeoutError",
]
