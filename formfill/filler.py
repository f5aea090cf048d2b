"""Fill PDF forms with field values.

``fill`` takes a template path, ``fill_from_stream`` a readable binary stream.
Both check that the backend is available before any temporary file or
directory is created, and both remove those transient resources before
returning, whatever the outcome.
"""
from __future__ import annotations

import logging
import os
from typing import BinaryIO, Optional, Union

from .backends import FormBackend, get_backend
from .config import FillerSettings, get_settings
from .errors import PathResolutionError, TemplateAccessError, TemplateNotFoundError
from .utils.fdf import Form

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _resolve_template(template_path: PathLike) -> str:
    try:
        resolved = os.path.abspath(os.fspath(template_path))
    except (TypeError, ValueError) as exc:
        raise PathResolutionError(f"failed to create the absolute path: {exc}") from exc

    try:
        os.stat(resolved)
    except FileNotFoundError as exc:
        raise TemplateNotFoundError(resolved) from exc
    except (OSError, ValueError) as exc:
        raise TemplateAccessError(f"failed to check if form PDF file exists: {exc}") from exc
    return resolved


class FormFiller:
    def __init__(
        self,
        settings: Optional[FillerSettings] = None,
        backend: Optional[FormBackend] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.backend = backend or get_backend(self.settings)

    def fill(self, form: Form, template_path: PathLike) -> bytes:
        """Fill the PDF form at *template_path* and return the filled PDF bytes."""
        resolved = _resolve_template(template_path)
        self.backend.ensure_available()

        result = self.backend.fill(form, resolved)
        logger.info("Filled %s with %d fields via %s (%d bytes)", resolved, len(form), self.backend.name, len(result))
        return result

    def fill_from_stream(self, form: Form, template_stream: BinaryIO) -> bytes:
        """Fill the PDF form read from *template_stream* and return the filled PDF bytes."""
        self.backend.ensure_available()

        result = self.backend.fill(form, template_stream)
        logger.info("Filled streamed template with %d fields via %s (%d bytes)", len(form), self.backend.name, len(result))
        return result


def fill(form: Form, template_path: PathLike, settings: Optional[FillerSettings] = None) -> bytes:
    return FormFiller(settings).fill(form, template_path)


def fill_from_stream(
    form: Form, template_stream: BinaryIO, settings: Optional[FillerSettings] = None
) -> bytes:
    return FormFiller(settings).fill_from_stream(form, template_stream)
