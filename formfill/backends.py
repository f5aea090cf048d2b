"""Form-filling backends.

A backend turns a template PDF plus field values into filled PDF bytes. It
exposes ``name``, ``ensure_available()`` and ``fill(form, template)`` where
``template`` is an absolute path string or a readable binary stream.
"""
from __future__ import annotations

import io
import logging
import os
import shutil
import subprocess
from typing import BinaryIO, List, Optional, Protocol

from .config import FillerSettings
from .errors import FillExecutionError, FillTimeoutError, ToolMissingError
from .utils.fdf import Form, write_fdf
from .utils.pdf_fill import TemplateSource, fill_pdf_fields
from .utils.workspace import transient_dir, transient_file

logger = logging.getLogger(__name__)

STDIO_TOKEN = "-"
FDF_FILENAME = "data.fdf"


class FormBackend(Protocol):
    name: str

    def ensure_available(self) -> None:
        ...

    def fill(self, form: Form, template: TemplateSource) -> bytes:
        ...


def _seekable_fileno(stream: BinaryIO) -> Optional[int]:
    """Return a descriptor positioned at the stream's logical offset, or None."""
    seekable = getattr(stream, "seekable", None)
    try:
        if seekable is None or not seekable():
            return None
        fd = stream.fileno()
        # Buffered readers may have read ahead of their logical position.
        os.lseek(fd, stream.tell(), os.SEEK_SET)
    except (AttributeError, OSError, ValueError):
        return None
    return fd


class PdftkBackend:
    """Runs ``pdftk <template> fill_form <fdf> output -`` and captures stdout."""

    name = "pdftk"

    def __init__(self, settings: FillerSettings) -> None:
        self.settings = settings
        self._executable: Optional[str] = None

    def ensure_available(self) -> None:
        self._executable = self._resolve_executable()

    def _resolve_executable(self) -> str:
        resolved = shutil.which(self.settings.executable)
        if not resolved:
            raise ToolMissingError(self.settings.executable)
        return resolved

    def fill(self, form: Form, template: TemplateSource) -> bytes:
        executable = self._executable or self._resolve_executable()
        if isinstance(template, (str, os.PathLike)):
            return self._fill_path(executable, form, os.fspath(template))
        return self._fill_stream(executable, form, template)

    def _fill_path(self, executable: str, form: Form, template_path: str) -> bytes:
        with transient_dir(self.settings.temp_prefix, self.settings.temp_dir) as work_dir:
            fdf_path = os.path.join(work_dir, FDF_FILENAME)
            write_fdf(form, fdf_path, escape=self.settings.escape_strings)
            args = [executable, template_path, "fill_form", fdf_path, "output", STDIO_TOKEN]
            return self._run(args, cwd=work_dir, stdin=subprocess.DEVNULL)

    def _fill_stream(self, executable: str, form: Form, stream: BinaryIO) -> bytes:
        with transient_file(self.settings.temp_prefix, ".fdf", self.settings.temp_dir) as fdf_path:
            write_fdf(form, fdf_path, escape=self.settings.escape_strings)
            args = [executable, STDIO_TOKEN, "fill_form", fdf_path, "output", STDIO_TOKEN]
            fd = _seekable_fileno(stream)
            if fd is not None:
                return self._run(args, stdin=fd)
            return self._run(args, input_bytes=stream.read())

    def _run(
        self,
        args: List[str],
        *,
        cwd: Optional[str] = None,
        stdin=None,
        input_bytes: Optional[bytes] = None,
    ) -> bytes:
        logger.debug("Running %s (cwd=%s)", " ".join(args), cwd or os.getcwd())
        try:
            completed = subprocess.run(
                args,
                cwd=cwd,
                stdin=stdin,
                input=input_bytes,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.settings.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise FillTimeoutError(
                f"{self.name} did not finish within {self.settings.timeout} seconds",
                stderr=(exc.stderr or b"").decode("utf-8", errors="replace"),
                stdout=exc.stdout or b"",
            ) from exc
        except OSError as exc:
            raise FillExecutionError(f"{self.name} error: failed to start {args[0]}: {exc}") from exc

        stderr = completed.stderr.decode("utf-8", errors="replace")
        if completed.returncode != 0:
            logger.error("%s exited with status %d: %s", self.name, completed.returncode, stderr.strip())
            raise FillExecutionError(
                f"{self.name} error: exit status {completed.returncode}",
                returncode=completed.returncode,
                stderr=stderr,
                stdout=completed.stdout,
            )
        return completed.stdout


class PypdfBackend:
    """Fills AcroForm fields in process with pypdf."""

    name = "pypdf"

    def __init__(self, settings: FillerSettings) -> None:
        self.settings = settings

    def ensure_available(self) -> None:
        return None

    def fill(self, form: Form, template: TemplateSource) -> bytes:
        seekable = getattr(template, "seekable", None)
        if not isinstance(template, (str, os.PathLike)) and (seekable is None or not seekable()):
            # PdfReader needs random access.
            template = io.BytesIO(template.read())
        return fill_pdf_fields(template, form)


def get_backend(settings: FillerSettings) -> FormBackend:
    if settings.backend == "pypdf":
        return PypdfBackend(settings)
    return PdftkBackend(settings)
