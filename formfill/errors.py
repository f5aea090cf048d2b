from __future__ import annotations

from typing import Optional


class FormFillError(RuntimeError):
    """Base class for every failure raised while filling a PDF form."""


class PathResolutionError(FormFillError):
    """Raised when the template path cannot be made absolute."""


class TemplateNotFoundError(FormFillError):
    """Raised when the template PDF does not exist on disk."""

    def __init__(self, path: str) -> None:
        super().__init__(f"form PDF file does not exist: '{path}'")
        self.path = path


class TemplateAccessError(FormFillError):
    """Raised when checking for the template fails for a reason other than absence."""


class ToolMissingError(FormFillError):
    """Raised when the external filler executable is not on the search path."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"{executable} utility is not installed")
        self.executable = executable


class TempResourceError(FormFillError):
    """Raised when the transient working directory or file cannot be created."""


class FdfWriteError(FormFillError):
    """Raised when the encoded FDF payload cannot be written."""


class FillExecutionError(FormFillError):
    """Raised when the filler could not be started or reported a failure.

    ``stderr`` holds the tool's diagnostic output, ``stdout`` whatever it wrote
    before failing.
    """

    def __init__(
        self,
        message: str,
        *,
        returncode: Optional[int] = None,
        stderr: str = "",
        stdout: bytes = b"",
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
        self.stdout = stdout

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr:
            return f"{message}: {self.stderr.strip()}"
        return message


class FillTimeoutError(FillExecutionError):
    """Raised when the filler exceeds the configured timeout."""
