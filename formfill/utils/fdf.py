"""FDF (Forms Data Format) encoding of field name/value mappings.

Field names and values are written verbatim between parentheses. Unless
``escape`` is requested, backslashes and parentheses are not escaped, so a
value such as ``"a)b"`` produces malformed FDF. Callers relying on the exact
unescaped layout keep the default.
"""
from __future__ import annotations

import logging
import math
import os
from decimal import Decimal
from typing import Any, Mapping, Union

from ..errors import FdfWriteError

logger = logging.getLogger(__name__)

FDF_HEADER = """%FDF-1.2
%,,oe"
1 0 obj
<<
/FDF << /Fields ["""

FDF_FOOTER = """]
>>
>>
endobj
trailer
<<
/Root 1 0 R
>>
%%EOF"""

FIELD_LINE = "<< /T ({name}) /V ({value})>>"

Form = Mapping[str, Any]


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    # repr() is the shortest round-tripping form; Decimal drops its exponent.
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def encode_value(value: Any) -> str:
    """Render a single field value the way pdftk expects it."""
    if isinstance(value, bool):
        return "Yes" if value else "Off"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def escape_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def encode_fdf(form: Form, *, escape: bool = False) -> bytes:
    lines = [FDF_HEADER]
    for name, value in form.items():
        name_text = str(name)
        value_text = encode_value(value)
        if escape:
            name_text = escape_string(name_text)
            value_text = escape_string(value_text)
        lines.append(FIELD_LINE.format(name=name_text, value=value_text))
    lines.append(FDF_FOOTER)
    return ("\n".join(lines) + "\n").encode("utf-8")


def write_fdf(form: Form, path: Union[str, os.PathLike], *, escape: bool = False) -> int:
    """Encode *form* and write it to *path*, returning the payload size."""
    payload = encode_fdf(form, escape=escape)
    try:
        with open(path, "wb") as fdf_file:
            fdf_file.write(payload)
    except OSError as exc:
        raise FdfWriteError(f"failed to create fdf form data file: {exc}") from exc
    logger.debug("Wrote FDF with %d fields to %s (%d bytes)", len(form), path, len(payload))
    return len(payload)
