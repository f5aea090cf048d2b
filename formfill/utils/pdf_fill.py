from __future__ import annotations

import io
from typing import Any, BinaryIO, Mapping, Union

try:
    from pypdf import PdfReader, PdfWriter
    from pypdf.generic import BooleanObject, NameObject
except ImportError as exc:  # pragma: no cover - optional dependency
    raise ImportError("pypdf is required to fill PDF forms in process") from exc

from ..errors import FillExecutionError
from .fdf import encode_value

TemplateSource = Union[str, BinaryIO]


def fill_pdf_fields(template: TemplateSource, field_values: Mapping[str, Any]) -> bytes:
    """Fill AcroForm fields in the given PDF and return the modified PDF bytes."""
    if not isinstance(field_values, Mapping):
        raise TypeError("field_values must be a mapping of field names to values")

    try:
        reader = PdfReader(template)
        writer = PdfWriter(clone_from=reader)
    except Exception as exc:
        raise FillExecutionError(f"Failed to read template PDF: {exc}") from exc

    acro_form = writer._root_object.get(NameObject("/AcroForm"))
    if acro_form is None:
        raise FillExecutionError("Template PDF does not contain form fields")
    acro_form.get_object()[NameObject("/NeedAppearances")] = BooleanObject(True)

    rendered = {str(name): encode_value(value) for name, value in field_values.items()}
    try:
        for page in writer.pages:
            writer.update_page_form_field_values(page, rendered)
        output = io.BytesIO()
        writer.write(output)
    except Exception as exc:
        raise FillExecutionError(f"Failed to write PDF form fields: {exc}") from exc
    return output.getvalue()
