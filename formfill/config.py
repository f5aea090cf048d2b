from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class FillerSettings(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    executable: str = Field(default="pdftk", min_length=1)
    # None keeps the external process unbounded.
    timeout: Optional[float] = Field(default=None, gt=0)
    temp_dir: Optional[str] = None
    temp_prefix: str = "fillpdf-"
    escape_strings: bool = False
    backend: Literal["pdftk", "pypdf"] = "pdftk"


@lru_cache
def get_settings() -> FillerSettings:
    return FillerSettings()
