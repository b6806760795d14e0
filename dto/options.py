"""
ExtractOptions: everything the caller can configure for one run.

Defaults come from ``extractors.constants`` (which reads the environment);
CLI flags override them.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, field_validator, model_validator

from extractors.constants import DEFAULT_DELIMITER, DEFAULT_SEPARATOR


class ExtractOptions(BaseModel):
    """Validated configuration for a single extraction."""

    # Output path template; "" means the default stream (stdout).
    # May contain "<SHEET>" to write one file per sheet.
    output: str = ""

    separator: str = DEFAULT_SEPARATOR
    delimiter: str = DEFAULT_DELIMITER

    # Sheet-name patterns (regex wildcards allowed).  Empty → default policy.
    sheets: List[str] = []

    verbose: int = 0

    # Convert non-OpenDocument input through LibreOffice first.
    convert: bool = False

    @field_validator("separator", "delimiter")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if value == "":
            raise ValueError("must not be empty")
        return value

    @field_validator("sheets")
    @classmethod
    def _drop_blank_patterns(cls, value: List[str]) -> List[str]:
        return [pattern for pattern in value if pattern != ""]

    @model_validator(mode="after")
    def _distinct_delimiter(self) -> "ExtractOptions":
        if self.delimiter == self.separator:
            raise ValueError("Delimiter and separator must be different")
        return self
