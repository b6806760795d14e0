"""
Run summary DTOs.

    ExtractionResult
      └─ sheets: List[SheetResult]   (one per sheet actually taken)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class SheetResult(BaseModel):
    """What was written for a single sheet."""

    sheet_name: str
    output_path: Optional[str] = None  # None → default stream
    lines_written: int = 0


class ExtractionResult(BaseModel):
    """Summary of an entire extraction run."""

    file_name: str = ""
    sheets: List[SheetResult] = []
