"""
Pydantic models for jishokei results.

Used for the CLI's JSON output and by hosts that pass scan results over an
API boundary.

Usage:
    from jishokei.models import ScanResult

    result = ScanResult.from_scan(text, scanner.scan(text))
    print(result.model_dump_json())
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ScanResult(BaseModel):
    """Ranked dictionary-form candidates for one input fragment."""
    text: str = Field(..., description="Scanned input text")
    candidates: List[str] = Field(default_factory=list, description="Candidates, most relevant first")
    best: Optional[str] = Field(None, description="First candidate, None for empty input")

    @classmethod
    def from_scan(cls, text: str, candidates: List[str]) -> "ScanResult":
        return cls(
            text=text,
            candidates=list(candidates),
            best=candidates[0] if candidates else None,
        )
