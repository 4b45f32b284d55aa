"""
Pydantic models for words and resumable session snapshots.

Word documents come from the word catalog (MongoDB); snapshots are stored as
JSON in the local cache and as rows in the remote progress table.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from core.constants import ALL_PACKAGES, MAX_STARS, MIN_STARS


def clamp_stars(value: Any) -> int:
    """Coerce a rating to an int and clamp it into [MIN_STARS, MAX_STARS]."""
    try:
        stars = int(value)
    except (TypeError, ValueError):
        return MIN_STARS
    return max(MIN_STARS, min(MAX_STARS, stars))


def normalize_package(package: Optional[str]) -> Optional[str]:
    """Map the "all" sentinel and blank values to None (no filter)."""
    if package is None:
        return None
    package = package.strip()
    if not package or package.lower() == ALL_PACKAGES:
        return None
    return package


class Word(BaseModel):
    """A vocabulary pair with its mastery rating."""
    id: str = Field(..., min_length=1, description="Stable word identifier")
    source: str = Field(..., description="Word in the studied language")
    target: str = Field(..., description="Translation")
    level: str = Field(default="1k", description="Free-form frequency/level tag")
    stars: int = Field(default=MIN_STARS, description="Mastery rating 0-5")
    package_id: Optional[str] = None
    package_name: Optional[str] = None

    model_config = {"frozen": True}

    @field_validator("stars", mode="before")
    @classmethod
    def _clamp_stars(cls, value: Any) -> int:
        return clamp_stars(value)

    @field_validator("source", "target", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> str:
        return str(value).strip() if value is not None else ""

    def with_stars(self, stars: int) -> "Word":
        """Return a copy carrying a different (clamped) rating."""
        return self.model_copy(update={"stars": clamp_stars(stars)})

    @classmethod
    def from_document(cls, doc: dict) -> "Word":
        """
        Build a Word from a catalog document.

        Accepts both the catalog field names (english/turkish/frequency_group/
        star_rating) and the model's own names.
        """
        word_id = doc.get("id") or doc.get("word_id") or doc.get("_id")
        return cls(
            id=str(word_id) if word_id is not None else "",
            source=doc.get("source", doc.get("english", "")),
            target=doc.get("target", doc.get("turkish", "")),
            level=doc.get("level") or doc.get("frequency_group") or "1k",
            stars=doc.get("stars", doc.get("star_rating", MIN_STARS)),
            package_id=doc.get("package_id"),
            package_name=doc.get("package_name"),
        )


class SessionSnapshot(BaseModel):
    """
    Resumable session state: the ordered draw IDs and the cursor.
    """
    word_ids: list[str] = Field(default_factory=list)
    current_index: int = Field(default=0, ge=0)
    selected_package: Optional[str] = None

    @field_validator("selected_package", mode="before")
    @classmethod
    def _normalize_package(cls, value: Any) -> Optional[str]:
        return normalize_package(value)
