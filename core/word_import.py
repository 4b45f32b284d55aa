"""
Word list import - semicolon-separated word files.

Format (header line required, columns by position):

    id;english;turkish;level
    w1;apple;elma;A1

Rows with fewer than three columns or a blank id/english/turkish are skipped.
The level column is optional and defaults to A1.
"""

from __future__ import annotations

import io
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import pandas as pd
from pydantic import ValidationError

from core.schemas import Word

logger = logging.getLogger(__name__)

DEFAULT_CSV_LEVEL = "A1"
CSV_COLUMNS = ["id", "english", "turkish", "level"]


def parse_word_csv(content: str) -> list[Word]:
    """
    Parse a semicolon-separated word list into unrated words.
    """
    content = content.strip()
    if len(content.splitlines()) < 2:
        return []

    df = pd.read_csv(
        io.StringIO(content),
        sep=";",
        header=None,
        skiprows=1,
        names=CSV_COLUMNS,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        on_bad_lines="skip",
        engine="python",
    ).fillna("")

    words = []
    for row in df.itertuples(index=False):
        if not (row.id.strip() and row.english.strip() and row.turkish.strip()):
            continue
        try:
            words.append(Word(
                id=row.id.strip(),
                source=row.english,
                target=row.turkish,
                level=row.level.strip() or DEFAULT_CSV_LEVEL,
            ))
        except ValidationError as e:
            logger.warning("Skipping word row %r: %s", row.id, e)
    return words


def load_word_csv(path: Path | str) -> list[Word]:
    return parse_word_csv(Path(path).read_text(encoding="utf-8"))


def to_documents(
    words: list[Word],
    learner_id: Optional[str] = None,
    package_name: Optional[str] = None,
) -> list[dict]:
    """
    Catalog documents for the words collection.

    Documents use the catalog field names (english/turkish/frequency_group)
    and carry added_at so the supply keeps insertion order.
    """
    now = datetime.now(timezone.utc)
    docs = []
    for offset, word in enumerate(words):
        doc = {
            "word_id": word.id,
            "english": word.source,
            "turkish": word.target,
            "frequency_group": word.level,
            # microsecond offsets keep file order within one import
            "added_at": now + timedelta(microseconds=offset),
        }
        if learner_id:
            doc["user_id"] = learner_id
        if package_name:
            doc["package_name"] = package_name
        docs.append(doc)
    return docs
