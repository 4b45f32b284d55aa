"""
Import a semicolon-separated word list into the MongoDB words collection.

Usage:
    python -m scripts.import_words data/words.csv [--package NAME] [--user-id ID] [--dry-run]
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from pymongo.errors import BulkWriteError

from core import config
from core.word_import import load_word_csv, to_documents
from core.word_repo import get_collection

logger = logging.getLogger(__name__)


def import_words(
    csv_path: Path,
    package_name: Optional[str] = None,
    learner_id: Optional[str] = None,
    dry_run: bool = False,
) -> int:
    """
    Insert the words of a CSV file, skipping ids already in the collection.

    Returns:
        Number of documents inserted (or that would be, in a dry run)
    """
    words = load_word_csv(csv_path)
    print(f"Loaded {len(words)} words from {csv_path}")
    if not words:
        return 0

    collection = get_collection()
    query = {"word_id": {"$in": [w.id for w in words]}}
    if learner_id:
        query["user_id"] = learner_id
    existing = set(collection.distinct("word_id", query))
    new_words = [w for w in words if w.id not in existing]
    print(f"Already present: {len(existing)}, new: {len(new_words)}")

    if dry_run or not new_words:
        if dry_run:
            print("\n⚠ DRY RUN MODE - No changes were made to MongoDB")
        return len(new_words)

    docs = to_documents(new_words, learner_id=learner_id, package_name=package_name)
    try:
        result = collection.insert_many(docs, ordered=False)
    except BulkWriteError as e:
        inserted = e.details.get("nInserted", 0)
        logger.warning("Bulk insert partially failed: %s", e.details.get("writeErrors"))
        print(f"✓ Inserted {inserted} words ({len(docs) - inserted} failed)")
        return inserted

    print(f"✓ Inserted {len(result.inserted_ids)} words")
    return len(result.inserted_ids)


def main():
    parser = argparse.ArgumentParser(description="Import a word list CSV to MongoDB")
    parser.add_argument("csv_path", type=Path, help="Semicolon-separated file (id;english;turkish;level)")
    parser.add_argument("--package", help="Package name stored on every imported word")
    parser.add_argument(
        "--user-id",
        help="Learner the words belong to (default: LEARNER_ID)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Don't actually insert to MongoDB"
    )

    args = parser.parse_args()
    logging.basicConfig(level=config.get_log_level())

    import_words(
        args.csv_path,
        package_name=args.package,
        learner_id=config.get_learner_id(args.user_id),
        dry_run=args.dry_run,
    )


if __name__ == "__main__":
    main()
