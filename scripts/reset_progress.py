"""
Reset all stored learning progress.

DANGEROUS: This deletes every star rating and resumable session, both in the
remote progress tables and in the local cache file.

Usage:
    python -m scripts.reset_progress
"""

from core import config
from core.constants import PROGRESS_CACHE_KEY, SESSION_CACHE_KEY
from core.progress import SqliteLocalCache, get_database_url, reset_db


def main():
    print("=" * 60)
    print("WARNING: Reset Learning Progress")
    print("=" * 60)
    print()
    print("This will DELETE:")
    print("  - All star ratings (remote and local)")
    print("  - All resumable sessions (remote and local)")
    print()

    response = input("Are you sure you want to reset? (type 'yes' to confirm): ")

    if response.lower() != "yes":
        print("\nCancelled. No changes made.")
        return

    if get_database_url():
        print("\nResetting remote progress tables...")
        reset_db()
    else:
        print("\nDATABASE_URL not set, skipping remote progress")

    cache = SqliteLocalCache(config.get_local_cache_path())
    cache.delete(PROGRESS_CACHE_KEY)
    cache.delete(SESSION_CACHE_KEY)
    print("✓ Progress reset complete!")


if __name__ == "__main__":
    main()
