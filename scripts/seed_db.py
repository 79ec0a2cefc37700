"""Seed script for the bitácora entry store.

Creates a handful of sample entries through the configured persistence adapter
so local UIs and API calls have data to read.
"""

from __future__ import annotations

import argparse
from datetime import datetime, timedelta, timezone
from typing import List

from backend.app.config import load_settings
from backend.app.domain.catalog import Category
from backend.app.domain.entrystore import EntryDraft, EntryStore, build_persistence_adapter
from backend.app.infra.logging import configure_logging


def build_seed_drafts(now: datetime) -> List[EntryDraft]:
    """Return static seed drafts dated relative to ``now``."""

    return [
        EntryDraft(
            date=now,
            title="Weekly coordination",
            description="Agenda review with the culture team leads.",
            owner="Isabella",
            category=Category.MEETING,
        ),
        EntryDraft(
            date=now - timedelta(days=1),
            title="Festival invitations",
            description="Sent invitations to the partner cultural groups.",
            owner="Marcos",
            category=Category.MAIL,
        ),
        EntryDraft(
            date=now - timedelta(days=3),
            title="Dance group rehearsal",
            description="Supported the folk dance group rehearsal logistics.",
            owner="Isabella",
            category=Category.CULTURAL_GROUPS,
        ),
        EntryDraft(
            date=now - timedelta(days=12),
            title="Monthly report",
            description="Compiled attendance figures for the monthly report.",
            owner="Natalia",
            category=Category.REPORT,
        ),
        EntryDraft(
            date=now - timedelta(days=40),
            title="Open-air concert",
            description="Coordinated stage and sound for the open-air concert.",
            owner="Juan Pablo",
            category=Category.EVENT,
        ),
    ]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--complete-first",
        type=int,
        default=2,
        help="Mark the first N seeded entries as completed.",
    )
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings.logging)
    store = EntryStore.open(build_persistence_adapter(settings))
    created = [
        store.create(draft) for draft in build_seed_drafts(datetime.now(timezone.utc))
    ]
    for entry in created[: max(args.complete_first, 0)]:
        store.toggle_complete(entry.entry_id)
    store.close()
    print(f"Seeded {len(created)} entries via {store.adapter.name} adapter")


if __name__ == "__main__":
    main()
