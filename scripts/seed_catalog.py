"""Seed the deed catalog with starter templates."""

from app import create_app
from models import db
from models.deed_catalog import DeedCatalogEntry

CATALOG = [
    {
        "title": "Neighborhood cleanup",
        "description": "Pick up litter along a street, park, or shoreline.",
        "impact": "Cleaner shared spaces",
        "duration": "1-2 hours",
    },
    {
        "title": "Food bank shift",
        "description": "Sort, pack, or hand out groceries at a local food bank.",
        "impact": "Meals for families in need",
        "duration": "2-4 hours",
    },
    {
        "title": "Check in on a neighbor",
        "description": "Visit or call an elderly or isolated neighbor.",
        "impact": "Reduced isolation",
        "duration": "30 minutes",
    },
    {
        "title": "Tutor a student",
        "description": "Help a student with homework or reading practice.",
        "impact": "Stronger learning outcomes",
        "duration": "1 hour",
    },
    {
        "title": "Donate blood",
        "description": "Give blood at a local drive or donation center.",
        "impact": "Up to three lives helped",
        "duration": "1 hour",
    },
    {
        "title": "Plant a tree",
        "description": "Plant and water a tree with a local greening program.",
        "impact": "Shade and cleaner air",
        "duration": "1-3 hours",
    },
]


def get_or_create_entry(data: dict) -> tuple[DeedCatalogEntry, bool]:
    entry = DeedCatalogEntry.query.filter_by(title=data["title"]).first()
    if entry is not None:
        return entry, False
    entry = DeedCatalogEntry(**data)
    db.session.add(entry)
    return entry, True


def main() -> None:
    app = create_app()
    with app.app_context():
        created = 0
        for data in CATALOG:
            _, was_created = get_or_create_entry(data)
            created += int(was_created)
        db.session.commit()
        print(f"Deed catalog seeded: {created} new, {len(CATALOG) - created} existing")


if __name__ == "__main__":
    main()
