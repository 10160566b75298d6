from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

ROOT_PATH = Path(__file__).resolve().parents[1]
if str(ROOT_PATH) not in sys.path:
    sys.path.insert(0, str(ROOT_PATH))

from sqlalchemy import select

from hopeclub.extensions import db
from hopeclub.models import Guardian, PointCategory, StoreItem, Student

STUDENTS = [
    {"first_name": "Kai", "last_name": "Nguyen", "grade": "6", "cohort": "Juniors", "dob": date(2014, 3, 2)},
    {"first_name": "Mia", "last_name": "Singh", "grade": "8", "cohort": "Seniors", "dob": date(2012, 9, 17)},
    {"first_name": "Noah", "last_name": "Smith", "grade": "7", "cohort": "Juniors", "dob": date(2013, 5, 30)},
]

CATEGORIES = [
    {"name": "Helping Others", "min_value": 0, "max_value": 20},
    {"name": "Homework Club", "min_value": 0, "max_value": 10},
    {"name": "Behaviour", "min_value": -10, "max_value": 5},
]

STORE_ITEMS = [
    {"title": "Snack Voucher", "cost": 10, "stock": 25},
    {"title": "Club T-Shirt", "cost": 60, "stock": 5},
    {"title": "Movie Night Ticket", "cost": 40, "stock": 10},
]


def get_or_create(session, model, defaults=None, **lookup):
    """Return (row, created); seeding twice leaves existing rows alone."""
    row = session.execute(select(model).filter_by(**lookup)).scalars().first()
    if row is not None:
        return row, False
    row = model(**lookup, **(defaults or {}))
    session.add(row)
    session.flush()
    return row, True


def seed_all(session) -> dict:
    students = []
    for row in STUDENTS:
        student, _ = get_or_create(
            session,
            Student,
            defaults={key: value for key, value in row.items() if key not in ("first_name", "last_name")},
            first_name=row["first_name"],
            last_name=row["last_name"],
        )
        students.append(student)

    guardian, _ = get_or_create(session, Guardian, defaults={"name": "Priya Singh"}, email="guardian@example.com")
    if students[1] not in guardian.students:
        guardian.students.append(students[1])

    categories = [
        get_or_create(session, PointCategory, defaults={k: v for k, v in row.items() if k != "name"}, name=row["name"])[0]
        for row in CATEGORIES
    ]
    items = [
        get_or_create(session, StoreItem, defaults={k: v for k, v in row.items() if k != "title"}, title=row["title"])[0]
        for row in STORE_ITEMS
    ]
    session.commit()
    return {"students": students, "guardian": guardian, "categories": categories, "items": items}


def main():
    try:
        db.drop_all()
        db.create_all()
        seed_all(db.session)
        print("Database seeded.")
    finally:
        db.remove_session()


if __name__ == '__main__':
    main()
