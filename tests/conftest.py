import uuid

import pytest
from jose import jwt

from hopeclub.config import settings
from hopeclub.extensions import Database
from hopeclub.models import Guardian, PointCategory, StoreItem, Student  # noqa: F401  (registers tables)


@pytest.fixture(name="database")
def database_fixture(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'hopeclub-test.db'}", busy_timeout=30)
    database.create_all()
    yield database
    database.drop_all()
    database.dispose()


@pytest.fixture(name="session")
def session_fixture(database):
    session = database.new_session()
    yield session
    session.close()


# Factories return ids assigned up front, so reading them never reopens a transaction.

@pytest.fixture(name="make_student")
def make_student_fixture(session):
    def make_student(first_name="Kai", last_name="Nguyen", **fields):
        student_id = uuid.uuid4()
        session.add(Student(id=student_id, first_name=first_name, last_name=last_name, **fields))
        session.commit()
        return student_id
    return make_student


@pytest.fixture(name="make_category")
def make_category_fixture(session):
    def make_category(name=None, min_value=-10, max_value=20, is_active=True):
        category_id = uuid.uuid4()
        session.add(PointCategory(
            id=category_id,
            name=name or f"category-{category_id.hex[:8]}",
            min_value=min_value,
            max_value=max_value,
            is_active=is_active,
        ))
        session.commit()
        return category_id
    return make_category


@pytest.fixture(name="make_item")
def make_item_fixture(session):
    def make_item(title="Snack Voucher", cost=10, stock=5, is_active=True):
        item_id = uuid.uuid4()
        session.add(StoreItem(id=item_id, title=title, cost=cost, stock=stock, is_active=is_active))
        session.commit()
        return item_id
    return make_item


@pytest.fixture(name="make_guardian")
def make_guardian_fixture(session):
    def make_guardian(*student_ids, email=None):
        guardian_id = uuid.uuid4()
        guardian = Guardian(id=guardian_id, name="Guardian", email=email or f"{guardian_id.hex[:8]}@example.com")
        guardian.students = [session.get(Student, student_id) for student_id in student_ids]
        session.add(guardian)
        session.commit()
        return guardian_id
    return make_guardian


@pytest.fixture(name="token_for")
def token_for_fixture():
    def token_for(role, actor_id=None):
        claims = {"sub": str(actor_id or uuid.uuid4()), settings.ROLE_CLAIM: role}
        return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return token_for
