import uuid

import pytest
from httpx import ASGITransport, AsyncClient

from hopeclub.dependencies import get_db
from hopeclub.main import app
from hopeclub.services import award_points

STAFF_ID = uuid.UUID("00000000-0000-0000-0000-0000000000ee")


@pytest.fixture(name="client")
def client_fixture(session):
    def get_db_override():
        yield session

    app.dependency_overrides[get_db] = get_db_override
    client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="staff_headers")
def staff_headers_fixture(token_for):
    return {"Authorization": f"Bearer {token_for('staff', STAFF_ID)}"}


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_staff_awards_points(client, staff_headers, make_student, make_category):
    student_id = make_student()
    category_id = make_category()

    response = await client.post(
        "/rpc/award_points",
        json={"student_id": str(student_id), "category_id": str(category_id), "amount": 15, "note": " kind "},
        headers=staff_headers,
    )

    assert response.status_code == 201
    assert uuid.UUID(response.json()["event_id"])
    balance = await client.get(f"/students/{student_id}/balance", headers=staff_headers)
    assert balance.json() == {"student_id": str(student_id), "balance": 15}


@pytest.mark.asyncio
async def test_out_of_range_award_is_a_validation_error(client, staff_headers, make_student, make_category):
    student_id = make_student()
    category_id = make_category(min_value=-10, max_value=20)

    response = await client.post(
        "/rpc/award_points",
        json={"student_id": str(student_id), "category_id": str(category_id), "amount": 25},
        headers=staff_headers,
    )

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "AMOUNT_OUT_OF_RANGE"
    assert body["details"] == {"amount": 25, "min_value": -10, "max_value": 20}


@pytest.mark.asyncio
async def test_inactive_category_is_rejected(client, staff_headers, make_student, make_category):
    response = await client.post(
        "/rpc/award_points",
        json={"student_id": str(make_student()), "category_id": str(make_category(is_active=False)), "amount": 1},
        headers=staff_headers,
    )

    assert response.status_code == 409
    assert response.json()["error"] == "CATEGORY_INACTIVE"


@pytest.mark.asyncio
async def test_unknown_student_wins_over_inactive_category(client, staff_headers, make_category):
    response = await client.post(
        "/rpc/award_points",
        json={"student_id": str(uuid.uuid4()), "category_id": str(make_category(is_active=False)), "amount": 1},
        headers=staff_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"] == "STUDENT_NOT_FOUND"


@pytest.mark.asyncio
async def test_anonymous_cannot_award(client, make_student, make_category):
    response = await client.post(
        "/rpc/award_points",
        json={"student_id": str(make_student()), "category_id": str(make_category()), "amount": 1},
    )

    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"


@pytest.mark.asyncio
async def test_redeem_and_out_of_stock(client, staff_headers, session, make_student, make_category, make_item):
    student_id = make_student()
    award_points(session, student_id, make_category(), 20, None, STAFF_ID)
    item_id = make_item(cost=5, stock=1)
    payload = {"student_id": str(student_id), "item_id": str(item_id)}

    first = await client.post("/rpc/redeem_item", json=payload, headers=staff_headers)
    second = await client.post("/rpc/redeem_item", json=payload, headers=staff_headers)

    assert first.status_code == 201
    assert "redemption_id" in first.json()
    assert second.status_code == 409
    assert second.json()["error"] == "OUT_OF_STOCK"


@pytest.mark.asyncio
async def test_unknown_item_is_not_found(client, staff_headers, make_student):
    response = await client.post(
        "/rpc/redeem_item",
        json={"student_id": str(make_student()), "item_id": str(uuid.uuid4())},
        headers=staff_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"] == "ITEM_NOT_FOUND"


@pytest.mark.asyncio
async def test_guardian_reads_linked_student_only(client, token_for, make_student, make_guardian):
    mia = make_student("Mia")
    kai = make_student("Kai")
    guardian_id = make_guardian(mia)
    headers = {"Authorization": f"Bearer {token_for('guardian', guardian_id)}"}

    allowed = await client.get(f"/students/{mia}/balance", headers=headers)
    denied = await client.get(f"/students/{kai}/balance", headers=headers)

    assert allowed.status_code == 200
    assert denied.status_code == 403


@pytest.mark.asyncio
async def test_student_reads_own_calendar_from_cookie(client, token_for, make_student):
    student_id = make_student()
    client.cookies.set("access_token", token_for("student", student_id))

    response = await client.get(
        f"/students/{student_id}/calendar", params={"start": "2025-01-01", "end": "2025-01-02"}
    )

    assert response.status_code == 200
    assert response.json() == [{"day": "2025-01-01", "total": 0}, {"day": "2025-01-02", "total": 0}]


@pytest.mark.asyncio
async def test_activity_feed_and_audit(client, token_for, staff_headers, make_student):
    student_id = make_student()
    logged = await client.post(
        "/rpc/log_incident",
        json={"student_id": str(student_id), "category": "conduct", "severity": "low"},
        headers=staff_headers,
    )
    assert logged.status_code == 201

    feed = await client.get("/activity", params={"limit": 5}, headers=staff_headers)
    assert feed.status_code == 200
    [entry] = feed.json()
    assert entry["type"] == "incident"
    assert entry["payload"]["id"] == logged.json()["incident_id"]

    staff_audit = await client.get("/audit", headers=staff_headers)
    assert staff_audit.status_code == 403
    admin_audit = await client.get("/audit", headers={"Authorization": f"Bearer {token_for('admin')}"})
    assert [row["action"] for row in admin_audit.json()] == ["log_incident"]


@pytest.mark.asyncio
async def test_catalog_is_public(client, make_item):
    make_item(title="Sticker")
    make_item(title="Retired Hat", is_active=False)

    response = await client.get("/store/items")

    assert response.status_code == 200
    assert [item["title"] for item in response.json()] == ["Sticker"]
