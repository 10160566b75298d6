import uuid

import pytest

from hopeclub.policy import CapabilityPolicy, Identity, Operation, Role, guardian_links
from hopeclub.security import decode_identity

STUDENT_ID = uuid.uuid4()
OTHER_STUDENT_ID = uuid.uuid4()
GUARDIAN_ID = uuid.uuid4()


@pytest.fixture(name="policy")
def policy_fixture():
    links = {GUARDIAN_ID: {STUDENT_ID}}
    return CapabilityPolicy(linked_students=lambda guardian_id: links.get(guardian_id, set()))


@pytest.mark.parametrize("operation", list(Operation))
def test_admin_can_do_everything(policy, operation):
    assert policy.can_perform(Identity(uuid.uuid4(), Role.ADMIN), operation, STUDENT_ID)


@pytest.mark.parametrize(
    "operation, allowed",
    [
        (Operation.AWARD_POINTS, True),
        (Operation.REDEEM_ITEM, True),
        (Operation.LOG_INCIDENT, True),
        (Operation.VIEW_ACTIVITY, True),
        (Operation.MANAGE_STORE, True),
        (Operation.VIEW_AUDIT, False),
        (Operation.MANAGE_CATEGORIES, False),
    ],
)
def test_staff_capabilities(policy, operation, allowed):
    assert policy.can_perform(Identity(uuid.uuid4(), Role.STAFF), operation) is allowed


def test_guardian_sees_only_linked_students(policy):
    guardian = Identity(GUARDIAN_ID, Role.GUARDIAN)

    assert policy.can_perform(guardian, Operation.VIEW_BALANCE, STUDENT_ID)
    assert policy.can_perform(guardian, Operation.VIEW_CALENDAR, STUDENT_ID)
    assert not policy.can_perform(guardian, Operation.VIEW_BALANCE, OTHER_STUDENT_ID)
    assert not policy.can_perform(guardian, Operation.VIEW_BALANCE)
    assert not policy.can_perform(guardian, Operation.AWARD_POINTS, STUDENT_ID)


def test_student_sees_only_self(policy):
    student = Identity(STUDENT_ID, Role.STUDENT)

    assert policy.can_perform(student, Operation.VIEW_BALANCE, STUDENT_ID)
    assert not policy.can_perform(student, Operation.VIEW_BALANCE, OTHER_STUDENT_ID)
    assert not policy.can_perform(student, Operation.REDEEM_ITEM, STUDENT_ID)
    assert not policy.can_perform(student, Operation.VIEW_ACTIVITY)


def test_anonymous_only_browses_catalog(policy):
    anonymous = Identity.anonymous()

    assert policy.can_perform(anonymous, Operation.VIEW_CATALOG)
    assert not any(
        policy.can_perform(anonymous, operation, STUDENT_ID)
        for operation in Operation
        if operation is not Operation.VIEW_CATALOG
    )


def test_guardian_without_link_lookup_is_denied():
    policy = CapabilityPolicy()
    assert not policy.can_perform(Identity(GUARDIAN_ID, Role.GUARDIAN), Operation.VIEW_BALANCE, STUDENT_ID)


def test_guardian_links_reads_join_table(session, make_student, make_guardian):
    kai = make_student("Kai")
    mia = make_student("Mia")
    guardian_id = make_guardian(mia)

    assert set(guardian_links(session)(guardian_id)) == {mia}
    assert kai not in set(guardian_links(session)(guardian_id))


def test_role_parse_falls_back_to_anonymous():
    assert Role.parse("Staff") is Role.STAFF
    assert Role.parse("superuser") is Role.ANONYMOUS
    assert Role.parse(None) is Role.ANONYMOUS


def test_decode_identity(token_for):
    actor_id = uuid.uuid4()

    identity = decode_identity(token_for("guardian", actor_id))

    assert identity == Identity(actor_id, Role.GUARDIAN)


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_decode_identity_rejects_garbage(token):
    assert decode_identity(token) == Identity.anonymous()
