from uuid import uuid4

import pytest

from clinic_auth.domain import roles
from clinic_auth.domain.entities import Principal, Role

PATIENT, ADMIN, MANAGER, DOCTOR, RECEPTIONIST = 0, 1, 2, 3, 4


@pytest.mark.parametrize(
    "predicate, allowed",
    [
        (roles.is_patient, {PATIENT}),
        (roles.is_admin, {ADMIN}),
        (roles.is_manager, {MANAGER}),
        (roles.is_doctor, {DOCTOR}),
        (roles.is_receptionist, {RECEPTIONIST}),
        (roles.is_staff, {ADMIN, MANAGER, DOCTOR, RECEPTIONIST}),
        (roles.is_privileged, {ADMIN, MANAGER}),
        (roles.can_manage_users, {ADMIN, MANAGER}),
        (roles.can_reset_passwords, {ADMIN, MANAGER}),
        (roles.can_impersonate, {ADMIN}),
        (roles.can_manage_scheduling, {ADMIN, MANAGER, RECEPTIONIST}),
        (roles.can_create_tasks, {ADMIN, MANAGER, RECEPTIONIST, DOCTOR}),
    ],
)
def test_predicates_over_taxonomy(predicate, allowed):
    for role in range(5):
        assert predicate(role) is (role in allowed)


def test_predicates_accept_principal_and_enum():
    principal = Principal(user_id=uuid4(), role=ADMIN, session_id=uuid4())

    assert roles.is_admin(principal)
    assert roles.is_doctor(Role.doctor)
    assert not roles.is_staff(99)


def test_role_name():
    assert roles.role_name(DOCTOR) == "doctor"
    assert roles.role_name(Role.receptionist) == "receptionist"
    assert roles.role_name(42) == "unknown"


def test_validate_role():
    assert roles.validate_role(2).value == Role.manager

    result = roles.validate_role(5)
    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
