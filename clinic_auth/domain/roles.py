"""
Role Predicates

Pure functions over the Role taxonomy, shared by every route that needs a
role-level authorization decision. Each predicate accepts a Role, a raw
smallint, or anything with a ``role`` attribute (Principal, User).
"""

from typing import Any, Union

from clinic_auth.libs.result import Error, Result, Return

from .entities.enums import Role

RoleLike = Union[Role, int, Any]


def _role_value(subject: RoleLike) -> int:
    if isinstance(subject, int):
        return int(subject)
    return int(subject.role)


def role_name(subject: RoleLike) -> str:
    """Lowercase role name, or "unknown" outside the taxonomy"""
    try:
        return Role(_role_value(subject)).name
    except ValueError:
        return "unknown"


def validate_role(value: int) -> Result[Role]:
    try:
        return Return.ok(Role(value))
    except (ValueError, TypeError):
        return Return.err(Error("VALIDATION_ERROR", "role must be one of 0..4"))


def is_patient(subject: RoleLike) -> bool:
    return _role_value(subject) == Role.patient


def is_admin(subject: RoleLike) -> bool:
    return _role_value(subject) == Role.admin


def is_manager(subject: RoleLike) -> bool:
    return _role_value(subject) == Role.manager


def is_doctor(subject: RoleLike) -> bool:
    return _role_value(subject) == Role.doctor


def is_receptionist(subject: RoleLike) -> bool:
    return _role_value(subject) == Role.receptionist


def is_staff(subject: RoleLike) -> bool:
    return _role_value(subject) in (
        Role.admin,
        Role.manager,
        Role.doctor,
        Role.receptionist,
    )


def is_privileged(subject: RoleLike) -> bool:
    """Admin or manager: may inspect and extend any session"""
    return is_admin(subject) or is_manager(subject)


def can_manage_users(subject: RoleLike) -> bool:
    return is_privileged(subject)


def can_reset_passwords(subject: RoleLike) -> bool:
    return is_privileged(subject)


def can_impersonate(subject: RoleLike) -> bool:
    return is_admin(subject)


def can_manage_scheduling(subject: RoleLike) -> bool:
    """Appointments, waitlist and task boards"""
    return is_privileged(subject) or is_receptionist(subject)


def can_create_tasks(subject: RoleLike) -> bool:
    return can_manage_scheduling(subject) or is_doctor(subject)
