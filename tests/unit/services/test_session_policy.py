from types import SimpleNamespace

from clinic_auth.app.services.session_policy import SessionPolicy
from clinic_auth.domain.entities import Role, SessionType


def test_defaults():
    policy = SessionPolicy()

    assert policy.default_ttl_hours == 24
    assert policy.remember_me_ttl_hours == 168
    assert policy.patient_ttl_hours == 72
    assert policy.impersonation_ttl_hours == 2
    assert policy.max_extend_hours == 720


def test_login_ttl_selection():
    policy = SessionPolicy()

    assert policy.login_ttl_hours(SessionType.patient_portal, remember_me=True) == 72
    assert policy.login_ttl_hours(SessionType.staff_portal, remember_me=True) == 168
    assert policy.login_ttl_hours(SessionType.staff_portal, remember_me=False) == 24
    assert policy.login_ttl_hours(SessionType.internal, remember_me=False) == 24


def test_default_extend_hours():
    policy = SessionPolicy()

    assert policy.default_extend_hours(Role.patient) == 72
    assert policy.default_extend_hours(Role.doctor) == 24


def test_validate_password_trims_before_counting():
    policy = SessionPolicy()

    assert policy.validate_password("12345678").is_ok()
    result = policy.validate_password("  1234567  ", field="new_password")
    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert "new_password" in result.error.message


def test_from_config():
    config = SimpleNamespace(
        SESSION_TTL_HOURS=12,
        REMEMBER_ME_TTL_HOURS=48,
        PATIENT_SESSION_TTL_HOURS=6,
        IMPERSONATION_TTL_HOURS=1,
        MAX_EXTEND_HOURS=100,
        MIN_PASSWORD_LENGTH=10,
        TEMP_PASSWORD_LENGTH=16,
    )
    policy = SessionPolicy.from_config(config)

    assert policy.default_ttl_hours == 12
    assert policy.max_extend_hours == 100
    assert policy.temp_password_length == 16
