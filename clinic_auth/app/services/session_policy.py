from dataclasses import dataclass

from clinic_auth.domain.entities import Role, SessionType
from clinic_auth.libs.result import Error, Result, Return


@dataclass(frozen=True)
class SessionPolicy:
    """
    Lifetime and password rules handed to the session use cases.

    Built once from ApplicationConfig; use cases never read config directly.
    """

    default_ttl_hours: int = 24
    remember_me_ttl_hours: int = 24 * 7
    patient_ttl_hours: int = 24 * 3
    impersonation_ttl_hours: int = 2
    max_extend_hours: int = 24 * 30
    min_password_length: int = 8
    temp_password_length: int = 20

    @classmethod
    def from_config(cls, config) -> "SessionPolicy":
        return cls(
            default_ttl_hours=config.SESSION_TTL_HOURS,
            remember_me_ttl_hours=config.REMEMBER_ME_TTL_HOURS,
            patient_ttl_hours=config.PATIENT_SESSION_TTL_HOURS,
            impersonation_ttl_hours=config.IMPERSONATION_TTL_HOURS,
            max_extend_hours=config.MAX_EXTEND_HOURS,
            min_password_length=config.MIN_PASSWORD_LENGTH,
            temp_password_length=config.TEMP_PASSWORD_LENGTH,
        )

    def validate_password(self, password: str, field: str = "password") -> Result[None]:
        if len(password.strip()) < self.min_password_length:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"{field} must be at least {self.min_password_length} characters",
                )
            )
        return Return.ok(None)

    def login_ttl_hours(self, session_type: int, remember_me: bool) -> int:
        if session_type == SessionType.patient_portal:
            return self.patient_ttl_hours
        if remember_me:
            return self.remember_me_ttl_hours
        return self.default_ttl_hours

    def default_extend_hours(self, role: int) -> int:
        if role == Role.patient:
            return self.patient_ttl_hours
        return self.default_ttl_hours
