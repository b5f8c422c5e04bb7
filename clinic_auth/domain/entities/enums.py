"""
Clinic Auth Domain Enums

Enumeration types stored as small integers on the account and session rows.
"""

from enum import IntEnum


class Role(IntEnum):
    """Account role (closed set, stored as smallint)"""

    patient = 0
    admin = 1
    manager = 2
    doctor = 3
    receptionist = 4


class SessionType(IntEnum):
    """Surface a session was issued for"""

    undefined = 0
    staff_portal = 1
    patient_portal = 2
    internal = 3
