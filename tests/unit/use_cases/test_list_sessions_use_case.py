from uuid import uuid4

import pytest

from clinic_auth.app.repositories.session_repository import SessionFilter
from clinic_auth.app.use_cases.sessions import GetSessionUseCase, ListSessionsUseCase
from clinic_auth.domain.entities import Role
from tests.unit.factories import make_principal, make_session
from tests.utils.clock import NOW


@pytest.mark.asyncio
async def test_list_returns_live_sessions_and_flags_current(mock_uow, clock):
    principal = make_principal()
    current = make_session(principal.user_id)
    current.id = principal.session_id
    other = make_session(principal.user_id)
    mock_uow.sessions.find.return_value = [current, other]

    result = await ListSessionsUseCase(mock_uow, clock).execute(principal)

    assert result.value.current_session_id == str(principal.session_id)
    assert [s.is_current for s in result.value.sessions] == [True, False]
    mock_uow.sessions.find.assert_called_once_with(
        SessionFilter(user_id=principal.user_id, live_at=NOW)
    )


@pytest.mark.asyncio
async def test_get_one_scopes_non_privileged_caller_to_own(mock_uow, clock):
    caller = make_principal(role=Role.doctor.value)
    session_id = uuid4()

    result = await GetSessionUseCase(mock_uow, clock).execute(caller, session_id)

    assert result.error.code == "NOT_FOUND"
    mock_uow.sessions.find.assert_called_once_with(
        SessionFilter(session_id=session_id, user_id=caller.user_id)
    )


@pytest.mark.asyncio
async def test_get_one_privileged_sees_revoked_session(mock_uow, clock):
    revoked = make_session(uuid4(), revoked=True)
    mock_uow.sessions.find.return_value = [revoked]

    result = await GetSessionUseCase(mock_uow, clock).execute(
        make_principal(role=Role.admin.value), revoked.id
    )

    assert result.is_ok()
    assert result.value.is_live is False
    assert result.value.revoked_at == NOW
    mock_uow.sessions.find.assert_called_once_with(SessionFilter(session_id=revoked.id))
