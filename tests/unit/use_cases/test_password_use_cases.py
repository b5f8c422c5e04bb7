import pytest

from clinic_auth.app.use_cases.auth import ChangePasswordUseCase, ResetPasswordUseCase
from clinic_auth.domain.entities import Role
from tests.unit.factories import make_principal, make_user
from tests.utils.clock import NOW

OLD = "old-password-1"
NEW = "new-password-2"


@pytest.mark.asyncio
async def test_change_password_revokes_other_sessions_in_one_commit(
    mock_uow, hasher, policy, clock
):
    user = make_user(hasher, OLD)
    principal = make_principal(user_id=user.id)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.sessions.revoke_all_except_session.return_value = 2

    result = await ChangePasswordUseCase(mock_uow, hasher, policy, clock).execute(
        principal, OLD, NEW
    )

    assert result.is_ok()
    assert result.value.revoked_count == 2

    user_id, new_hash = mock_uow.users.update_password_hash.call_args.args
    assert user_id == user.id
    assert hasher.verify_password(NEW, new_hash)
    assert not hasher.verify_password(OLD, new_hash)
    mock_uow.sessions.revoke_all_except_session.assert_called_once_with(
        user.id, principal.session_id, NOW
    )
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_change_password_wrong_old_password(mock_uow, hasher, policy, clock):
    user = make_user(hasher, OLD)
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow, hasher, policy, clock).execute(
        make_principal(user_id=user.id), "not-it-at-all", NEW
    )

    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.users.update_password_hash.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("old, new", [("", NEW), (OLD, "   "), (OLD, "short")])
async def test_change_password_validation(mock_uow, hasher, policy, clock, old, new):
    result = await ChangePasswordUseCase(mock_uow, hasher, policy, clock).execute(
        make_principal(), old, new
    )

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_change_password_for_disabled_account(mock_uow, hasher, policy, clock):
    user = make_user(hasher, OLD, is_active=False)
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow, hasher, policy, clock).execute(
        make_principal(user_id=user.id), OLD, NEW
    )

    assert result.error.code == "SESSION_EXPIRED"


@pytest.mark.asyncio
async def test_reset_password_requires_admin_or_manager(mock_uow, hasher, policy, clock):
    result = await ResetPasswordUseCase(mock_uow, hasher, policy, clock).execute(
        make_principal(role=Role.receptionist.value), "drsmith", NEW
    )

    assert result.error.code == "FORBIDDEN"
    mock_uow.users.get_by_username.assert_not_called()


@pytest.mark.asyncio
async def test_reset_password_with_explicit_password_revokes_all(
    mock_uow, hasher, policy, clock
):
    user = make_user(hasher, OLD)
    mock_uow.users.get_by_username.return_value = user
    mock_uow.sessions.revoke_all_by_user_id.return_value = 4

    result = await ResetPasswordUseCase(mock_uow, hasher, policy, clock).execute(
        make_principal(role=Role.manager.value), "drsmith", NEW
    )

    assert result.is_ok()
    assert result.value.revoked_count == 4
    assert result.value.temporary_password is None
    _, new_hash = mock_uow.users.update_password_hash.call_args.args
    assert hasher.verify_password(NEW, new_hash)
    mock_uow.sessions.revoke_all_by_user_id.assert_called_once_with(user.id, NOW)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_reset_password_stores_trimmed_password(mock_uow, hasher, policy, clock):
    mock_uow.users.get_by_username.return_value = make_user(hasher, OLD)

    result = await ResetPasswordUseCase(mock_uow, hasher, policy, clock).execute(
        make_principal(role=Role.admin.value), "drsmith", f"  {NEW}  "
    )

    assert result.is_ok()
    _, new_hash = mock_uow.users.update_password_hash.call_args.args
    assert hasher.verify_password(NEW, new_hash)
    assert not hasher.verify_password(f"  {NEW}  ", new_hash)


@pytest.mark.asyncio
@pytest.mark.parametrize("new_password", [None, "", "   "])
async def test_reset_password_generates_temporary_password(
    mock_uow, hasher, policy, clock, new_password
):
    mock_uow.users.get_by_username.return_value = make_user(hasher, OLD)

    result = await ResetPasswordUseCase(mock_uow, hasher, policy, clock).execute(
        make_principal(role=Role.admin.value), "drsmith", new_password
    )

    temp = result.value.temporary_password
    assert temp is not None and len(temp) == 20
    _, new_hash = mock_uow.users.update_password_hash.call_args.args
    assert hasher.verify_password(temp, new_hash)
    assert new_hash != hasher.hash_token(temp)


@pytest.mark.asyncio
async def test_reset_password_weak_explicit_password(mock_uow, hasher, policy, clock):
    result = await ResetPasswordUseCase(mock_uow, hasher, policy, clock).execute(
        make_principal(role=Role.admin.value), "drsmith", "abc"
    )

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_reset_password_unknown_user(mock_uow, hasher, policy, clock):
    mock_uow.users.get_by_username.return_value = None

    result = await ResetPasswordUseCase(mock_uow, hasher, policy, clock).execute(
        make_principal(role=Role.admin.value), "ghost", NEW
    )

    assert result.error.code == "NOT_FOUND"


@pytest.mark.asyncio
async def test_reset_password_blank_username(mock_uow, hasher, policy, clock):
    result = await ResetPasswordUseCase(mock_uow, hasher, policy, clock).execute(
        make_principal(role=Role.admin.value), "  ", NEW
    )

    assert result.error.code == "VALIDATION_ERROR"
