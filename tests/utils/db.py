from sqlmodel import select

from clinic_auth.domain.entities import Session, User


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def fetch_session(db_session, session_id) -> Session:
    """Current row state, bypassing the identity map"""
    stmt = (
        select(Session)
        .where(Session.id == session_id)
        .execution_options(populate_existing=True)
    )
    result = await db_session.exec(stmt)
    return result.one()


async def fetch_user(db_session, user_id) -> User:
    stmt = select(User).where(User.id == user_id).execution_options(populate_existing=True)
    result = await db_session.exec(stmt)
    return result.one()
