from typing import List, Optional
from sqlalchemy import func
from sqlmodel import Session, select, or_
from bookstore.models.user import User
from bookstore.utils.pagination import paginate


def _search_clause(term: str):
    like = f"%{term}%"
    return or_(
        User.first_name.ilike(like),
        User.last_name.ilike(like),
        User.email.ilike(like),
        User.username.ilike(like),
    )


def find_all(
    session: Session,
    *,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
):
    query = select(User)

    if search:
        query = query.where(_search_clause(search))

    query = query.order_by(User.created_at.desc(), User.id.desc())
    return paginate(session=session, query=query, page=page, limit=limit)


def find_by_id(session: Session, user_id: int) -> Optional[User]:
    return session.get(User, user_id)


def find_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email)).first()


def find_by_email_or_username(session: Session, email: str, username: str) -> Optional[User]:
    return session.exec(
        select(User).where(or_(User.email == email, User.username == username))
    ).first()


def email_exists(session: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    query = select(User.id).where(User.email == email)
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    return session.exec(query).first() is not None


def username_exists(session: Session, username: str, exclude_id: Optional[int] = None) -> bool:
    query = select(User.id).where(User.username == username)
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    return session.exec(query).first() is not None


def search_users(session: Session, term: str) -> List[User]:
    return session.exec(
        select(User).where(_search_clause(term)).order_by(User.username)
    ).all()


def get_user_stats(session: Session) -> List[dict]:
    rows = session.exec(
        select(User.role, func.count(User.id))
        .group_by(User.role)
        .order_by(User.role)
    ).all()
    return [{"role": role, "count": count} for role, count in rows]


def save(session: Session, user: User) -> User:
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def delete(session: Session, user: User):
    session.delete(user)
    session.commit()
