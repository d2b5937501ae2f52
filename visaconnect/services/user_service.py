from typing import Optional
from sqlmodel import Session, select

from visaconnect.models.enums import UserRole
from visaconnect.models.user import User
from visaconnect.schemas.user import PosterOut, UserOut, UserUpdate


def to_user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        is_active=user.is_active,
        role=user.role,
    )


def to_poster_out(user: User) -> PosterOut:
    return PosterOut(id=user.id, first_name=user.first_name, last_name=user.last_name, email=user.email)


def get_user(session: Session, user_id: str) -> Optional[User]:
    return session.exec(select(User).where(User.id == user_id)).first()


def list_admins(session: Session) -> list[User]:
    statement = select(User).where((User.role == UserRole.ADMIN) & (User.is_active.is_(True)))
    return list(session.exec(statement).all())


def update_user(session: Session, user: User, payload: UserUpdate) -> User:
    data = payload.model_dump(exclude_unset=True)
    email = data.pop('email', None)
    if email is not None and email != user.email:
        existing = session.exec(select(User).where(User.email == email)).first()
        if existing and existing.id != user.id:
            raise ValueError('Email already registered')
        user.email = email
    for key, value in data.items():
        setattr(user, key, value)

    session.add(user)
    session.commit()
    session.refresh(user)
    return user
