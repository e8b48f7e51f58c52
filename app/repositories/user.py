from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.user import Role, User, user_role


def find_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def find_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.user_id == user_id).first()


def find_role_by_name(db: Session, name: str) -> Optional[Role]:
    return db.query(Role).filter(Role.name == name).first()


def role_names(db: Session, user_id: int) -> List[str]:
    rows = db.query(Role.name).join(user_role, user_role.c.role_id == Role.role_id).filter(
        user_role.c.user_id == user_id
    ).order_by(Role.name).all()
    return [name for (name,) in rows]


def assign_role(db: Session, user: User, role: Role) -> None:
    db.execute(user_role.insert().values(user_id=user.user_id, role_id=role.role_id))


def ensure_role(db: Session, name: str) -> Role:
    """Create the role if it does not exist yet."""
    role = find_role_by_name(db, name)
    if role is None:
        role = Role(name=name)
        db.add(role)
        db.commit()
        db.refresh(role)
    return role
