from sqlalchemy import select, func
from sqlalchemy.orm import Session
from ..models import User

def list_users(db: Session) -> list[User]:
    return list(db.execute(select(User).order_by(User.id)).scalars())

def seed_users(db: Session, names: list[str]) -> int:
    """Insert `names` when the users table is empty. Returns rows added."""
    count = db.execute(select(func.count(User.id))).scalar_one()
    if count:
        return 0
    for name in names:
        db.add(User(name=name))
    db.flush()
    return len(names)
