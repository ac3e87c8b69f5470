from typing import Optional

from sqlalchemy.orm import Session

from . import models


def get_slot(db: Session, key: str):
    return db.query(models.Slot).filter(models.Slot.key == key).first()


def read_slot(db: Session, key: str) -> Optional[str]:
    db_slot = get_slot(db, key)
    if not db_slot:
        return None
    return db_slot.value


def write_slot(db: Session, key: str, value: str):
    db_slot = get_slot(db, key)
    if db_slot:
        db_slot.value = value
    else:
        db_slot = models.Slot(key=key, value=value)
    db.add(db_slot)
    db.commit()
    db.refresh(db_slot)
    return db_slot


def delete_slot(db: Session, key: str):
    db_slot = get_slot(db, key)
    if not db_slot:
        return False
    db.delete(db_slot)
    db.commit()
    return True


class SlotStorage:
    """Key-value slots backed by a SQLAlchemy session factory.

    Each call opens its own session and closes it before returning, so a
    failed write never leaves a half-committed value behind.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def read(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            return read_slot(db, key)
        finally:
            db.close()

    def write(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            write_slot(db, key, value)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def clear(self, key: str) -> bool:
        db = self.session_factory()
        try:
            return delete_slot(db, key)
        finally:
            db.close()
