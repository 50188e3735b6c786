"""User account storage."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fleamarket.errors import DuplicateAccountError
from fleamarket.models.user import User

logger = logging.getLogger(__name__)


class AccountDirectory:
    """Owns user records in the relational store."""

    def __init__(self, db: Session):
        self.db = db

    def exists(self, email: str) -> bool:
        """Check whether an account is registered under this email."""
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def create(self, email: str, password_hash: str) -> User:
        """Insert a new user.

        Uniqueness is left to the store's constraint rather than checked
        first, so two concurrent signups cannot both succeed.
        """
        user = User(email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateAccountError() from e
        self.db.refresh(user)
        return user

    def find_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> User | None:
        """Get a user by id."""
        return self.db.get(User, user_id)
