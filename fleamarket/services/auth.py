"""Signup, login and session resolution."""

import logging

from fleamarket.errors import InvalidCredentialsError, InvalidTokenError
from fleamarket.models.user import User
from fleamarket.services.accounts import AccountDirectory
from fleamarket.services.passwords import PasswordHasher
from fleamarket.services.tokens import TokenCodec

logger = logging.getLogger(__name__)


class AuthService:
    """Service composing password hashing, token signing and account storage."""

    def __init__(self, accounts: AccountDirectory, hasher: PasswordHasher, tokens: TokenCodec):
        self.accounts = accounts
        self.hasher = hasher
        self.tokens = tokens

    def signup(self, email: str, password: str) -> User:
        """Register a new account.

        Raises DuplicateAccountError if the email is taken and HashingError
        if the password could not be hashed.
        """
        password_hash = self.hasher.hash(password)
        user = self.accounts.create(email, password_hash)
        logger.info(f"Created user {user.id}")
        return user

    def login(self, email: str, password: str) -> str:
        """Check credentials and issue a session token.

        An unknown email and a wrong password raise the same
        InvalidCredentialsError, and both paths run one bcrypt verify.
        """
        user = self.accounts.find_by_email(email)
        if user is None:
            self.hasher.verify_dummy(password)
            logger.debug("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not self.hasher.verify(password, user.password_hash):
            logger.debug(f"Login failed: wrong password for user {user.id}")
            raise InvalidCredentialsError()

        logger.info(f"User {user.id} logged in")
        return self.tokens.issue(user.id, user.email)

    def resolve_from_token(self, token: str) -> User:
        """Return the user a token was issued to."""
        try:
            claims = self.tokens.verify(token)
        except InvalidTokenError:
            raise InvalidCredentialsError() from None

        user = self.accounts.find_by_id(claims.user_id)
        if user is None:
            logger.debug(f"Token subject {claims.user_id} no longer exists")
            raise InvalidCredentialsError()
        return user
