"""Account service: registration, login and profile maintenance.

Passwords are stored as salted PBKDF2 hashes through passlib; credential
fields never leave this module in a public view.
"""

import structlog
from passlib.context import CryptContext
from protean.exceptions import ValidationError

from identity.user.user import CREDENTIAL_FIELDS, PROFILE_FIELDS, User
from shared.store import EntityStore

logger = structlog.get_logger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def public_view(user: User) -> dict:
    """Serialisable user fields with every credential field removed."""
    return user.model_dump(mode="json", exclude=set(CREDENTIAL_FIELDS))


class AccountService:
    def __init__(self, store: EntityStore):
        self.store = store

    def find_by_username(self, username: str) -> User | None:
        return next(self.store.list(User, lambda user: user.username == username), None)

    def register(self, username: str, password: str, **profile) -> User:
        if not username or not username.strip():
            raise ValidationError({"username": ["Username is required"]})
        if not password:
            raise ValidationError({"password": ["Password is required"]})

        unknown = set(profile) - set(PROFILE_FIELDS)
        if unknown:
            raise ValidationError({field: ["Unknown profile field"] for field in sorted(unknown)})

        password_hash = hash_password(password)

        with self.store.transaction():
            if self.find_by_username(username) is not None:
                raise ValidationError({"username": ["Username already exists"]})

            user = self.store.create(
                User,
                username=username,
                password_hash=password_hash,
                **profile,
            )

        logger.info("User registered", user_id=user.id, username=user.username)
        return user

    def authenticate(self, username: str, password: str) -> User | None:
        """Return the user when the password matches its stored hash."""
        user = self.find_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login rejected", username=username)
            return None
        return user

    def get_profile(self, user_id: int) -> User | None:
        return self.store.get(User, user_id)

    def update_profile(self, user_id: int, **fields) -> User | None:
        """Update profile fields. Username and credentials are not editable here."""
        forbidden = set(fields) - set(PROFILE_FIELDS)
        if forbidden:
            raise ValidationError({field: ["Field cannot be updated"] for field in sorted(forbidden)})

        user = self.store.update(User, user_id, **fields)
        if user is not None:
            logger.info("Profile updated", user_id=user_id, fields=sorted(fields))
        return user
