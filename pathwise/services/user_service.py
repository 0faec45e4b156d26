from typing import Optional
from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from pathwise.core.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    StorageUnavailableError,
)
from pathwise.core.security import dummy_verify, get_password_hash, verify_password
from pathwise.models.user import User
from pathwise.schemas.user import (
    CredentialAttempt,
    FederatedAttempt,
    Identity,
    PasswordAttempt,
    UserCreate,
)


class UserService:
    @staticmethod
    async def get_user(db: Session, user_id: str) -> Optional[User]:
        """Get user by ID."""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    async def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email."""
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    async def register(db: Session, user_in: UserCreate) -> Identity:
        """Create a password account.

        The unique index on ``users.email`` is the only duplicate check, so two
        racing registrations for one email yield one row and one ConflictError.
        """
        db_user = User(
            email=user_in.email,
            name=user_in.name,
            hashed_password=get_password_hash(user_in.password),
            interests=[],
        )
        db.add(db_user)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.info("Registration rejected, email already in use")
            raise ConflictError() from e
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageUnavailableError() from e
        db.refresh(db_user)
        logger.info(f"Registered user {db_user.id}")
        return Identity.model_validate(db_user)

    @staticmethod
    async def authenticate(db: Session, email: str, password: str) -> Identity:
        """Authenticate a password attempt.

        Unknown email, Google-only account and wrong password all raise the same
        InvalidCredentialsError.
        """
        try:
            user = await UserService.get_user_by_email(db, email)
        except SQLAlchemyError as e:
            raise StorageUnavailableError() from e

        if not user:
            dummy_verify()
            raise InvalidCredentialsError()
        if not user.hashed_password:
            dummy_verify()
            raise InvalidCredentialsError()
        if not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError()
        return Identity.model_validate(user)

    @staticmethod
    async def resolve_federated(db: Session, email: str, display_name: str = "") -> Identity:
        """Return the user for a provider-verified email, creating it on first sign-in."""
        try:
            user = await UserService.get_user_by_email(db, email)
            if user:
                return Identity.model_validate(user)

            user = User(email=email, name=display_name or "", hashed_password=None, interests=[])
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                # Another request created the same email first
                db.rollback()
                user = await UserService.get_user_by_email(db, email)
                if user is None:
                    raise StorageUnavailableError()
                return Identity.model_validate(user)
            db.refresh(user)
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageUnavailableError() from e

        logger.info(f"Created federated user {user.id}")
        return Identity.model_validate(user)

    @staticmethod
    async def resolve_identity(db: Session, attempt: CredentialAttempt) -> Identity:
        """Resolve either credential source to one canonical Identity."""
        if isinstance(attempt, PasswordAttempt):
            return await UserService.authenticate(db, attempt.email, attempt.password)
        if isinstance(attempt, FederatedAttempt):
            return await UserService.resolve_federated(db, attempt.email, attempt.display_name)
        raise TypeError(f"Unsupported credential attempt: {type(attempt).__name__}")
