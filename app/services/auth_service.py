"""
Credential store: account registration and credential check.

Login is a bcrypt comparison against the stored hash and nothing more; no
token or session is issued. Unknown email and wrong password produce the
same AuthError so the response does not reveal which accounts exist.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import AuthError, ConflictError, ValidationError
from app.core.logging_config import logger, set_account_id
from app.core.security import get_password_hash, verify_password
from app.core.validation import missing_fields
from app.models.user import UserAccount, UserRole
from app.schemas.auth import UserRegister, UserLogin, UserPublic
from app.services.persistence import commit_or_raise

EMAIL_TAKEN = "An account with this email already exists."
BAD_CREDENTIALS = "Incorrect email or password."


class AuthService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str):
        result = await self.db.execute(
            select(UserAccount).where(UserAccount.email == email)
        )
        return result.scalar_one_or_none()

    async def register(self, data: UserRegister) -> dict:
        """Create an account and return its public view"""
        raw = data.model_dump()
        missing = missing_fields(raw, ("full_name", "email", "password", "confirm_password", "role"))
        if missing:
            raise ValidationError(
                "Please fill in all required fields.",
                violations=[{"field": name, "message": "Field required"} for name in missing],
            )

        if data.password != data.confirm_password:
            raise ValidationError("The passwords you entered do not match.", field="confirmPassword")

        if len(data.password) < settings.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Your password must be at least {settings.MIN_PASSWORD_LENGTH} characters long.",
                field="password",
            )

        try:
            role = UserRole(data.role)
        except ValueError:
            raise ValidationError(
                f"Role must be one of: {', '.join(r.value for r in UserRole)}",
                field="role",
            )

        if await self.get_by_email(data.email):
            logger.log_auth_event(
                event="register",
                success=False,
                email=data.email,
                reason="Email already registered",
            )
            raise ConflictError(EMAIL_TAKEN, field="email")

        account = UserAccount(
            full_name=data.full_name.strip(),
            email=data.email,
            role=role,
            hashed_password=get_password_hash(data.password),
        )
        self.db.add(account)
        await commit_or_raise(self.db, "register", conflict_message=EMAIL_TAKEN, conflict_field="email")
        await self.db.refresh(account)

        set_account_id(account.id)
        logger.log_auth_event(
            event="register",
            success=True,
            email=account.email,
            role=role.value,
        )
        return UserPublic.model_validate(account).to_wire()

    async def login(self, data: UserLogin) -> dict:
        """Check credentials and return the public view of the account"""
        if missing_fields(data.model_dump(), ("email", "password")):
            raise ValidationError("Please provide both email and password.")

        account = await self.get_by_email(data.email)
        if not account or not verify_password(data.password, account.hashed_password):
            logger.log_auth_event(
                event="login",
                success=False,
                email=data.email,
                reason="unknown email" if not account else "wrong password",
            )
            raise AuthError(BAD_CREDENTIALS)

        set_account_id(account.id)
        logger.log_auth_event(event="login", success=True, email=account.email, role=account.role.value)
        return UserPublic.model_validate(account).to_wire()
