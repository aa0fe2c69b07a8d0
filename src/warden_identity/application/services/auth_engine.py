"""Auth engine: the credential and token lifecycle.

Every public operation validates its input before any store access, runs
multi-step writes inside a single unit-of-work transaction, and sends email
only after that transaction has committed.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from warden_auth import InvalidTokenError, JWTService, PasswordHashingService, TokenGenerator
from warden_identity.application.config import EngineConfig
from warden_identity.application.results import (
    SignInResult,
    SignUpResult,
    TokenVerification,
    UserAccount,
    VerifyEmailResult,
)
from warden_identity.domain.time import utc_now
from warden_identity.domain.token import TokenType, UserToken
from warden_identity.domain.user import Profile, User
from warden_identity.exceptions import (
    EmailAlreadyExistsError,
    EmailNotVerifiedError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidSessionError,
    InvalidVerificationTokenError,
    PasswordResetRateLimitError,
    ResetTokenExpiredError,
    UsernameTakenError,
    UserNotFoundError,
    ValidationError,
    VerificationTokenExpiredError,
)
from warden_identity.validators import (
    EmailInput,
    OnboardingInput,
    ResetPasswordInput,
    SignInInput,
    SignUpInput,
    VerifyEmailInput,
    validate_input,
)

if TYPE_CHECKING:
    from warden_identity.infrastructure.email import EmailService
    from warden_identity.repositories import (
        UnitOfWork,
        UserCredentialRepository,
        UserProfileRepository,
        UserRepository,
        UserTokenRepository,
    )
    from warden_identity.services import RateLimiter

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
PASSWORD_RESET_ACTION = "password_reset"

MSG_VERIFICATION_SENT = "Verification email sent"
MSG_EMAIL_VERIFIED = "Email verified"
MSG_RESET_SENT = "Password reset email sent"
MSG_RESET_DONE = "Password reset successful"


class AuthEngine:
    """
    Application service for the account lifecycle.

    Orchestrates warden_auth primitives (password hashing, session tokens,
    token values) with the identity store to provide:
    - Sign-up with email verification
    - Sign-in and session verification
    - Password reset with a per-user request limit
    - Onboarding (username selection)
    """

    def __init__(  # noqa: PLR0913
        self,
        user_repository: UserRepository,
        credential_repository: UserCredentialRepository,
        profile_repository: UserProfileRepository,
        token_repository: UserTokenRepository,
        unit_of_work: UnitOfWork,
        rate_limiter: RateLimiter,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        token_generator: TokenGenerator,
        email_service: EmailService,
        config: EngineConfig | None = None,
    ):
        self._user_repo = user_repository
        self._credential_repo = credential_repository
        self._profile_repo = profile_repository
        self._token_repo = token_repository
        self._uow = unit_of_work
        self._rate_limiter = rate_limiter
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._token_generator = token_generator
        self._email_service = email_service
        self._config = config or EngineConfig()

    # -------------------------------------------------------------------------
    # Registration and verification
    # -------------------------------------------------------------------------

    async def sign_up(
        self,
        email: str,
        password: str,
        name: str | None = None,
    ) -> SignUpResult:
        data = validate_input(SignUpInput, email=email, password=password, name=name)

        if await self._user_repo.exists_by_email(data.email):
            raise EmailAlreadyExistsError(data.email)

        password_hash = self._password_service.hash(data.password)
        user = User.create(data.email, name=data.name)
        profile = Profile(user_id=user.id)
        verification = self._issue_token(
            user.id,
            TokenType.VERIFY_EMAIL,
            utc_now(),
        )

        async with self._uow.transaction():
            await self._user_repo.save(user)
            await self._credential_repo.save(user_id=user.id, password_hash=password_hash)
            await self._profile_repo.save(profile)
            await self._token_repo.create(verification)

        logger.info("User signed up: %s", user.id)
        await self._send_verification_email(user.email, verification.token)

        session_token = None
        if self._config.signup_issues_session:
            session_token = self._create_session(user)

        return SignUpResult(
            message=MSG_VERIFICATION_SENT,
            user=UserAccount.from_domain(user, profile),
            token=session_token,
        )

    async def verify_email(self, token: str) -> VerifyEmailResult:
        data = validate_input(VerifyEmailInput, token=token)

        stored = await self._token_repo.find_by_value(data.token, TokenType.VERIFY_EMAIL)
        if stored is None:
            raise InvalidVerificationTokenError
        if stored.is_expired(utc_now()):
            raise VerificationTokenExpiredError

        async with self._uow.transaction():
            if not await self._token_repo.consume(stored.id):
                # Redeemed by a concurrent request
                raise InvalidVerificationTokenError
            profile = await self._profile_repo.find_by_user_id(stored.user_id)
            profile = (profile or Profile(user_id=stored.user_id)).mark_email_verified()
            await self._profile_repo.save(profile)

        logger.info("Email verified for user: %s", stored.user_id)

        if not self._config.verify_email_issues_session:
            return VerifyEmailResult(message=MSG_EMAIL_VERIFIED)

        user = await self._user_repo.find_by_id(stored.user_id)
        if user is None:
            raise UserNotFoundError
        return VerifyEmailResult(
            message=MSG_EMAIL_VERIFIED,
            token=self._create_session(user),
            user=UserAccount.from_domain(user, profile),
        )

    async def resend_verification_email(self, email: str) -> str:
        data = validate_input(EmailInput, email=email)

        user = await self._user_repo.find_by_email(data.email)
        if user is None or await self._credential_repo.find_by_user_id(user.id) is None:
            raise UserNotFoundError

        now = utc_now()
        profile = await self._profile_repo.find_by_user_id(user.id)
        verification = None
        if profile is None or not profile.email_verified:
            verification = await self._token_repo.find_valid_for_user(
                user.id,
                TokenType.VERIFY_EMAIL,
                now,
            )

        if verification is None:
            verification = self._issue_token(user.id, TokenType.VERIFY_EMAIL, now)
            async with self._uow.transaction():
                await self._token_repo.delete_all_for_user(user.id, TokenType.VERIFY_EMAIL)
                await self._token_repo.create(verification)
            logger.debug("Issued new verification token for user: %s", user.id)

        await self._send_verification_email(user.email, verification.token)
        return MSG_VERIFICATION_SENT

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    async def sign_in(self, email: str, password: str) -> SignInResult:
        data = validate_input(SignInInput, email=email, password=password)

        user = await self._check_password(data.email, data.password)
        if user is None:
            logger.warning("Failed sign-in attempt for email: %s", data.email)
            raise InvalidCredentialsError

        profile = await self._profile_repo.find_by_user_id(user.id)
        if profile is None or not profile.email_verified:
            logger.info("Sign-in refused for unverified user: %s", user.id)
            raise EmailNotVerifiedError

        logger.info("User signed in: %s", user.id)
        return SignInResult(
            token=self._create_session(user),
            user=UserAccount.from_domain(user, profile),
        )

    def verify_token(self, token: str | None) -> TokenVerification:
        """Check a session token. Never raises."""
        if not token:
            return TokenVerification(valid=False)

        raw = token.removeprefix(BEARER_PREFIX).strip()
        if not raw:
            return TokenVerification(valid=False)

        try:
            payload = self._jwt_service.verify_token(raw)
        except InvalidTokenError as e:
            logger.debug("Session token rejected: %s", e)
            return TokenVerification(valid=False)

        return TokenVerification(valid=True, user_id=payload.user_id)

    async def validate_credentials(self, email: str, password: str) -> UserAccount | None:
        """Return the account for a matching email and password, else None."""
        try:
            data = validate_input(SignInInput, email=email, password=password)
        except ValidationError:
            return None

        user = await self._check_password(data.email, data.password)
        if user is None:
            return None

        profile = await self._profile_repo.find_by_user_id(user.id)
        return UserAccount.from_domain(user, profile)

    async def authenticate(self, token: str | None) -> UserAccount:
        """Resolve a session token to the account it was issued for.

        Raises
        ------
        InvalidSessionError
            If the token is missing, invalid or expired, or its user is gone
        """
        verification = self.verify_token(token)
        if not verification.valid or verification.user_id is None:
            raise InvalidSessionError

        try:
            return await self.get_account(verification.user_id)
        except UserNotFoundError as e:
            logger.warning("User not found for session: %s", verification.user_id)
            raise InvalidSessionError("User not found") from e

    async def get_account(self, user_id: UUID) -> UserAccount:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError

        profile = await self._profile_repo.find_by_user_id(user_id)
        return UserAccount.from_domain(user, profile)

    # -------------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------------

    async def request_password_reset(self, email: str) -> str:
        data = validate_input(EmailInput, email=email)

        user = await self._user_repo.find_by_email(data.email)
        if user is None or await self._credential_repo.find_by_user_id(user.id) is None:
            raise UserNotFoundError

        now = utc_now()
        await self._enforce_reset_limit(user.id, now)

        reset_token = self._issue_token(user.id, TokenType.PASSWORD_RESET, now)
        async with self._uow.transaction():
            await self._token_repo.delete_all_for_user(user.id, TokenType.PASSWORD_RESET)
            await self._token_repo.create(reset_token)

        logger.info("Password reset requested for user: %s", user.id)
        await self._send_password_reset_email(user.email, reset_token.token)
        return MSG_RESET_SENT

    async def reset_password(self, token: str, new_password: str) -> str:
        data = validate_input(ResetPasswordInput, token=token, new_password=new_password)

        stored = await self._token_repo.find_by_value(data.token, TokenType.PASSWORD_RESET)
        if stored is None:
            raise InvalidResetTokenError
        if stored.is_expired(utc_now()):
            raise ResetTokenExpiredError
        if await self._credential_repo.find_by_user_id(stored.user_id) is None:
            logger.warning("Reset token for user without credentials: %s", stored.user_id)
            raise InvalidResetTokenError

        new_hash = self._password_service.hash(data.new_password)
        async with self._uow.transaction():
            if not await self._token_repo.consume(stored.id):
                raise InvalidResetTokenError
            await self._credential_repo.save(user_id=stored.user_id, password_hash=new_hash)

        logger.info("Password reset completed for user: %s", stored.user_id)
        return MSG_RESET_DONE

    # -------------------------------------------------------------------------
    # Onboarding and maintenance
    # -------------------------------------------------------------------------

    async def complete_onboarding(self, user_id: UUID, username: str) -> UserAccount:
        data = validate_input(OnboardingInput, username=username)

        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError

        profile = await self._profile_repo.find_by_user_id(user_id)
        if profile is None or not profile.email_verified:
            raise EmailNotVerifiedError

        holder = await self._profile_repo.find_by_username(data.username)
        if holder is not None and holder.user_id != user_id:
            raise UsernameTakenError(data.username)

        profile = profile.complete_onboarding(data.username)
        async with self._uow.transaction():
            await self._profile_repo.save(profile)

        logger.info("Onboarding completed for user: %s", user_id)
        return UserAccount.from_domain(user, profile)

    async def cleanup_expired_tokens(self) -> int:
        """Delete expired tokens and closed rate-limit windows.

        Returns
        -------
        Number of tokens deleted
        """
        now = utc_now()
        async with self._uow.transaction():
            tokens_deleted = await self._token_repo.cleanup_expired(now)
            counters_deleted = await self._rate_limiter.cleanup_expired(now)

        logger.info(
            "Cleanup removed %d expired tokens and %d rate-limit counters",
            tokens_deleted,
            counters_deleted,
        )
        return tokens_deleted

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _check_password(self, email: str, password: str) -> User | None:
        user = await self._user_repo.find_by_email(email)
        if user is None:
            return None

        credential = await self._credential_repo.find_by_user_id(user.id)
        if credential is None:
            return None

        if not self._password_service.verify(password, credential.password_hash):
            return None

        return user

    async def _enforce_reset_limit(self, user_id: UUID, now: datetime) -> None:
        if not self._rate_limiter.enabled:
            return

        key = self._rate_limiter.key_for(PASSWORD_RESET_ACTION, user_id)
        async with self._uow.transaction():
            decision = await self._rate_limiter.hit(key, now)

        if not decision.allowed:
            logger.warning("Rate limit exceeded for password reset: %s", user_id)
            retry_after = decision.retry_after
            raise PasswordResetRateLimitError(
                retry_after_seconds=int(retry_after.total_seconds()) if retry_after else None,
            )

    def _issue_token(
        self,
        user_id: UUID,
        token_type: TokenType,
        now: datetime,
    ) -> UserToken:
        ttl = (
            self._config.verification_token_ttl
            if token_type is TokenType.VERIFY_EMAIL
            else self._config.password_reset_token_ttl
        )
        return UserToken.issue(
            user_id=user_id,
            token_type=token_type,
            value=self._token_generator.new_token(),
            ttl=ttl,
            now=now,
        )

    def _create_session(self, user: User) -> str:
        return self._jwt_service.create_session_token(user_id=user.id, email=user.email)

    async def _send_verification_email(self, to_email: str, token: str) -> str | None:
        link = f"{self._config.app_url}/verify-email?token={token}"
        try:
            return await asyncio.to_thread(
                self._email_service.send_verification_email,
                to_email,
                link,
            )
        except Exception as e:
            # Don't raise - the token is already committed
            logger.error("Failed to send verification email: %s", e)
            return None

    async def _send_password_reset_email(self, to_email: str, token: str) -> str | None:
        link = f"{self._config.app_url}/reset-password?token={token}"
        try:
            return await asyncio.to_thread(
                self._email_service.send_password_reset_email,
                to_email,
                link,
            )
        except Exception as e:
            logger.error("Failed to send password reset email: %s", e)
            return None
