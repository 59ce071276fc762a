"""
Authentication Service

Identity provider backends and user record provisioning.

Sign-in itself is delegated to an external identity provider. The core only
consumes the authenticated subject and turns it into a Principal bound to a
row in `users`.

Backends:
=========
    ┌──────────────────────┬──────────────────────────────────────────────┐
    │ AUTH_BACKEND=mock    │ MockIdentityProvider: fixed dev identity,    │
    │                      │ issues its own HS256 session JWT             │
    ├──────────────────────┼──────────────────────────────────────────────┤
    │ AUTH_BACKEND=jwt     │ JWTIdentityProvider: verifies session JWTs   │
    │                      │ issued by the external provider              │
    └──────────────────────┴──────────────────────────────────────────────┘

The provider is built once by the application factory and stored on
app.state; nothing here keeps a module-level instance.

Usage:
======
    from src.shared.services.auth_service import create_identity_provider

    provider = create_identity_provider(settings)
    auth_session = await provider.sign_in()
    auth_user = await provider.get_current_user(auth_session.access_token)
    user = await provider.get_or_create_user_record(db, auth_user)
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Mapping, Optional, Protocol
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import Settings
from src.shared.core.exceptions import AuthenticationError
from src.shared.core.logging import get_logger
from src.shared.db.session import storage_errors
from src.shared.models.user import User
from src.shared.repositories.user_repository import UserRepository
from src.shared.utils.security import SecurityUtils
from src.shared.utils.validation import (
    EMAIL_MAX,
    sanitize_user_name,
    validate_bio,
    validate_headline,
    validate_user_name,
)

logger = get_logger("auth")


# ═══════════════════════════════════════════════════════════════════════════════
# IDENTITY TYPES
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class AuthUser:
    """Identity as reported by the provider."""

    id: str
    email: Optional[str] = None
    name: str = ""
    headline: Optional[str] = None
    profile_photo_url: Optional[str] = None


@dataclass(frozen=True)
class AuthSession:
    """Result of a successful sign-in."""

    access_token: str
    expires_in: int
    user: AuthUser


@dataclass(frozen=True)
class Principal:
    """
    The acting identity of a request.

    Derived from the session only; a user id sent by the client is a
    claim to be checked against this, never a substitute for it.
    """

    user_id: UUID
    auth_id: str
    email: Optional[str] = None


AuthStateListener = Callable[[str, Optional[AuthUser]], None]


class IdentityProvider(Protocol):
    """Capabilities every auth backend offers."""

    async def get_current_user(self, access_token: str) -> Optional[AuthUser]:
        ...

    async def sign_in(self, **credentials: Any) -> AuthSession:
        ...

    async def sign_out(self, access_token: str) -> None:
        ...

    def on_auth_state_change(self, callback: AuthStateListener) -> Callable[[], None]:
        ...

    async def get_or_create_user_record(self, session: AsyncSession, auth_user: AuthUser) -> User:
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# SHARED BEHAVIOUR
# ═══════════════════════════════════════════════════════════════════════════════


class _ProviderBase:
    """Listener bookkeeping and user provisioning shared by both backends."""

    def __init__(self, config: Settings) -> None:
        self.config = config
        self._listeners: set[AuthStateListener] = set()

    def on_auth_state_change(self, callback: AuthStateListener) -> Callable[[], None]:
        """
        Subscribe to SIGNED_IN / SIGNED_OUT transitions.

        Returns:
            A callable that removes the subscription
        """
        self._listeners.add(callback)

        def unsubscribe() -> None:
            self._listeners.discard(callback)

        return unsubscribe

    def _notify(self, event: str, user: Optional[AuthUser]) -> None:
        for callback in list(self._listeners):
            try:
                callback(event, user)
            except Exception as e:
                logger.warning("Auth state listener failed", auth_event=event, error=str(e))

    async def get_or_create_user_record(self, session: AsyncSession, auth_user: AuthUser) -> User:
        """
        Return the users row bound to this identity, creating it on first sign-in.

        Provider-supplied names are sanitized before storage.
        """
        repo = UserRepository(session)

        async with storage_errors("get_or_create_user", session, auth_id=auth_user.id):
            user = await repo.get_by_auth_id(auth_user.id)
            if user:
                return user

            email = auth_user.email if auth_user.email and len(auth_user.email) <= EMAIL_MAX else None
            user = await repo.create(
                auth_id=auth_user.id,
                email=email,
                name=sanitize_user_name(auth_user.name or "") or "New User",
                headline=auth_user.headline,
                profile_photo_url=auth_user.profile_photo_url,
            )
            await session.commit()

        logger.info("User record created", user_id=str(user.id))
        return user


# ═══════════════════════════════════════════════════════════════════════════════
# BACKENDS
# ═══════════════════════════════════════════════════════════════════════════════


DEFAULT_MOCK_USER = AuthUser(
    id="mock-auth-id-12345",
    email="dev@level2.bio",
    name="Dev User",
    headline="Software Engineer",
)


class MockIdentityProvider(_ProviderBase):
    """
    Development backend.

    sign_in() signs in as a fixed identity (or the one passed in) and issues
    a session JWT signed with SECRET_KEY. Signed-out tokens are remembered
    for the life of the process.
    """

    def __init__(self, config: Settings, user: AuthUser = DEFAULT_MOCK_USER) -> None:
        super().__init__(config)
        self.default_user = user
        self._revoked: set[str] = set()

    async def sign_in(self, **credentials: Any) -> AuthSession:
        user = self.default_user
        if credentials.get("auth_id"):
            user = AuthUser(
                id=credentials["auth_id"],
                email=credentials.get("email"),
                name=credentials.get("name") or user.name,
            )

        expires = timedelta(minutes=self.config.ACCESS_TOKEN_EXPIRE_MINUTES)
        token = SecurityUtils.create_access_token(
            data={
                "sub": user.id,
                "email": user.email,
                "jti": uuid4().hex,
                "user_metadata": {"full_name": user.name, "headline": user.headline},
            },
            secret_key=self.config.SECRET_KEY,
            expires_delta=expires,
            algorithm=self.config.JWT_ALGORITHM,
        )

        self._notify("SIGNED_IN", user)
        return AuthSession(access_token=token, expires_in=int(expires.total_seconds()), user=user)

    async def get_current_user(self, access_token: str) -> Optional[AuthUser]:
        try:
            payload = SecurityUtils.decode_access_token(
                access_token, self.config.SECRET_KEY, self.config.JWT_ALGORITHM
            )
        except ValueError:
            return None

        if payload.get("jti") in self._revoked:
            return None
        return _user_from_claims(payload)

    async def sign_out(self, access_token: str) -> None:
        try:
            payload = SecurityUtils.decode_access_token(
                access_token, self.config.SECRET_KEY, self.config.JWT_ALGORITHM
            )
        except ValueError:
            return

        self._revoked.add(payload.get("jti", ""))
        self._notify("SIGNED_OUT", None)


class JWTIdentityProvider(_ProviderBase):
    """
    Production backend for provider-issued session JWTs.

    Tokens are verified with the shared secret (and audience when
    JWT_AUDIENCE is set). Sign-in happens at the provider, not here.
    """

    async def sign_in(self, **credentials: Any) -> AuthSession:
        raise AuthenticationError("Sign in through the identity provider")

    async def get_current_user(self, access_token: str) -> Optional[AuthUser]:
        try:
            payload = SecurityUtils.decode_access_token(
                access_token,
                self.config.SECRET_KEY,
                self.config.JWT_ALGORITHM,
                audience=self.config.JWT_AUDIENCE or None,
            )
        except ValueError as e:
            logger.debug("Rejected session token", error=str(e))
            return None
        return _user_from_claims(payload)

    async def sign_out(self, access_token: str) -> None:
        # Provider sessions are revoked at the provider; only listeners care here
        if await self.get_current_user(access_token) is not None:
            self._notify("SIGNED_OUT", None)


def _user_from_claims(payload: Mapping[str, Any]) -> Optional[AuthUser]:
    subject = payload.get("sub")
    if not subject:
        return None

    metadata = payload.get("user_metadata") or {}
    return AuthUser(
        id=str(subject),
        email=payload.get("email"),
        name=metadata.get("full_name") or metadata.get("name") or "",
        headline=metadata.get("headline"),
        profile_photo_url=metadata.get("avatar_url") or metadata.get("picture"),
    )


def create_identity_provider(config: Settings) -> IdentityProvider:
    """Pick the identity provider named by AUTH_BACKEND."""
    backend = config.AUTH_BACKEND.lower()
    if backend == "mock":
        if config.is_production:
            logger.warning("Mock identity provider enabled in production")
        return MockIdentityProvider(config)
    if backend == "jwt":
        return JWTIdentityProvider(config)
    raise ValueError(f"Unknown AUTH_BACKEND: {config.AUTH_BACKEND}")


# ═══════════════════════════════════════════════════════════════════════════════
# CURRENT USER
# ═══════════════════════════════════════════════════════════════════════════════


class AuthService:
    """
    Service for the signed-in user's own record.

    Attributes:
        session: Database session
        repo: UserRepository instance
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)

    async def get_current_user(self, principal: Principal) -> User:
        user = await self.repo.get(principal.user_id)
        if not user:
            raise AuthenticationError()
        return user

    async def update_current_user(self, principal: Principal, patch: Mapping[str, Any]) -> User:
        """
        Update name, headline, bio or photo of the signed-in user.

        Only keys present in the patch are touched; headline, bio and photo
        may be cleared with None.
        """
        changes: dict[str, Any] = {}
        if "name" in patch:
            changes["name"] = validate_user_name(patch["name"])
        if "headline" in patch:
            changes["headline"] = validate_headline(patch["headline"])
        if "bio" in patch:
            changes["bio"] = validate_bio(patch["bio"])
        if "profile_photo_url" in patch:
            changes["profile_photo_url"] = patch["profile_photo_url"] or None

        async with storage_errors("update_user", self.session, user_id=str(principal.user_id)):
            user = await self.get_current_user(principal)
            if changes:
                user = await self.repo.apply(user, **changes)
                await self.session.commit()
        return user
