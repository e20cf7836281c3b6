"""Authentication passthrough to Supabase Auth."""

import logging
from typing import Any, Callable

from supabase import Client

from network20.core.config import Settings
from network20.core.errors import BackendNotConfiguredError, ValidationError
from network20.schemas.auth import AuthUser

logger = logging.getLogger(__name__)


class AuthService:
    """Service for managing user authentication.

    Local-only installs have no auth: every operation raises
    BackendNotConfiguredError when constructed without a client.
    """

    def __init__(self, client: Client | None, settings: Settings) -> None:
        """Initialize auth service.

        Args:
            client: Supabase client, or None when no backend is configured.
            settings: Application settings.
        """
        self.client = client
        self.settings = settings

    def _require_client(self) -> Client:
        if self.client is None:
            raise BackendNotConfiguredError("Authentication requires a configured Supabase backend")
        return self.client

    async def sign_up(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> AuthUser:
        """Sign up a new user with email and password.

        Args:
            email: User's email address.
            password: User's password.
            display_name: Optional display name stored in user metadata.

        Returns:
            AuthUser: The created identity.

        Raises:
            BackendNotConfiguredError: If no backend is configured.
            ValidationError: If signup fails (e.g., email already exists).
        """
        client = self._require_client()

        options: dict[str, Any] = {}
        if self.settings.auth_redirect_url:
            options["email_redirect_to"] = self.settings.auth_redirect_url
        if display_name:
            options["data"] = {"display_name": display_name}

        try:
            response = client.auth.sign_up({"email": email, "password": password, "options": options})
        except Exception as e:
            error_msg = str(e)
            logger.error("Signup failed: %s", error_msg)

            if "already registered" in error_msg.lower() or "already exists" in error_msg.lower():
                raise ValidationError("An account with this email already exists") from e
            if "password" in error_msg.lower() and ("weak" in error_msg.lower() or "least" in error_msg.lower()):
                raise ValidationError("Password is too weak. Please use a stronger password.") from e

            raise ValidationError(f"Signup failed: {error_msg}") from e

        if not response.user:
            raise ValidationError("Failed to create user account")

        logger.info("User signed up: %s", response.user.id)
        return AuthUser.from_supabase_user(response.user)

    async def sign_in(self, email: str, password: str) -> AuthUser:
        """Sign in with email and password.

        The session is kept by the client and persisted in local storage.

        Raises:
            BackendNotConfiguredError: If no backend is configured.
            ValidationError: If sign-in fails.
        """
        client = self._require_client()

        try:
            response = client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            error_msg = str(e)
            logger.error("Login failed: %s", error_msg)

            if "invalid" in error_msg.lower() and "credentials" in error_msg.lower():
                raise ValidationError("Invalid email or password") from e
            if "email not confirmed" in error_msg.lower():
                raise ValidationError("Please verify your email before logging in") from e

            raise ValidationError(f"Login failed: {error_msg}") from e

        if not response.user or not response.session:
            raise ValidationError("Login failed: No session created")

        logger.info("User logged in: %s", response.user.id)
        return AuthUser.from_supabase_user(response.user)

    async def sign_out(self) -> None:
        """Sign out the current user."""
        client = self._require_client()

        try:
            client.auth.sign_out()
            logger.info("User logged out")
        except Exception as e:
            # The local session is dropped even when revoking it server-side fails
            logger.error("Logout failed: %s", e)

    async def reset_password(self, email: str) -> None:
        """Send a password reset email.

        Raises:
            BackendNotConfiguredError: If no backend is configured.
            ValidationError: If the request fails.
        """
        client = self._require_client()

        options = {"redirect_to": self.settings.auth_redirect_url} if self.settings.auth_redirect_url else {}
        try:
            client.auth.reset_password_for_email(email, options=options)
        except Exception as e:
            logger.error("Password reset request failed: %s", e)
            raise ValidationError("Failed to send reset email. Please try again.") from e

        logger.info("Password reset email sent to: %s", email)

    def on_auth_state_change(self, callback: Callable[[AuthUser | None], None]) -> Callable[[], None]:
        """Subscribe to sign-in and sign-out transitions.

        Args:
            callback: Called with the new identity, or None after sign-out.

        Returns:
            Callable: Unsubscribe handle.
        """
        client = self._require_client()

        def handle(event: Any, session: Any) -> None:
            user = session.user if session else None
            callback(AuthUser.from_supabase_user(user) if user else None)

        subscription = client.auth.on_auth_state_change(handle)
        return subscription.unsubscribe

    async def get_current_auth_user(self) -> AuthUser | None:
        """Get the signed-in identity.

        Returns:
            AuthUser | None: The identity, or None if nobody is signed in or
            the lookup failed.
        """
        client = self._require_client()

        try:
            response = client.auth.get_user()
        except Exception as e:
            logger.warning("Failed to resolve current auth user: %s", e)
            return None

        if not response or not response.user:
            return None
        return AuthUser.from_supabase_user(response.user)
