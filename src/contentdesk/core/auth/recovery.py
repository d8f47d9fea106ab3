"""Password recovery protocol.

Email delivery is not part of this service; the recovery adapter is the
seam where a deployment plugs in whatever delivers the reset link.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class PasswordRecoveryAdapter(Protocol):
    """Protocol for delivering password reset links."""

    async def initiate_recovery(
        self,
        user_email: str,
        user_name: str,
        token: str,
        reset_url: str,
    ) -> bool:
        """Hand a reset link to the user.

        Args:
            user_email: The email address of the user.
            user_name: Display name for the greeting.
            token: The plaintext reset token.
            reset_url: The full URL for password reset (includes token).

        Returns:
            True if the link was delivered.
        """
        ...
