"""Console-based password recovery adapter.

Prints the reset link to stdout so developers can click it directly.
"""

import structlog

from contentdesk.core.auth.recovery import PasswordRecoveryAdapter

logger = structlog.get_logger()


class ConsoleRecoveryAdapter:
    """Console-based password recovery for local development.

    Instead of sending an email, prints the reset link to the console.
    Deployments that deliver mail supply their own PasswordRecoveryAdapter.
    """

    async def initiate_recovery(
        self,
        user_email: str,
        user_name: str,
        token: str,
        reset_url: str,
    ) -> bool:
        """Print the password reset link to the console.

        Args:
            user_email: The email address for the reset.
            user_name: Display name of the user.
            token: The reset token (included in reset_url).
            reset_url: The full URL for password reset.

        Returns:
            True (console printing always succeeds).
        """
        print("\n" + "=" * 70, flush=True)
        print("[PASSWORD RESET] Reset link generated", flush=True)
        print(f"  User:  {user_name} <{user_email}>", flush=True)
        print(f"  Link:  {reset_url}", flush=True)
        print("=" * 70 + "\n", flush=True)
        logger.info("password_reset_link_printed", email=user_email)
        return True


# Verify we implement the protocol
_adapter: PasswordRecoveryAdapter = ConsoleRecoveryAdapter()
