"""Root of the control panel's exception tree.

Every error the panel raises on purpose is a PanelError, so the CLI can
tell an expected failure (unreachable service, bad option) from a bug.
Each one carries two texts: a short one for the console and a detailed
one for the log file.
"""

from typing import Optional


class PanelError(Exception):
    """
    Expected failure of the control panel.

    Attributes:
        user_message: Short text shown on the console
        technical_message: Detailed text written to the log
        recoverable: True if fixing the input or retrying can succeed
        recovery_hint: What the user can change, if anything
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        """
        Args:
            user_message: Short text for the console
            technical_message: Text for the log (user_message when omitted)
            recoverable: Whether a retry or corrected input can succeed
            recovery_hint: Suggested fix
        """
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message
