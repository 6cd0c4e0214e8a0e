"""
CollegeMate CLI notifications

Out-of-band OTP delivery for the terminal: the code shows up in its own panel
a moment after the "code sent" confirmation, the way a text message would.
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel

from collegemate.services.otp_delivery import OTPDeliveryChannel


class ConsoleDeliveryChannel(OTPDeliveryChannel):
    """Prints the code in a highlighted panel"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def deliver(self, email: str, code: str, ttl_seconds: int) -> None:
        self.console.print()
        self.console.print(Panel(
            f"Your verification code is: [bold green]{code}[/bold green]\n\n"
            f"[dim]Sent to {email} - valid for {ttl_seconds} seconds[/dim]",
            title="🔐 COLLEGE MATE OTP",
            border_style="magenta",
            expand=False
        ))
