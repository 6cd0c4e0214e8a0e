"""
CollegeMate CLI Authentication
==============================

  collegemate login     Email + password, then the emailed code
  collegemate signup    Student details, then the emailed code
  collegemate logout    End the session on this machine
  collegemate whoami    Show the signed-in student

The code prompt accepts the 6-digit code, 'r' to resend, or 'q' to cancel.
"""

from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from collegemate.core.results import FailureKind, OperationResult
from collegemate.main import Portal
from collegemate.modules.auth.dependencies import LANDING_ROUTE, LOGIN_ROUTE, Navigator
from collegemate.schemas.auth import AttemptKind, LoginForm, SignupForm

BRANCHES = ["CSE", "ECE", "ME", "CE", "EE", "IT"]
YEARS = ["1st Year", "2nd Year", "3rd Year", "4th Year"]
RESEND_KEYS = {"r", "resend"}
CANCEL_KEYS = {"q", "quit", "cancel"}


class ConsoleNavigator(Navigator):
    """Turns redirects into hints about which command to run next"""

    def __init__(self, console: Console):
        self.console = console

    def redirect(self, route: str) -> None:
        if route == LOGIN_ROUTE:
            self.console.print("[yellow]This action requires authentication[/yellow]")
            self.console.print("[dim]Please login using: [cyan]collegemate login[/cyan][/dim]")
        elif route == LANDING_ROUTE:
            self.console.print("[dim]Back to home[/dim]")

    def reload(self) -> None:
        # Each CLI invocation is a fresh process, nothing else to discard
        pass


def _show_validation_error(console: Console, error: ValidationError) -> None:
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ()))
        console.print(f"[red]{field or 'input'}: {item.get('msg')}[/red]")


class CLIAuthFlow:
    """Interactive login/signup over the portal's auth orchestrator"""

    def __init__(self, portal: Portal, console: Optional[Console] = None):
        self.portal = portal
        self.auth = portal.auth
        self.app_name = portal.settings.APP_NAME
        self.console = console or Console()

    def _report(self, result: OperationResult) -> None:
        if result.success:
            if result.message:
                self.console.print(f"[green]{result.message}[/green]")
        else:
            self.console.print(f"[red]{result.message}[/red]")

    def _already_signed_in(self) -> bool:
        user = self.auth.current_user()
        if user:
            self.console.print(f"[yellow]Already logged in as {user.email}[/yellow]")
            self.console.print("[dim]Use 'collegemate logout' first to switch accounts[/dim]")
            return True
        return False

    def interactive_login(self) -> bool:
        if self._already_signed_in():
            return False

        self.console.print(Panel(
            f"[bold cyan]{self.app_name} - Login[/bold cyan]\n\n"
            "Welcome back! We'll email you a 6-digit code to confirm it's you.",
            border_style="cyan"
        ))

        try:
            form = LoginForm(
                email=Prompt.ask("Email", console=self.console),
                password=Prompt.ask("Password", password=True, console=self.console),
            )
        except ValidationError as e:
            _show_validation_error(self.console, e)
            return False

        result = self.auth.initiate_login(form.email, form.password)
        self._report(result)
        if not result.success:
            return False
        return self.verification_loop()

    def interactive_signup(self) -> bool:
        if self._already_signed_in():
            return False

        self.console.print(Panel(
            f"[bold cyan]{self.app_name} - Create Account[/bold cyan]\n\n"
            "Join your campus community. We'll verify your email with a 6-digit code.",
            border_style="cyan"
        ))

        try:
            form = SignupForm(
                name=Prompt.ask("Full Name", console=self.console),
                college=Prompt.ask("College", console=self.console),
                branch=Prompt.ask("Branch", choices=BRANCHES, default="CSE", console=self.console),
                year=Prompt.ask("Year", choices=YEARS, default="1st Year", console=self.console),
                roll_number=Prompt.ask("Roll Number", console=self.console),
                email=Prompt.ask("Email", console=self.console),
                password=Prompt.ask("Password", password=True, console=self.console),
            )
        except ValidationError as e:
            _show_validation_error(self.console, e)
            return False

        result = self.auth.initiate_signup(form.to_account())
        self._report(result)
        if not result.success:
            return False
        return self.verification_loop()

    def verification_loop(self) -> bool:
        """Prompt for codes until success, cancellation, or the flow becomes unrecoverable"""
        pending = self.auth.pending
        mode = "Verify Account" if pending.kind == AttemptKind.SIGNUP else "Security Check"
        self.console.print(f"\n[bold]{mode} 🔐[/bold]")

        while self.auth.pending is not None:
            remaining = self.portal.otp.seconds_remaining()
            hint = f"expires in {remaining}s" if remaining else "expired - 'r' to resend"
            entry = Prompt.ask(
                f"Enter 6-digit code [dim]({hint}, 'q' to cancel)[/dim]",
                console=self.console
            ).strip()

            if entry.lower() in CANCEL_KEYS:
                self.auth.cancel_verification()
                self.console.print("[dim]Verification cancelled[/dim]")
                return False

            if entry.lower() in RESEND_KEYS:
                self._report(self.auth.resend_code())
                continue

            if len(entry) != 6 or not entry.isdigit():
                self.console.print("[yellow]Please enter complete 6-digit code[/yellow]")
                continue

            result = self.auth.complete_verification(entry)
            self._report(result)
            if result.success:
                self.show_status()
                return True
            if result.failure == FailureKind.DUPLICATE_EMAIL:
                self.console.print("[dim]Please start the signup again with another email[/dim]")
                return False

        return False

    def logout(self) -> None:
        if not self.auth.is_authenticated():
            self.console.print("[dim]Not logged in[/dim]")
            return
        self.auth.log_out()
        self.console.print("[green]Logged out successfully[/green]")

    def show_status(self) -> None:
        user = self.auth.current_user()
        if user:
            self.console.print(Panel(
                f"[green]Authenticated[/green]\n\n"
                f"[bold]Name:[/bold] {user.name}\n"
                f"[bold]Email:[/bold] {user.email}\n"
                f"[bold]College:[/bold] {user.college}\n"
                f"[bold]Branch:[/bold] {user.branch} - {user.year}\n"
                f"[bold]Roll No:[/bold] {user.roll_number}",
                title="Account",
                border_style="green"
            ))
        else:
            self.console.print(Panel(
                "[red]Not authenticated[/red]\n\n"
                "Please login using: [cyan]collegemate login[/cyan]\n"
                "New here? Create an account with: [cyan]collegemate signup[/cyan]",
                title="Authentication Status",
                border_style="red"
            ))
