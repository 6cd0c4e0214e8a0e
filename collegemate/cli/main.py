#!/usr/bin/env python3
"""
CollegeMate CLI - Main Entry Point

Usage:
    collegemate signup              # Create an account (email code verification)
    collegemate login               # Login (email code verification)
    collegemate poll                # Today's Class Bunk Planner
    collegemate vote yes            # Vote in today's poll
    collegemate --help              # Show help
"""

import argparse
import sys
from typing import List, Optional

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from collegemate.core.exceptions import CollegeMateError
from collegemate.core.logging_config import logger, setup_logging


SEMESTERS = ["Semester 1", "Semester 2", "Semester 3", "Semester 4"]


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="collegemate",
        description="CollegeMate - your campus portal in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  collegemate signup                 Create your student account
  collegemate login                  Login to your account
  collegemate whoami                 Show the signed-in student
  collegemate poll                   See today's bunk poll
  collegemate vote maybe             Cast today's vote
  collegemate upload                 Share a study material link
  collegemate logout                 Logout on this machine

Verification:
  Login and signup send a 6-digit code that is valid for 60 seconds.
  At the code prompt type 'r' to resend or 'q' to cancel.
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("login", help="Login to CollegeMate")
    subparsers.add_parser("signup", help="Create a CollegeMate account")
    subparsers.add_parser("logout", help="Logout from CollegeMate")
    subparsers.add_parser("status", help="Show authentication status")
    subparsers.add_parser("whoami", help="Show current user info")
    subparsers.add_parser("poll", help="Show today's bunk poll")

    vote_parser = subparsers.add_parser("vote", help="Vote in today's bunk poll")
    vote_parser.add_argument("option", help="yes, no or maybe")

    subparsers.add_parser("upload", help="Share a study material link")
    subparsers.add_parser("uploads", help="List shared study material")

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0"
    )

    return parser


def _upload(portal, console: Console) -> bool:
    semester = Prompt.ask("Semester", choices=SEMESTERS, default=SEMESTERS[0], console=console)
    subject = Prompt.ask("Subject", console=console)
    name = Prompt.ask("File Title", console=console)
    link = Prompt.ask("File Link (Drive/Dropbox)", console=console)

    if not all(value.strip() for value in (subject, name, link)):
        console.print("[red]Subject, title and link are required[/red]")
        return False
    if not link.startswith(("http://", "https://")):
        console.print("[red]File link must be an http(s) URL[/red]")
        return False

    portal.uploads.add_upload(semester, subject.strip(), name.strip(), link.strip())
    console.print(f"[green]Upload Successful! Added to {semester}[/green]")
    return True


def _list_uploads(portal, console: Console) -> bool:
    uploads = portal.uploads.list_uploads()
    if not uploads:
        console.print("[dim]No shared material yet. Add some with: collegemate upload[/dim]")
        return True

    table = Table(title="Shared Study Material", show_header=True, header_style="bold cyan")
    table.add_column("Semester")
    table.add_column("Subject")
    table.add_column("Title")
    table.add_column("Link", overflow="fold")
    for upload in uploads:
        table.add_row(upload.semester, upload.subject, upload.name, upload.file)
    console.print(table)
    return True


def run(args: argparse.Namespace, portal, console: Console) -> int:
    """Dispatch one command; returns the process exit code"""
    from collegemate.cli.auth import CLIAuthFlow
    from collegemate.cli.poll import PollView
    from collegemate.modules.auth.dependencies import requires_auth

    flow = CLIAuthFlow(portal, console)
    guarded = requires_auth(portal.auth)

    if args.command == "login":
        return 0 if flow.interactive_login() else 1

    if args.command == "signup":
        return 0 if flow.interactive_signup() else 1

    if args.command == "logout":
        flow.logout()
        return 0

    if args.command in ("status", "whoami"):
        flow.show_status()
        return 0

    view = PollView(portal, console)
    protected = {
        "poll": lambda: view.show(),
        "vote": lambda: view.vote(args.option),
        "upload": lambda: _upload(portal, console),
        "uploads": lambda: _list_uploads(portal, console),
    }

    handler = protected.get(args.command)
    if handler is None:
        flow.show_status()
        return 0

    return 0 if guarded(handler)() else 1


def main(argv: Optional[List[str]] = None):
    """Main entry point"""
    from collegemate.cli.auth import ConsoleNavigator
    from collegemate.main import create_portal

    parser = create_parser()
    args = parser.parse_args(argv)
    console = Console()

    if args.verbose:
        setup_logging("INFO")

    try:
        portal = create_portal(navigator=ConsoleNavigator(console))
        sys.exit(run(args, portal, console))

    except KeyboardInterrupt:
        console.print("\n\nGoodbye! 👋")
        sys.exit(0)
    except CollegeMateError as e:
        logger.log_error_with_context(e, f"command {args.command}")
        console.print(f"[red]Error: {e.message}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
