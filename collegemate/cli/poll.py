"""
Class Bunk Planner - today's poll in the terminal
"""

from typing import Optional

from rich.console import Console
from rich.table import Table

from collegemate.main import Portal
from collegemate.schemas.poll import PollOption

OPTION_ALIASES = {
    "yes": PollOption.YES,
    "no": PollOption.NO,
    "maybe": PollOption.MAYBE,
}

BAR_WIDTH = 30


def parse_option(choice: str) -> Optional[str]:
    """Accept 'yes'/'no'/'maybe' or the exact label"""
    option = OPTION_ALIASES.get(choice.strip().lower())
    if option is not None:
        return option.value
    return choice


class PollView:

    def __init__(self, portal: Portal, console: Optional[Console] = None):
        self.poll = portal.poll
        self.console = console or Console()

    def show(self) -> bool:
        results = self.poll.get_results()
        voted = self.poll.has_voted_today()

        table = Table(
            title="Class Bunk Planner - Today's Breakdown",
            caption="Let's see who's staying & who's bunking! 🎓",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Option")
        table.add_column("Votes", justify="right")
        table.add_column("", min_width=BAR_WIDTH)
        table.add_column("%", justify="right")

        for option, count in results.vote_counts.items():
            percent = results.percentages[option]
            bar = "█" * round(BAR_WIDTH * percent / 100)
            style = "bold green" if option == results.leading_option else ""
            table.add_row(option, str(count), f"[{style or 'white'}]{bar}[/]", f"{percent}%", style=style)

        self.console.print(table)

        plural = "" if results.total == 1 else "s"
        if results.total > 0:
            self.console.print(f"👥 [bold]{results.total}[/bold] student{plural} voted • Most students are {results.leading_option}")
        else:
            self.console.print(f"👥 [bold]0[/bold] students voted • Be the first to vote!")

        if voted:
            self.console.print("[dim]You've voted today. Come back tomorrow![/dim]")
        else:
            self.console.print("[dim]Vote with: collegemate vote yes|no|maybe[/dim]")
        return True

    def vote(self, choice: str) -> bool:
        result = self.poll.cast_vote(parse_option(choice))
        if result.success:
            self.console.print(f"[green]{result.message}[/green]")
            self.show()
            return True
        self.console.print(f"[red]{result.message}[/red]")
        return False
