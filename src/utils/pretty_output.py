"""
Pretty Terminal Output with Colors

Colored banners and result lines for the booking scripts, plus a rich
table view of the ledger.
"""

from colorama import Fore, Style, init
from rich import box
from rich.console import Console
from rich.table import Table

from src.models.booking import BookingStatus

# Initialize colorama for Windows compatibility
init(autoreset=True)

STATUS_STYLES = {
    BookingStatus.PENDING: "cyan",
    BookingStatus.BOOKED: "green",
    BookingStatus.FAILED: "red",
    BookingStatus.NO_SPACE: "yellow",
}


class PrettyOutput:
    """Handles pretty, colored terminal output"""

    @staticmethod
    def header(text: str, char: str = "="):
        """Print a colored header"""
        line = char * 70
        print(f"\n{Fore.CYAN}{Style.BRIGHT}{line}")
        print(f"{text:^70}")
        print(f"{line}{Style.RESET_ALL}\n")

    @staticmethod
    def success(text: str):
        """Print success message in green"""
        print(f"{Fore.GREEN}✓ {text}{Style.RESET_ALL}")

    @staticmethod
    def error(text: str):
        """Print error message in red"""
        print(f"{Fore.RED}✗ {text}{Style.RESET_ALL}")

    @staticmethod
    def warning(text: str):
        """Print warning message in yellow"""
        print(f"{Fore.YELLOW}⚠ {text}{Style.RESET_ALL}")

    @staticmethod
    def info(text: str):
        """Print info message in blue"""
        print(f"{Fore.CYAN}ℹ {text}{Style.RESET_ALL}")

    @staticmethod
    def booking_result(parking_date: str, status: BookingStatus, message: str = ""):
        """Print the final result of a booking run"""
        if status == BookingStatus.BOOKED:
            PrettyOutput.success(f"Parking booked for {parking_date}")
        elif status == BookingStatus.NO_SPACE:
            PrettyOutput.warning(f"No parking space available for {parking_date}")
        else:
            PrettyOutput.error(f"Booking for {parking_date} failed")
        if message:
            print(f"  {Fore.LIGHTBLACK_EX}{message}{Style.RESET_ALL}")


def build_ledger_table(records) -> Table:
    """Rich table of booking records"""
    table = Table(title="Parking bookings", box=box.ROUNDED)
    table.add_column("Parking date", style="bold")
    table.add_column("Status")
    table.add_column("Created")
    table.add_column("Last attempt")
    table.add_column("Message", overflow="fold")

    for record in records:
        style = STATUS_STYLES.get(record.status, "white")
        table.add_row(
            record.parking_date,
            f"[{style}]{record.status.value}[/{style}]",
            record.created_at,
            record.last_attempt or "-",
            record.attempt_message or "",
        )
    return table


def print_ledger(records, console: Console = None):
    """Print the ledger, or a note if it is empty"""
    console = console or Console()
    if not records:
        console.print("[dim]No bookings in the ledger.[/dim]")
        return
    console.print(build_ledger_table(records))
