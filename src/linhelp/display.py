"""
Terminal rendering for lin-help.

Entries are shown as an ID / Command / Description table.
"""

import os

from linhelp.model import Entry


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    BLUE = "\033[34m"
    WHITE = "\033[37m"
    BRIGHT_CYAN = "\033[96m"

    @classmethod
    def enabled(cls) -> bool:
        """Check if colors should be enabled."""
        if os.environ.get("NO_COLOR"):
            return False
        return True


def c(text: str, *codes: str) -> str:
    """Apply color codes to text if colors are enabled."""
    if not Colors.enabled():
        return text
    return "".join(codes) + text + Colors.RESET


HEADERS = ("ID", "Command", "Description")


def format_entries(entries: list[Entry], title: str = "ENTRIES") -> str:
    """Render entries as a table, in the order given."""
    if not entries:
        return c("No entries found.", Colors.DIM)

    rows = [(str(entry.id), entry.command, entry.description) for entry in entries]
    widths = [
        max(len(HEADERS[i]), *(len(row[i]) for row in rows))
        for i in range(len(HEADERS))
    ]

    lines = [c(f"━━━ {title} ━━━", Colors.BOLD, Colors.BLUE), ""]

    header = "  ".join(
        [f"{HEADERS[0]:>{widths[0]}}", f"{HEADERS[1]:{widths[1]}}", HEADERS[2]]
    )
    lines.append(c(header, Colors.DIM))
    lines.append(c("─" * (sum(widths) + 4), Colors.DIM))

    for entry_id, command, description in rows:
        id_str = c(f"{entry_id:>{widths[0]}}", Colors.BOLD, Colors.WHITE)
        command_str = c(f"{command:{widths[1]}}", Colors.BRIGHT_CYAN)
        lines.append(f"{id_str}  {command_str}  {description}".rstrip())

    return "\n".join(lines)


def format_saved(entry: Entry) -> str:
    """One-line confirmation after add."""
    return f"Saved #{entry.id}: {entry.command}"
