import re
from typing import Iterable, List, Literal, Optional, Sequence

from db.models import Product

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def filter_products(products: Iterable[Product], query: str) -> List[Product]:
    """Case-insensitive substring match on title. An empty query keeps everything."""
    needle = (query or "").lower()
    if not needle:
        return list(products)
    return [p for p in products if needle in p.title.lower()]


def format_price(amount: float) -> str:
    return f"${amount:.2f}"


def validate_auth_form(
    email: str, password: str, name: str = "", is_login: bool = True
) -> Optional[str]:
    """
    Form-level checks for the login / sign up form.
    Returns the message to show, or None if the input is acceptable.
    """
    if not email or not password:
        return "Please fill in all fields"
    if not is_login and not name:
        return "Please enter your name"
    if not EMAIL_RE.match(email):
        return "Please enter a valid email"
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return None


def _cell(value) -> str:
    # pipes would break the row
    return str(value).replace("|", "\\|").replace("\n", " ")


def generate_markdown_table(
    headers: Optional[Sequence[str]],
    rows: Sequence[Sequence],
    aligns: Optional[List[Literal["l", "c", "r"]]] = None,
) -> str:
    """
    Generate a Markdown table.

    Args:
        headers: List of column headers, or None to use first row as headers.
        rows: List of rows; cells are converted with str().
        aligns: List of alignments ('l', 'c', 'r') for each column.
                Defaults to all left ('l').

    Returns:
        str: Markdown formatted table, or "" when there are no rows.
    """
    if not rows:
        return ""

    if not headers:
        headers, rows = rows[0], rows[1:]

    headers = [_cell(h) for h in headers]
    rows = [[_cell(c) for c in row] for row in rows]

    if aligns is None:
        aligns = ["l"] * len(headers)
    elif len(aligns) != len(headers):
        raise ValueError("Length of aligns must match number of headers.")

    align_map = {"l": ":---", "c": ":---:", "r": "---:"}

    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join(align_map[a] for a in aligns) + " |",
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in rows)
    return "\n".join(lines)
