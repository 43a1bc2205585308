from datetime import datetime, timezone
from decimal import Decimal


def time_ago(moment: datetime, now: datetime | None = None) -> str:
    """
    Abbreviated relative time, e.g. "5 min ago" or "3 days ago"

    Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = int((now - moment).total_seconds())
    if seconds < 0:
        return "in the future"
    if seconds < 60:
        return "just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes} min ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} hr ago"
    days = hours // 24
    if days < 7:
        return f"{days} day ago" if days == 1 else f"{days} days ago"
    weeks = days // 7
    if days < 30:
        return f"{weeks} wk ago"
    months = days // 30
    if days < 365:
        return f"{months} mo ago"
    return f"{days // 365} yr ago"


def format_percent(value: float | None, digits: int = 1) -> str:
    if value is None:
        return "--"
    return f"{value:.{digits}f}%"


def format_cost(amount: Decimal | float | None, currency: str = "USD") -> str:
    if amount is None:
        return "--"
    return f"{amount:,.2f} {currency}"
