"""Human-readable presentation helpers for health scores."""


def format_days_since_update(days: int | None) -> str:
    """Format a day count as a relative age ("3 months ago")."""
    if days is None:
        return "Unknown"
    if days < 1:
        return "Today"
    if days == 1:
        return "1 day ago"
    if days < 30:
        return f"{days} days ago"
    if days < 60:
        return "1 month ago"
    if days < 365:
        return f"{days // 30} months ago"
    if days < 730:
        return "1 year ago"
    return f"{days // 365} years ago"
