"""Formatting utilities for display values."""


def format_quantity(value) -> str:
    """Whole numbers without decimals, anything else to two places."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:,.2f}"


def format_readiness(summary) -> str:
    """One-line readiness badge text for a ``ReadinessSummary``."""
    if not summary.required_count:
        return "No parts required"
    text = (f"{format_quantity(summary.ready_count)} / "
            f"{format_quantity(summary.required_count)} ready")
    if summary.missing_count > 0:
        text += f" ({format_quantity(summary.missing_count)} missing)"
    return text
