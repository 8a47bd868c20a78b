"""Pure date logic for looking back at past years."""

from datetime import date


def same_day_years_ago(today: date, years: int) -> date:
    """The same calendar day `years` years before. 29 Feb maps to 28 Feb."""
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return today.replace(year=today.year - years, day=28)


def memory_dates(today: date, years: int = 1) -> list[date]:
    """Dates 1..years years before today, most recent first."""
    return [same_day_years_ago(today, n) for n in range(1, years + 1)]
