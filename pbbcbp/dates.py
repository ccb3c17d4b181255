"""Julian (day of year) date conversions used by boarding passes."""

# Standard imports
from datetime import date, timedelta

def flight_date(day_of_year: int, year: int) -> date:
    """
    Converts a day of year into a date.

    Days are counted from the last day of the prior year, so day 1 is
    January 1. Leap years are not checked: day 366 of a non-leap year
    is January 1 of the following year.
    """
    return date(year - 1, 12, 31) + timedelta(days=day_of_year)

def issue_date(julian: str, year: int) -> date | None:
    """
    Converts a date of issue (last digit of year + day of year).

    The issue year is the latest year up to and including year that
    ends in the encoded digit. Returns None for a blank date.
    """
    julian = julian.strip()
    if julian == "":
        return None
    issue_year = year - ((year - int(julian[0])) % 10)
    return flight_date(int(julian[1:]), issue_year)
