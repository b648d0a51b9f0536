from datetime import date


def get_current_age(date_of_birth: date, today: date | None = None) -> int:
    """
    Whole years between ``date_of_birth`` and ``today``.

    Args:
        date_of_birth: Birth date.
        today: Reference date, defaults to the current date.

    Returns:
        Age in completed years.
    """
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age
