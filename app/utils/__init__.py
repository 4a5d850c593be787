from app.utils.iso_week import (
    MAX_ISO_YEAR,
    iso_week,
    iso_week_number,
    iso_week_year,
    weeks_in_year,
    week_date_range,
    weeks_in_range,
    day_of_week,
)

__all__ = [
    "MAX_ISO_YEAR",
    "iso_week",
    "iso_week_number",
    "iso_week_year",
    "weeks_in_year",
    "week_date_range",
    "weeks_in_range",
    "day_of_week",
]
