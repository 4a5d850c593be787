"""
ISO-8601 週次計算

週一為一週的第一天，每年第 1 週是包含該年第一個星期四的那一週。
"""
from datetime import date, timedelta

from app.exceptions import InvalidRangeError

# 9999 年最後一週會跨到 10000 年，date 無法表示
MAX_ISO_YEAR = 9998


def _thursday_of(d: date) -> date:
    """同一 ISO 週的星期四"""
    return d + timedelta(days=3 - d.weekday())


def iso_week(d: date) -> tuple[int, int]:
    """
    取得日期所屬的 ISO 週

    Returns:
        (ISO 年, 週次)；年底/年初的日期可能屬於相鄰年份
    """
    thursday = _thursday_of(d)
    day_of_year = thursday.timetuple().tm_yday
    return thursday.year, (day_of_year - 1) // 7 + 1


def iso_week_number(d: date) -> int:
    """取得 ISO 週次（1-53）"""
    return iso_week(d)[1]


def iso_week_year(d: date) -> int:
    """取得 ISO 週所屬的年份"""
    return iso_week(d)[0]


def weeks_in_year(year: int) -> int:
    """該 ISO 年共有幾週（52 或 53）"""
    if not 1 <= year <= MAX_ISO_YEAR:
        raise InvalidRangeError(f"Year {year} is outside 1-{MAX_ISO_YEAR}")
    # 12/28 一定落在該年最後一週
    return iso_week_number(date(year, 12, 28))


def week_date_range(year: int, week_number: int) -> tuple[date, date]:
    """
    取得 ISO 週的起訖日

    Returns:
        (星期一, 星期日)
    """
    if not 1 <= year <= MAX_ISO_YEAR or not 1 <= week_number <= weeks_in_year(year):
        raise InvalidRangeError(f"Week {week_number} does not exist in {year}")

    # 1/4 一定落在第 1 週
    jan4 = date(year, 1, 4)
    monday = jan4 - timedelta(days=jan4.weekday()) + timedelta(weeks=week_number - 1)
    return monday, monday + timedelta(days=6)


def weeks_in_range(start_date: date, end_date: date) -> list[tuple[int, int]]:
    """
    列出日期範圍（含頭尾）涵蓋的所有 ISO 週，依時間先後排序且不重複

    以週一為界逐週前進，跨年的週只會出現一次。
    """
    if end_date < start_date:
        raise InvalidRangeError(f"End date {end_date} is before start date {start_date}")

    weeks = []
    monday = start_date - timedelta(days=start_date.weekday())
    while monday <= end_date:
        weeks.append(iso_week(monday))
        monday += timedelta(weeks=1)
    return weeks


def day_of_week(d: date) -> int:
    """星期幾（0=星期日 ... 6=星期六），與資料表的 day_of_week 一致"""
    return (d.weekday() + 1) % 7
