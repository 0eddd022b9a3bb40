from __future__ import annotations

import unittest
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from persiancalendar import (
    AmbiguousOrInvalidLocalTimeError,
    DateOutOfRangeError,
    DateService,
    DateServiceConfig,
    DurationUnit,
    InvalidFieldError,
    NullOrEmptyInputError,
    ParseError,
    PatternMismatchError,
    PersianFields,
    format_fields,
)
from persiancalendar.core.constants import ASIA_TEHRAN_ZONE
from persiancalendar.utils.jalali import to_gregorian_day_number, to_persian


def dashed_service() -> DateService:
    return DateService(
        DateServiceConfig.builder()
        .with_date_format("yyyy-MM-dd")
        .with_date_time_format("yyyy-MM-dd HH:mm:ss")
        .build()
    )


class CurrentDateTests(unittest.TestCase):
    def test_current_values_are_non_empty(self):
        service = DateService()
        self.assertTrue(service.current_date_time())
        self.assertTrue(service.current_date())

    def test_current_values_use_reference_zone(self):
        service = DateService(clock=lambda: datetime(2024, 3, 20, 20, 30, tzinfo=timezone.utc))
        self.assertEqual(service.current_date(), "1403/01/02")
        self.assertEqual(service.current_date_time(), "1403/01/02T00:00:00")


class InstantConversionTests(unittest.TestCase):
    def setUp(self):
        self.service = DateService()
        self.instant = datetime(2023, 3, 21, 0, 0, 0, tzinfo=timezone.utc)

    def test_instant_to_persian_date(self):
        self.assertEqual(self.service.to_persian_date(self.instant), "1402/01/01")

    def test_zoned_datetime_is_an_instant(self):
        zoned = self.instant.astimezone(ZoneInfo(ASIA_TEHRAN_ZONE))
        self.assertEqual(self.service.to_persian_date(zoned), "1402/01/01")

    def test_instant_to_persian_date_time_at_utc(self):
        self.assertEqual(self.service.to_persian_date_time(self.instant), "1402/01/01T00:00:00")

    def test_instant_to_persian_date_time_with_zone(self):
        self.assertEqual(self.service.to_persian_date_time_with_zone(self.instant), "1402/01/01T03:30:00")

    def test_none_rejected(self):
        with self.assertRaises(NullOrEmptyInputError):
            self.service.to_persian_date(None)
        with self.assertRaises(NullOrEmptyInputError):
            self.service.to_persian_date_time_with_zone(None)


class LocalConversionTests(unittest.TestCase):
    def setUp(self):
        self.service = DateService()

    def test_local_date_time(self):
        self.assertEqual(self.service.to_persian_date_time_no_zone(datetime(2023, 3, 21)), "1402/01/01T00:00:00")
        self.assertEqual(
            self.service.to_persian_local_date_time(datetime(2023, 3, 21, 18, 5, 9)), "1402/01/01T18:05:09"
        )

    def test_local_date(self):
        self.assertEqual(self.service.to_persian_local_date(date(2023, 3, 21)), "1402/01/01")
        self.assertEqual(self.service.to_persian_local_date_time(date(2023, 3, 21)), "1402/01/01T00:00:00")

    def test_custom_formats(self):
        self.assertEqual(dashed_service().to_persian_local_date_time(date(2023, 3, 21)), "1402-01-01 00:00:00")

    def test_first_representable_day(self):
        with self.assertRaises(DateOutOfRangeError):
            self.service.to_persian_local_date(date(1, 1, 1))
        self.assertEqual(
            self.service.to_persian_local_date(date(1, 1, 2)),
            format_fields(to_persian(date(1, 1, 2).toordinal()), "yyyy/MM/dd"),
        )
        with self.assertRaises(DateOutOfRangeError):
            self.service.plus_days("1403/01/01", 10_000_000)

    def test_none_rejected(self):
        with self.assertRaises(NullOrEmptyInputError):
            self.service.to_persian_local_date(None)
        with self.assertRaises(NullOrEmptyInputError):
            self.service.to_persian_local_date_time(None)


class IsoStringTests(unittest.TestCase):
    def setUp(self):
        self.service = DateService()

    def test_iso_date(self):
        self.assertEqual(self.service.to_persian_date_from_iso("2024-03-20"), "1403/01/01")

    def test_iso_date_time(self):
        self.assertEqual(self.service.to_persian_date_time_from_iso("2024-03-20T00:00:00"), "1403/01/01T00:00:00")
        self.assertEqual(self.service.to_persian_date_time_from_iso("2024-03-20T14:25"), "1403/01/01T14:25:00")

    def test_iso_date_start_of_day(self):
        self.assertEqual(self.service.to_persian_date_time_start_of_day("2024-03-20"), "1403/01/01T00:00:00")

    def test_single_digit_month_rejected(self):
        with self.assertRaises(ParseError):
            self.service.to_persian_date_from_iso("2024-3-20")

    def test_impossible_date_wraps_cause(self):
        with self.assertRaises(ParseError) as ctx:
            self.service.to_persian_date_from_iso("2023-02-29")
        self.assertIsInstance(ctx.exception.__cause__, ValueError)

    def test_empty_rejected(self):
        for value in (None, "", "   "):
            with self.subTest(value=value):
                with self.assertRaises(NullOrEmptyInputError):
                    self.service.to_persian_date_from_iso(value)
                with self.assertRaises(NullOrEmptyInputError):
                    self.service.to_persian_date_time_from_iso(value)


class FindDateTests(unittest.TestCase):
    def test_lookup_key_round_trip(self):
        service = DateService()
        self.assertEqual(service.to_persian_find_date(date(2024, 3, 20)), "14030101")
        self.assertEqual(service.to_persian_find_date(datetime(2024, 3, 19, 21, 0, tzinfo=timezone.utc)), "14030101")
        self.assertEqual(service.from_find_date("14030101", ASIA_TEHRAN_ZONE), date(2024, 3, 20))

    def test_custom_find_pattern(self):
        service = DateService(DateServiceConfig.builder().with_find_date_format("yyyy_MM").build())
        self.assertEqual(service.to_persian_find_date(date(2024, 4, 25)), "1403_02")


class DayArithmeticTests(unittest.TestCase):
    def test_minus_days_across_year_end(self):
        self.assertEqual(DateService().minus_days("1403/01/01", 1), "1402/12/29")
        self.assertEqual(dashed_service().minus_days("1403-01-01", 1), "1402-12-29")

    def test_plus_days_into_leap_day(self):
        self.assertEqual(dashed_service().plus_days("1403-12-29", 1), "1403-12-30")
        self.assertEqual(dashed_service().plus_days("1403-12-30", 1), "1404-01-01")
        self.assertEqual(dashed_service().plus_days("1402-12-29", 1), "1403-01-01")

    def test_plus_then_minus_is_identity(self):
        service = DateService()
        for start in ("1399/12/30", "1402/06/31", "1403/01/01", "1403/12/30", "1404/07/01"):
            for n in (0, 1, 29, 30, 31, 365, 366, 1000):
                with self.subTest(start=start, n=n):
                    self.assertEqual(service.minus_days(service.plus_days(start, n), n), start)

    def test_unparsable_input(self):
        service = DateService()
        with self.assertRaises(PatternMismatchError):
            service.plus_days("1403-01-01", 1)
        with self.assertRaises(ParseError) as ctx:
            service.minus_days("1402/12/30", 1)
        self.assertIsInstance(ctx.exception.__cause__, InvalidFieldError)
        with self.assertRaises(NullOrEmptyInputError):
            service.plus_days(None, 1)

    def test_parse_failure_is_logged(self):
        with self.assertLogs("persiancalendar.service", level="WARNING") as logs:
            with self.assertRaises(ParseError):
                DateService().plus_days("not a date", 1)
        self.assertIn("persian_parse_failed", logs.output[0])


class DurationTests(unittest.TestCase):
    def setUp(self):
        self.service = dashed_service()

    def test_days_and_seconds_across_leap_day(self):
        self.assertEqual(self.service.local_date_duration("1403-12-29", "1403-12-30", DurationUnit.DAYS), 1)
        self.assertEqual(self.service.local_date_duration("1403-12-29", "1403-12-30", DurationUnit.SECONDS), 86400)

    def test_date_time_durations(self):
        self.assertEqual(
            self.service.local_date_time_duration("1403-12-29 23:59:59", "1403-12-30 00:00:00", DurationUnit.SECONDS),
            1,
        )
        self.assertEqual(
            self.service.local_date_time_duration("1403-12-29 23:59:58", "1403-12-30 00:00:00", DurationUnit.DAYS),
            0,
        )
        self.assertEqual(
            self.service.local_date_time_duration("621-12-29 23:59:58", "1403-12-30 00:00:00", DurationUnit.CENTURIES),
            7,
        )

    def test_years_and_months(self):
        self.assertEqual(self.service.local_date_duration("1400-01-01", "1410-01-01", "YEARS"), 10)
        self.assertEqual(self.service.local_date_duration("1403-12-30", "1402-12-29", DurationUnit.DAYS), -366)

    def test_days_are_additive(self):
        points = ["1399-12-30", "1400-01-01", "1401-10-01", "1403-12-29", "1403-12-30", "1404-01-01"]
        for i, a in enumerate(points):
            for j in range(i, len(points)):
                for c in points[j:]:
                    b = points[j]
                    with self.subTest(a=a, b=b, c=c):
                        self.assertEqual(
                            self.service.local_date_duration(a, c, DurationUnit.DAYS),
                            self.service.local_date_duration(a, b, DurationUnit.DAYS)
                            + self.service.local_date_duration(b, c, DurationUnit.DAYS),
                        )

    def test_unparsable(self):
        with self.assertRaises(ParseError):
            self.service.local_date_duration("1403/12/29", "1403-12-30", DurationUnit.DAYS)


class GregorianConversionTests(unittest.TestCase):
    def setUp(self):
        self.service = DateService()

    def test_persian_date_to_gregorian(self):
        self.assertEqual(self.service.to_gregorian_date("1403/01/01", ASIA_TEHRAN_ZONE), date(2024, 3, 20))
        self.assertEqual(self.service.to_gregorian_date("1403/01/01", "UTC"), date(2024, 3, 19))

    def test_persian_date_time_to_gregorian(self):
        self.assertEqual(
            self.service.to_gregorian_date_time("1403/01/01T00:00:00", ZoneInfo(ASIA_TEHRAN_ZONE)),
            datetime(2024, 3, 20, 0, 0, 0),
        )
        self.assertEqual(
            self.service.to_gregorian_date_time("1403/01/01T03:30:00", "UTC"),
            datetime(2024, 3, 20, 0, 0, 0),
        )

    def test_zone_required(self):
        with self.assertRaises(NullOrEmptyInputError):
            self.service.to_gregorian_date("1403/01/01", None)
        with self.assertRaises(NullOrEmptyInputError):
            self.service.to_gregorian_date_time("1403/01/01T00:00:00", None)

    def test_unparsable(self):
        with self.assertRaises(ParseError):
            self.service.to_gregorian_date_time("1403/01/01 00:00:00", ASIA_TEHRAN_ZONE)


class TehranDaylightSavingTests(unittest.TestCase):
    """Asia/Tehran skipped 00:00-01:00 on the first DST day (2021-03-22, 1400/01/02)."""

    def setUp(self):
        self.service = DateService()

    def test_gap_midnight_is_a_valid_date(self):
        self.assertEqual(self.service.plus_days("1400/01/01", 1), "1400/01/02")
        self.assertEqual(self.service.plus_days("1400/01/02", 0), "1400/01/02")
        self.assertEqual(self.service.minus_days("1400/01/03", 1), "1400/01/02")
        self.assertEqual(self.service.to_persian_local_date(date(2021, 3, 22)), "1400/01/02")
        self.assertEqual(self.service.to_gregorian_date("1400/01/02", ASIA_TEHRAN_ZONE), date(2021, 3, 22))
        self.assertEqual(self.service.to_gregorian_date("1399/01/02", ASIA_TEHRAN_ZONE), date(2020, 3, 21))

    def test_gap_midnight_moves_to_first_valid_time(self):
        self.assertEqual(
            self.service.to_gregorian_date_time("1400/01/02T00:00:00", ASIA_TEHRAN_ZONE),
            datetime(2021, 3, 22, 1, 0, 0),
        )

    def test_durations_across_the_gap(self):
        self.assertEqual(self.service.local_date_duration("1400/01/01", "1400/01/03", DurationUnit.DAYS), 2)
        self.assertEqual(self.service.local_date_duration("1400/01/02", "1400/01/03", DurationUnit.DAYS), 1)
        self.assertEqual(self.service.local_date_duration("1400/01/03", "1400/01/02", DurationUnit.DAYS), -1)
        self.assertEqual(self.service.local_date_duration("1400/01/01", "1400/01/03", DurationUnit.SECONDS), 169200)
        self.assertEqual(self.service.local_date_duration("1400/01/02", "1400/01/03", DurationUnit.HOURS), 23)

    def test_shahrivar_month_end(self):
        self.assertEqual(self.service.plus_days("1390/06/30", 1), "1390/06/31")
        self.assertEqual(self.service.plus_days("1390/06/31", 1), "1390/07/01")
        self.assertEqual(self.service.minus_days("1400/07/01", 2), "1400/06/30")

    def test_transition_days_of_every_year(self):
        for year in range(1358, 1402):
            for month, day in ((1, 1), (1, 2), (6, 30), (6, 31)):
                fields = PersianFields(year, month, day)
                text = f"{year}/{month:02d}/{day:02d}"
                following = to_persian(to_gregorian_day_number(fields) + 1)
                with self.subTest(date=text):
                    self.assertEqual(self.service.plus_days(text, 0), text)
                    self.assertEqual(
                        self.service.plus_days(text, 1),
                        f"{following.year}/{following.month:02d}/{following.day:02d}",
                    )
                    self.assertEqual(self.service.minus_days(self.service.plus_days(text, 1), 1), text)
                    self.assertEqual(
                        self.service.to_gregorian_date(text, ASIA_TEHRAN_ZONE),
                        date.fromordinal(to_gregorian_day_number(fields)),
                    )

    def test_raise_policy_reports_the_gap(self):
        service = DateService(DateServiceConfig.builder().with_local_time_policy("raise").build())
        with self.assertRaises(AmbiguousOrInvalidLocalTimeError) as ctx:
            service.plus_days("1400/01/01", 1)
        self.assertEqual(ctx.exception.kind, "gap")


class ThreadSafetyTests(unittest.TestCase):
    def test_concurrent_calls_match_serial_calls(self):
        service = DateService()

        def work(i: int) -> tuple[str, str, str]:
            return (
                service.to_persian_local_date(date(2023, 3, 21)),
                service.to_persian_local_date_time(datetime(2024, 3, 20)),
                service.minus_days("1403/01/01", 1),
            )

        with ThreadPoolExecutor(max_workers=32) as pool:
            results = list(pool.map(work, range(2000)))
        self.assertEqual(set(results), {("1402/01/01", "1403/01/01T00:00:00", "1402/12/29")})


if __name__ == "__main__":
    unittest.main()
