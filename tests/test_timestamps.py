"""
Unit tests for day and event time ranges.

All expectations are unix timestamps in Europe/Ljubljana.
"""

import unittest
from datetime import datetime
from zoneinfo import ZoneInfo

from runningorder.errors import TimeFormatError
from runningorder.model import TimeStamps
from runningorder.timestamps import day_start, resolve_day_range, resolve_event_range


TZ = ZoneInfo("Europe/Ljubljana")


class TestDayRange(unittest.TestCase):
    def test_known_days(self) -> None:
        cases = [
            (2017, "Saturday 22.07.", TimeStamps(1500674400, 1500760800)),
            (2017, "Tuesday 25.07.", TimeStamps(1500933600, 1501020000)),
            (2017, "Wednesday 26.07.", TimeStamps(1501020000, 1501106400)),
            (2016, "Saturday 22.07.", TimeStamps(1469138400, 1469224800)),
        ]
        for year, label, expected in cases:
            with self.subTest(label=label, year=year):
                self.assertEqual(resolve_day_range(year, label, TZ), expected)

    def test_whole_day(self) -> None:
        ts = resolve_day_range(2019, "Monday 22.07.", TZ)
        self.assertEqual(ts.end - ts.start, 86400)

    def test_dst_switch_days(self) -> None:
        spring = resolve_day_range(2017, "Sunday 26.03.", TZ)
        self.assertEqual(spring.end - spring.start, 23 * 3600)
        autumn = resolve_day_range(2017, "Sunday 29.10.", TZ)
        self.assertEqual(autumn.end - autumn.start, 25 * 3600)

    def test_label_from_date_gives_its_midnight(self) -> None:
        d = datetime(2018, 7, 24, tzinfo=TZ)
        label = d.strftime("%A %d.%m.")
        self.assertEqual(resolve_day_range(2018, label, TZ).start, int(d.timestamp()))

    def test_year_comes_from_caller(self) -> None:
        self.assertEqual(day_start(2030, "Friday 02.08.", TZ), datetime(2030, 8, 2, tzinfo=TZ))

    def test_invalid_labels(self) -> None:
        for label in [
            "",
            "Saturday",
            "Saturday 22. 07.",
            "Saturday 22.07",
            "Saturday 2.7.",
            "Samstag 22.07.",
            "Saturday 32.07.",
            "Saturday 22.13.",
        ]:
            with self.subTest(label=label):
                with self.assertRaises(TimeFormatError):
                    resolve_day_range(2017, label, TZ)

    def test_weekday_case_insensitive(self) -> None:
        expected = TimeStamps(1500674400, 1500760800)
        for label in ["SATURDAY 22.07.", "saturday 22.07.", "sAtUrDaY 22.07."]:
            with self.subTest(label=label):
                self.assertEqual(resolve_day_range(2017, label, TZ), expected)

    def test_leap_day(self) -> None:
        self.assertEqual(day_start(2016, "Monday 29.02.", TZ), datetime(2016, 2, 29, tzinfo=TZ))
        with self.assertRaises(TimeFormatError):
            day_start(2017, "Monday 29.02.", TZ)


class TestEventRange(unittest.TestCase):
    def setUp(self) -> None:
        self.day = datetime(2017, 7, 22, tzinfo=TZ)

    def test_same_day(self) -> None:
        ts = resolve_event_range(self.day, "20:30 - 21:15")
        self.assertEqual(ts.start, int(datetime(2017, 7, 22, 20, 30, tzinfo=TZ).timestamp()))
        self.assertEqual(ts.end, int(datetime(2017, 7, 22, 21, 15, tzinfo=TZ).timestamp()))

    def test_end_after_midnight(self) -> None:
        self.assertEqual(resolve_event_range(self.day, "22:30 - 00:00"), TimeStamps(1500755400, 1500760800))

    def test_both_after_midnight(self) -> None:
        self.assertEqual(resolve_event_range(self.day, "00:10 - 01:20"), TimeStamps(1500761400, 1500765600))

        day = datetime(2016, 6, 15, tzinfo=TZ)
        ts = resolve_event_range(day, "00:30 - 01:15")
        self.assertEqual(ts.start, int(datetime(2016, 6, 16, 0, 30, tzinfo=TZ).timestamp()))
        self.assertEqual(ts.end, int(datetime(2016, 6, 16, 1, 15, tzinfo=TZ).timestamp()))

    def test_rollover_threshold(self) -> None:
        ts = resolve_event_range(self.day, "09:59 - 10:00")
        self.assertEqual(ts.start, int(datetime(2017, 7, 23, 9, 59, tzinfo=TZ).timestamp()))
        self.assertEqual(ts.end, int(datetime(2017, 7, 22, 10, 0, tzinfo=TZ).timestamp()))

    def test_end_not_before_start_across_midnight(self) -> None:
        ts = resolve_event_range(self.day, "23:15 - 00:30")
        self.assertGreater(ts.end, ts.start)

    def test_unscheduled(self) -> None:
        self.assertIsNone(resolve_event_range(self.day, "-"))
        self.assertIsNone(resolve_event_range(self.day, " - "))

    def test_single_digit_hour(self) -> None:
        ts = resolve_event_range(self.day, "0:10 - 1:20")
        self.assertEqual(ts, TimeStamps(1500761400, 1500765600))

    def test_invalid_labels(self) -> None:
        for label in [
            "",
            "22:30",
            "22:30-00:00",
            "22:30 - 00:00 - 01:00",
            "22.30 - 00:00",
            "24:00 - 01:00",
            "22:60 - 23:00",
            "22:3 - 23:00",
            "tba - tba",
        ]:
            with self.subTest(label=label):
                with self.assertRaises(TimeFormatError):
                    resolve_event_range(self.day, label)


if __name__ == "__main__":
    unittest.main()
