# =============================================================================
# tests/test_timezone.py - Fixed-Offset Date Tests
# =============================================================================

from datetime import datetime, timedelta, timezone

from lib.timezone import IST, fixed_offset, local_date_string, utc_now


class TestLocalDateString:
    """Tests for local_date_string."""

    def test_before_ist_midnight(self):
        # 18:29 UTC == 23:59 IST
        instant = datetime(2024, 3, 15, 18, 29, tzinfo=timezone.utc)
        assert local_date_string(instant) == "2024-03-15"

    def test_at_ist_midnight(self):
        # 18:30 UTC == 00:00 IST next day
        instant = datetime(2024, 3, 15, 18, 30, tzinfo=timezone.utc)
        assert local_date_string(instant) == "2024-03-16"

    def test_naive_is_treated_as_utc(self):
        assert local_date_string(datetime(2024, 3, 15, 18, 30)) == "2024-03-16"

    def test_independent_of_input_timezone(self):
        """The same instant expressed in different zones gives the same day."""
        new_york = timezone(timedelta(hours=-5))
        a = datetime(2024, 3, 15, 13, 45, tzinfo=new_york)       # 18:45 UTC
        b = a.astimezone(timezone.utc)
        c = a.astimezone(IST)

        assert local_date_string(a) == local_date_string(b) == local_date_string(c) == "2024-03-16"

    def test_custom_timezone(self):
        instant = datetime(2024, 3, 15, 18, 30, tzinfo=timezone.utc)
        assert local_date_string(instant, timezone.utc) == "2024-03-15"

    def test_year_boundary(self):
        instant = datetime(2023, 12, 31, 19, 0, tzinfo=timezone.utc)
        assert local_date_string(instant) == "2024-01-01"


class TestFixedOffset:

    def test_ist(self):
        assert fixed_offset(330) == IST
        assert fixed_offset(330).utcoffset(None) == timedelta(hours=5, minutes=30)
        assert IST.utcoffset(None) == timedelta(hours=5, minutes=30)

    def test_other_offsets(self):
        assert fixed_offset(0).utcoffset(None) == timedelta(0)
        assert fixed_offset(-300).utcoffset(None) == timedelta(hours=-5)

    def test_offset_buckets_like_ist(self):
        """A configured 330 minute offset dates instants the same as IST."""
        instant = datetime(2024, 3, 15, 18, 31, tzinfo=timezone.utc)

        assert local_date_string(instant, fixed_offset(330)) == local_date_string(instant) == "2024-03-16"


def test_utc_now_is_aware():
    now = utc_now()
    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)
