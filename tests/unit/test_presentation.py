"""Terminal rendering of a state."""

from datetime import datetime, timedelta, timezone

import pytest

from skuff.core.ids import new_id
from skuff.domain.entities import Activity, Break, Login, Logout
from skuff.presentation.log import describe, format_duration, render
from skuff.projection.replay import State

UTC = timezone.utc
NINE = datetime(2023, 1, 1, 9, 0, tzinfo=UTC)


@pytest.mark.parametrize("duration, expected", [
    (timedelta(0), "0h00m"),
    (timedelta(minutes=10), "0h10m"),
    (timedelta(hours=1, minutes=5), "1h05m"),
    (timedelta(hours=25), "25h00m"),
    (timedelta(minutes=-30), "-0h30m"),
])
def test_format_duration(duration, expected):
    assert format_duration(duration) == expected


class TestDescribe:
    def test_login(self):
        assert describe(Login(entity_id=new_id(), timestamp=NINE), UTC) == "Login @ 2023-01-01 09:00"

    def test_logout(self):
        assert describe(Logout(entity_id=new_id(), timestamp=NINE), UTC) == "Logout @ 2023-01-01 09:00"

    def test_break(self):
        entity = Break(entity_id=new_id(), timestamp=NINE, duration=timedelta(minutes=15))
        assert describe(entity, UTC) == "Break @ 2023-01-01 09:00 for 0h15m"

    def test_auto_break(self):
        entity = Break(entity_id=new_id(), timestamp=NINE, duration=timedelta(minutes=15), autoinsert=True)
        assert describe(entity, UTC).endswith(" (auto)")

    def test_activity(self):
        entity = Activity(entity_id=new_id(), timestamp=NINE, duration=timedelta(hours=2), value="Coding")
        assert describe(entity, UTC) == "Activity: Coding @ 2023-01-01 09:00 for 2h00m"

    def test_local_time(self):
        cet = timezone(timedelta(hours=1))
        assert describe(Login(entity_id=new_id(), timestamp=NINE), cet) == "Login @ 2023-01-01 10:00"


class TestRender:
    def test_newest_first(self):
        early = Login(entity_id=new_id(), timestamp=NINE)
        late = Logout(entity_id=new_id(), timestamp=NINE + timedelta(hours=8))

        text = render(State([early, late]), color=False, tz=UTC)

        assert text == (
            f"{late.entity_id}\nLogout @ 2023-01-01 17:00\n"
            "\n"
            f"{early.entity_id}\nLogin @ 2023-01-01 09:00\n"
        )

    def test_color_highlights_ids(self):
        login = Login(entity_id=new_id(), timestamp=NINE)
        text = render(State([login]), color=True, tz=UTC)
        assert "\x1b[33m" in text
        assert str(login.entity_id) in text

    def test_empty(self):
        assert render(State(), color=False) == ""
