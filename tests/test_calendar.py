"""Tests for the month grid and per-day calendar activity."""

import calendar as stdlib_calendar
import logging
from datetime import date

import pytest

from models.records import HolidayRecord, TrainingRecord
from services.calendar import (
    CampaignGroup,
    active_campaigns_in_period,
    build_calendar_month,
    campaigns_in_month,
    group_by_campaign,
    group_status,
    holiday_on,
    month_grid,
    novelties_on,
    records_on,
    split_lanes,
)

MARCH_START, MARCH_END = date(2025, 3, 1), date(2025, 3, 31)


class TestMonthGrid:
    @pytest.mark.parametrize("year,month", [(2025, m) for m in range(1, 13)] + [(2024, 2)])
    def test_no_sundays_and_every_working_day(self, year, month):
        grid = month_grid(year, month)
        assert all(d.weekday() != stdlib_calendar.SUNDAY for d in grid)

        _, last_day = stdlib_calendar.monthrange(year, month)
        for day in range(1, last_day + 1):
            d = date(year, month, day)
            if d.weekday() != stdlib_calendar.SUNDAY:
                assert d in grid

    def test_grid_is_whole_weeks_starting_monday(self):
        grid = month_grid(2025, 3)
        assert grid[0] == date(2025, 2, 24)
        assert grid[-1] == date(2025, 4, 5)
        assert len(grid) == 36
        assert grid[0].weekday() == 0

    def test_month_starting_on_sunday(self):
        # June 2025 starts on a Sunday
        grid = month_grid(2025, 6)
        assert grid[0] == date(2025, 5, 26)
        assert date(2025, 6, 1) not in grid
        assert grid[-1] == date(2025, 7, 5)


class TestHolidays:
    def test_first_match_wins(self, holidays):
        match = holiday_on(date(2025, 3, 24), holidays)
        assert match.is_holiday
        assert match.name == "San José"

    def test_no_holiday(self, holidays):
        match = holiday_on(date(2025, 3, 25), holidays)
        assert not match.is_holiday
        assert match.name is None


def test_novelties_on(novelties):
    assert [n.developer for n in novelties_on(date(2025, 3, 4), novelties)] == [
        "Ana Gomez",
        "Carlos Ruiz",
    ]
    assert novelties_on(date(2025, 3, 5), novelties) == []


def test_records_on(sample_records):
    assert len(records_on(date(2025, 3, 3), sample_records)) == 3
    assert len(records_on(date(2025, 3, 1), sample_records)) == 2


class TestGroups:
    def test_group_by_campaign_first_seen(self, sample_records):
        groups = group_by_campaign(records_on(date(2025, 3, 3), sample_records))
        assert [g.campaign for g in groups] == ["Banco Andino", "Telco Sur"]
        assert len(groups[0].developments) == 2
        assert groups[0].developer == "Ana Gomez"

    def test_missing_campaign_label(self):
        groups = group_by_campaign([TrainingRecord(name="x")])
        assert groups[0].campaign == "Sin campaña"

    @pytest.mark.parametrize(
        "statuses,expected",
        [
            (["Entregado", "En Proceso", "Finalizado"], "En Proceso"),
            (["Entregado", "finalizado"], "Finalizado"),
            (["Cancelado", "Entregado"], "Entregado"),
            (["Cancelado", "Proyectado"], "Cancelado"),
            ([None], None),
        ],
    )
    def test_group_status(self, statuses, expected):
        group = CampaignGroup("X", None, None, None, None, None)
        group.developments = [TrainingRecord(status=s) for s in statuses]
        assert group_status(group) == expected


class TestLanes:
    def _group(self, name, *records):
        return CampaignGroup(name, None, None, None, None, None, list(records))

    def test_split(self):
        regular = self._group("A", TrainingRecord(development_type="NUEVO"))
        update = self._group("B", TrainingRecord(development_type="actualizacion"))
        breach = self._group(
            "C", TrainingRecord(development_type="ACTUALIZACION", status="Incumplimiento")
        )
        lanes = split_lanes([regular, update, breach])

        assert [g.campaign for g in lanes["regular"]] == ["A"]
        assert [g.campaign for g in lanes["updates"]] == ["B"]
        assert [g.campaign for g in lanes["breaches"]] == ["C"]

    def test_lanes_are_capped(self):
        groups = [self._group(str(i), TrainingRecord()) for i in range(10)]
        assert len(split_lanes(groups)["regular"]) == 6
        assert len(split_lanes(groups, limit=3)["regular"]) == 3


class TestActiveCampaigns:
    def test_counts_grid_days_per_campaign(self, sample_records):
        activity = active_campaigns_in_period(sample_records, MARCH_START, MARCH_END)
        by_name = {a.campaign: a for a in activity}

        assert [a.campaign for a in activity] == ["Banco Andino", "Telco Sur"]
        # 1-5 March is 4 grid days; 3-14 March is 11
        assert by_name["Banco Andino"].count == 15
        assert by_name["Banco Andino"].developers == {"Ana Gomez", "Carlos Ruiz"}
        # every Mon-Sat of March 2025
        assert by_name["Telco Sur"].count == 26

    def test_sundays_do_not_count(self):
        sunday = date(2025, 3, 2)
        record = TrainingRecord(campaign="X", start_date=sunday.isoformat(), end_date=sunday.isoformat())
        assert active_campaigns_in_period([record], MARCH_START, MARCH_END) == []

    def test_distinct_names_by_overlap(self, sample_records):
        assert campaigns_in_month(sample_records, MARCH_START, MARCH_END) == [
            "Banco Andino",
            "Telco Sur",
        ]
        assert campaigns_in_month(sample_records, date(2025, 6, 1), date(2025, 6, 30)) == [
            "Energia Norte",
            "Telco Sur",
        ]


def test_build_calendar_month(sample_records, holidays, novelties):
    days = build_calendar_month(
        2025, 3, sample_records, holidays, novelties, today=date(2025, 3, 4)
    )
    by_day = {cell.day: cell for cell in days}

    assert len(days) == 36
    assert not by_day[date(2025, 2, 24)].in_month
    assert by_day[date(2025, 3, 4)].is_today
    assert by_day[date(2025, 3, 24)].holiday.name == "San José"
    assert len(by_day[date(2025, 3, 4)].novelties) == 2

    lanes = by_day[date(2025, 3, 3)].lanes
    assert [g.campaign for g in lanes["regular"]] == ["Telco Sur"]
    assert [g.campaign for g in lanes["updates"]] == ["Banco Andino"]
    assert lanes["breaches"] == []


def test_generated_feed_never_lands_on_sunday(generated_records):
    days = build_calendar_month(2025, 5, generated_records, [], [], today=date(2025, 5, 1))
    assert all(cell.day.weekday() != 6 for cell in days)


def test_bad_date_cell_is_reported_once(caplog):
    with caplog.at_level(logging.WARNING, logger="core.dates"):
        record = TrainingRecord(campaign="X", start_date="2025-03-01", end_date="31/03/2025")
        build_calendar_month(2025, 3, [record], [], [], today=date(2025, 3, 1))
        active_campaigns_in_period([record], MARCH_START, MARCH_END)

    assert record.end is None
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 1


def test_holiday_date_resolved_on_load():
    holiday = HolidayRecord(date="Date(2025,2,24)", name="San José")
    assert holiday.day == date(2025, 3, 24)
    assert holiday_on(date(2025, 3, 24), [holiday]).name == "San José"
