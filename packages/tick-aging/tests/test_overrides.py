"""Tests for manual crew overrides and range application."""
import logging

import pytest

from tick_aging.calendar import YEAR_SECONDS
from tick_aging.clock import ManualClock
from tick_aging.config import AgingRanges, AgingSettings
from tick_aging.overrides import CrewOverrides

NOW = YEAR_SECONDS * 4.5  # calendar year 5


@pytest.fixture
def settings():
    return AgingSettings()


@pytest.fixture
def overrides(ledger, adjudicator, settings, scripted):
    return CrewOverrides(ledger, adjudicator, settings, ManualClock(NOW), scripted("low"))


class TestSetAge:
    def test_lowering_age_rebases_year(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(current_age=30, year_added=1, birth_year=-29))
        assert overrides.set_age("Bob", 25)
        assert rec.current_age == 25
        assert rec.year_added == 5
        assert rec.birth_year == -20

    def test_raising_age_keeps_year(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(current_age=30, year_added=1))
        overrides.set_age("Bob", 40)
        assert rec.year_added == 1
        assert rec.birth_year == -39

    def test_negative_clamped_to_zero(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record())
        overrides.set_age("Bob", -5)
        assert rec.current_age == 0

    def test_past_death_age_dies_now(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(death_age=300))
        overrides.set_age("Bob", 300)
        assert rec.is_alive is False
        assert rec.unknown_death is False
        assert rec.death_ut == NOW

    def test_immortal_survives(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(death_age=300, immortal=True))
        overrides.set_age("Bob", 500)
        assert rec.is_alive

    def test_dead_record_not_editable(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(is_alive=False))
        assert not overrides.set_age("Bob", 10)
        assert rec.current_age == 30

    def test_unknown_name(self, overrides):
        assert not overrides.set_age("Nobody", 10)


class TestFrozenYears:
    def test_subtracts_years(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(current_age=30, birth_year=-29))
        assert overrides.add_frozen_years("Bob", 12)
        assert rec.current_age == 18
        assert rec.birth_year == -29

    def test_never_below_zero(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(current_age=3))
        overrides.add_frozen_years("Bob", 10)
        assert rec.current_age == 0


class TestBlessing:
    def test_bless_adds_bonus(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(death_age=300))
        overrides.set_blessed("Bob", True)
        assert rec.blessed and rec.death_age == 350

    def test_unbless_subtracts_bonus(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(death_age=350, blessed=True))
        overrides.set_blessed("Bob", False)
        assert not rec.blessed and rec.death_age == 300

    def test_unbless_clamped_above_current_age(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(current_age=320, death_age=340, blessed=True))
        overrides.set_blessed("Bob", False)
        assert rec.death_age == 321
        assert rec.is_alive

    def test_same_value_is_noop(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(death_age=350, blessed=True))
        overrides.set_blessed("Bob", True)
        assert rec.death_age == 350


class TestImmortal:
    def test_toggle(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record())
        overrides.set_immortal("Bob", True)
        assert rec.immortal
        overrides.set_immortal("Bob", False)
        assert not rec.immortal

    def test_clearing_past_lifespan_dies_now(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(current_age=320, death_age=300, immortal=True))
        assert overrides.set_immortal("Bob", False)
        assert rec.is_alive is False
        assert rec.unknown_death is False
        assert rec.death_ut == NOW


class TestApplyRanges:
    def test_numeric_strings_applied(self, overrides, settings):
        assert overrides.apply_ranges("18", "25", "200", "220")
        assert settings.ranges == AgingRanges(18, 25, 200, 220)

    def test_bad_field_left_unchanged(self, overrides, settings):
        overrides.apply_ranges("abc", "40", "", "400")
        assert settings.ranges == AgingRanges(22, 40, 300, 400)

    def test_max_clamped_to_min(self, overrides, settings):
        overrides.apply_ranges(50, 30, 500, 100)
        assert settings.ranges == AgingRanges(50, 50, 500, 500)

    def test_living_lifespans_resampled(self, ledger, overrides, make_record):
        alive = ledger.create("Bob", make_record(death_age=999))
        blessed = ledger.create("Jebediah", make_record(death_age=999, blessed=True))
        dead = ledger.create("Bill", make_record(death_age=30, current_age=30, is_alive=False))
        overrides.apply_ranges(None, None, 200, 250)
        assert alive.death_age == 200
        assert blessed.death_age == 250
        assert dead.death_age == 30

    def test_lifespan_below_age_dies(self, ledger, overrides, make_record):
        rec = ledger.create("Bob", make_record(current_age=150))
        overrides.apply_ranges(None, None, 100, 120)
        assert rec.is_alive is False
        assert rec.death_ut == NOW


class TestLock:
    def test_locked_refuses_everything(self, ledger, overrides, settings, make_record, caplog):
        rec = ledger.create("Bob", make_record(current_age=30))
        overrides.lock()
        assert settings.locked
        with caplog.at_level(logging.WARNING, logger="tick_aging.overrides"):
            assert not overrides.set_age("Bob", 50)
            assert not overrides.set_blessed("Bob", True)
            assert not overrides.set_immortal("Bob", True)
            assert not overrides.add_frozen_years("Bob", 5)
            assert not overrides.apply_ranges(1, 2, 3, 4)
        assert rec.current_age == 30
        assert settings.ranges == AgingRanges()
        assert "locked" in caplog.text
