"""Tests for time accounting."""
import random

from tick_aging.accounting import advance_ages, make_aging_system
from tick_aging.calendar import DAY_SECONDS, YEAR_SECONDS, birthday_ut
from tick_aging.records import UNSET_UT
from tick_aging.types import TickContext


def _ctx(now, last_ut, suspended=frozenset()):
    return TickContext(now=now, last_ut=last_ut, crew={}, suspended=suspended,
                       random=random.Random(0))


class TestAdvanceAges:
    def test_two_birthdays_in_a_year_and_a_half(self, ledger, adjudicator, make_record):
        ledger.create("Jebediah", make_record(current_age=30, birthday=100))
        advance_ages(ledger, adjudicator, 0, YEAR_SECONDS * 1.5)
        assert ledger.get("Jebediah").current_age == 32

    def test_crossing_threshold_dies_with_known_time(self, ledger, adjudicator, make_record):
        rec = ledger.create("Jebediah", make_record(current_age=364, death_age=365, birthday=10))
        t = birthday_ut(3, 10)
        now = t + DAY_SECONDS

        died = advance_ages(ledger, adjudicator, t - DAY_SECONDS, now)

        assert died == ["Jebediah"]
        assert rec.current_age == 365
        assert rec.is_alive is False
        assert rec.unknown_death is False
        assert rec.death_ut == now

    def test_second_pass_changes_nothing(self, ledger, adjudicator, make_record):
        rec = ledger.create("Jebediah", make_record(current_age=364, death_age=365, birthday=10))
        t = birthday_ut(3, 10)
        advance_ages(ledger, adjudicator, t - 1, t)
        death_ut = rec.death_ut

        assert advance_ages(ledger, adjudicator, t, t + YEAR_SECONDS * 2) == []
        assert rec.death_ut == death_ut
        assert rec.unknown_death is False
        assert rec.current_age == 365

    def test_aging_is_monotonic(self, ledger, adjudicator, make_record):
        rec = ledger.create("Bob", make_record(current_age=30, birthday=200))
        last, ages = 0.0, []
        for step in range(1, 40):
            now = step * YEAR_SECONDS / 7
            advance_ages(ledger, adjudicator, last, now)
            ages.append(rec.current_age)
            last = now
        assert ages == sorted(ages)
        # birthdays at y + 0.467 for y in 0..5, all before 39/7 years
        assert rec.current_age == 30 + 6

    def test_suspended_record_does_not_age(self, ledger, adjudicator, make_record):
        rec = ledger.create("Bob", make_record(current_age=30, death_age=31, birthday=1))
        advance_ages(ledger, adjudicator, 0, YEAR_SECONDS * 5, suspended={"Bob"})
        assert rec.current_age == 30
        assert rec.is_alive

    def test_dead_record_untouched(self, ledger, adjudicator, make_record):
        rec = ledger.create("Bob", make_record(current_age=40, death_age=40, is_alive=False))
        advance_ages(ledger, adjudicator, 0, YEAR_SECONDS * 5)
        assert rec.current_age == 40
        assert rec.death_ut == UNSET_UT

    def test_immortal_ages_but_survives(self, ledger, adjudicator, make_record):
        rec = ledger.create("Bob", make_record(current_age=299, death_age=300, immortal=True))
        advance_ages(ledger, adjudicator, 0, YEAR_SECONDS * 3)
        assert rec.current_age == 302
        assert rec.is_alive

    def test_threshold_checked_without_birthday(self, ledger, adjudicator, make_record):
        """A record already past its death age dies even if no birthday elapsed."""
        rec = ledger.create("Bob", make_record(current_age=310, death_age=300, birthday=400))
        advance_ages(ledger, adjudicator, 10.0, 20.0)
        assert rec.is_alive is False
        assert rec.death_ut == 20.0

    def test_no_interval_ages_nothing(self, ledger, adjudicator, make_record):
        rec = ledger.create("Bob", make_record(current_age=30, birthday=1))
        advance_ages(ledger, adjudicator, YEAR_SECONDS, YEAR_SECONDS)
        advance_ages(ledger, adjudicator, YEAR_SECONDS, 5.0)
        assert rec.current_age == 30
        assert rec.is_alive

    def test_no_interval_still_resolves_threshold(self, ledger, adjudicator, make_record):
        rec = ledger.create("Bob", make_record(current_age=310, death_age=300))
        assert advance_ages(ledger, adjudicator, 20.0, 20.0) == ["Bob"]
        assert rec.death_ut == 20.0


class TestAgingSystem:
    def test_first_tick_only_sets_baseline(self, ledger, adjudicator, make_record):
        rec = ledger.create("Bob", make_record(current_age=30, birthday=1))
        system = make_aging_system(adjudicator)
        system(ledger, _ctx(YEAR_SECONDS * 10, None))
        assert rec.current_age == 30

    def test_first_tick_resolves_records_past_threshold(self, ledger, adjudicator, make_record):
        """Nothing ages on the baseline tick, but overdue records still die."""
        due = ledger.create("Bob", make_record(current_age=300, death_age=300))
        frozen = ledger.create("Bill", make_record(current_age=310, death_age=300))
        immortal = ledger.create("Jebediah", make_record(current_age=310, death_age=300, immortal=True))
        system = make_aging_system(adjudicator)
        system(ledger, _ctx(500.0, None, frozenset({"Bill"})))
        assert due.is_alive is False
        assert due.death_ut == 500.0
        assert due.current_age == 300
        assert frozen.is_alive
        assert immortal.is_alive

    def test_uses_tick_interval_and_snapshot(self, ledger, adjudicator, make_record):
        ledger.create("Bob", make_record(current_age=30, birthday=1))
        ledger.create("Bill", make_record(current_age=30, birthday=1))
        system = make_aging_system(adjudicator)
        system(ledger, _ctx(YEAR_SECONDS * 2 + 1, 1.0, frozenset({"Bill"})))
        assert ledger.get("Bob").current_age == 32
        assert ledger.get("Bill").current_age == 30
