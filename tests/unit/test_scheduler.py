"""
Tests for the daily skill scheduler and weighted sampling.
"""

import random
from datetime import timedelta

import pytest

from practice_planner.errors import InvalidLookbackError, MissingSkillsError, UnknownSkillError
from practice_planner.history import HistoryStore
from practice_planner.models import PlannerConfiguration
from practice_planner.scheduler import MAX_WEIGHT, Scheduler, weighted_sample


# ============================================================================
# Weighted Sampling
# ============================================================================


class TestWeightedSample:
    def test_draws_distinct_items(self):
        rng = random.Random(7)
        drawn = weighted_sample(rng, list("abcdef"), [1, 2, 3, 4, 5, 6], 4)
        assert len(drawn) == 4
        assert len(set(drawn)) == 4

    def test_k_is_truncated_to_population(self):
        drawn = weighted_sample(random.Random(0), ["a", "b"], [1, 1], 5)
        assert sorted(drawn) == ["a", "b"]

    def test_zero_weight_items_come_last(self):
        for seed in range(25):
            drawn = weighted_sample(random.Random(seed), ["zero", "one", "two"], [0, 5, 5], 2)
            assert "zero" not in drawn

    def test_zero_weight_items_still_fill_the_draw(self):
        drawn = weighted_sample(random.Random(3), ["x", "y", "z"], [0, 0, 1], 3)
        assert drawn[0] == "z"
        assert sorted(drawn) == ["x", "y", "z"]

    def test_mismatched_lengths_raise(self):
        with pytest.raises(ValueError):
            weighted_sample(random.Random(0), ["a", "b"], [1], 1)

    def test_negative_weight_raises(self):
        with pytest.raises(ValueError):
            weighted_sample(random.Random(0), ["a"], [-1], 1)

    def test_same_seed_same_draw(self):
        items = list("abcdefgh")
        weights = [1, 3, 5, 7, 1, 3, 5, 7]
        first = weighted_sample(random.Random(99), items, weights, 3)
        second = weighted_sample(random.Random(99), items, weights, 3)
        assert first == second


# ============================================================================
# Weights
# ============================================================================


class TestWeights:
    def test_no_history_gives_max_weight(self, scheduler, now):
        assert scheduler.weights(now) == {name: MAX_WEIGHT for name in "ABCDE"}

    def test_skills_seen_only_today_get_zero(self, scheduler, history, now):
        history.record(now - timedelta(hours=1), ["A", "B"])

        weights = scheduler.weights(now)
        assert weights["A"] == 0
        assert weights["B"] == 0
        assert weights["C"] == MAX_WEIGHT

    def test_seen_skills_take_the_weight_of_the_newest_window_day(self, scheduler, history, now):
        history.record(now - timedelta(days=1), ["A"])
        history.record(now - timedelta(hours=1), ["B"])

        weights = scheduler.weights(now)
        assert weights["A"] == 50
        assert weights["B"] == 50
        assert weights["C"] == MAX_WEIGHT

    def test_bandwidth_uses_integer_division(self, config, history, now):
        config.repeat_threshold = 3
        history.record(now - timedelta(days=2), ["A"])
        history.record(now - timedelta(days=1), ["B"])
        history.record(now - timedelta(hours=1), ["C"])

        weights = Scheduler(config, history, random.Random(0)).weights(now)
        assert weights["A"] == 66
        assert weights["B"] == 66
        assert weights["C"] == 66
        assert weights["D"] == MAX_WEIGHT

    def test_history_outside_window_is_ignored(self, scheduler, history, now):
        history.record(now - timedelta(days=5), ["A"])
        assert scheduler.weights(now)["A"] == MAX_WEIGHT

    def test_no_skills_raises(self, history, now):
        scheduler = Scheduler(PlannerConfiguration(), history, random.Random(0))
        with pytest.raises(MissingSkillsError):
            scheduler.weights(now)


# ============================================================================
# Schedule
# ============================================================================


class TestSchedule:
    def test_schedule_has_configured_size_and_distinct_skills(self, config, history, now):
        for seed in range(20):
            scheduler = Scheduler(config, history, random.Random(seed))
            schedule = scheduler.schedule(now)
            assert len(schedule) == config.skills_per_day
            assert len(set(schedule)) == len(schedule)
            assert set(schedule) <= set(config.skills)

    def test_empty_history_draw_varies_with_seed(self, config, history, now):
        left_out = set()
        for seed in range(50):
            scheduler = Scheduler(config, history, random.Random(seed))
            scheduled = {skill.name for skill in scheduler.schedule(now)}
            left_out |= set(config.skill_names) - scheduled
        assert len(left_out) > 1

    def test_same_seed_same_schedule(self, config, history, now):
        first = Scheduler(config, history, random.Random(5)).schedule(now)
        second = Scheduler(config, history, random.Random(5)).schedule(now)
        assert first == second

    def test_truncates_when_too_few_skills(self, config, history, now):
        config.skills_per_day = 10
        schedule = Scheduler(config, history, random.Random(0)).schedule(now)
        assert sorted(skill.name for skill in schedule) == list("ABCDE")

    def test_unique_overdue_skill_is_always_chosen(self, config, history, now):
        config.skills_per_day = 1
        history.record(now - timedelta(hours=2), ["A", "B", "C", "D"])
        for seed in range(50):
            schedule = Scheduler(config, history, random.Random(seed)).schedule(now)
            assert [skill.name for skill in schedule] == ["E"]

    def test_no_skills_raises(self, history, now):
        scheduler = Scheduler(PlannerConfiguration(), history, random.Random(0))
        with pytest.raises(MissingSkillsError):
            scheduler.schedule(now)

    def test_bad_lookback_propagates(self, config, history, now):
        config.repeat_threshold = 10**10
        with pytest.raises(InvalidLookbackError):
            Scheduler(config, history, random.Random(0)).schedule(now)


class TestScheduleCache:
    def test_repeated_calls_return_cached_schedule(self, scheduler, now):
        first = scheduler.schedule(now)
        second = scheduler.schedule(now + timedelta(hours=1))
        assert first == second
        assert scheduler.scheduled_for == now.date()

    def test_cache_ignores_config_changes_until_forced(self, scheduler, config, now):
        scheduler.schedule(now)
        config.skills_per_day = 2

        assert len(scheduler.schedule(now)) == 4
        assert len(scheduler.schedule(now, force=True)) == 2

    def test_new_day_recomputes(self, scheduler, now):
        scheduler.schedule(now)
        tomorrow = now + timedelta(days=1)

        assert not scheduler.has_schedule_for(tomorrow)
        scheduler.schedule(tomorrow)
        assert scheduler.scheduled_for == tomorrow.date()

    def test_clear_forgets_schedule(self, scheduler, now):
        scheduler.schedule(now)
        scheduler.clear()
        assert scheduler.todays_schedule is None
        assert scheduler.scheduled_for is None

    def test_todays_schedule_is_a_copy(self, scheduler, now):
        scheduler.schedule(now)
        names = scheduler.todays_schedule
        names.clear()
        assert len(scheduler.todays_schedule) == 4

    def test_restore_drops_unknown_skills(self, scheduler, now):
        scheduler.restore(["A", "Gone", "C"], now.date())
        assert scheduler.todays_schedule == ["A", "C"]
        assert [skill.name for skill in scheduler.schedule(now)] == ["A", "C"]

    def test_restore_with_nothing_known_clears(self, scheduler, now):
        scheduler.restore(["Gone"], now.date())
        assert scheduler.todays_schedule is None

    def test_removed_skill_in_cache_fails_to_resolve(self, scheduler, config, now):
        scheduler.restore(["A"], now.date())
        config.remove_skill("A")
        with pytest.raises(UnknownSkillError):
            scheduler.schedule(now)

    def test_history_is_not_modified(self, config, now):
        history = HistoryStore()
        history.record(now - timedelta(days=1), ["A"])
        Scheduler(config, history, random.Random(0)).schedule(now)
        assert len(history) == 1
