"""Tests for developer-only state mutators."""

from __future__ import annotations

import pytest

from thetaprogress.models import AnnouncementType, StreakState


def test_not_available_outside_dev_mode(progress_context):
    assert progress_context.debug is None
    with pytest.raises(RuntimeError):
        progress_context.require_debug()


def test_set_streak_days_backfills_history(dev_context):
    debug = dev_context.require_debug()

    debug.set_streak_days(5)

    streak = dev_context.state.streaks.state
    assert streak.current == 5
    assert streak.best == 5
    assert streak.last_date_key == "2024-03-01"
    assert sorted(streak.sessions_by_date) == [
        "2024-02-26", "2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01",
    ]
    assert [d.done for d in dev_context.progress.get_public_state().last_7_days] == [False, False] + [True] * 5


def test_forced_streak_continues_next_day(dev_context, clock):
    dev_context.require_debug().set_streak_days(6)
    clock.advance(1)

    result = dev_context.progress.complete_session("Sarah", "Maths")

    assert dev_context.state.streaks.state.current == 7
    assert result.reward_id == "rainfall_soundscape"


def test_forcing_zero_lets_today_count_again(dev_context):
    dev_context.progress.complete_session("Sarah", "Maths")
    dev_context.progress.complete_session("Sarah", "Maths")  # same-day no-op
    forced = dev_context.require_debug().set_streak_days(0)

    assert forced.last_date_key is None
    assert forced.best == 1
    assert forced.sessions_by_date == {"2024-03-01": True}

    result = dev_context.progress.complete_session("Sarah", "Maths")

    state = dev_context.progress.get_public_state()
    assert result.applied is True
    assert state.current == 1
    assert state.last_7_days[-1].done is True


def test_negative_streak_rejected(dev_context):
    with pytest.raises(ValueError):
        dev_context.require_debug().set_streak_days(-1)


def test_reset_keeps_seed(dev_context):
    dev_context.progress.complete_session("Sarah", "Maths")

    fresh = dev_context.require_debug().reset_streak()

    assert fresh == StreakState(seed=42)
    assert dev_context.state.streaks.state == StreakState(seed=42)
    assert len(dev_context.progress.list_diary_entries()) == 1


def test_reset_allows_rewards_again(dev_context, clock):
    dev_context.progress.complete_session("Sarah", "Maths")
    dev_context.require_debug().reset_streak()
    clock.advance(1)

    result = dev_context.progress.complete_session("Sarah", "Maths")

    assert result.reward_id == "night_owl_badge"


def test_enqueue_any_announcement(dev_context):
    debug = dev_context.require_debug()

    debug.enqueue_announcement("coach_unlocked", 3, coach_id="coach-2")
    debug.enqueue_announcement(AnnouncementType.STREAK_PLUS)

    first = dev_context.progress.dismiss_announcement()
    second = dev_context.progress.dismiss_announcement()
    assert first.type is AnnouncementType.COACH_UNLOCKED
    assert first.coach_id == "coach-2"
    assert second.type is AnnouncementType.STREAK_PLUS
    assert second.streak == 0


def test_enqueue_rejects_incomplete_variant(dev_context):
    with pytest.raises(ValueError):
        dev_context.require_debug().enqueue_announcement("reward_unlocked", 1)


def test_replay_counts_same_day(dev_context):
    debug = dev_context.require_debug()
    dev_context.progress.complete_session("Sarah", "Maths")

    result = debug.replay_session("Sarah", "Maths")

    assert result.applied is True
    assert dev_context.state.streaks.state.current == 2
    assert len(dev_context.progress.list_diary_entries()) == 1
