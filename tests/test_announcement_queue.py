"""Tests for the persisted announcement queue."""

from __future__ import annotations

import pytest

from thetaprogress.models import Announcement, AnnouncementType, Slot
from thetaprogress.services.announcements import AnnouncementQueue


@pytest.fixture
def queue(slot_repo) -> AnnouncementQueue:
    queue = AnnouncementQueue(slot_repo)
    queue.load()
    return queue


def test_empty_queue(queue):
    assert queue.peek_first() is None
    assert queue.shift() is None


def test_consumed_oldest_first(queue):
    for streak in (1, 2, 3):
        queue.push(Announcement.streak_plus(f"a{streak}", streak))

    assert queue.peek_first().id == "a1"
    assert queue.shift().id == "a1"
    assert queue.peek_first().id == "a2"
    assert queue.shift().id == "a2"
    assert queue.shift().id == "a3"
    assert queue.peek_first() is None


def test_capped_at_ten_dropping_oldest(queue):
    for i in range(13):
        queue.push(Announcement.streak_plus(f"a{i}", i))

    assert len(queue) == 10
    assert queue.peek_first().id == "a3"
    assert queue.items[0].id == "a12"


def test_shift_removes_what_peek_returned(queue):
    queue.push(Announcement.reward_unlocked("r", 1, "night_owl_badge"))
    queue.push(Announcement.streak_plus("s", 2))

    peeked = queue.peek_first()

    assert queue.shift() == peeked


def test_round_trip_all_variants(queue, slot_repo):
    queue.push(Announcement.streak_plus("a", 2))
    queue.push(Announcement.reward_unlocked("b", 3, "starlight_chime"))
    queue.push(Announcement.coach_unlocked("c", 4, "coach-2"))

    reloaded = AnnouncementQueue(slot_repo)

    assert reloaded.load() == queue.items
    assert slot_repo.load_json(Slot.ANNOUNCEMENTS) == [
        {"id": "c", "type": "coach_unlocked", "streak": 4, "coachId": "coach-2"},
        {"id": "b", "type": "reward_unlocked", "streak": 3, "rewardId": "starlight_chime"},
        {"id": "a", "type": "streak_plus", "streak": 2},
    ]


def test_dismiss_survives_reload(queue, slot_repo):
    queue.push(Announcement.streak_plus("a", 1))
    queue.push(Announcement.streak_plus("b", 2))
    queue.shift()

    reloaded = AnnouncementQueue(slot_repo)
    reloaded.load()

    assert [a.id for a in reloaded.items] == ["b"]


def test_unknown_type_in_storage_starts_empty(slot_repo):
    slot_repo.save_json(Slot.ANNOUNCEMENTS, [{"id": "x", "type": "confetti", "streak": 1}])

    queue = AnnouncementQueue(slot_repo)

    assert queue.load() == []


def test_variant_fields_are_required():
    with pytest.raises(ValueError):
        Announcement(id="x", type=AnnouncementType.REWARD_UNLOCKED, streak=1)
    with pytest.raises(ValueError):
        Announcement(id="x", type=AnnouncementType.COACH_UNLOCKED, streak=1)
