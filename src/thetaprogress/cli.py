"""Command line access to the progress engine."""

from __future__ import annotations

import json
from typing import Any, Optional

import click

from .config import BaseConfig
from .context import ProgressContext, create_progress_context
from .logging_config import setup_logging
from .models.announcement import AnnouncementType
from .models.diary import Rating
from .services.diary import entries_for_month, tally_ratings


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


def _context(ctx: click.Context) -> ProgressContext:
    return ctx.obj


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Track nightly session streaks, rewards and the sleep diary."""

    if ctx.obj is None:
        config = BaseConfig()
        setup_logging(config)
        ctx.obj = create_progress_context(config)


@cli.command("status")
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the current streak, next milestone and last seven days."""

    _echo_json(_context(ctx).progress.get_public_state().to_dict())


@cli.command("complete")
@click.option("--coach", "coach_name", required=True, help="Coach the session used")
@click.option("--class", "class_name", required=True, help="Class the session used")
@click.pass_context
def complete(ctx: click.Context, coach_name: str, class_name: str) -> None:
    """Record tonight's completed session."""

    result = _context(ctx).progress.complete_session(coach_name, class_name)
    _echo_json({"rewardId": result.reward_id, "applied": result.applied})


@cli.command("diary")
@click.option("--month", default=None, help="Only show YYYY-MM")
@click.pass_context
def diary(ctx: click.Context, month: Optional[str]) -> None:
    """List diary entries, newest first, with rating totals."""

    entries = _context(ctx).progress.list_diary_entries()
    if month:
        try:
            year, month_number = (int(part) for part in month.split("-"))
        except ValueError as exc:
            raise click.BadParameter("expected YYYY-MM", param_hint="--month") from exc
        entries = entries_for_month(entries, year, month_number)
    _echo_json(
        {
            "entries": [e.to_record() for e in entries],
            "ratings": tally_ratings(entries),
        }
    )


@cli.command("rate")
@click.argument("entry_id")
@click.argument("rating", type=click.Choice([r.value for r in Rating]))
@click.pass_context
def rate(ctx: click.Context, entry_id: str, rating: str) -> None:
    """Rate a diary entry."""

    entry = _context(ctx).progress.rate_diary_entry(entry_id, rating)
    if entry is None:
        click.echo(f"No diary entry {entry_id}")
        return
    _echo_json(entry.to_record())


@cli.group("announcement")
def announcement() -> None:
    """Pending announcements, oldest first."""


@announcement.command("next")
@click.pass_context
def announcement_next(ctx: click.Context) -> None:
    item = _context(ctx).progress.peek_announcement()
    _echo_json(item.to_record() if item else None)


@announcement.command("dismiss")
@click.pass_context
def announcement_dismiss(ctx: click.Context) -> None:
    item = _context(ctx).progress.dismiss_announcement()
    _echo_json(item.to_record() if item else None)


@cli.group("prefs")
def prefs() -> None:
    """Selected coach, class and timer."""


@prefs.command("show")
@click.pass_context
def prefs_show(ctx: click.Context) -> None:
    _echo_json(_context(ctx).preferences.as_dict())


@prefs.command("set")
@click.option("--coach", "coach_id", default=None)
@click.option("--class", "class_id", default=None)
@click.option("--timer", "timer_seconds", type=click.IntRange(min=1), default=None)
@click.option("--onboarded/--not-onboarded", default=None)
@click.pass_context
def prefs_set(
    ctx: click.Context,
    coach_id: Optional[str],
    class_id: Optional[str],
    timer_seconds: Optional[int],
    onboarded: Optional[bool],
) -> None:
    preferences = _context(ctx).preferences
    if coach_id is not None:
        preferences.set_coach(coach_id)
    if class_id is not None:
        preferences.set_class(class_id)
    if timer_seconds is not None:
        preferences.set_timer(timer_seconds)
    if onboarded is not None:
        preferences.set_onboarded(onboarded)
    _echo_json(preferences.as_dict())


@cli.group("dev")
@click.pass_context
def dev(ctx: click.Context) -> None:
    """Developer tools (requires THETA_DEV_MODE)."""

    if _context(ctx).debug is None:
        raise click.UsageError("dev commands need THETA_DEV_MODE=1")


@dev.command("set-streak")
@click.argument("days", type=click.IntRange(min=0))
@click.pass_context
def dev_set_streak(ctx: click.Context, days: int) -> None:
    _context(ctx).require_debug().set_streak_days(days)
    _echo_json(_context(ctx).progress.get_public_state().to_dict())


@dev.command("reset")
@click.pass_context
def dev_reset(ctx: click.Context) -> None:
    _context(ctx).require_debug().reset_streak()
    click.echo("Streak reset.")


@dev.command("announce")
@click.argument("kind", type=click.Choice([t.value for t in AnnouncementType]))
@click.option("--streak", type=int, default=None)
@click.option("--reward-id", default=None)
@click.option("--coach-id", default=None)
@click.pass_context
def dev_announce(
    ctx: click.Context,
    kind: str,
    streak: Optional[int],
    reward_id: Optional[str],
    coach_id: Optional[str],
) -> None:
    try:
        item = _context(ctx).require_debug().enqueue_announcement(
            kind, streak, reward_id=reward_id, coach_id=coach_id
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    _echo_json(item.to_record())


@dev.command("replay")
@click.option("--coach", "coach_name", required=True)
@click.option("--class", "class_name", required=True)
@click.pass_context
def dev_replay(ctx: click.Context, coach_name: str, class_name: str) -> None:
    """Complete a session even if today already counted."""

    result = _context(ctx).require_debug().replay_session(coach_name, class_name)
    _echo_json({"rewardId": result.reward_id, "applied": result.applied})


if __name__ == "__main__":  # pragma: no cover
    cli()
