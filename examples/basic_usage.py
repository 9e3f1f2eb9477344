#!/usr/bin/env python3
"""
Basic Usage Example - Serene Mind wellness core

This script demonstrates the wellness core with a simulated clock and
scheduler so it finishes instantly. It shows how to:
- Run a guided breathing session to completion
- Pause and resume without losing time
- Complete a self-care activity and update the streak
- Build a journal streak over several days
- Estimate the current cycle phase

Run: python examples/basic_usage.py
"""

from datetime import date, datetime, timezone

from serene_app.breathing.models import PhaseChange, SessionSnapshot
from serene_app.engine import WellnessEngine
from serene_app.scheduling.scheduler import ManualTickScheduler
from serene_app.streaks.models import ActivityKind, StreakRecord, UserStreaks
from serene_app.utils.time import FixedClock


def demo_breathing(engine: WellnessEngine, scheduler: ManualTickScheduler) -> None:
    print("\n🌬️  4-7-8 breathing, 2 cycles")
    driver = engine.breathing_session("478", target_cycles=2)
    sequencer = driver.target

    def show_phase(change: PhaseChange) -> None:
        print(f"  t={scheduler.now:>4.0f}s  {change.to_phase.label:<7} cycles={change.completed_cycles}")

    def show_done(snapshot: SessionSnapshot) -> None:
        print(f"  ✅ Exercise completed! {snapshot.completed_cycles} cycles of breathing.")

    sequencer.on_phase_change(show_phase)
    sequencer.on_complete(show_done)

    with driver:
        driver.start()
        scheduler.advance(10)

        driver.pause()
        paused_at = sequencer.remaining_seconds
        scheduler.advance(60)
        print(f"  ⏸️  paused with {paused_at}s left, still {sequencer.remaining_seconds}s after a minute")

        driver.resume()
        scheduler.advance(60)


def demo_activity(engine: WellnessEngine, scheduler: ManualTickScheduler,
                  streaks: UserStreaks) -> UserStreaks:
    print("\n🧘 Self-care activity, 1 minute")
    holder = {"streaks": streaks}

    def store(updated: UserStreaks) -> None:
        holder["streaks"] = updated

    driver = engine.activity_timer(1, streaks=lambda: holder["streaks"], on_streaks_updated=store)
    driver.start()
    scheduler.advance(30)
    print(f"  remaining {driver.target.format_time()}")
    scheduler.advance(30)

    record = holder["streaks"].get(ActivityKind.SELF_CARE)
    print(f"  self-care streak: {record.streak_count} (last {record.last_activity_date})")
    return holder["streaks"]


def demo_journal(engine: WellnessEngine, clock: FixedClock, streaks: UserStreaks) -> UserStreaks:
    print("\n📓 Journal entries over a week")
    for day in range(7):
        if day == 4:
            print("  (day skipped)")
        else:
            streaks = engine.record_journal_entry(streaks)
            print(f"  {engine.streak_tracker.today()}  streak={streaks.get(ActivityKind.JOURNAL).streak_count}")
        clock.advance(days=1)
    return streaks


def main() -> None:
    clock = FixedClock(datetime(2024, 3, 15, 8, 0, tzinfo=timezone.utc))
    scheduler = ManualTickScheduler()
    engine = WellnessEngine(
        overrides={"logging": {"level": "WARNING"}},
        clock=clock,
        scheduler=scheduler,
    )

    streaks = UserStreaks().with_record(ActivityKind.SELF_CARE, StreakRecord(4, date(2024, 3, 14)))

    demo_breathing(engine, scheduler)
    streaks = demo_activity(engine, scheduler, streaks)
    streaks = demo_journal(engine, clock, streaks)

    print("\n💾 Profile document:", streaks.to_dict())

    settings = engine.cycle_settings({"enabled": True, "lastPeriod": "2024-03-01"})
    status = engine.cycle_status(settings)
    print(f"\n🌙 Cycle: {status.phase.value}, day {status.day_in_cycle + 1}, next period {status.next_period}")


if __name__ == "__main__":
    main()
