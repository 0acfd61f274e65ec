import argparse
import csv
import datetime
import shutil

from db import WorkoutEntryRepository
from entry_service import EntryService
from history_service import HistoryService
from logger_setup import setup_logger
from models import CommitContext, SetInput, check_date
from tools import CalendarTools
import catalog


def print_calendar(db_path: str, year: int, month0: int) -> None:
    """Print the month grid, marking days that have entries with ``*``."""
    entries = WorkoutEntryRepository(db_path)
    active = {int(d[-2:]) for d in entries.dates_with_entries(year, month0)}
    print(f"{year}-{month0 + 1:02d}")
    print(" ".join(f"{name:>3}" for name in ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")))
    for week in CalendarTools.build_month_grid(year, month0):
        cells = []
        for day in week:
            if day is None:
                cells.append("   ")
            else:
                mark = "*" if day in active else " "
                cells.append(f"{day:>2}{mark}")
        print(" ".join(cells))


def print_day(db_path: str, date: str) -> None:
    entries = WorkoutEntryRepository(db_path)
    day_entries = entries.entries_on(date)
    if not day_entries:
        print(f"No entries on {date}")
        return
    for entry in day_entries:
        print(
            f"{catalog.lookup_body_part(entry.body_part_id)} / "
            f"{catalog.lookup_exercise(entry.exercise_id)} [{entry.id}]"
        )
        for s in entry.sets:
            memo = f" ({s.memo})" if s.memo else ""
            print(f"  set {s.set_number}: {s.weight:g} x {s.reps:g}{memo}")


def print_previous(db_path: str, exercise_id: str, date: str) -> None:
    history = HistoryService(WorkoutEntryRepository(db_path))
    entry = history.find_previous(exercise_id, date)
    if entry is None:
        print(f"No previous record for {catalog.lookup_exercise(exercise_id)}")
        return
    sets = ", ".join(f"{s.weight:g}x{s.reps:g}" for s in entry.sets)
    print(f"{entry.date}: {sets}")


def export_entries(db_path: str, fmt: str, out_path: str) -> None:
    entries = WorkoutEntryRepository(db_path)
    if fmt == "json":
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(entries.serialize())
        return
    with open(out_path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(
            [
                "entry_id",
                "date",
                "body_part",
                "exercise",
                "set_number",
                "weight",
                "reps",
                "memo",
                "created_at",
            ]
        )
        for entry in entries.all():
            for s in entry.sets:
                writer.writerow(
                    [
                        entry.id,
                        entry.date,
                        catalog.lookup_body_part(entry.body_part_id),
                        catalog.lookup_exercise(entry.exercise_id),
                        s.set_number,
                        s.weight,
                        s.reps,
                        s.memo,
                        entry.created_at,
                    ]
                )


def backup_db(db_path: str, backup_path: str) -> None:
    shutil.copy(db_path, backup_path)


def restore_db(backup_path: str, db_path: str) -> None:
    shutil.copy(backup_path, db_path)


def demo_data(db_path: str) -> None:
    """Populate the store with two squat sessions if it is empty."""
    entries = WorkoutEntryRepository(db_path)
    if len(entries):
        print("Store already contains entries")
        return
    service = EntryService(entries)
    today = datetime.date.today()
    last_week = today - datetime.timedelta(days=7)
    for day, weights in ((last_week, ("80", "85")), (today, ("82.5", "87.5"))):
        slots = EntryService.empty_slots()
        slots[0] = SetInput(weight=weights[0], reps="10")
        slots[1] = SetInput(weight=weights[1], reps="8", memo="last set hard")
        service.commit(
            slots,
            CommitContext(
                date=day.isoformat(), body_part_id="leg", exercise_id="squat"
            ),
        )
    print("Demo data inserted")


def main() -> None:
    parser = argparse.ArgumentParser(description="Workout log utilities")
    parser.add_argument("--log-level", default="WARNING")
    sub = parser.add_subparsers(dest="cmd", required=True)

    today = datetime.date.today()
    cal = sub.add_parser("calendar")
    cal.add_argument("--db", default="workout_log.db")
    cal.add_argument("--year", type=int, default=today.year)
    cal.add_argument("--month", type=int, default=today.month, help="1-12")

    day = sub.add_parser("day")
    day.add_argument("--db", default="workout_log.db")
    day.add_argument("--date", type=check_date, default=today.isoformat())

    prev = sub.add_parser("previous")
    prev.add_argument("--db", default="workout_log.db")
    prev.add_argument("--exercise", required=True)
    prev.add_argument("--date", type=check_date, default=today.isoformat())

    exp = sub.add_parser("export")
    exp.add_argument("--db", default="workout_log.db")
    exp.add_argument("--fmt", choices=["csv", "json"], default="csv")
    exp.add_argument("--out", default="workouts.csv")

    bkp = sub.add_parser("backup")
    bkp.add_argument("--db", default="workout_log.db")
    bkp.add_argument("--out", default="backup.db")

    rst = sub.add_parser("restore")
    rst.add_argument("--in", dest="src", default="backup.db")
    rst.add_argument("--db", default="workout_log.db")

    demo = sub.add_parser("demo")
    demo.add_argument("--db", default="workout_log.db")

    args = parser.parse_args()
    setup_logger(args.log_level)
    if args.cmd == "calendar":
        print_calendar(args.db, args.year, args.month - 1)
    elif args.cmd == "day":
        print_day(args.db, args.date)
    elif args.cmd == "previous":
        print_previous(args.db, args.exercise, args.date)
    elif args.cmd == "export":
        export_entries(args.db, args.fmt, args.out)
    elif args.cmd == "backup":
        backup_db(args.db, args.out)
    elif args.cmd == "restore":
        restore_db(args.src, args.db)
    elif args.cmd == "demo":
        demo_data(args.db)


if __name__ == "__main__":
    main()
