import argparse
import logging
import sys

from classtime.errors import (
    InfeasibleScheduleError, InputTooLargeError, InvalidDatabaseError, SchedulerError,
)
from classtime.io_utils import ClassStore, load_database, save_database, save_timetables_csv
from classtime.models import MAX_ATTEMPTS
from classtime.parsing import build_class_specs
from classtime.render import format_timetable
from classtime.scheduling.evaluation import overloaded_resources, summary
from classtime.scheduling.placement import generate_timetables


def setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def main(argv=None):
    p = argparse.ArgumentParser(description="ClassTime – weekly class timetable generator")
    # Input
    p.add_argument('--db', type=str, help='JSON class list [{id,name,subjectsRaw,teachersRaw,roomsRaw}]')
    p.add_argument('--store', type=str, default=None, help='Durable store file (read if --db is absent)')

    # Search
    p.add_argument('--attempts', type=int, default=MAX_ATTEMPTS, help='Randomized attempt budget')
    p.add_argument('--seed', type=int, default=None)

    # Output
    p.add_argument('--out', type=str, default=None, help='Write timetables as long-format CSV')
    p.add_argument('--export', type=str, default=None, help='Write the class list back out as JSON')
    p.add_argument('--log-level', type=str, default='WARNING')
    args = p.parse_args(argv)

    setup_logging(args.log_level)

    if not (args.db or args.store):
        raise SystemExit("Provide --db or --store")
    try:
        if args.db:
            records = load_database(args.db)
            if args.store:
                ClassStore(args.store).save(records)
        else:
            records = ClassStore(args.store).load()
        if args.export:
            save_database(args.export, records)
    except (InvalidDatabaseError, OSError) as e:
        raise SystemExit(f"Could not load classes: {e}")
    if not records:
        raise SystemExit("No classes to schedule.")

    try:
        classes = build_class_specs(records)
        result = generate_timetables(classes, max_attempts=args.attempts, rng=args.seed)
    except InputTooLargeError as e:
        raise SystemExit(str(e))
    except InfeasibleScheduleError as e:
        for (kind, name), load in overloaded_resources(classes):
            print(f"{kind} {name}: {load} periods requested")
        raise SystemExit(f"{e} ({e.attempts} attempts)")
    except SchedulerError as e:
        raise SystemExit(str(e))

    for sg in result.grids:
        print(format_timetable(sg))
        print()
    print(summary(classes, result.grids, attempts=result.attempts))

    if args.out:
        save_timetables_csv(args.out, result.grids)
        print(f"Saved: {args.out}")


if __name__ == '__main__':
    main()
