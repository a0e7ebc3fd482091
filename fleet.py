#!/usr/bin/env python3
"""
Command-line view of projected fleet service reminders.

Commands:
  reminders  - Show overdue, due-soon and upcoming service occurrences
  schedules  - List service schedules and their intervals
"""

import argparse
import logging
import sys
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from reminders import (
    QueryParameters,
    ReminderProjection,
    ReminderError,
    get_service_reminders,
    load_fleet,
    load_settings,
)
from reminders.loader import parse_datetime

logger = logging.getLogger("reminders.cli")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles: Optional[float]) -> str:
    """Format mileage for display."""
    return f"{miles:,.0f}" if miles is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_hours(hours: Optional[float]) -> str:
    """Format labour hours for display."""
    return f"{hours:g}h" if hours is not None else "-"


def format_variance(reminder: ReminderProjection) -> str:
    """Format mileage variance: '+200' past due, '-300' still to go."""
    if reminder.mileage_variance is None:
        return "-"
    if reminder.mileage_variance > 0:
        return f"+{reminder.mileage_variance:,.0f}"
    return f"{reminder.mileage_variance:,.0f}"


def format_days_until(reminder: ReminderProjection) -> str:
    """Format days until due (e.g., '3mo 15d' or '-2mo 5d')."""
    if reminder.days_until_due is None:
        return "-"

    days = reminder.days_until_due
    sign = "-" if days < 0 else ""
    days = abs(days)
    months = days // 30
    remaining_days = days % 30
    if months > 0:
        return f"{sign}{months}mo {remaining_days}d"
    return f"{sign}{days}d"


def format_interval(value, unit) -> str:
    """Format a time interval like '90 days' or '1 week'."""
    if value is None or unit is None:
        return "-"
    label = unit.value if value == 1 else f"{unit.value}s"
    return f"{value} {label}"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Reminders command
# =============================================================================


def make_reminder_table(items: List[ReminderProjection]) -> List[List[str]]:
    """Convert reminder projections to table rows."""
    rows = []
    for reminder in items:
        rows.append(
            [
                reminder.status.name,
                truncate(reminder.vehicle_name, 20),
                truncate(reminder.service_schedule_name),
                f"#{reminder.occurrence_number}",
                reminder.due_date.date().isoformat() if reminder.due_date else "-",
                format_days_until(reminder),
                format_miles(reminder.due_mileage),
                format_variance(reminder),
                str(reminder.task_count),
                format_hours(reminder.total_estimated_labour_hours),
                format_cost(reminder.total_estimated_cost),
            ]
        )
    return rows


def cmd_reminders(args, store, settings):
    """Show projected service reminders."""
    now = parse_datetime(args.as_of) if args.as_of else settings.clock()
    parameters = QueryParameters(
        search=args.search,
        sort_by=args.sort,
        sort_descending=args.desc,
        page_number=args.page,
        page_size=args.page_size or settings.default_page_size,
    )
    result = get_service_reminders(store, parameters, now=now, settings=settings)

    print(f"As of: {now.isoformat(sep=' ', timespec='minutes')}")
    if args.search:
        print(f"Filter: {args.search!r}")
    print(
        f"Reminders: {result.total_count} "
        f"(page {result.page_number} of {max(result.total_pages, 1)})"
    )
    print()

    if not result.items:
        print("No service reminders found.")
        return 0

    headers = [
        "Status",
        "Vehicle",
        "Schedule",
        "#",
        "Due (date)",
        "Remaining (time)",
        "Due (mi)",
        "Variance (mi)",
        "Tasks",
        "Labour",
        "Cost",
    ]
    print(tabulate(make_reminder_table(result.items), headers=headers, tablefmt="simple"))

    due = [r for r in result.items if r.is_due]
    print()
    print(f"Needs attention: {len(due)} of {len(result.items)} shown")
    return 0


# =============================================================================
# Schedules command
# =============================================================================


def cmd_schedules(args, store, settings):
    """List service schedules and their intervals."""
    print(f"Schedules: {len(store.schedules)}")
    print()

    rows = []
    for schedule in sorted(store.schedules, key=lambda s: (s.service_program_id, s.name)):
        program = store.get_program(schedule.service_program_id)

        interval = []
        if schedule.is_time_based:
            interval.append(format_interval(schedule.time_interval_value, schedule.time_interval_unit))
        if schedule.is_mileage_based:
            interval.append(f"{schedule.mileage_interval:,.0f} mi")
        interval_str = " / ".join(interval) if interval else "-"

        buffer = []
        if schedule.has_time_buffer:
            buffer.append(format_interval(schedule.time_buffer_value, schedule.time_buffer_unit))
        if schedule.has_mileage_buffer:
            buffer.append(f"{schedule.mileage_buffer:,.0f} mi")
        buffer_str = " / ".join(buffer) if buffer else "-"

        tasks = store.get_tasks(
            link.service_task_id for link in store.get_schedule_task_links(schedule.id)
        )
        rows.append(
            [
                program.name if program else "-",
                schedule.name,
                interval_str,
                buffer_str,
                len(tasks),
                "yes" if schedule.is_active else "no",
                "" if schedule.is_valid else "INVALID",
            ]
        )

    headers = ["Program", "Schedule", "Interval", "Buffer", "Tasks", "Active", ""]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


def main():
    parser = argparse.ArgumentParser(
        description="Fleet service reminder viewer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fleets/depot.yaml reminders
  %(prog)s fleets/depot.yaml reminders --search "bus 001"
  %(prog)s fleets/depot.yaml reminders --sort dueDate --desc --page 2
  %(prog)s fleets/depot.yaml reminders --as-of 2024-04-05
  %(prog)s fleets/depot.yaml schedules
""",
    )
    parser.add_argument(
        "fleet_file",
        type=Path,
        help="Path to fleet YAML file",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML settings file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (default: from settings, WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Reminders subcommand
    reminders_parser = subparsers.add_parser(
        "reminders", help="Show overdue, due-soon and upcoming service occurrences"
    )
    reminders_parser.add_argument(
        "--search",
        type=str,
        help="Filter by vehicle, schedule, program or task name (case-insensitive)",
    )
    reminders_parser.add_argument(
        "--sort",
        type=str,
        help=(
            "Sort by vehicleName, scheduleName, dueDate, dueMileage, status, "
            "priority or occurrenceNumber (default: urgency)"
        ),
    )
    reminders_parser.add_argument(
        "--desc",
        action="store_true",
        help="Sort descending instead of ascending",
    )
    reminders_parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Page number, starting at 1",
    )
    reminders_parser.add_argument(
        "--page-size",
        type=int,
        help="Reminders per page (default: from settings)",
    )
    reminders_parser.add_argument(
        "--as-of",
        type=str,
        help="Classify as of this date/time (YYYY-MM-DD[THH:MM], default: now)",
    )

    # Schedules subcommand
    subparsers.add_parser("schedules", help="List service schedules and their intervals")

    args = parser.parse_args()

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: Invalid settings: {e}")
        return 1

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Validate fleet file exists
    if not args.fleet_file.exists():
        print(f"Error: File not found: {args.fleet_file}")
        return 1

    try:
        store = load_fleet(args.fleet_file)
        # Dispatch to command handler
        if args.command == "reminders":
            return cmd_reminders(args, store, settings)
        elif args.command == "schedules":
            return cmd_schedules(args, store, settings)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    except ReminderError as e:
        logger.exception("Failed to compute service reminders")
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
