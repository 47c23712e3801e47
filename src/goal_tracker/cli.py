#!/usr/bin/env python3
"""
Goal Tracker CLI.

Preview schedules, check goal realism and read dashboards against the local
goals database.

Usage:
    goal-tracker schedule --start 2024-01-01 --end 2024-01-14 --workouts workout_a,workout_b
    goal-tracker realism --type weight_loss --target 5 --unit kg --start 2024-01-01 --end 2024-03-01
    goal-tracker --user local goals
    goal-tracker dashboard --date 2024-01-10
    goal-tracker complete goal_abc123 2024-01-03 --calories 250 --duration 40
"""

import argparse
import sys
from datetime import date
from typing import List, Optional

from .config import get_settings
from .db.repositories import ProgramRepository, SQLiteGoalRepository, WorkoutRepository
from .engine.dashboard import summarize_goals
from .engine.progress import compute_progress
from .exceptions import GoalTrackerError
from .models.goals import CompletionResult, GoalStatus, GoalType
from .models.profile import ActivityLevel, FitnessLevel, FitnessProfile
from .services.goal_service import GoalService
from .utils.dates import to_date
from .utils.log_sanitizer import configure_logging


# ANSI color codes
class Colors:
    RED = "\033[91m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def get_risk_color(risk_level: str) -> str:
    """Get color for a realism risk level."""
    colors = {
        "low": Colors.GREEN,
        "medium": Colors.YELLOW,
        "high": Colors.RED,
    }
    return colors.get(risk_level, Colors.RESET)


def format_percentage(percentage: int) -> str:
    """Format a completion percentage with color."""
    if percentage >= 75:
        color = Colors.GREEN
    elif percentage >= 40:
        color = Colors.YELLOW
    else:
        color = Colors.RED
    return f"{color}{percentage}%{Colors.RESET}"


def _split_ids(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def build_service(db_path: Optional[str] = None) -> GoalService:
    """Wire a GoalService over the SQLite database."""
    settings = get_settings()
    path = db_path or settings.goals_db_path
    return GoalService(
        goal_repository=SQLiteGoalRepository(path),
        workout_repository=WorkoutRepository(path),
        program_repository=ProgramRepository(path),
        week_start_day=settings.week_start_day,
    )


def cmd_schedule(args, service: GoalService):
    """Preview the schedule for a date range and workout source."""
    schedule = service.preview_schedule(
        start_date=to_date(args.start),
        end_date=to_date(args.end),
        program_id=args.program,
        custom_workout_ids=_split_ids(args.workouts),
    )

    print()
    print(f"{Colors.BOLD}Schedule Preview{Colors.RESET}")
    print("=" * 40)

    if not schedule:
        print(f"{Colors.YELLOW}No workouts scheduled. Add workouts to the pool.{Colors.RESET}")
        return

    for key in sorted(schedule):
        entry = schedule[key]
        weekday = entry.scheduled_date.strftime("%a")
        duration = f" ({entry.workout.duration_min} min)" if entry.workout.duration_min else ""
        print(f"  {key} {weekday}  {entry.workout.name}{duration}")
    print()
    print(f"Total: {len(schedule)} workouts")


def cmd_realism(args, service: GoalService):
    """Check whether goal parameters are realistic."""
    profile = None
    if args.level or args.activity or args.conditions:
        profile = FitnessProfile(
            fitness_level=FitnessLevel(args.level or FitnessLevel.BEGINNER.value),
            activity_level=ActivityLevel(args.activity or ActivityLevel.MODERATELY_ACTIVE.value),
            medical_conditions=_split_ids(args.conditions),
        )

    verdict = service.check_realism(
        type=GoalType(args.type),
        target_value=args.target,
        target_unit=args.unit,
        start_date=to_date(args.start),
        end_date=to_date(args.end),
        program_id=args.program,
        custom_workout_ids=_split_ids(args.workouts),
        profile=profile,
    )

    color = get_risk_color(verdict.risk_level)
    print()
    print(f"{Colors.BOLD}Goal Realism Check{Colors.RESET}")
    print("=" * 40)
    print(f"Score:     {color}{verdict.realism_score}/100{Colors.RESET}")
    print(f"Realistic: {'yes' if verdict.is_realistic else 'no'}")
    print(f"Risk:      {color}{verdict.risk_level}{Colors.RESET}")
    print(f"\n{verdict.feedback}")

    if verdict.warnings:
        print(f"\n{Colors.YELLOW}Warnings:{Colors.RESET}")
        for warning in verdict.warnings:
            print(f"  - {warning}")
    if verdict.suggestions:
        print(f"\n{Colors.CYAN}Suggestions:{Colors.RESET}")
        for suggestion in verdict.suggestions:
            print(f"  - {suggestion}")
    print()


def cmd_goals(args, service: GoalService):
    """List a user's goals with progress."""
    status = GoalStatus(args.status) if args.status else None
    result = service.list_goals(args.user, status=status)

    print()
    print(f"{Colors.BOLD}Goals for {args.user}{Colors.RESET} ({result.total} total)")
    print("=" * 40)
    if not result.items:
        print("No goals yet.")
        return

    for summary in summarize_goals(result.items):
        progress = summary["progress"]
        print(
            f"  {summary['id']}  {summary['title']}  [{summary['status']}]  "
            f"{summary['start_date']} to {summary['end_date']}  "
            f"{format_percentage(progress['completion_percentage'])} "
            f"({progress['completed_workouts']}/{progress['total_workouts']})"
        )
    print()


def cmd_dashboard(args, service: GoalService):
    """Show dashboard statistics."""
    reference = to_date(args.date) if args.date else date.today()
    stats = service.get_dashboard(args.user, reference)

    print()
    print(f"{Colors.BOLD}Dashboard{Colors.RESET} ({reference.isoformat()})")
    print("=" * 40)

    current = stats.current_goal
    if current is None:
        print(f"{Colors.YELLOW}No active goal.{Colors.RESET}")
    else:
        print(f"Current goal: {Colors.CYAN}{current.title}{Colors.RESET}")
        print(f"  Progress:       {format_percentage(current.progress.completion_percentage)}")
        print(f"  Days remaining: {current.days_remaining}")

    week = stats.week_progress
    print(f"This week:      {week.completed}/{week.total} ({format_percentage(week.percentage)})")
    print()
    print(f"Total goals:              {stats.total_goals}")
    print(f"Completed goals:          {stats.completed_goals}")
    print(f"Total workouts completed: {stats.total_workouts_completed}")
    print()


def cmd_complete(args, service: GoalService):
    """Record a completed workout."""
    result = CompletionResult(
        calories_burned=args.calories,
        duration_minutes=args.duration,
        notes=args.notes,
    )
    goal = service.complete_workout(args.goal_id, args.user, to_date(args.date), result=result)
    progress = compute_progress(goal.schedule)

    print(f"{Colors.GREEN}Workout on {args.date} marked as completed.{Colors.RESET}")
    print(
        f"Progress: {format_percentage(progress.completion_percentage)} "
        f"({progress.completed_workouts}/{progress.total_workouts})"
    )
    if goal.status == GoalStatus.COMPLETED:
        print(f"{Colors.BOLD}{Colors.GREEN}Goal completed!{Colors.RESET}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Goal Tracker - fitness goal scheduling and progress",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  goal-tracker schedule --start 2024-01-01 --end 2024-01-14 --workouts w1,w2,w3
  goal-tracker realism --type weight_loss --target 20 --unit kg --start 2024-01-01 --end 2024-01-08
  goal-tracker dashboard --date 2024-01-10
        """,
    )
    parser.add_argument("--db", help="Path to the goals database")
    parser.add_argument("--user", "-u", default=settings.default_user_id, help="User id")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Schedule command
    schedule_p = subparsers.add_parser("schedule", help="Preview a workout schedule")
    schedule_p.add_argument("--start", required=True, help="Start date (YYYY-MM-DD)")
    schedule_p.add_argument("--end", required=True, help="End date (YYYY-MM-DD)")
    schedule_p.add_argument("--program", help="Program id")
    schedule_p.add_argument("--workouts", help="Comma-separated workout ids")

    # Realism command
    realism_p = subparsers.add_parser("realism", help="Check goal realism")
    realism_p.add_argument("--type", required=True, choices=[t.value for t in GoalType])
    realism_p.add_argument("--target", required=True, type=float, help="Target value")
    realism_p.add_argument("--unit", required=True, help="Target unit (kg, lb, %%, ...)")
    realism_p.add_argument("--start", required=True, help="Start date (YYYY-MM-DD)")
    realism_p.add_argument("--end", required=True, help="End date (YYYY-MM-DD)")
    realism_p.add_argument("--program", help="Program id")
    realism_p.add_argument("--workouts", help="Comma-separated workout ids")
    realism_p.add_argument("--level", choices=[l.value for l in FitnessLevel])
    realism_p.add_argument("--activity", choices=[a.value for a in ActivityLevel])
    realism_p.add_argument("--conditions", help="Comma-separated medical conditions")

    # Goals command
    goals_p = subparsers.add_parser("goals", help="List goals")
    goals_p.add_argument("--status", choices=[s.value for s in GoalStatus])

    # Dashboard command
    dashboard_p = subparsers.add_parser("dashboard", help="Show dashboard statistics")
    dashboard_p.add_argument("--date", help="Reference date (YYYY-MM-DD), default today")

    # Complete command
    complete_p = subparsers.add_parser("complete", help="Mark a scheduled workout completed")
    complete_p.add_argument("goal_id", help="Goal id")
    complete_p.add_argument("date", help="Scheduled date (YYYY-MM-DD)")
    complete_p.add_argument("--calories", type=float, help="Calories burned")
    complete_p.add_argument("--duration", type=float, help="Duration in minutes")
    complete_p.add_argument("--notes", help="Notes")

    args = parser.parse_args(argv)

    commands = {
        "schedule": cmd_schedule,
        "realism": cmd_realism,
        "goals": cmd_goals,
        "dashboard": cmd_dashboard,
        "complete": cmd_complete,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    configure_logging("WARNING")

    try:
        command(args, build_service(args.db))
    except GoalTrackerError as e:
        print(f"{Colors.RED}Error: {e.message}{Colors.RESET}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"{Colors.RED}Error: {e}{Colors.RESET}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
