"""Goal Tracker: fitness goal scheduling and progress engine."""

__version__ = "0.1.0"
