"""GridGoal focus engine: pomodoro/stopwatch timing and streak tracking."""

__version__ = "0.1.0"
