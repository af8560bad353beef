"""daytasks: a personal task manager with today's schedule, folders and a month calendar."""

__version__ = "0.1.0"
