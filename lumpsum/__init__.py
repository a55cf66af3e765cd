"""Swiss lump-sum planner: monthly payment schedules based on Swiss working days."""

__version__ = "1.0.0"
