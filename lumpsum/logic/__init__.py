"""Core business logic layer.

Subpackages:
- calendar: Swiss working-day engine (Easter, holidays, working days, milestones)
- formatting: month / date / currency labels
- scheduling: building the monthly lump-sum schedule
"""
__all__ = ["calendar", "formatting", "scheduling"]
