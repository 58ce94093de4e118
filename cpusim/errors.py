"""
Exceptions raised by the scheduling simulator.

Every error here describes a violated precondition detected *before* a
simulation starts. A run that has begun on valid input always terminates
with every process completed, so there is nothing to recover from mid-run.
"""


class SchedulingError(Exception):
    """Base class for all simulator errors."""


class ConfigurationError(SchedulingError, ValueError):
    """
    Invalid process set, quantum or algorithm selection.

    Also a ValueError so callers that guard user input with
    ``except ValueError`` keep working.
    """
