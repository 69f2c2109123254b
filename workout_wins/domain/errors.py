"""
Error Taxonomy - Failures the Star Engine Can Report
=====================================================

Raised where the failure is detected, translated into user-facing text only
by the command router.

Not every failure is an exception: an unparseable date silently falls back
to "today" (see calendar.resolve_target_day).
"""


class WorkoutWinsError(Exception):
    """Base exception for all workout-wins errors."""
    pass


class MissingUser(WorkoutWinsError):
    """A command that needs a user id arrived without one."""
    pass


class StoreUnavailable(WorkoutWinsError):
    """The star store backend could not be reached or failed mid-operation."""
    pass


class UpstreamCollaboratorError(WorkoutWinsError):
    """An outbound service (text generation, message delivery) failed."""
    pass


class InvalidDayKey(WorkoutWinsError):
    """A confirm or cancel action carried a value that is not a YYYY-MM-DD day."""
    pass
