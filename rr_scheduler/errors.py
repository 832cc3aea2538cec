from __future__ import annotations


class SchedulerError(ValueError):
    """
    Base class for every rejected scheduler call.

    The engine is left untouched whenever one of these is raised.
    """


class InvalidInput(SchedulerError):
    pass


class DuplicateId(SchedulerError):
    pass


class InvalidQuantum(SchedulerError):
    pass


class NoProcesses(SchedulerError):
    pass


class StatisticsUnavailable(SchedulerError):
    pass
