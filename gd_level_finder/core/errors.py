"""
Errors - Typed failure taxonomy for the level finder

Remote failures, per-candidate failures and session misuse are kept apart
so each delivery layer can decide what to show the requester.
"""


class LevelFinderError(Exception):
    """Base class for all level finder errors"""


class RemoteUnavailable(LevelFinderError):
    """The remote level index could not be queried"""


class DetailFetchFailed(LevelFinderError):
    """Detail for one level could not be fetched (brief fallback included)"""

    def __init__(self, level_id: str, reason: str = ""):
        self.level_id = level_id
        self.reason = reason
        message = f"Detail fetch failed for level {level_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class LevelDataError(LevelFinderError):
    """Level string could not be decoded"""


class InvalidFilter(LevelFinderError, ValueError):
    """Command options could not be turned into a FilterSpec"""


class SessionError(LevelFinderError):
    """Base class for pagination session errors"""

    notice = "This result set is no longer available."


class SessionAccessDenied(SessionError):
    """Someone other than the requester tried to navigate"""

    notice = "These buttons are not for you."


class SessionExpired(SessionError):
    """Navigation attempted after the session lifetime elapsed"""

    notice = "This result set has expired. Run /findlevel again."
