"""Typed exceptions for the draft flow."""


class StudioError(Exception):
    """Base exception for draft flow errors."""
    pass


class SubmissionError(StudioError):
    """The job-start webhook could not be reached or rejected the request."""
    pass


class ApprovalError(StudioError):
    """The approval webhook could not be reached or rejected the request."""
    pass


class NoActiveFlowError(StudioError):
    """There is no generation flow to act on."""
    pass


class FlowMismatchError(StudioError):
    """The caller addressed a flow that is not the current one."""
    pass


class NothingToApproveError(StudioError):
    """Approval requested before any text exists."""
    pass
