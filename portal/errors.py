"""Domain errors raised by the wizard and its collaborators."""


class PortalError(Exception):
    """Base class for portal errors."""


class WizardStateError(PortalError):
    """Operation not allowed in the wizard's current state."""


class ResumePolicyError(PortalError):
    """Attached resume violates the content-type or size rule."""

    def __init__(self, title: str, message: str):
        super().__init__(message)
        self.title = title
        self.message = message


class JobNotFoundError(PortalError):
    """Job is missing or no longer active."""


class SubmissionInProgressError(PortalError):
    """A submission for this draft is already running."""


class SubmissionCancelledError(PortalError):
    """The wizard was closed before the submission started."""


class SubmissionError(PortalError):
    """A remote step of the submission procedure failed."""

    title = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UploadError(SubmissionError):
    title = "Resume Upload Failed"


class ProfileWriteError(SubmissionError):
    title = "Profile Update Failed"


class SnapshotInsertError(SubmissionError):
    title = "Application Failed"
