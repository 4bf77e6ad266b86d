from typing import Optional


class RepoAskError(Exception):
    """Base class for failures that end a run."""


class ConfigError(RepoAskError):
    pass


class TerminalSetupError(RepoAskError):
    pass


class ComposeError(RepoAskError):
    pass


class FileReadFailure(ComposeError):
    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Failed to read file: {path}"
        if reason: message = f"{message} ({reason})"
        super().__init__(message)


class ServiceError(RepoAskError):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
