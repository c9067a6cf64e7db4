"""Exceptions raised by the journal engine."""


class JournalError(Exception):
    """Base class for fatal journal errors."""

    pass


class NoteNotFoundError(JournalError):
    """A note had to be stat'ed for classification but does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Note not found: {path}")
        self.path = path


class ScanError(JournalError):
    """A note contained an unparseable time heading or diary date."""

    pass


class StateError(JournalError):
    """The persisted journal state could not be read or validated."""

    pass


class ConfigError(JournalError):
    """journal-config.yaml is invalid."""

    pass


class GitError(JournalError):
    """A git invocation failed."""

    def __init__(self, args: list[str], returncode: int, stderr: str = ""):
        detail = " ".join(stderr.strip().split()) or f"exit={returncode}"
        super().__init__(f"git {' '.join(args)} failed: {detail}")
        self.args_list = args
        self.returncode = returncode
