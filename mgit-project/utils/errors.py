# What it does: Defines the error types raised by the repository layer
# How it does: Every failure a command can report derives from MgitError, so the CLI catches exactly one base class
# What data structure it uses: A small class hierarchy


class MgitError(Exception):
    """Base class for errors reported to the user as 'fatal: <message>'."""


class NotARepositoryError(MgitError):
    def __init__(self, meta_dir):
        self.meta_dir = meta_dir
        super().__init__(f"not a mgit repository (or any of the parent directories): {meta_dir}")


class InvalidReferenceError(MgitError):
    pass


class InvalidBranchNameError(MgitError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"'{name}' is not a valid branch name")


class BranchExistsError(MgitError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"a branch named '{name}' already exists")


class DetachedHeadError(MgitError):
    def __init__(self, operation):
        self.operation = operation
        super().__init__(f"cannot {operation} in detached HEAD state")


class UnrelatedHistoriesError(MgitError):
    def __init__(self, current, incoming):
        self.current = current
        self.incoming = incoming
        super().__init__("refusing to merge unrelated histories")


class NothingToCommitError(MgitError):
    pass


class CorruptObjectError(MgitError):
    pass


class MergeInProgressError(MgitError):
    def __init__(self, incoming):
        self.incoming = incoming
        super().__init__("you have not concluded your merge (MERGE_HEAD exists); "
                         "resolve the conflicts and run \"mgit commit\"")
