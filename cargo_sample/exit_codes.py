"""
Standard exit codes and error types for cargo-sample.

Following Unix/POSIX conventions for command-line tools. Every error the
sampling pipeline can raise is a CommandError carrying its exit code, so the
CLI can report it and terminate the run.
"""

# Standard POSIX exit codes
GENERAL_ERROR = 1        # General errors

# Application-specific exit codes (64-113 are typically available)
RESOLUTION_ERROR = 64    # Package reference could not be resolved
CHECKOUT_ERROR = 65      # git clone/checkout failed
CATALOG_ERROR = 66       # Missing examples directory or unknown example
MATERIALIZE_ERROR = 67   # I/O failure while copying the example
MERGE_ERROR = 68         # Manifest could not be parsed or written
DECLINED = 70            # Operator declined or cancelled a prompt
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


# Resolution

class ResolutionError(CommandError):
    """Raised when a package reference cannot be turned into a (url, commit) pair."""
    def __init__(self, message: str):
        super().__init__(message, RESOLUTION_ERROR)


class AmbiguousPackage(ResolutionError):
    """More than one local package matches the identifier."""
    def __init__(self, name: str, count: int):
        super().__init__(f"Found {count} packages named '{name}', expected exactly one")
        self.name = name
        self.count = count


class PackageNotFound(ResolutionError):
    """No local package matches the identifier."""
    def __init__(self, name: str):
        super().__init__(f"No package named '{name}' found in project metadata")
        self.name = name


class MissingRepositoryMetadata(ResolutionError):
    """The package does not declare a source repository."""
    def __init__(self, name: str):
        super().__init__(f"Package '{name}' does not declare a repository")
        self.name = name


class MissingRevisionMetadata(ResolutionError):
    """The package has no recorded source-control revision."""
    def __init__(self, name: str):
        super().__init__(
            f"Package '{name}' has no recorded git revision (missing .cargo_vcs_info.json)"
        )
        self.name = name


# Checkout

class CheckoutError(CommandError):
    """Raised when the upstream repository cannot be checked out."""
    def __init__(self, message: str):
        super().__init__(message, CHECKOUT_ERROR)


class GitNotAvailableError(CheckoutError):
    """git is not installed on the host."""
    def __init__(self, message: str = "Git is not installed"):
        super().__init__(message)


class CloneError(CheckoutError):
    """git clone failed."""


class RevisionCheckoutError(CheckoutError):
    """git checkout of the pinned commit failed."""


# Catalog

class CatalogError(CommandError):
    """Raised when the examples catalog cannot satisfy a request."""
    def __init__(self, message: str):
        super().__init__(message, CATALOG_ERROR)


class NoExamplesDirectory(CatalogError):
    """The checkout has no examples directory."""
    def __init__(self, path):
        super().__init__(f"No examples directory found in repository (looked for {path})")
        self.path = path


class ExampleNotFound(CatalogError):
    """The requested example is not in the catalog."""
    def __init__(self, name: str):
        super().__init__(f"Example '{name}' not found")
        self.name = name


# Materialization

class MaterializationError(CommandError):
    """Raised on I/O failure while copying an example tree."""
    def __init__(self, message: str):
        super().__init__(message, MATERIALIZE_ERROR)


class SourceUnreadable(MaterializationError):
    """A file or directory in the example could not be read."""


class DestinationWriteError(MaterializationError):
    """A file or directory could not be written at the destination."""


# Manifest merge

class MergeError(CommandError):
    """Raised when two manifests cannot be reconciled."""
    def __init__(self, message: str):
        super().__init__(message, MERGE_ERROR)


class ManifestParseError(MergeError):
    """A manifest is not valid TOML."""


class ManifestIOError(MergeError):
    """A manifest could not be read or written."""


# Prompts

class ConfirmationDeclined(CommandError):
    """Raised when the operator answers no to the copy confirmation."""
    def __init__(self, message: str = "User did not confirm"):
        super().__init__(message, DECLINED)


class SelectionCancelled(CommandError):
    """Raised when the operator cancels a prompt."""
    def __init__(self, message: str = "Selection cancelled"):
        super().__init__(message, DECLINED)
