"""Exception classes for ucover override resolution.

Errors raised while probing optional local builds are caught and logged by the
resolver. Errors on the explicit environment override path propagate.
"""


class UCOverError(Exception):
    """Base exception for all ucover errors."""

    def __init__(self, message: str, *, context: dict | None = None):
        """Initialize the exception.

        Args:
            message: Error description.
            context: Optional diagnostic context for tracing.
        """
        super().__init__(message)
        self.context = context or {}


class MalformedVersionError(UCOverError, ValueError):
    """Version text does not follow the version grammar."""

    def __init__(self, text: str, reason: str):
        """Initialize the exception.

        Args:
            text: The offending version text.
            reason: Short description of the grammar violation.
        """
        super().__init__(f"Malformed version {text!r}: {reason}", context={"text": text})
        self.text = text


class MalformedManifestError(UCOverError):
    """A repository manifest or plugin archive manifest cannot be read."""

    def __init__(self, message: str, *, path: str | None = None, context: dict | None = None):
        """Initialize the exception.

        Args:
            message: Error description.
            path: File that failed to parse.
            context: Optional diagnostic context for tracing.
        """
        super().__init__(message, context=context)
        self.path = path


class NameMismatchError(UCOverError):
    """An override artifact reports a name other than the one it should replace."""

    def __init__(self, expected: str, actual: str, *, context: dict | None = None):
        """Initialize the exception.

        Args:
            expected: Catalog key the artifact was selected for.
            actual: Name parsed from the artifact's own manifest.
            context: Optional diagnostic context for tracing.
        """
        super().__init__(f"wrong name: {actual} vs. {expected}", context=context)
        self.expected = expected
        self.actual = actual


class ConflictingOverrideError(NameMismatchError):
    """Several explicit overrides resolve to the same plugin name."""

    def __init__(self, name: str, variables: list[str]):
        """Initialize the exception.

        Args:
            name: Plugin name claimed by more than one override.
            variables: Environment variables naming the conflicting files.
        """
        UCOverError.__init__(
            self,
            f"Plugin {name} is overridden by more than one variable: {', '.join(variables)}",
            context={"variables": list(variables)},
        )
        self.expected = name
        self.actual = name
        self.variables = list(variables)


class MissingOverrideFileError(UCOverError):
    """An explicit override points at a file that does not exist."""

    def __init__(self, path: str, *, variable_name: str | None = None):
        """Initialize the exception.

        Args:
            path: Absolute path of the missing file.
            variable_name: Environment variable that named the file, if any.
        """
        if variable_name:
            message = f"Plugin file for {variable_name} does not exist: {path}"
        else:
            message = f"Plugin file does not exist: {path}"
        super().__init__(message, context={"path": path, "variable": variable_name})
        self.path = path
        self.variable_name = variable_name


class MissingRepositoryRootError(UCOverError):
    """The local artifact repository root is missing."""

    def __init__(self, path: str):
        """Initialize the exception.

        Args:
            path: The configured repository root.
        """
        super().__init__(f"Local repository root does not exist: {path}", context={"path": path})
        self.path = path
