from typing import Any


class InstallIfDifferentError(Exception):
    """Terminal failure while deciding whether an object must be installed."""

    def __init__(self, message: str, *, mode: str | None = None, filename: str | None = None) -> None:
        self.message = message
        self.mode = mode
        self.filename = filename
        super().__init__(self._render())

    def _render(self) -> str:
        context = []
        if self.mode is not None:
            context.append(f"mode '{self.mode}'")
        if self.filename is not None:
            context.append(f"object '{self.filename}'")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class UnknownModeError(InstallIfDifferentError):
    def __init__(self, mode: str, *, filename: str | None = None) -> None:
        super().__init__(f"failed to process mode '{mode}': unknown install mode", mode=mode, filename=filename)


class TargetUnreadableError(InstallIfDifferentError):
    def __init__(
        self,
        target: str,
        operation: str,
        reason: str,
        *,
        mode: str | None = None,
        filename: str | None = None,
    ) -> None:
        self.target = target
        self.operation = operation
        self.reason = reason
        super().__init__(
            f"failed to {operation} on target '{target}': {reason}",
            mode=mode,
            filename=filename,
        )

    def with_object(self, mode: str, filename: str | None) -> "TargetUnreadableError":
        return TargetUnreadableError(self.target, self.operation, self.reason, mode=mode, filename=filename)


class UnrecognizedDirectiveFormatError(InstallIfDifferentError):
    def __init__(self, value: Any, *, mode: str | None = None, filename: str | None = None) -> None:
        self.value = value
        super().__init__(
            f"unknown install-if-different format: {type(value).__name__}",
            mode=mode,
            filename=filename,
        )

    def with_object(self, mode: str, filename: str | None) -> "UnrecognizedDirectiveFormatError":
        return UnrecognizedDirectiveFormatError(self.value, mode=mode, filename=filename)


class MetadataError(Exception):
    """Raised when an update package metadata document cannot be loaded."""
