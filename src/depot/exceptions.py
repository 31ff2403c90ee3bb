"""Depot exception hierarchy.

All public exceptions inherit from DepotError, giving callers a single
base class to catch when they want to handle any Depot-specific failure
without swallowing unrelated errors.
"""

from __future__ import annotations


class DepotError(Exception):
    """Base exception for all Depot errors."""


class MalformedVersionError(DepotError, ValueError):
    """Raised when a string has no leading dotted numeric version.

    Attributes:
        value: The string that failed to parse.
    """

    def __init__(self, value: str) -> None:
        super().__init__(f"Malformed version: {value!r}")
        self.value = value


class InvalidOperatorError(DepotError, ValueError):
    """Raised when a constraint uses an operator outside ``< <= = >= >``."""

    def __init__(self, operator: str) -> None:
        super().__init__(f"Operator {operator!r} not understood")
        self.operator = operator


class PackageNotFoundError(DepotError):
    """Raised when the registry answers 404 for a package query.

    Attributes:
        name: Requested package name.
        version: Requested version, tag, or range.
    """

    def __init__(self, name: str, version: str) -> None:
        super().__init__(f"Package '{name}@{version}' not found.")
        self.name = name
        self.version = version


class RegistryError(DepotError):
    """Raised for any registry failure other than a missing package.

    Covers non-200/404 statuses, transport errors, and undecodable
    documents.
    """

    def __init__(self, message: str, *, url: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class InvalidSourceError(DepotError):
    """Raised when a package archive cannot be fetched or placed.

    Attributes:
        url: The archive location that failed.
    """

    def __init__(self, url: str, reason: str = "") -> None:
        message = f"Invalid url - {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.url = url
        self.reason = reason


class ExtractionError(DepotError):
    """Raised when an archive cannot be unpacked.

    Attributes:
        path: The archive (or extraction directory) involved.
        cause: The underlying exception or a short description.
    """

    def __init__(self, path: str, cause: BaseException | str) -> None:
        super().__init__(f"Error occurred while extracting - {path}: {cause}")
        self.path = path
        self.cause = cause


class ManifestError(DepotError):
    """Raised when a package.json exists but cannot be decoded."""

    def __init__(self, path: str, cause: BaseException | str) -> None:
        super().__init__(f"Unreadable manifest {path}: {cause}")
        self.path = path
        self.cause = cause


class NotSupportedError(DepotError):
    """Raised for package references Depot does not install.

    Installing from an arbitrary local folder or file is not supported.
    """

    def __init__(self, reference: str) -> None:
        super().__init__(f"Installing from a local path is not supported: {reference}")
        self.reference = reference


class InstallError(DepotError):
    """Raised when the installation tree cannot be written.

    Attributes:
        target: The archive URL or directory being written.
        cause: The underlying filesystem error.
    """

    def __init__(self, target: str, cause: BaseException | str) -> None:
        super().__init__(f"Could not install {target}: {cause}")
        self.target = target
        self.cause = cause


class InstallCancelledError(DepotError):
    """Raised when cancellation is observed before an install step starts."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Install cancelled before {reference}")
        self.reference = reference
