"""Outcome of an authorization handler run."""

from dataclasses import dataclass


@dataclass
class AuthorizationResult:
    """Handler outcome. A result that neither succeeded nor failed means the
    handler had nothing to decide; callers must treat it as not authorized."""

    succeeded: bool = False
    failed: bool = False

    def succeed(self) -> None:
        if not self.failed:
            self.succeeded = True

    def fail(self) -> None:
        self.failed = True
        self.succeeded = False
