"""Fatal startup error types and the exit codes they map to."""

from __future__ import annotations

from typing import Optional


class SupervisorError(RuntimeError):
    """Base class for failures that abort the supervisor before it starts running."""

    exit_code = 1


class PreconditionError(SupervisorError):
    """Raised when required configuration, files or executables are missing."""

    exit_code = 2

    @classmethod
    def missing_variable(cls, name: str) -> "PreconditionError":
        return cls(f"{name} environment variable is required")

    @classmethod
    def invalid_port(cls, name: str, value: int) -> "PreconditionError":
        return cls(f"{name} must be between 1 and 65535 (got {value})")

    @classmethod
    def missing_file(cls, description: str, path) -> "PreconditionError":
        return cls(f"Missing {description}: {path}")

    @classmethod
    def missing_executable(cls, executable: str) -> "PreconditionError":
        return cls(f"{executable} executable not found")


class InitializationError(SupervisorError):
    """Raised when a one-time setup step fails."""

    exit_code = 3

    def __init__(self, message: str, *, step: str, returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.step = step
        self.returncode = returncode

    @classmethod
    def step_failed(cls, step: str, returncode: Optional[int] = None) -> "InitializationError":
        msg = f"Failed to {step}"
        if returncode is not None:
            msg += f" (exit code {returncode})"
        return cls(msg, step=step, returncode=returncode)


class LaunchError(SupervisorError):
    """Raised when a tracked service is not alive shortly after being started."""

    exit_code = 4

    def __init__(self, message: str, *, service_name: str) -> None:
        super().__init__(message)
        self.service_name = service_name

    @classmethod
    def spawn_failed(cls, service_name: str) -> "LaunchError":
        return cls(f"{service_name} could not be started", service_name=service_name)

    @classmethod
    def not_running(cls, service_name: str) -> "LaunchError":
        return cls(f"{service_name} failed to start", service_name=service_name)


__all__ = ["InitializationError", "LaunchError", "PreconditionError", "SupervisorError"]
