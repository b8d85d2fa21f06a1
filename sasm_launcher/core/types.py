"""Core types: dependency status snapshots."""
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional


class Dependency(Enum):
    """The dependencies the launcher needs, in display order."""

    HOMEBREW = "Homebrew"
    DOCKER = "Docker"
    XQUARTZ = "XQuartz"

    def __str__(self):
        return self.value


class XQuartzState(Enum):
    """XQuartz installation and configuration state."""

    ABSENT = "absent"
    INSTALLED_UNCONFIGURED = "installed_unconfigured"
    CONFIGURED = "configured"


@dataclass(frozen=True)
class DependencyStatus:
    """Result of probing one dependency."""

    name: str
    installed: bool
    path: str = ""
    message: str = ""
    # Only set for XQuartz
    state: Optional[XQuartzState] = None

    def __post_init__(self):
        if not self.installed and self.path:
            raise ValueError(f"{self.name}: a dependency that is not installed cannot have a path")
        if self.state is not None and self.installed != (self.state != XQuartzState.ABSENT):
            raise ValueError(f"{self.name}: state {self.state.value} contradicts installed={self.installed}")

    @property
    def configured(self) -> bool:
        """False only for an installed dependency that still needs configuration."""
        if self.state is None:
            return self.installed
        return self.state == XQuartzState.CONFIGURED


@dataclass(frozen=True)
class DependencySet:
    """All three statuses from a single probe pass."""

    homebrew: DependencyStatus
    docker: DependencyStatus
    xquartz: DependencyStatus

    def __iter__(self) -> Iterator[DependencyStatus]:
        return iter((self.homebrew, self.docker, self.xquartz))

    def get(self, dependency: Dependency) -> DependencyStatus:
        return {
            Dependency.HOMEBREW: self.homebrew,
            Dependency.DOCKER: self.docker,
            Dependency.XQUARTZ: self.xquartz,
        }[dependency]

    def missing(self) -> List[DependencyStatus]:
        """Statuses of dependencies that are not installed."""
        return [status for status in self if not status.installed]

    @property
    def needs_configuration(self) -> bool:
        return self.xquartz.state == XQuartzState.INSTALLED_UNCONFIGURED

    @property
    def all_satisfied(self) -> bool:
        return not self.missing() and not self.needs_configuration
