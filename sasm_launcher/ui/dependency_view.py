"""Dependency View - what the dependency check screen shows for a probe result."""
from dataclasses import dataclass
from typing import List, Tuple

from sasm_launcher.core.types import Dependency, DependencySet, DependencyStatus, XQuartzState
from sasm_launcher.ui.handlers.installer_handler import Action
from sasm_launcher.utils.platform_utils import Platform

CONTINUE_LABEL = "Continue to Launcher"
CONTINUE_ANYWAY_LABEL = "Continue Anyway (May Not Work)"

_INSTALL_ACTIONS = {
    Dependency.HOMEBREW: Action.INSTALL_HOMEBREW,
    Dependency.DOCKER: Action.INSTALL_DOCKER,
    Dependency.XQUARTZ: Action.INSTALL_XQUARTZ,
}


@dataclass(frozen=True)
class StatusRow:
    """One line of the status list."""

    level: str
    text: str
    detail: str

    def __str__(self):
        return f"[{self.level}] {self.text}"


@dataclass(frozen=True)
class DependencyView:
    """Immutable rendering of one DependencySet."""

    os_line: str
    rows: Tuple[StatusRow, ...]
    actions: Tuple[Action, ...]
    continue_label: str
    ready: bool

    @classmethod
    def from_dependencies(cls, deps: DependencySet, platform: Platform) -> "DependencyView":
        if platform == Platform.MACOS:
            os_line = "macOS detected - checking for required dependencies..."
        else:
            os_line = "Non-macOS system detected - some features may not work as expected"

        actions: List[Action] = [_INSTALL_ACTIONS[Dependency(status.name)] for status in deps.missing()]
        if deps.needs_configuration:
            actions.append(Action.CONFIGURE_XQUARTZ)

        return cls(
            os_line=os_line,
            rows=tuple(_row(status) for status in deps),
            actions=tuple(actions),
            continue_label=CONTINUE_LABEL if deps.all_satisfied else CONTINUE_ANYWAY_LABEL,
            ready=deps.all_satisfied,
        )


def _row(status: DependencyStatus) -> StatusRow:
    if not status.installed:
        return StatusRow("MISSING", f"{status.name}: Not Found", status.message)
    if status.state == XQuartzState.INSTALLED_UNCONFIGURED:
        return StatusRow("WARNING", f"{status.name}: Installed (Needs Configuration)", status.message)
    if status.state == XQuartzState.CONFIGURED:
        return StatusRow("OK", f"{status.name}: Installed & Configured", status.message)
    return StatusRow("OK", f"{status.name}: Installed", status.message)
