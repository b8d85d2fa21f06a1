"""Installer Handler - runs installer operations in the background."""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from loguru import logger

from sasm_launcher.core.errors import DependencyError
from sasm_launcher.services.dependency_installer import DependencyInstaller
from sasm_launcher.services.xquartz_configurator import XQuartzConfigurator


class Action(Enum):
    """User actions offered by the dependency check."""

    INSTALL_HOMEBREW = "install_homebrew"
    INSTALL_DOCKER = "install_docker"
    INSTALL_XQUARTZ = "install_xquartz"
    CONFIGURE_XQUARTZ = "configure_xquartz"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def success_message(self) -> str:
        return _SUCCESS_MESSAGES[self]

    @property
    def failure_prefix(self) -> str:
        verb, target = self.label.split(" ", 1)
        return f"Failed to {verb.lower()} {target}"


_LABELS = {
    Action.INSTALL_HOMEBREW: "Install Homebrew",
    Action.INSTALL_DOCKER: "Install Docker",
    Action.INSTALL_XQUARTZ: "Install XQuartz",
    Action.CONFIGURE_XQUARTZ: "Configure XQuartz",
}

_SUCCESS_MESSAGES = {
    Action.INSTALL_HOMEBREW: "Homebrew installed successfully!",
    Action.INSTALL_DOCKER: "Docker installed successfully! You may need to start Docker Desktop manually.",
    Action.INSTALL_XQUARTZ: "XQuartz installed successfully! Configuration is still needed.",
    Action.CONFIGURE_XQUARTZ: "XQuartz configured successfully! XQuartz will be restarted.",
}


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one background action."""

    action: Action
    error: Optional[DependencyError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.error is None:
            return self.action.success_message
        return f"{self.action.failure_prefix}: {self.error}"


class InstallerHandler:
    """Dispatches installer actions onto worker threads, one run per action at a time."""

    def __init__(
        self,
        installer: Optional[DependencyInstaller] = None,
        configurator: Optional[XQuartzConfigurator] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self._installer = installer or DependencyInstaller()
        self._configurator = configurator or XQuartzConfigurator()
        self._executor = executor or ThreadPoolExecutor(thread_name_prefix="installer")
        self._in_flight: Dict[Action, Future] = {}
        self._lock = threading.Lock()

    def _operation(self, action: Action) -> Callable[[], None]:
        return {
            Action.INSTALL_HOMEBREW: self._installer.install_homebrew,
            Action.INSTALL_DOCKER: self._installer.install_docker,
            Action.INSTALL_XQUARTZ: self._installer.install_xquartz,
            Action.CONFIGURE_XQUARTZ: self._configurator.configure,
        }[action]

    def is_running(self, action: Action) -> bool:
        with self._lock:
            return action in self._in_flight

    def submit(
        self,
        action: Action,
        on_done: Optional[Callable[[ActionResult], None]] = None,
    ) -> Optional[Future]:
        """
        Start an action in the background.

        Args:
            action: Action to run
            on_done: Called from the worker thread with the ActionResult

        Returns:
            Future resolving to an ActionResult, or None if the action is already running
        """
        with self._lock:
            if action in self._in_flight:
                logger.warning(f"[InstallerHandler] {action.label} already running")
                return None
            future = self._executor.submit(self._run, action, on_done)
            self._in_flight[action] = future
        return future

    def _run(self, action: Action, on_done: Optional[Callable[[ActionResult], None]]) -> ActionResult:
        try:
            self._operation(action)()
            result = ActionResult(action)
        except DependencyError as e:
            logger.error(f"[InstallerHandler] {action.label} failed: {e}")
            result = ActionResult(action, e)
        except Exception as e:
            logger.exception(f"[InstallerHandler] {action.label} crashed: {e}")
            error = DependencyError(str(e) or type(e).__name__)
            error.__cause__ = e
            result = ActionResult(action, error)
        finally:
            with self._lock:
                self._in_flight.pop(action, None)

        if on_done:
            try:
                on_done(result)
            except Exception as e:
                logger.error(f"[InstallerHandler] Completion callback failed: {e}")
        return result

    def run(self, action: Action) -> Optional[ActionResult]:
        """Run an action and wait for it. Returns None if it was already running."""
        future = self.submit(action)
        if future is None:
            return None
        return future.result()

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
