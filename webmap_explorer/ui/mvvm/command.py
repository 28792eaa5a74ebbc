"""
Bindable commands for ViewModels.

`AsyncCommand` pairs an action with an optional can-execute predicate, in the
spirit of WPF's ICommand. Coroutine actions are scheduled on the running event
loop and the resulting task is handed back to the caller, so outcomes can be
awaited instead of being lost at the dispatch boundary.
"""
import asyncio
import inspect
from typing import Any, Callable, Optional, Set

from PySide6.QtCore import QObject, Signal
from loguru import logger


class AsyncCommand(QObject):
    """
    Invocable UI action with an eligibility predicate.

    The predicate result is cached; `canExecuteChanged` is emitted only when a
    fresh evaluation differs from the cached value. The cache starts as False,
    so the first permitted evaluation announces the command as available.

    Example:
        self.load_command = AsyncCommand(self.load, can_execute=lambda item: item is not None)

        if vm.load_command.can_execute(item):
            task = vm.load_command.execute(item)
    """

    canExecuteChanged = Signal()

    def __init__(
        self,
        action: Callable[[Any], Any],
        can_execute: Optional[Callable[[Any], bool]] = None,
        name: Optional[str] = None,
    ):
        super().__init__()
        self._action = action
        self._can_execute = can_execute
        self._can_execute_cache = False
        self._pending: Set[asyncio.Task] = set()
        self.name = name or getattr(action, "__name__", "command")

    @property
    def is_executing(self) -> bool:
        return bool(self._pending)

    @property
    def pending_tasks(self):
        return tuple(self._pending)

    def can_execute(self, parameter: Any = None) -> bool:
        if self._can_execute is None:
            return True

        value = bool(self._can_execute(parameter))
        if value != self._can_execute_cache:
            self._can_execute_cache = value
            self.canExecuteChanged.emit()

        return self._can_execute_cache

    def execute(self, parameter: Any = None) -> Optional[asyncio.Task]:
        """
        Run the action.

        Returns:
            The scheduled task for coroutine actions, otherwise None.
        """
        result = self._action(parameter)
        if not inspect.isawaitable(result):
            return None

        task = asyncio.ensure_future(result)
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        return task

    def __call__(self, parameter: Any = None) -> Optional[asyncio.Task]:
        """Execute only if the predicate permits it."""
        if not self.can_execute(parameter):
            logger.debug(f"Command '{self.name}' rejected parameter {parameter!r}")
            return None
        return self.execute(parameter)

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.opt(exception=exc).error(f"Command '{self.name}' failed: {exc}")
