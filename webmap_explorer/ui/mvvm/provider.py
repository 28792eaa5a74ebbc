from typing import Type, TypeVar
from .viewmodel import BaseViewModel

T = TypeVar('T', bound=BaseViewModel)

class ViewModelProvider:
    """
    Factory for creating and managing ViewModel instances,
    ensuring they receive the ServiceLocator.
    """
    def __init__(self, locator):
        self.locator = locator
        self._cache = {}

    def get(self, vm_cls: Type[T]) -> T:
        """Get or create the ViewModel instance for `vm_cls`."""
        if vm_cls not in self._cache:
            self._cache[vm_cls] = vm_cls(self.locator)
        return self._cache[vm_cls]

    async def close_all(self) -> None:
        """Close every cached ViewModel that owns resources."""
        for vm in self._cache.values():
            close = getattr(vm, "close", None)
            if close is not None:
                await close()
        self._cache.clear()
