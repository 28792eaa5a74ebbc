"""
WPF-Style Bindable Property Descriptor.

Provides automatic signal emission on property change, reducing MVVM boilerplate.

Usage:
    class MyViewModel(BindableBase):
        searchTextChanged = Signal(str)
        search_text = BindableProperty(default="", signal_name="searchTextChanged")

    # Changing the property auto-emits searchTextChanged and propertyChanged
    vm.search_text = "rivers"

Notifications are emitted synchronously from the setter. Subscribers choose
the delivery thread through the Qt connection type they connect with.
"""
from typing import Any, Optional, Callable, TypeVar, Generic
from PySide6.QtCore import QObject, Signal

T = TypeVar('T')


class BindableProperty(Generic[T]):
    """
    Descriptor that emits a signal when the property value changes.

    Inspired by WPF's DependencyProperty / INotifyPropertyChanged pattern.

    Args:
        default: Default value for the property.
        signal_name: Optional custom signal name. Defaults to "{property_name}Changed".
        coerce: Optional callable to coerce/validate the value before setting.
    """

    def __init__(
        self,
        default: T = None,
        signal_name: Optional[str] = None,
        coerce: Optional[Callable[[Any], T]] = None
    ):
        self.default = default
        self._signal_name = signal_name
        self.coerce = coerce
        self._attr_name: str = ""
        self._public_name: str = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self._public_name = name
        self._attr_name = f"_bindable_{name}"

        if not self._signal_name:
            self._signal_name = f"{name}Changed"

        # Signals must be class-level attributes of the QObject subclass, so
        # the specific signal is looked up at emit time rather than created here.

    @property
    def name(self) -> str:
        return self._public_name

    def __get__(self, obj: Optional[QObject], objtype: type = None) -> T:
        if obj is None:
            return self  # type: ignore
        return getattr(obj, self._attr_name, self.default)

    def __set__(self, obj: QObject, value: Any) -> None:
        """Set the property value and emit change signal if different."""
        if self.coerce is not None:
            value = self.coerce(value)

        old_value = getattr(obj, self._attr_name, self.default)

        if old_value != value:
            setattr(obj, self._attr_name, value)

            specific_signal = getattr(obj, self._signal_name, None)
            if specific_signal is not None and callable(getattr(specific_signal, 'emit', None)):
                specific_signal.emit(value)

            generic_signal = getattr(obj, 'propertyChanged', None)
            if generic_signal is not None and callable(getattr(generic_signal, 'emit', None)):
                generic_signal.emit(self._public_name, value)


class BindableBase(QObject):
    """
    Base class for ViewModels with WPF-style property change notification.

    Provides:
    - A generic `propertyChanged` signal for any property changes.
    - Works with `BindableProperty` descriptors for automatic notification.
    """

    # Generic signal emitted for any property change: (property_name, new_value)
    propertyChanged = Signal(str, object)

    def __init__(self, locator=None):
        super().__init__()
        self.locator = locator

    def subscribe(self, property_name: str, callback: Callable[[Any], None]) -> Callable[[str, Any], None]:
        """
        Call `callback(value)` whenever `property_name` changes.

        Returns the connected slot so it can be passed to `unsubscribe`.
        """
        def _slot(name: str, value: Any) -> None:
            if name == property_name:
                callback(value)

        self.propertyChanged.connect(_slot)
        return _slot

    def unsubscribe(self, slot: Callable[[str, Any], None]) -> None:
        self.propertyChanged.disconnect(slot)
