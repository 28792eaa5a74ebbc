"""
MVVM ViewModel Infrastructure.

Provides a single base class for ViewModels with property change notification.
Uses BindableBase for WPF-style automatic signal emission.
"""
from webmap_explorer.ui.mvvm.bindable import BindableProperty, BindableBase


class BaseViewModel(BindableBase):
    """
    Base class for ViewModels.

    Extends BindableBase for unified MVVM pattern:
    - Use BindableProperty descriptor for automatic change notification
    - propertyChanged signal inherited from BindableBase
    """

    def __init__(self, locator=None):
        super().__init__(locator)


__all__ = ["BaseViewModel", "BindableBase", "BindableProperty"]
