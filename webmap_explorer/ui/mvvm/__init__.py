"""
MVVM Package - WPF-Style Data Binding for PySide6.

Provides:
- BindableProperty: Descriptor for auto-signaling properties.
- BindableBase: Base ViewModel with generic propertyChanged signal.
- BaseViewModel: Base class for application ViewModels.
- AsyncCommand: Command with can-execute predicate returning task handles.
- ViewModelProvider: Creates and caches ViewModels with the ServiceLocator.
"""
from webmap_explorer.ui.mvvm.viewmodel import BaseViewModel, BindableProperty, BindableBase
from webmap_explorer.ui.mvvm.command import AsyncCommand
from webmap_explorer.ui.mvvm.provider import ViewModelProvider

__all__ = [
    "BaseViewModel",
    "BindableBase",
    "BindableProperty",
    "AsyncCommand",
    "ViewModelProvider",
]
