"""
Base ViewModel class for the Coherence Map MVVM architecture.

ViewModels hold UI state as private attributes and announce changes through
pyqtSignals; views bind to the signals and never mutate state directly.
"""

from typing import Optional, Any
from PyQt6.QtCore import QObject, pyqtSignal


class BaseViewModel(QObject):
    """
    Base class for all ViewModels.

    Pattern:
    - Properties with signals on change
    - Commands as methods
    - No widget references (UI-agnostic)
    - Services injected via constructor
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)

    def _notify_change(self, signal: pyqtSignal, *args: Any) -> None:
        """Emit a change signal."""
        signal.emit(*args)

    def _update(self, attr: str, value: Any, signal: pyqtSignal) -> bool:
        """
        Store a state attribute and emit its signal if the value changed.

        Args:
            attr: Private attribute name, e.g. "_insight"
            value: New value
            signal: Signal emitted with the new value on change

        Returns:
            True if the value changed
        """
        if getattr(self, attr) == value:
            return False
        setattr(self, attr, value)
        self._notify_change(signal, value)
        return True
