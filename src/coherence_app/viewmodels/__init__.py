"""
ViewModels for the Coherence Map app.

MVVM architecture separating business logic from UI:
- ViewModels handle state and business logic
- Views (Qt widgets) handle rendering and user input
- Services handle data access and layout
"""

from .base import BaseViewModel
from .map_vm import MapVM
from .details_vm import DetailsVM, DetailSection
from .coordinator import AppCoordinator

__all__ = [
    # Base
    "BaseViewModel",

    # ViewModels
    "MapVM",
    "DetailsVM",
    "AppCoordinator",

    # Data classes
    "DetailSection",
]
