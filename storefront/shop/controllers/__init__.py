"""Screen controllers that build Flet views from the stores."""

from .cart_controller import CartController
from .catalog_controller import CatalogController
from .profile_controller import ProfileController

__all__ = ["CartController", "CatalogController", "ProfileController"]
