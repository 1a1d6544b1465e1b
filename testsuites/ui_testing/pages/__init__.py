"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the SauceDemo pages.

Each page class encapsulates:
    - Element locator strategies (primary + fallbacks)
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .inventory_page import InventoryPage
from .cart_page import CartPage
from .checkout_page import CheckoutPage

__all__ = [
    "LoginPage",
    "InventoryPage",
    "CartPage",
    "CheckoutPage",
]
