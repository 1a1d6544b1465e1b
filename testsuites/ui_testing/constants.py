"""
SauceDemo application constants: paths, product ids, sort options and the
error banners the login form shows.
"""

from enum import Enum


class Paths:
    LOGIN = "/"
    INVENTORY = "/inventory.html"
    CART = "/cart.html"
    CHECKOUT_STEP_ONE = "/checkout-step-one.html"
    CHECKOUT_STEP_TWO = "/checkout-step-two.html"
    CHECKOUT_COMPLETE = "/checkout-complete.html"


class ProductId:
    BACKPACK = "sauce-labs-backpack"
    BIKE_LIGHT = "sauce-labs-bike-light"
    BOLT_T_SHIRT = "sauce-labs-bolt-t-shirt"
    FLEECE_JACKET = "sauce-labs-fleece-jacket"
    ONESIE = "sauce-labs-onesie"
    RED_T_SHIRT = "test.allthethings()-t-shirt-(red)"


class SortOption(str, Enum):
    NAME_A_TO_Z = "az"
    NAME_Z_TO_A = "za"
    PRICE_LOW_TO_HIGH = "lohi"
    PRICE_HIGH_TO_LOW = "hilo"


class ErrorMessages:
    LOCKED_USER = "Epic sadface: Sorry, this user has been locked out."
    INVALID_CREDENTIALS = (
        "Epic sadface: Username and password do not match any user in this service"
    )
    REQUIRED_USERNAME = "Epic sadface: Username is required"
    REQUIRED_PASSWORD = "Epic sadface: Password is required"


PRODUCT_NAMES = {
    ProductId.BACKPACK: "Sauce Labs Backpack",
    ProductId.BIKE_LIGHT: "Sauce Labs Bike Light",
    ProductId.BOLT_T_SHIRT: "Sauce Labs Bolt T-Shirt",
    ProductId.FLEECE_JACKET: "Sauce Labs Fleece Jacket",
    ProductId.ONESIE: "Sauce Labs Onesie",
    ProductId.RED_T_SHIRT: "Test.allTheThings() T-Shirt (Red)",
}

# Hidden before visual captures; they change between runs
DYNAMIC_ELEMENTS = (
    ".shopping_cart_badge",
    ".peek",
    ".timestamp",
)
