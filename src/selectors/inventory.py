"""Inventory (products) page selectors."""

from __future__ import annotations

from types import MappingProxyType

INVENTORY_SELECTORS = MappingProxyType({
    # Page header
    "page_title": ".title",
    "app_logo": ".app_logo",

    # Product containers
    "inventory_container": ".inventory_container",
    "inventory_list": ".inventory_list",
    "inventory_item": ".inventory_item",

    # Product details
    "inventory_item_name": ".inventory_item_name",
    "inventory_item_desc": ".inventory_item_desc",
    "inventory_item_price": ".inventory_item_price",
    "inventory_item_img": ".inventory_item_img",

    # Buttons
    "add_to_cart_button": '[data-test^="add-to-cart"]',
    "remove_button": '[data-test^="remove"]',

    # Cart
    "shopping_cart_link": ".shopping_cart_link",
    "shopping_cart_badge": ".shopping_cart_badge",

    # Sorting
    "product_sort_container": ".product_sort_container",

    # Menu
    "burger_menu": "#react-burger-menu-btn",
    "logout_link": "#logout_sidebar_link",
})
