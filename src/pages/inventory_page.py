"""Inventory page object for the product listing, cart and menu."""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Optional, Union

from playwright.async_api import Locator

from src.selectors.inventory import INVENTORY_SELECTORS

from .base_page import BasePage

logger = logging.getLogger(__name__)

INVENTORY_PATH = "inventory.html"
INVENTORY_TITLE = "Products"


class SortOption(str, Enum):
    """Values of the product sort dropdown."""

    NAME_ASC = "az"
    NAME_DESC = "za"
    PRICE_ASC = "lohi"
    PRICE_DESC = "hilo"


class ProductLookupError(LookupError):
    """A product name did not resolve to exactly one inventory item."""


class ProductNotFoundError(ProductLookupError):
    def __init__(self, product_name: str):
        self.product_name = product_name
        super().__init__(f"No product named '{product_name}' on the inventory page")


class AmbiguousProductError(ProductLookupError):
    def __init__(self, product_name: str, matches: int):
        self.product_name = product_name
        self.matches = matches
        super().__init__(f"Product name '{product_name}' matches {matches} items")


class CartBadgeParseError(ValueError):
    """The cart badge showed text that is not an integer."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Cart badge text is not a number: '{text}'")


def parse_cart_badge(text: Optional[str]) -> int:
    """Parse cart badge text; empty text counts as an empty cart."""
    if text is None or not text.strip():
        return 0
    try:
        return int(text.strip())
    except ValueError as e:
        raise CartBadgeParseError(text) from e


def parse_price(text: str) -> float:
    """Parse a displayed price such as '$29.99' into a float."""
    cleaned = re.sub(r"[^\d.\-]", "", text or "")
    if not cleaned:
        raise ValueError(f"Not a price: '{text}'")
    return float(cleaned)


def _exact_name(product_name: str) -> re.Pattern:
    return re.compile(rf"^\s*{re.escape(product_name.strip())}\s*$")


class InventoryPage:
    """Interactions with the product listing screen."""

    def __init__(self, base: BasePage):
        self.base = base
        self.page = base.page

    async def goto(self) -> None:
        await self.base.goto(INVENTORY_PATH)
        await self.base.wait_for_page_load()

    async def assert_inventory_page_loaded(self) -> None:
        await self.base.assert_visible(INVENTORY_SELECTORS["page_title"])
        await self.base.assert_visible(INVENTORY_SELECTORS["inventory_container"])
        await self.base.assert_exact_text(INVENTORY_SELECTORS["page_title"], INVENTORY_TITLE)

    async def get_page_title(self) -> Optional[str]:
        return await self.base.get_text(INVENTORY_SELECTORS["page_title"])

    # ------------------------------------------------------------------
    # Product listing
    # ------------------------------------------------------------------

    async def get_product_count(self) -> int:
        return await self.base.get_locator(INVENTORY_SELECTORS["inventory_item"]).count()

    async def get_all_product_names(self) -> list[str]:
        """Product names in DOM order, trimmed; items without text are skipped."""
        names: list[str] = []
        for element in await self.base.get_locator(INVENTORY_SELECTORS["inventory_item_name"]).all():
            text = await element.text_content()
            if text:
                names.append(text.strip())
        return names

    async def get_all_product_prices(self) -> list[float]:
        """Numeric prices in DOM order."""
        texts = await self.base.get_locator(
            INVENTORY_SELECTORS["inventory_item_price"]).all_text_contents()
        return [parse_price(t) for t in texts]

    def _product_name_locator(self, product_name: str) -> Locator:
        return self.base.get_locator(INVENTORY_SELECTORS["inventory_item_name"]).filter(
            has_text=_exact_name(product_name))

    async def _resolve_product(self, product_name: str) -> Locator:
        """Locate the single inventory item whose name is exactly *product_name*."""
        await self.base.wait_for_selector(INVENTORY_SELECTORS["inventory_item"])
        item = self.base.get_locator(INVENTORY_SELECTORS["inventory_item"]).filter(
            has=self._product_name_locator(product_name))
        count = await item.count()
        if count == 0:
            raise ProductNotFoundError(product_name)
        if count > 1:
            raise AmbiguousProductError(product_name, count)
        return item

    async def add_product_to_cart(self, product_name: str) -> None:
        item = await self._resolve_product(product_name)
        logger.debug("Adding to cart: %s", product_name)
        await item.locator(INVENTORY_SELECTORS["add_to_cart_button"]).click()

    async def remove_product_from_cart(self, product_name: str) -> None:
        item = await self._resolve_product(product_name)
        logger.debug("Removing from cart: %s", product_name)
        await item.locator(INVENTORY_SELECTORS["remove_button"]).click()

    async def get_product_price(self, product_name: str) -> Optional[str]:
        item = await self._resolve_product(product_name)
        return await item.locator(INVENTORY_SELECTORS["inventory_item_price"]).text_content()

    async def click_product_name(self, product_name: str) -> None:
        item = await self._resolve_product(product_name)
        await item.locator(INVENTORY_SELECTORS["inventory_item_name"]).click()

    async def sort_products(self, option: Union[SortOption, str]) -> None:
        option = SortOption(option)
        await self.base.select_option(INVENTORY_SELECTORS["product_sort_container"], option.value)

    # ------------------------------------------------------------------
    # Cart
    # ------------------------------------------------------------------

    async def get_cart_item_count(self) -> int:
        """Badge count; 0 when the badge is hidden."""
        if not await self.base.is_visible(INVENTORY_SELECTORS["shopping_cart_badge"]):
            return 0
        text = await self.base.get_text(INVENTORY_SELECTORS["shopping_cart_badge"])
        return parse_cart_badge(text)

    async def click_shopping_cart(self) -> None:
        await self.base.click(INVENTORY_SELECTORS["shopping_cart_link"])

    # ------------------------------------------------------------------
    # Menu
    # ------------------------------------------------------------------

    async def open_menu(self) -> None:
        await self.base.click(INVENTORY_SELECTORS["burger_menu"])

    async def logout(self) -> None:
        await self.open_menu()
        await self.base.wait_for_selector(INVENTORY_SELECTORS["logout_link"])
        await self.base.click(INVENTORY_SELECTORS["logout_link"])
        logger.info("Logged out")

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    async def assert_cart_item_count(self, expected_count: int) -> None:
        """A count of 0 means the badge is hidden, not merely showing '0'."""
        if expected_count < 0:
            raise ValueError(f"expected_count must be >= 0, got {expected_count}")
        badge = INVENTORY_SELECTORS["shopping_cart_badge"]
        if expected_count == 0:
            await self.base.assert_hidden(badge, "Cart badge should be hidden for an empty cart")
        else:
            await self.base.assert_exact_text(
                badge, str(expected_count),
                f"Cart badge should show {expected_count}")

    async def assert_product_visible(self, product_name: str) -> None:
        await self.base.assert_visible(self._product_name_locator(product_name).first)
