"""Catalog rules: upsert-by-title, delete, reset and search.

These work on an in-memory ``Catalog`` and know nothing about storage; the
catalog service loads a snapshot, applies one of these and saves the result.
"""
from typing import Callable, Container, Iterable, List, Optional, Tuple

from apps.common.errors import NotFoundError

from .commands import ProductUpsertCommand
from .constants import DEFAULT_PRODUCTS
from .dtos import Catalog, ProductDTO

IdFactory = Callable[[Container[str]], str]
ColorFactory = Callable[[], str]


def build_catalog(products: Iterable[ProductDTO]) -> Catalog:
    return {product.id: product for product in products}


def find_by_title(catalog: Catalog, title: str) -> Optional[ProductDTO]:
    wanted = title.strip().casefold()
    for product in catalog.values():
        if product.title.casefold() == wanted:
            return product
    return None


def search_products(catalog: Catalog, term: Optional[str] = None) -> List[ProductDTO]:
    needle = (term or "").strip().casefold()
    if not needle:
        return list(catalog.values())
    return [p for p in catalog.values() if needle in p.title.casefold()]


def upsert_product(
    catalog: Catalog,
    command: ProductUpsertCommand,
    *,
    id_factory: IdFactory,
    color_factory: ColorFactory,
) -> Tuple[ProductDTO, bool]:
    """Update the product whose title matches case-insensitively, else create one.

    A title that collides with another product merges into it: title and id
    of the existing product are kept, price and qty are overwritten, img only
    when a non-empty one was supplied.
    """
    existing = find_by_title(catalog, command.title)
    if existing is not None:
        existing.price = command.price
        existing.qty = command.qty
        if command.img:
            existing.img = command.img
        return existing, False
    product = ProductDTO(
        id=id_factory(catalog.keys()),
        title=command.title,
        price=command.price,
        qty=command.qty,
        img=command.img,
        color=color_factory(),
    )
    catalog[product.id] = product
    return product, True


def delete_product(catalog: Catalog, product_id: str) -> ProductDTO:
    try:
        return catalog.pop(product_id)
    except KeyError:
        raise NotFoundError("Product not found", details={"id": str(product_id)}) from None


def reset_catalog() -> Catalog:
    return build_catalog(
        ProductDTO(id=pid, title=title, price=price, qty=qty, img=img, color=color)
        for pid, title, price, qty, img, color in DEFAULT_PRODUCTS
    )
