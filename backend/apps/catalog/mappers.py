from typing import Any, Dict, Iterable, List

from .dtos import ProductDTO
from .models import Product


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            title=product.title,
            price=product.price,
            qty=product.qty,
            img=product.img or None,
            color=product.color or None,
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]

    @staticmethod
    def to_fields(dto: ProductDTO, position: int) -> Dict[str, Any]:
        return {
            "title": dto.title,
            "price": dto.price,
            "qty": dto.qty,
            "img": dto.img,
            "color": dto.color,
            "position": position,
        }
