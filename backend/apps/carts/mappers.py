from typing import Iterable, List

from .dtos import CartLineDTO
from .models import CartLine


class CartLineMapper:
    @staticmethod
    def to_dto(line: CartLine) -> CartLineDTO:
        return CartLineDTO(
            id=line.product_id, title=line.title, price=line.price, qty=line.qty
        )

    @staticmethod
    def many_to_dto(lines: Iterable[CartLine]) -> List[CartLineDTO]:
        return [CartLineMapper.to_dto(line) for line in lines]

    @staticmethod
    def to_model(owner_id: int, dto: CartLineDTO, position: int) -> CartLine:
        return CartLine(
            owner_id=owner_id,
            product_id=dto.id,
            title=dto.title,
            price=dto.price,
            qty=dto.qty,
            position=position,
        )
