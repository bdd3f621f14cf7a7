from pydantic import BaseModel, ConfigDict, Field


class NewLineItem(BaseModel):
    """A product as handed to the cart by the catalog, before it has a quantity."""

    id: str
    title: str
    image_url: str
    price: float = Field(..., allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)


class LineItem(NewLineItem):
    quantity: int = Field(..., ge=1)

    @classmethod
    def from_new(cls, item: NewLineItem, quantity: int = 1) -> "LineItem":
        return cls(
            id=item.id,
            title=item.title,
            image_url=item.image_url,
            price=item.price,
            quantity=quantity,
        )

    def with_quantity(self, quantity: int) -> "LineItem":
        return self.model_copy(update={"quantity": quantity})
