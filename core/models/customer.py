"""Customer domain models. Customers are read-only from the dashboard."""

from uuid import UUID

from pydantic import BaseModel


class Customer(BaseModel):
    """Full customer entity as stored."""

    id: UUID
    name: str
    email: str
    image_url: str | None = None

    model_config = {"from_attributes": True}


class CustomerField(BaseModel):
    """Id and name pair used to populate the invoice form's customer select."""

    id: UUID
    name: str

    model_config = {"from_attributes": True}
