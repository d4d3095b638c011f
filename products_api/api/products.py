"""
Products API endpoints.

Routes are declared in ``ROUTES`` and bound to a ``ProductHandler`` instance by
``build_router``; the handler receives its gateway at construction time.
"""
from fastapi import APIRouter, HTTPException, Path
from typing import Annotated, List, Optional
from datetime import datetime
from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel

from products_api.services.product_gateway import ProductGateway

# Ids outside the signed 64-bit range cannot reach the store
ProductId = Annotated[int, Path(ge=1, le=2**63 - 1)]


# --- Pydantic Schemas ---

class ProductResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    price: Optional[float]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    deleted_at: Optional[datetime]

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class ProductCreate(BaseModel):
    name: str
    description: Optional[str] = None
    price: Optional[float] = None

    class Config:
        extra = "forbid"


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None

    class Config:
        extra = "forbid"

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v):
        # Only runs when the client sent the field
        if v is None:
            raise ValueError("name cannot be null")
        return v


# --- Handler ---

class ProductHandler:
    def __init__(self, gateway: ProductGateway):
        self.gateway = gateway

    async def create(self, data: ProductCreate):
        """Create a new product"""
        return await self.gateway.create(data.model_dump())

    async def list_all(self):
        """List all live products"""
        return await self.gateway.find_all()

    async def get(self, product_id: ProductId):
        """Get a single live product"""
        product = await self.gateway.find_one(product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    async def update(self, product_id: ProductId, data: ProductUpdate):
        """Update the fields present in the body of a live product"""
        return await self.gateway.update(product_id, data.model_dump(exclude_unset=True))

    async def remove(self, product_id: ProductId):
        """Soft-delete a product"""
        return await self.gateway.remove(product_id)


# --- Route table ---

# (method, path, handler method, response model, status code)
ROUTES = [
    ("POST", "", "create", ProductResponse, 201),
    ("GET", "", "list_all", List[ProductResponse], 200),
    ("GET", "/{product_id}", "get", ProductResponse, 200),
    ("PATCH", "/{product_id}", "update", ProductResponse, 200),
    ("DELETE", "/{product_id}", "remove", ProductResponse, 200),
]


def build_router(handler: ProductHandler) -> APIRouter:
    router = APIRouter()
    for method, path, name, response_model, status_code in ROUTES:
        router.add_api_route(
            path,
            getattr(handler, name),
            methods=[method],
            response_model=response_model,
            status_code=status_code,
            name=f"products_{name}",
        )
    return router
