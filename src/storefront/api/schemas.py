"""Pydantic request/response schemas for the storefront API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Order Request Schemas ---


class CartItem(BaseModel):
    product_id: str
    quantity: float


class CreateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {"product_id": "prod-rice-5kg", "quantity": 1},
                        {"product_id": "prod-tomato", "quantity": 0.5},
                    ],
                    "delivery_address": "12 MG Road, Bengaluru 560001",
                    "phone_number": "9876543210",
                    "payment_mode": "cash_on_delivery",
                    "bcoins_used": 5,
                }
            ]
        }
    }

    items: list[CartItem]
    delivery_address: str = Field(..., min_length=1)
    phone_number: str = Field(..., max_length=20)
    payment_mode: str | None = Field(None, max_length=20)
    bcoins_used: int = Field(0, ge=0)


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., max_length=20)


class RecordPaymentRequest(BaseModel):
    payment_status: str = Field(..., max_length=10)


# --- Order Response Schemas ---


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: float
    unit_price: float
    total_price: float
    unit: str | None = None


class OrderResponse(BaseModel):
    id: str
    customer_id: str
    items: list[OrderItemResponse]
    status: str
    subtotal: float
    total_amount: float
    delivery_address: str
    phone_number: str
    payment_mode: str
    payment_status: str
    bcoins_used: int
    bcoins_earned: int
    delivery_fee: float
    estimated_delivery: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> OrderResponse:
        return cls(
            id=str(order.id),
            customer_id=str(order.customer_id),
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total_price=item.total_price,
                    unit=item.unit,
                )
                for item in order.items
            ],
            status=order.status,
            subtotal=order.subtotal,
            total_amount=order.total_amount,
            delivery_address=order.delivery_address,
            phone_number=order.phone_number,
            payment_mode=order.payment_mode,
            payment_status=order.payment_status,
            bcoins_used=order.bcoins_used or 0,
            bcoins_earned=order.bcoins_earned or 0,
            delivery_fee=order.delivery_fee or 0.0,
            estimated_delivery=order.estimated_delivery,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    total: int
    page: int
    limit: int


# --- Product Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Basmati Rice",
                    "description": "Aged long-grain basmati, 5 kg bag.",
                    "original_price": 650.0,
                    "discounted_price": 599.0,
                    "category": "Grains",
                    "image_url": "https://cdn.example.com/rice.jpg",
                    "stock": 40,
                    "is_open": False,
                    "unit": "piece",
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str
    original_price: float = Field(..., ge=0)
    discounted_price: float = Field(..., ge=0)
    category: str = Field(..., max_length=100)
    image_url: str | None = Field(None, max_length=1024)
    stock: int = Field(0, ge=0)
    is_open: bool = False
    unit: str | None = Field(None, max_length=10)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    original_price: float | None = Field(None, ge=0)
    discounted_price: float | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=100)
    image_url: str | None = Field(None, max_length=1024)
    stock: int | None = Field(None, ge=0)
    is_open: bool | None = None
    unit: str | None = Field(None, max_length=10)


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    original_price: float
    discounted_price: float
    category: str
    image_url: str | None = None
    stock: int
    is_open: bool
    unit: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            original_price=product.original_price,
            discounted_price=product.discounted_price,
            category=product.category,
            image_url=product.image_url,
            stock=product.stock or 0,
            is_open=bool(product.is_open),
            unit=product.unit,
            is_active=bool(product.is_active),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    total: int
    page: int
    limit: int


class ProductIdResponse(BaseModel):
    product_id: str


class ProductCategoriesResponse(BaseModel):
    categories: list[str]


# --- Categories ---


class CategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryResponse(BaseModel):
    id: str
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_category(cls, category) -> CategoryResponse:
        return cls(
            id=str(category.id),
            name=category.name,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]


# --- Customer Schemas ---


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=20)


class AddAddressRequest(BaseModel):
    label: str | None = Field(None, max_length=10)
    address_line: str = Field(..., max_length=500)
    city: str = Field(..., max_length=100)
    postal_code: str = Field(..., max_length=20)
    is_default: bool = False


class UpdateAddressRequest(BaseModel):
    label: str | None = Field(None, max_length=10)
    address_line: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    is_default: bool = False


class AddressResponse(BaseModel):
    id: str
    label: str
    address_line: str
    city: str
    postal_code: str
    is_default: bool


class AddressIdResponse(BaseModel):
    address_id: str


class CustomerResponse(BaseModel):
    id: str
    external_id: str
    email: str
    name: str
    phone: str | None = None
    role: str
    bcoin_balance: int
    addresses: list[AddressResponse]

    @classmethod
    def from_customer(cls, customer) -> CustomerResponse:
        return cls(
            id=str(customer.id),
            external_id=customer.external_id,
            email=customer.email,
            name=customer.name,
            phone=customer.phone,
            role=customer.role,
            bcoin_balance=customer.bcoin_balance or 0,
            addresses=[
                AddressResponse(
                    id=str(address.id),
                    label=address.label,
                    address_line=address.address_line,
                    city=address.city,
                    postal_code=address.postal_code,
                    is_default=bool(address.is_default),
                )
                for address in customer.addresses
            ],
        )


class CustomerListResponse(BaseModel):
    customers: list[CustomerResponse]
    total: int
    page: int
    limit: int


class BcoinTransactionResponse(BaseModel):
    id: str
    order_id: str | None = None
    amount_spent: float
    bcoins: int
    transaction_type: str
    description: str | None = None
    created_at: datetime | None = None


class BcoinHistoryResponse(BaseModel):
    balance: int
    transactions: list[BcoinTransactionResponse]
    total: int
    page: int
    limit: int


# --- Common ---


class StatusResponse(BaseModel):
    status: str = "ok"
