"""FastAPI endpoints for the storefront: orders, products, categories and customer accounts."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_admin, current_caller
from storefront.api.schemas import (
    AddAddressRequest,
    AddressIdResponse,
    BcoinHistoryResponse,
    BcoinTransactionResponse,
    CategoryListResponse,
    CategoryRequest,
    CategoryResponse,
    CreateOrderRequest,
    CreateProductRequest,
    CustomerListResponse,
    CustomerResponse,
    OrderListResponse,
    OrderResponse,
    ProductCategoriesResponse,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    RecordPaymentRequest,
    StatusResponse,
    UpdateAddressRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
    UpdateProfileRequest,
)
from storefront.category.category import Category
from storefront.category.management import (
    CreateCategory,
    RemoveCategory,
    RenameCategory,
    list_categories,
    product_categories,
)
from storefront.customer.addresses import AddAddress, RemoveAddress, UpdateAddress
from storefront.customer.customer import Customer
from storefront.customer.directory import list_customers
from storefront.customer.profile import UpdateProfile
from storefront.loyalty import ledger
from storefront.order.order import Order
from storefront.order.payment import record_payment
from storefront.order.placement import place_order
from storefront.order.queries import all_orders, order_visible_to, orders_for_customer
from storefront.order.status import update_order_status
from storefront.product.management import (
    AddProduct,
    DeactivateProduct,
    UpdateProduct,
    find_active_product,
    list_products,
)

order_router = APIRouter(prefix="/api/orders", tags=["orders"])
product_router = APIRouter(prefix="/api/products", tags=["products"])
category_router = APIRouter(prefix="/api/categories", tags=["categories"])
customer_router = APIRouter(prefix="/api/customers", tags=["customers"])


def _order_list(results, page, limit) -> OrderListResponse:
    return OrderListResponse(
        orders=[OrderResponse.from_order(order) for order in results.items],
        total=results.total,
        page=page,
        limit=limit,
    )


# --- Order endpoints ---


@order_router.post("/create-order", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, caller=Depends(current_caller)) -> OrderResponse:
    order_id = place_order(
        customer_id=str(caller.id),
        items=[item.model_dump() for item in body.items],
        delivery_address=body.delivery_address,
        phone_number=body.phone_number,
        payment_mode=body.payment_mode,
        bcoins_used=body.bcoins_used,
    )
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse.from_order(order)


@order_router.get("/my-orders", response_model=OrderListResponse)
async def my_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: str | None = None,
    caller=Depends(current_caller),
) -> OrderListResponse:
    results = orders_for_customer(caller.id, status=status, page=page, limit=limit)
    return _order_list(results, page, limit)


@order_router.get("", response_model=OrderListResponse)
async def list_all_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: str | None = None,
    user_id: str | None = None,
    caller=Depends(current_caller),
) -> OrderListResponse:
    results = all_orders(caller, status=status, customer_id=user_id, page=page, limit=limit)
    return _order_list(results, page, limit)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, caller=Depends(current_caller)) -> OrderResponse:
    return OrderResponse.from_order(order_visible_to(caller, order_id))


@order_router.patch("/{order_id}/status", response_model=OrderResponse)
async def change_order_status(
    order_id: str, body: UpdateOrderStatusRequest, caller=Depends(current_caller)
) -> OrderResponse:
    update_order_status(caller, order_id, body.status)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse.from_order(order)


@order_router.patch("/{order_id}/payment", response_model=OrderResponse)
async def change_payment_status(
    order_id: str, body: RecordPaymentRequest, caller=Depends(current_caller)
) -> OrderResponse:
    record_payment(caller, order_id, body.payment_status)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse.from_order(order)


# --- Product endpoints ---


@product_router.get("", response_model=ProductListResponse)
async def browse_products(
    category: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort_by: str = Query("created_at"),
    sort_order: str = Query("desc"),
) -> ProductListResponse:
    results = list_products(
        category=category,
        search=search,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return ProductListResponse(
        products=[ProductResponse.from_product(product) for product in results.items],
        total=results.total,
        page=page,
        limit=limit,
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(find_active_product(product_id))


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: CreateProductRequest, admin=Depends(current_admin)) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        original_price=body.original_price,
        discounted_price=body.discounted_price,
        category=body.category,
        image_url=body.image_url,
        stock=body.stock,
        is_open=body.is_open,
        unit=body.unit,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest, admin=Depends(current_admin)) -> ProductResponse:
    command = UpdateProduct(product_id=product_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(find_active_product(product_id))


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def deactivate_product(product_id: str, admin=Depends(current_admin)) -> StatusResponse:
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# --- Category endpoints ---


@category_router.get("", response_model=CategoryListResponse)
async def browse_categories() -> CategoryListResponse:
    return CategoryListResponse(categories=[CategoryResponse.from_category(c) for c in list_categories()])


@category_router.get("/own-categories", response_model=ProductCategoriesResponse)
async def categories_in_use() -> ProductCategoriesResponse:
    return ProductCategoriesResponse(categories=product_categories())


@category_router.post("", status_code=201, response_model=CategoryResponse)
async def create_category(body: CategoryRequest, admin=Depends(current_admin)) -> CategoryResponse:
    category_id = current_domain.process(CreateCategory(name=body.name), asynchronous=False)
    return CategoryResponse.from_category(current_domain.repository_for(Category).get(category_id))


@category_router.put("/{category_id}", response_model=CategoryResponse)
async def rename_category(category_id: str, body: CategoryRequest, admin=Depends(current_admin)) -> CategoryResponse:
    current_domain.process(RenameCategory(category_id=category_id, name=body.name), asynchronous=False)
    return CategoryResponse.from_category(current_domain.repository_for(Category).get(category_id))


@category_router.delete("/{category_id}", response_model=StatusResponse)
async def remove_category(category_id: str, admin=Depends(current_admin)) -> StatusResponse:
    current_domain.process(RemoveCategory(category_id=category_id), asynchronous=False)
    return StatusResponse()


# --- Customer endpoints ---


@customer_router.get("", response_model=CustomerListResponse)
async def browse_customers(
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin=Depends(current_admin),
) -> CustomerListResponse:
    results = list_customers(admin, search=search, page=page, limit=limit)
    return CustomerListResponse(
        customers=[CustomerResponse.from_customer(customer) for customer in results.items],
        total=results.total,
        page=page,
        limit=limit,
    )


def _reload(customer) -> CustomerResponse:
    return CustomerResponse.from_customer(current_domain.repository_for(Customer).get(customer.id))


@customer_router.get("/me", response_model=CustomerResponse)
async def get_profile(caller=Depends(current_caller)) -> CustomerResponse:
    return CustomerResponse.from_customer(caller)


@customer_router.put("/me", response_model=CustomerResponse)
async def update_profile(body: UpdateProfileRequest, caller=Depends(current_caller)) -> CustomerResponse:
    command = UpdateProfile(customer_id=str(caller.id), name=body.name, phone=body.phone)
    current_domain.process(command, asynchronous=False)
    return _reload(caller)


@customer_router.post("/me/addresses", status_code=201, response_model=AddressIdResponse)
async def add_address(body: AddAddressRequest, caller=Depends(current_caller)) -> AddressIdResponse:
    command = AddAddress(
        customer_id=str(caller.id),
        label=body.label,
        address_line=body.address_line,
        city=body.city,
        postal_code=body.postal_code,
        is_default=body.is_default,
    )
    result = current_domain.process(command, asynchronous=False)
    return AddressIdResponse(address_id=result)


@customer_router.put("/me/addresses/{address_id}", response_model=CustomerResponse)
async def update_address(
    address_id: str, body: UpdateAddressRequest, caller=Depends(current_caller)
) -> CustomerResponse:
    command = UpdateAddress(
        customer_id=str(caller.id),
        address_id=address_id,
        label=body.label,
        address_line=body.address_line,
        city=body.city,
        postal_code=body.postal_code,
        is_default=body.is_default,
    )
    current_domain.process(command, asynchronous=False)
    return _reload(caller)


@customer_router.delete("/me/addresses/{address_id}", response_model=CustomerResponse)
async def remove_address(address_id: str, caller=Depends(current_caller)) -> CustomerResponse:
    current_domain.process(RemoveAddress(customer_id=str(caller.id), address_id=address_id), asynchronous=False)
    return _reload(caller)


@customer_router.get("/me/bcoins", response_model=BcoinHistoryResponse)
async def bcoin_history(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    caller=Depends(current_caller),
) -> BcoinHistoryResponse:
    results = ledger.history(caller.id, page=page, limit=limit)
    return BcoinHistoryResponse(
        balance=ledger.balance_for(caller.id),
        transactions=[
            BcoinTransactionResponse(
                id=str(entry.id),
                order_id=str(entry.order_id) if entry.order_id else None,
                amount_spent=entry.amount_spent,
                bcoins=entry.bcoins,
                transaction_type=entry.transaction_type,
                description=entry.description,
                created_at=entry.created_at,
            )
            for entry in results.items
        ],
        total=results.total,
        page=page,
        limit=limit,
    )
