# orders/tests/fixtures.py

"""Small builders shared by the order test modules."""

from decimal import Decimal

from catalog.models import Product, ProductVariant, StoreVariantStock
from customers.models import Address, Customer
from orders.models import Order, OrderItem
from store.models import Store
from users.models import Role, User

_counter = {"n": 0}


def _next() -> int:
    _counter["n"] += 1
    return _counter["n"]


def make_customer(**extra) -> Customer:
    n = _next()
    customer = Customer(
        email=extra.pop("email", f"customer{n}@example.com"),
        name=extra.pop("name", f"Customer {n}"),
        phone=extra.pop("phone", "0700000000"),
        **extra,
    )
    customer.set_password("Str0ng!Pass")
    customer.save()
    return customer


def make_address(customer, **extra) -> Address:
    defaults = {
        "label": "Home",
        "street": "1 Market St",
        "city": "Nairobi",
        "county": "Nairobi",
        "postal_code": "00100",
        "country": "Kenya",
        "is_default": True,
    }
    defaults.update(extra)
    return Address.objects.create(customer=customer, **defaults)


def make_store(name="Main Store") -> Store:
    return Store.objects.create(name=name, code=f"S{_next()}")


def make_variant(name=None, price="10.00") -> ProductVariant:
    n = _next()
    product = Product.objects.create(name=f"Product {n}", price=Decimal(price))
    return ProductVariant.objects.create(
        product=product,
        name=name or f"Variant {n}",
        sku=f"SKU-{n}",
        price=Decimal(price),
    )


def stock(store, variant, quantity) -> StoreVariantStock:
    return StoreVariantStock.objects.create(
        store=store,
        variant=variant,
        quantity=quantity,
        stock_status=StoreVariantStock.status_for(quantity),
    )


def make_order(customer, variant, *, status=Order.STATUS_PENDING, quantity=2, price="10.00", **extra) -> Order:
    price = Decimal(price)
    order = Order.objects.create(
        order_number=extra.pop("order_number", f"ORD-20240101-{_next():06d}"),
        customer=customer,
        status=status,
        total_amount=price * quantity,
        payment_method=extra.pop("payment_method", Order.PAYMENT_CARD),
        **extra,
    )
    OrderItem.objects.create(order=order, variant=variant, quantity=quantity, price=price)
    return order


def make_staff(role_name: str | None = "admin", **extra) -> User:
    role = Role.objects.get_or_create(name=role_name)[0] if role_name else None
    return User.objects.create_user(
        email=extra.pop("email", f"staff{_next()}@example.com"),
        password="pass12345",
        role=role,
        **extra,
    )
