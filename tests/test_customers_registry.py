"""Tests for category code assignment and routing."""

import pytest

from crm.customers.models import Category, RegularCustomer, Renter
from crm.customers.registry import CategorySpec, CustomerRegistry
from crm.records.store import StoreError


def add_regular(registry, first="Ana", last="Cruz", points=0):
    return registry.add_customer(
        Category.REGULAR, first_name=first, last_name=last, loyalty_points=points
    )


def add_renter(registry, first="Cy", last="Reyes", deposit=3000.0):
    return registry.add_customer(
        Category.RENTER, first_name=first, last_name=last, deposit=deposit
    )


def test_assign_code_starts_at_base_plus_one(registry):
    assert registry.assign_code(Category.REGULAR) == 1001
    assert registry.assign_code(Category.REGULAR) == 1002
    assert registry.assign_code(Category.RENTER) == 2001


def test_add_customer_returns_record_with_fresh_code(registry):
    result = add_regular(registry)
    assert result.ok
    assert isinstance(result.record, RegularCustomer)
    assert result.record.code == 1001
    assert result.record.category == Category.REGULAR

    renter = add_renter(registry).record
    assert isinstance(renter, Renter)
    assert renter.code == 2001


def test_codes_strictly_increase_and_are_never_reused(registry):
    seen = []
    for _ in range(3):
        seen.append(add_regular(registry).record.code)
    registry.delete_customer(seen[-1])
    registry.delete_customer(seen[0])
    seen.append(add_regular(registry).record.code)
    seen.append(add_regular(registry).record.code)

    assert seen == sorted(seen)
    assert len(set(seen)) == len(seen)
    assert seen[-2:] == [1004, 1005]


def test_route_by_code_uses_numeric_ranges(registry):
    assert registry.route_by_code(1001) == Category.REGULAR
    assert registry.route_by_code(1999) == Category.REGULAR
    assert registry.route_by_code(2000) == Category.RENTER
    assert registry.route_by_code(2999) == Category.RENTER


def test_route_by_code_outside_ranges_is_total(registry):
    assert registry.route_by_code(5) == Category.REGULAR
    assert registry.route_by_code(9999) == Category.RENTER


def test_find_routes_to_owning_store(registry):
    add_regular(registry, first="Ana")
    add_renter(registry, first="Cy")
    assert registry.find_customer(1001).first_name == "Ana"
    assert registry.find_customer(2001).first_name == "Cy"
    assert registry.find_customer(1002) is None
    assert registry.find_customer(9999) is None


def test_out_of_range_code_is_not_found(registry):
    add_regular(registry)
    assert registry.update_customer(9999, first_name="x") == StoreError.NOT_FOUND
    assert registry.delete_customer(42) == StoreError.NOT_FOUND


def test_category_capacity_is_independent(registry):
    for _ in range(3):
        assert add_regular(registry).ok

    result = add_regular(registry)
    assert result.error == StoreError.CAPACITY_EXCEEDED
    assert result.record is None
    assert registry.count(Category.REGULAR) == 3
    assert registry.is_full(Category.REGULAR)
    assert not registry.is_full()

    assert add_renter(registry).ok


def test_failed_add_does_not_consume_a_code(registry):
    for _ in range(3):
        add_regular(registry)
    add_regular(registry)
    registry.delete_customer(1002)
    assert add_regular(registry).record.code == 1004


def test_update_customer_changes_names_only(registry):
    add_regular(registry, first="Ana", last="Cruz", points=7)
    assert registry.update_customer(1001, first_name="Anna") is None
    customer = registry.find_customer(1001)
    assert (customer.code, customer.first_name, customer.last_name, customer.loyalty_points) == (
        1001, "Anna", "Cruz", 7,
    )


def test_update_customer_cannot_change_category(registry):
    add_regular(registry)
    with pytest.raises(ValueError):
        registry.update_customer(1001, category=Category.RENTER)


def test_delete_customer_preserves_order(registry):
    for name in ["Ana", "Bo", "Cy"]:
        add_regular(registry, first=name)
    assert registry.delete_customer(1002) is None
    assert [c.first_name for c in registry.list_customers(Category.REGULAR)] == ["Ana", "Cy"]
    assert registry.count() == 2


def test_code_range_exhaustion_reports_capacity():
    reg = CustomerRegistry(
        [CategorySpec(Category.REGULAR, code_base=1000, capacity=10)], code_span=4
    )
    assert [add_regular(reg).record.code for _ in range(3)] == [1001, 1002, 1003]
    reg.delete_customer(1001)

    result = add_regular(reg)
    assert result.error == StoreError.CAPACITY_EXCEEDED
    with pytest.raises(ValueError):
        reg.assign_code(Category.REGULAR)


def test_code_range():
    reg = CustomerRegistry(
        [
            CategorySpec(Category.REGULAR, 1000, 5),
            CategorySpec(Category.RENTER, 2000, 5),
        ]
    )
    assert reg.code_range(Category.REGULAR) == (1001, 1999)
    assert reg.code_range(Category.RENTER) == (2001, 2999)
    assert reg.code_range() == (1001, 2999)


def test_single_category_registry():
    reg = CustomerRegistry([CategorySpec(Category.REGULAR, 1000, 2)])
    assert reg.categories == (Category.REGULAR,)
    assert add_regular(reg).record.code == 1001
    assert reg.route_by_code(2500) == Category.REGULAR
    assert reg.find_customer(2500) is None
    with pytest.raises(ValueError):
        add_renter(reg)


def test_overlapping_ranges_rejected():
    with pytest.raises(ValueError):
        CustomerRegistry(
            [
                CategorySpec(Category.REGULAR, 1000, 5),
                CategorySpec(Category.RENTER, 1500, 5),
            ]
        )


def test_duplicate_category_rejected():
    with pytest.raises(ValueError):
        CustomerRegistry(
            [
                CategorySpec(Category.REGULAR, 1000, 5),
                CategorySpec(Category.REGULAR, 3000, 5),
            ]
        )


def test_from_settings_uses_config():
    reg = CustomerRegistry.from_settings()
    assert reg.categories == (Category.REGULAR, Category.RENTER)
    assert reg.capacity(Category.REGULAR) == 50
    assert reg.capacity(Category.RENTER) == 50
    assert reg.label(Category.REGULAR) == "Regular Customer"
    assert reg.code_range() == (1001, 2999)


def test_from_settings_capacity_override():
    reg = CustomerRegistry.from_settings(categories=[Category.REGULAR], capacity=2)
    assert reg.capacity(Category.REGULAR) == 2


def test_can_add_checks_capacity(registry):
    assert registry.can_add(Category.REGULAR)
    for _ in range(3):
        add_regular(registry)
    assert not registry.can_add(Category.REGULAR)
    assert registry.can_add(Category.RENTER)
    assert registry.can_add()


def test_can_add_checks_codes_left():
    reg = CustomerRegistry([CategorySpec(Category.REGULAR, 1000, 10)], code_span=3)
    add_regular(reg)
    add_regular(reg)
    reg.delete_customer(1001)

    assert not reg.is_full(Category.REGULAR)
    assert not reg.can_add(Category.REGULAR)
    assert not reg.can_add()
    assert add_regular(reg).error == StoreError.CAPACITY_EXCEEDED
