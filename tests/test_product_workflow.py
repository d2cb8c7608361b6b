"""Edit / create workflow and resync tests"""
import pytest

from schemas import ProductForm
from services import product_workflow, sync_service
from state import CLOSED, EDITING, VIEWING, CatalogStore
from tests.conftest import make_product

PLACEHOLDER = "https://via.placeholder.com/300?text=No+Image"


def valid_create_form(**overrides) -> ProductForm:
    data = {"title": "Desk Chair", "price": "149.90", "category_id": "3", "description": "Ergonomic", "images": ""}
    data.update(overrides)
    return ProductForm(**data)


# --- validation ---

@pytest.mark.parametrize("overrides", [
    {"title": ""},
    {"title": "   "},
    {"price": ""},
    {"price": "0"},
    {"price": "-5"},
    {"price": "abc"},
    {"price": "nan"},
    {"category_id": ""},
    {"description": " "},
])
def test_create_validation_failures(overrides):
    with pytest.raises(product_workflow.ProductValidationError, match="Please fill in all required fields!"):
        product_workflow.validate_create(valid_create_form(**overrides), PLACEHOLDER)


def test_parse_images_drops_blank_lines():
    assert product_workflow.parse_images("https://a/1.jpg\n\n  https://a/2.jpg  \n", PLACEHOLDER) == [
        "https://a/1.jpg", "https://a/2.jpg",
    ]
    assert product_workflow.parse_images("", PLACEHOLDER) == [PLACEHOLDER]
    assert product_workflow.parse_images("\n \n", PLACEHOLDER) == [PLACEHOLDER]


# --- create workflow ---

def test_create_with_empty_title_stays_open_and_sends_nothing(store, fake_service):
    product_workflow.open_create(store)
    ok = product_workflow.submit_create(store, fake_service, valid_create_form(title=""), PLACEHOLDER)
    assert ok is False
    assert store.creator.mode == EDITING
    assert store.creator.error == "Please fill in all required fields!"
    assert store.creator.form["price"] == "149.90"
    assert fake_service.calls == []


def test_create_success_resyncs_and_closes(store, fake_service):
    product_workflow.open_create(store)
    ok = product_workflow.submit_create(store, fake_service, valid_create_form(), PLACEHOLDER)
    assert ok is True
    assert store.creator.mode == CLOSED
    assert fake_service.calls == ["create_product", "list_products"]
    assert fake_service.created[0].images == [PLACEHOLDER]
    assert len(store.products) == 13
    assert store.pop_notices() == ["Product created successfully!"]


def test_create_network_failure_shows_inline_error(store, fake_service):
    fake_service.fail.add("create_product")
    product_workflow.open_create(store)
    ok = product_workflow.submit_create(store, fake_service, valid_create_form(), PLACEHOLDER)
    assert ok is False
    assert store.creator.mode == EDITING
    assert store.creator.error == "Error: Failed to create product"
    assert len(store.products) == 12


def test_cancel_create_closes(store):
    product_workflow.open_create(store)
    product_workflow.cancel_create(store)
    assert store.creator.mode == CLOSED


# --- edit workflow ---

def test_open_view_then_edit_then_cancel(store):
    product = product_workflow.open_product(store, 2)
    assert product.id == 2
    assert store.editor.mode == VIEWING
    assert store.editor.form["title"] == "Wireless Mouse"
    assert store.editor.form["category_id"] == "2"

    product_workflow.begin_edit(store, 2)
    assert store.editor.mode == EDITING

    product_workflow.cancel_edit(store)
    assert store.editor.mode == CLOSED
    assert store.editor.product_id is None


def test_open_unknown_product_is_a_no_op(store):
    assert product_workflow.open_product(store, 999) is None
    assert store.editor.mode == CLOSED


def test_update_carries_images_forward(store, fake_service, products):
    product_workflow.begin_edit(store, 2)
    form = ProductForm(title="Silent Mouse", price="21", category_id="2", description="Quiet clicks")
    assert product_workflow.submit_update(store, fake_service, 2, form) is True

    product_id, sent = fake_service.updated[0]
    assert product_id == 2
    assert sent.images == products[1].images
    assert sent.title == "Silent Mouse"
    assert store.get_product(2).title == "Silent Mouse"
    assert store.editor.mode == CLOSED
    assert store.pop_notices() == ["Product updated successfully!"]


@pytest.mark.parametrize("price", [12345.67, 1234567.5, 25.0, 19.99])
def test_unchanged_edit_form_keeps_exact_price(store, fake_service, categories, price):
    store.apply_products([make_product(7, "Oak Table", price, categories[2], "Solid oak")], store.begin_load())
    product_workflow.begin_edit(store, 7)

    form = ProductForm(**store.editor.form)
    assert product_workflow.submit_update(store, fake_service, 7, form) is True

    _, sent = fake_service.updated[0]
    assert sent.price == price


def test_update_validation_failure_keeps_input(store, fake_service):
    product_workflow.begin_edit(store, 2)
    form = ProductForm(title="", price="21", category_id="2")
    assert product_workflow.submit_update(store, fake_service, 2, form) is False
    assert store.editor.mode == EDITING
    assert store.editor.error == "Please fill in all required fields!"
    assert "update_product" not in fake_service.calls


def test_update_network_failure_stays_in_editing(store, fake_service):
    fake_service.fail.add("update_product")
    form = ProductForm(title="Mouse", price="21", category_id="2")
    assert product_workflow.submit_update(store, fake_service, 2, form) is False
    assert store.editor.mode == EDITING
    assert store.editor.error == "Error: Failed to update product"
    assert store.get_product(2).title == "Wireless Mouse"


def test_update_unknown_product(store, fake_service):
    with pytest.raises(product_workflow.ProductNotFoundError):
        product_workflow.update_product(store, fake_service, 99, ProductForm(title="X", price="1", category_id="1"))


def test_write_succeeds_even_if_resync_fails(store, fake_service):
    fake_service.fail.add("list_products")
    ok = product_workflow.submit_create(store, fake_service, valid_create_form(), PLACEHOLDER)
    assert ok is True
    assert store.load_error == sync_service.LOAD_ERROR_MESSAGE


# --- resync ---

def test_category_failure_is_logged_and_left_empty(fake_service):
    fresh = CatalogStore()
    fake_service.fail.add("list_categories")
    sync_service.refresh_categories(fresh, fake_service)
    assert fresh.categories == []


def test_load_dashboard_loads_categories_even_when_products_fail(fake_service):
    fresh = CatalogStore()
    fake_service.fail.add("list_products")
    sync_service.load_dashboard(fresh, fake_service)
    assert fresh.load_error == sync_service.LOAD_ERROR_MESSAGE
    assert fresh.loaded is False
    assert len(fresh.categories) == 3


def test_refresh_replaces_the_full_list(store, fake_service):
    fake_service.products = fake_service.products[:4]
    assert sync_service.refresh_catalog(store, fake_service) is True
    assert len(store.products) == 4
    assert store.load_error is None
