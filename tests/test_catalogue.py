"""Tests for catalogue browse views and product admin edits."""
import pytest

from storefront.errors import NotFoundError, ValidationError
from storefront.services import catalogue


def test_catalogue_index_sorted_at_both_levels():
    collections = [{"name": "Team Wear"}, {"name": "Casual"}]
    products = [
        {"categoryGroup": "Team Wear", "category": "Jersey"},
        {"categoryGroup": "Casual", "category": "Tee"},
        {"categoryGroup": "Team Wear", "category": "Shorts"},
    ]
    assert catalogue.build_catalogue_index(products, collections) == [
        {"group": "Casual", "categories": ["Tee"]},
        {"group": "Team Wear", "categories": ["Jersey", "Shorts"]},
    ]


def test_catalogue_index_distinct_categories_and_empty_inputs():
    products = [
        {"categoryGroup": "Casual", "category": "Tee"},
        {"categoryGroup": "Casual", "category": "Tee"},
        {"categoryGroup": "Unknown", "category": "Cap"},
    ]
    index = catalogue.build_catalogue_index(products, [{"name": "Casual"}])
    assert index == [{"group": "Casual", "categories": ["Tee"]}]
    assert catalogue.build_catalogue_index([], []) == []
    assert catalogue.GENDERS == ("Men", "Women", "Unisex")


def test_filter_products_by_facet_in_display_order():
    products = [
        {"id": "B", "gender": "Men", "displayOrder": 2},
        {"id": "A", "gender": "Men", "displayOrder": 0},
        {"id": "C", "gender": "Women", "displayOrder": 1},
    ]
    assert [p["id"] for p in catalogue.filter_products(products, "gender", "Men")] == ["A", "B"]
    assert [p["id"] for p in catalogue.filter_products(products)] == ["A", "C", "B"]
    with pytest.raises(ValueError):
        catalogue.filter_products(products, "colour", "Red")


def test_search_and_sort_products():
    products = [
        {"id": "TEE-1", "name": "Tee", "category": "Tee", "categoryGroup": "Casual"},
        {"id": "JER-1", "name": "Jersey", "category": "Jersey", "categoryGroup": "Team Wear"},
    ]
    assert [p["id"] for p in catalogue.search_products(products, "team")] == ["JER-1"]
    assert [p["id"] for p in catalogue.sort_products(products, "name", "desc")] == ["TEE-1", "JER-1"]


def test_related_products_same_category_excluding_self():
    products = [{"id": str(i), "category": "Tee"} for i in range(6)]
    related = catalogue.related_products(products, products[0])
    assert [p["id"] for p in related] == ["1", "2", "3", "4"]


def test_images_for_color(jersey):
    assert catalogue.images_for_color(jersey, "Black") == ["https://img.test/black-1.jpg"]
    # Red has no images yet: everything flattened
    assert catalogue.images_for_color(jersey, "Red") == ["https://img.test/black-1.jpg"]


def test_orphaned_image_keys_are_never_selected(jersey):
    jersey["imageUrls"]["Ghost"] = ["https://img.test/ghost.jpg"]
    assert catalogue.images_for_color(jersey, "Ghost") != ["https://img.test/ghost.jpg"]


def test_color_image_list_non_empty_after_add(jersey):
    product = catalogue.add_color(jersey, "Navy", "#000080")
    assert product["imageUrls"]["Navy"] == []
    product = catalogue.set_image_url(product, "Navy", 0, "https://img.test/navy.jpg")
    assert catalogue.images_for_color(product, "Navy") == ["https://img.test/navy.jpg"]
    # Original untouched
    assert "Navy" not in jersey["imageUrls"]


def test_add_color_rejects_duplicate(jersey):
    with pytest.raises(ValidationError):
        catalogue.add_color(jersey, "Black", "#111111")


def test_default_color(jersey):
    assert catalogue.default_color(jersey)["name"] == "Black"
    assert catalogue.default_color(jersey, "red")["name"] == "Red"
    assert catalogue.default_color({"availableColors": []}) is None


def test_create_product_round_trip(jersey):
    existing = [{"id": "TEE-001"}]
    products, product = catalogue.create_product(existing, jersey, " jer-100 ")

    assert product == dict(jersey, id="JER-100", displayOrder=1)
    assert products[-1] == product
    assert existing == [{"id": "TEE-001"}]


def test_create_product_validation(jersey):
    with pytest.raises(ValidationError) as exc:
        catalogue.create_product([{"id": "JER-100"}], jersey, "jer-100")
    assert exc.value.errors == {"id": "ID already exists"}

    with pytest.raises(ValidationError) as exc:
        catalogue.create_product([], dict(jersey, name="", category=" "), "")
    assert set(exc.value.errors) == {"id", "name", "category"}


def test_update_product_keeps_id(jersey):
    products, _ = catalogue.create_product([], jersey, "JER-100")
    products, updated = catalogue.update_product(
        products, "JER-100", dict(jersey, id="OTHER", name="Renamed")
    )
    assert updated["id"] == "JER-100"
    assert products[0]["name"] == "Renamed"

    with pytest.raises(NotFoundError):
        catalogue.update_product(products, "NOPE", jersey)


def test_delete_and_reorder():
    products = [{"id": i, "displayOrder": n} for n, i in enumerate("ABC")]
    assert [p["id"] for p in catalogue.delete_product(products, "B")] == ["A", "C"]

    reordered = catalogue.reorder_products(products, ["C", "A"])
    assert [(p["id"], p["displayOrder"]) for p in reordered] == [("C", 0), ("A", 1), ("B", 2)]


def test_sizes_features_and_printing(jersey):
    product = catalogue.add_size(jersey, "XL", 57, 76)
    assert product["availableSizes"][-1] == {"name": "XL", "width": 57, "length": 76}
    with pytest.raises(ValidationError):
        catalogue.add_size(product, "XL")
    assert [s["name"] for s in catalogue.remove_size(product, 0)["availableSizes"]] == ["L", "XL"]

    product = catalogue.add_feature(product, "Fabric", "Mesh")
    assert len(product["features"]) == 2  # duplicates allowed
    with pytest.raises(ValidationError):
        catalogue.add_feature(product, "Fit", "")

    product = catalogue.toggle_printing(product, "Embroidery")
    assert product["supportedPrinting"] == ["Sublimation", "Embroidery"]
    product = catalogue.toggle_printing(product, "Sublimation")
    assert product["supportedPrinting"] == ["Embroidery"]


def test_hero_button_requires_collection_link():
    with pytest.raises(ValidationError) as exc:
        catalogue.validate_hero({"title": "Hi", "mediaSrc": "x.jpg", "buttonText": "Shop"})
    assert "buttonCollectionLink" in exc.value.errors

    heroes, hero = catalogue.create_hero(
        [{"id": "hero-1"}],
        {"title": "Hi", "mediaSrc": "x.jpg", "buttonText": "Shop", "buttonCollectionLink": "Casual"},
    )
    assert hero["id"].startswith("hero-")
    assert hero["displayOrder"] == 1
    assert hero["featuredProductIds"] == []
    assert len(heroes) == 2


def test_page_banner_first_match_wins_and_collisions():
    banners = [
        {"id": "pb-1", "page": "about", "title": "About page"},
        {"id": "pb-2", "page": "about", "title": "About collection"},
        {"id": "pb-3", "page": "Men", "title": "Men"},
    ]
    assert catalogue.resolve_page_banner(banners, "about")["id"] == "pb-1"
    assert catalogue.resolve_page_banner(banners, "contact") is None

    collisions = catalogue.banner_collisions(banners, [{"name": "about"}], ["Tee"])
    assert collisions == {"about": ["page", "collection"]}


def test_page_header_precedence():
    banners = [{"page": "faq", "title": "FAQ", "description": "", "imageUrl": "faq.jpg"}]
    header = catalogue.page_header(
        banners, "faq", fallback_description="Answers", force_title="Help"
    )
    assert header == {"title": "Help", "description": "Answers", "imageUrl": "faq.jpg"}


def test_remove_color_drops_its_images(jersey):
    product = catalogue.remove_color(jersey, "Black")
    assert [c["name"] for c in product["availableColors"]] == ["Red"]
    assert "Black" not in product["imageUrls"]
    assert catalogue.remove_feature(product, 0)["features"] == []


def test_banner_and_partner_forms():
    with pytest.raises(ValidationError):
        catalogue.create_page_banner([], {"title": "About"})
    banners, banner = catalogue.create_page_banner([], {"title": "About", "imageUrl": "a.jpg"})
    assert banner["id"].startswith("pb-")
    assert banner["page"] == "about"

    partners, partner = catalogue.create_partner([], {"name": "Club", "logoUrl": "c.png"})
    renamed = dict(partner, name="Club FC")
    assert catalogue.replace_by_id(partners, renamed) == [renamed]


def test_distinct_categories():
    products = [{"category": "Tee"}, {"category": "Jersey"}, {"category": "Tee"}, {}]
    assert catalogue.distinct_categories(products) == ["Jersey", "Tee"]


def test_update_product_keeps_display_order(jersey):
    products = []
    for product_id in ("A-1", "B-1", "C-1"):
        products, _ = catalogue.create_product(products, jersey, product_id)

    products, updated = catalogue.update_product(products, "C-1", dict(jersey, name="Renamed"))

    assert updated["displayOrder"] == 2
    assert [p["id"] for p in catalogue.by_display_order(products)] == ["A-1", "B-1", "C-1"]
