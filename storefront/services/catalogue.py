"""Catalogue browse views and admin edits over the products segment.

Everything here works on plain JSON documents (dicts) as they live in the
content store and returns new lists/dicts; callers write the result back with
``ContentStore.replace``.
"""
import copy
import time

from storefront.errors import NotFoundError, ValidationError

GENDERS = ("Men", "Women", "Unisex")
PRINT_METHODS = ("Heat Transfer", "Embroidery", "Sublimation", "DTF Print", "Silk Screen")
SORTABLE_KEYS = ("id", "name", "category", "categoryGroup", "gender")

# Internal views that can carry a page banner.
INTERNAL_PAGES = (
    "browse", "catalogue", "about", "partners", "contact", "faq", "services",
    "terms-of-service", "return-policy", "privacy-policy", "materials",
    "community", "how-we-work", "mockup-generator", "track-project",
)

# Order in which the banner namespaces win when one ``page`` value is shared.
BANNER_PRECEDENCE = ("page", "collection", "category", "gender")

EMPTY_PRODUCT = {
    "name": "",
    "imageUrls": {},
    "url": "#",
    "isBestseller": False,
    "description": "",
    "availableSizes": [],
    "availableColors": [],
    "category": "",
    "categoryGroup": "",
    "gender": "Unisex",
    "displayOrder": 0,
    "leadTimeWeeks": 2,
    "supportedPrinting": [],
    "features": [],
}


# ---------------------------------------------------------------------------
# Browse views
# ---------------------------------------------------------------------------

def build_catalogue_index(products, collections):
    """Group → distinct categories present in the product list.

    Groups and the categories inside each group are sorted alphabetically.
    A collection with no products still appears, with no categories.
    """
    index = []
    for collection in collections or []:
        name = collection.get("name") or ""
        categories = {
            p.get("category")
            for p in products or []
            if p and p.get("categoryGroup") == name and p.get("category")
        }
        index.append({"group": name, "categories": sorted(categories)})
    return sorted(index, key=lambda entry: entry["group"])


def distinct_categories(products):
    return sorted({p.get("category") for p in products or [] if p and p.get("category")})


def by_display_order(products):
    return sorted(products or [], key=lambda p: p.get("displayOrder") or 0)


def filter_products(products, facet_type=None, value=None):
    """Products matching one facet (group, category or gender)."""
    field = {"group": "categoryGroup", "category": "category", "gender": "gender"}
    items = [p for p in products or [] if p]
    if facet_type and value:
        if facet_type not in field:
            raise ValueError(f"Unknown facet: {facet_type}")
        items = [p for p in items if p.get(field[facet_type]) == value]
    return by_display_order(items)


def search_products(products, term):
    """Case-insensitive substring match over the admin listing columns."""
    term = (term or "").strip().lower()
    if not term:
        return list(products or [])
    return [
        p for p in products or []
        if any(term in str(p.get(k) or "").lower() for k in SORTABLE_KEYS)
    ]


def sort_products(products, key=None, direction="asc"):
    """Sort by a listing column, or by display order when no key is given."""
    if key is None:
        return by_display_order(products)
    if key not in SORTABLE_KEYS:
        raise ValueError(f"Cannot sort by {key}")
    return sorted(
        products or [],
        key=lambda p: str(p.get(key) or ""),
        reverse=(direction == "desc"),
    )


def related_products(products, product, limit=4):
    return [
        p for p in products or []
        if p and p.get("category") == product.get("category") and p.get("id") != product.get("id")
    ][:limit]


def find_product(products, product_id):
    for p in products or []:
        if p and p.get("id") == product_id:
            return p
    return None


def default_color(product, initial=None):
    """The color a product page opens on."""
    colors = [c for c in product.get("availableColors") or [] if c]
    if initial:
        for c in colors:
            if (c.get("name") or "").lower() == initial.lower():
                return c
    return colors[0] if colors else None


def images_for_color(product, color_name=None):
    """Images shown for the selected color.

    Falls back to every image list flattened when the color has none. Keys
    that are not one of the product's colors are never selected directly.
    """
    image_urls = product.get("imageUrls") or {}
    color_names = {c.get("name") for c in product.get("availableColors") or [] if c}
    if color_name and color_name in color_names and image_urls.get(color_name):
        return list(image_urls[color_name])
    return [url for urls in image_urls.values() for url in urls or []]


# ---------------------------------------------------------------------------
# Page banners
# ---------------------------------------------------------------------------

def resolve_page_banner(banners, page):
    """First banner whose ``page`` equals the requested view, or None.

    ``page`` is one flat namespace shared by internal views, collection
    names, categories and gender literals; the first matching banner in list
    order wins. Use ``banner_collisions`` to find ambiguous values.
    """
    for banner in banners or []:
        if banner and banner.get("page") == page:
            return banner
    return None


def banner_namespaces(value, collections, categories):
    """Namespaces a banner ``page`` value belongs to, in precedence order."""
    members = {
        "page": set(INTERNAL_PAGES),
        "collection": {c.get("name") for c in collections or []},
        "category": set(categories or []),
        "gender": set(GENDERS),
    }
    return [ns for ns in BANNER_PRECEDENCE if value in members[ns]]


def banner_collisions(banners, collections, categories):
    """Map of ``page`` values claimed by more than one namespace."""
    collisions = {}
    for banner in banners or []:
        value = banner.get("page")
        namespaces = banner_namespaces(value, collections, categories)
        if len(namespaces) > 1:
            collisions[value] = namespaces
    return collisions


def page_header(banners, page, fallback_title="", fallback_description="",
                fallback_image="", force_title=None, force_description=None):
    """Title, description and image for a page header.

    Forced values win over the stored banner, which wins over the fallbacks.
    """
    banner = resolve_page_banner(banners, page) or {}
    return {
        "title": force_title or banner.get("title") or fallback_title or "",
        "description": force_description or banner.get("description") or fallback_description or "",
        "imageUrl": banner.get("imageUrl") or fallback_image or "",
    }


# ---------------------------------------------------------------------------
# Product admin edits
# ---------------------------------------------------------------------------

def normalize_product_id(product_id):
    return (product_id or "").strip().upper()


def validate_product(products, form, product_id=None, creating=True):
    errors = {}
    if creating:
        new_id = normalize_product_id(product_id)
        if not new_id:
            errors["id"] = "Reference ID is required"
        elif any(p.get("id") == new_id for p in products or []):
            errors["id"] = "ID already exists"
    if not (form.get("name") or "").strip():
        errors["name"] = "Product name is required"
    if not (form.get("category") or "").strip():
        errors["category"] = "Category is required"
    if form.get("gender") and form["gender"] not in GENDERS:
        errors["gender"] = f"Gender must be one of {', '.join(GENDERS)}"
    unknown = [m for m in form.get("supportedPrinting") or [] if m not in PRINT_METHODS]
    if unknown:
        errors["supportedPrinting"] = f"Unknown printing method: {', '.join(unknown)}"
    if errors:
        raise ValidationError(errors)


def create_product(products, form, product_id):
    """Append a new product; returns (new_list, product)."""
    validate_product(products, form, product_id, creating=True)
    product = copy.deepcopy(form)
    product["id"] = normalize_product_id(product_id)
    product["displayOrder"] = len(products or [])
    return list(products or []) + [product], product


def update_product(products, product_id, form):
    """Replace a product in place; the id cannot change."""
    existing = find_product(products, product_id)
    if existing is None:
        raise NotFoundError(product_id)
    validate_product(products, form, creating=False)
    updated = copy.deepcopy(form)
    updated["id"] = product_id
    if "displayOrder" not in updated and "displayOrder" in existing:
        updated["displayOrder"] = existing["displayOrder"]
    return [updated if p.get("id") == product_id else p for p in products], updated


def delete_product(products, product_id):
    """Remove a product. Hero and banner references to it are left dangling."""
    return [p for p in products or [] if p.get("id") != product_id]


def reorder_products(products, ordered_ids):
    """Rewrite ``displayOrder`` densely following ``ordered_ids``.

    Products missing from ``ordered_ids`` keep their relative order after the
    listed ones.
    """
    position = {pid: i for i, pid in enumerate(ordered_ids)}
    ranked = sorted(
        by_display_order(products),
        key=lambda p: position.get(p.get("id"), len(position)),
    )
    return [dict(p, displayOrder=i) for i, p in enumerate(ranked)]


def add_color(product, name, hex_value="#000000"):
    name = (name or "").strip()
    if not name or not hex_value:
        raise ValidationError({"color": "Color name and hex are required"})
    if any(c.get("name") == name for c in product.get("availableColors") or []):
        raise ValidationError({"color": f"Color {name} already exists"})
    product = copy.deepcopy(product)
    product.setdefault("availableColors", []).append({"name": name, "hex": hex_value})
    product.setdefault("imageUrls", {})[name] = []
    return product


def remove_color(product, name):
    product = copy.deepcopy(product)
    product["availableColors"] = [
        c for c in product.get("availableColors") or [] if c.get("name") != name
    ]
    (product.get("imageUrls") or {}).pop(name, None)
    return product


def set_image_url(product, color_name, index, url):
    """Set image ``index`` for a color, growing the list when appending."""
    product = copy.deepcopy(product)
    images = list((product.setdefault("imageUrls", {})).get(color_name) or [])
    if index == len(images):
        images.append(url)
    elif 0 <= index < len(images):
        images[index] = url
    else:
        raise ValidationError({"imageUrls": f"No image slot {index} for {color_name}"})
    product["imageUrls"][color_name] = images
    return product


def add_size(product, name, width=0, length=0):
    name = (name or "").strip()
    if not name:
        raise ValidationError({"size": "Size name is required"})
    if any(s.get("name") == name for s in product.get("availableSizes") or []):
        raise ValidationError({"size": f"Size {name} already exists"})
    product = copy.deepcopy(product)
    product.setdefault("availableSizes", []).append(
        {"name": name, "width": width, "length": length}
    )
    return product


def remove_size(product, index):
    product = copy.deepcopy(product)
    product["availableSizes"] = [
        s for i, s in enumerate(product.get("availableSizes") or []) if i != index
    ]
    return product


def add_feature(product, name, value, image_url=""):
    if not name or not value:
        raise ValidationError({"feature": "Feature name and value are required"})
    product = copy.deepcopy(product)
    feature = {"name": name, "value": value}
    if image_url:
        feature["imageUrl"] = image_url
    product.setdefault("features", []).append(feature)
    return product


def remove_feature(product, index):
    product = copy.deepcopy(product)
    product["features"] = [
        f for i, f in enumerate(product.get("features") or []) if i != index
    ]
    return product


def toggle_printing(product, method):
    if method not in PRINT_METHODS:
        raise ValidationError({"supportedPrinting": f"Unknown printing method: {method}"})
    product = copy.deepcopy(product)
    current = list(product.get("supportedPrinting") or [])
    if method in current:
        current.remove(method)
    else:
        current.append(method)
    product["supportedPrinting"] = current
    return product


# ---------------------------------------------------------------------------
# Heroes, page banners, partners
# ---------------------------------------------------------------------------

def _new_id(prefix):
    return f"{prefix}-{int(time.time() * 1000)}"


def validate_hero(form):
    errors = {}
    if not form.get("title") or not form.get("mediaSrc"):
        errors["title"] = "Title and media URL are required"
    if form.get("buttonText") and not form.get("buttonCollectionLink"):
        errors["buttonCollectionLink"] = (
            "Select a collection to link the button to, or remove the button text"
        )
    if errors:
        raise ValidationError(errors)


def create_hero(heroes, form):
    validate_hero(form)
    hero = dict(copy.deepcopy(form), id=_new_id("hero"), displayOrder=len(heroes or []))
    hero.setdefault("featuredProductIds", [])
    hero.setdefault("hideTextOverlay", False)
    return list(heroes or []) + [hero], hero


def create_page_banner(banners, form):
    if not form.get("title") or not form.get("imageUrl"):
        raise ValidationError({"title": "Title and image URL are required"})
    banner = dict(copy.deepcopy(form), id=_new_id("pb"))
    banner.setdefault("page", "about")
    return list(banners or []) + [banner], banner


def create_partner(partners, form):
    if not form.get("name") or not form.get("logoUrl"):
        raise ValidationError({"name": "Name and logo URL are required"})
    partner = dict(copy.deepcopy(form), id=_new_id("partner"))
    return list(partners or []) + [partner], partner


def replace_by_id(items, updated):
    """Swap the item sharing ``updated['id']``; used by every edit form."""
    return [updated if i.get("id") == updated.get("id") else i for i in items or []]
