"""Built-in content used before the content API answers and by seed-content."""
import copy

DEFAULT_COLLECTIONS = [
    {"id": "col-team", "name": "Team Wear"},
    {"id": "col-casual", "name": "Casual"},
    {"id": "col-outer", "name": "Outerwear"},
]

DEFAULT_PRODUCTS = [
    {
        "id": "JER-001",
        "name": "Pro Sublimated Basketball Jersey",
        "description": "Breathable mesh jersey with full-body sublimation.",
        "category": "Jersey",
        "categoryGroup": "Team Wear",
        "gender": "Unisex",
        "url": "#",
        "isBestseller": True,
        "availableColors": [
            {"name": "Black", "hex": "#000000"},
            {"name": "Royal Blue", "hex": "#1d4ed8"},
        ],
        "imageUrls": {
            "Black": [
                "https://images.pexels.com/photos/8365691/pexels-photo-8365691.jpeg",
            ],
            "Royal Blue": [],
        },
        "availableSizes": [
            {"name": "S", "width": 48, "length": 70},
            {"name": "M", "width": 51, "length": 72},
            {"name": "L", "width": 54, "length": 74},
            {"name": "XL", "width": 57, "length": 76},
        ],
        "features": [
            {"name": "Fabric", "value": "Dri-fit mesh"},
            {"name": "Fit", "value": "Relaxed"},
        ],
        "supportedPrinting": ["Sublimation"],
        "displayOrder": 0,
        "moq": 24,
        "leadTimeWeeks": 2,
    },
    {
        "id": "SHO-001",
        "name": "Game Day Shorts",
        "description": "Lightweight shorts with an elastic drawstring waist.",
        "category": "Shorts",
        "categoryGroup": "Team Wear",
        "gender": "Men",
        "url": "#",
        "isBestseller": False,
        "availableColors": [{"name": "Black", "hex": "#000000"}],
        "imageUrls": {"Black": []},
        "availableSizes": [
            {"name": "M", "width": 36, "length": 50},
            {"name": "L", "width": 38, "length": 52},
        ],
        "features": [],
        "supportedPrinting": ["Sublimation", "Heat Transfer"],
        "displayOrder": 1,
        "moq": 24,
        "leadTimeWeeks": 2,
    },
    {
        "id": "TEE-001",
        "name": "Heavyweight Cotton Tee",
        "description": "Boxy 240gsm cotton tee for screen and DTF prints.",
        "category": "Tee",
        "categoryGroup": "Casual",
        "gender": "Unisex",
        "url": "#",
        "isBestseller": True,
        "availableColors": [
            {"name": "White", "hex": "#ffffff"},
            {"name": "Black", "hex": "#000000"},
        ],
        "imageUrls": {"White": [], "Black": []},
        "availableSizes": [
            {"name": "S", "width": 50, "length": 69},
            {"name": "M", "width": 53, "length": 71},
            {"name": "L", "width": 56, "length": 73},
        ],
        "features": [{"name": "Weight", "value": "240gsm"}],
        "supportedPrinting": ["Silk Screen", "DTF Print", "Embroidery"],
        "displayOrder": 2,
        "moq": 12,
        "leadTimeWeeks": 3,
    },
]

DEFAULT_HEROES = [
    {
        "id": "hero-1",
        "title": "Built for the Game",
        "description": "Custom team uniforms made to order.",
        "mediaSrc": "https://images.pexels.com/photos/8365691/pexels-photo-8365691.jpeg",
        "mediaType": "image",
        "buttonText": "Shop Team Wear",
        "buttonCollectionLink": "Team Wear",
        "featuredProductsTitle": "Bestsellers",
        "featuredProductIds": ["JER-001", "TEE-001"],
        "hideTextOverlay": False,
        "displayOrder": 0,
    }
]

DEFAULT_PAGE_BANNERS = [
    {
        "id": "pb-about",
        "page": "about",
        "title": "About Us",
        "description": "Custom apparel, made locally.",
        "imageUrl": "https://images.pexels.com/photos/8365691/pexels-photo-8365691.jpeg",
    }
]

DEFAULT_FEATURED_VIDEO = {"title": "", "description": "", "videoUrl": ""}
DEFAULT_SUBSCRIPTION_MODAL = {
    "title": "Join the Squad",
    "description": "Get drops and team deals first.",
    "imageUrl": "",
    "isEnabled": False,
}
DEFAULT_HOME_FEATURE = {"title": "", "description": "", "imageUrl": "", "productIds": []}

_DEFAULTS = {
    "products": DEFAULT_PRODUCTS,
    "collections": DEFAULT_COLLECTIONS,
    "faqs": [],
    "heroContents": DEFAULT_HEROES,
    "partners": [],
    "howWeWorkSections": [],
    "materials": [],
    "infoCards": [],
    "featuredVideoContent": DEFAULT_FEATURED_VIDEO,
    "brandReviews": [],
    "platformRatings": [],
    "communityPosts": [],
    "pageBanners": DEFAULT_PAGE_BANNERS,
    "services": [],
    "capabilities": [],
    "subscriptionModalContent": DEFAULT_SUBSCRIPTION_MODAL,
    "homeFeature": DEFAULT_HOME_FEATURE,
}


def default_segments():
    """Return a fresh deep copy of every default segment."""
    return copy.deepcopy(_DEFAULTS)
