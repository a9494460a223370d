"""
Built-in section kinds.

One descriptor per `SectionType`. `build_default_registry()` fails loudly
if a kind is added to the enum without a descriptor here.
"""
from .registry import SectionTypeRegistry
from .types import (
    FieldDescriptor as F,
    FieldKind,
    PageType,
    SectionDescriptor,
    SectionLocation,
    SectionType,
)

ALIGNMENT_OPTIONS = (("left", "Left"), ("center", "Center"), ("right", "Right"))

TRUST_BADGE_ICONS = (
    ("Truck", "Truck/Shipping"),
    ("Shield", "Shield/Secure"),
    ("RefreshCw", "Returns"),
    ("CreditCard", "Payment"),
    ("Headphones", "Support"),
    ("Award", "Quality"),
)


ANNOUNCEMENT_BAR = SectionDescriptor(
    type=SectionType.ANNOUNCEMENT_BAR,
    name="Announcement Bar",
    description="Thin bar above the header for promotions and notices",
    icon="Megaphone",
    location=SectionLocation.HEADER,
    defaults={
        "text": "Free shipping on orders over R 1,500",
        "link": "",
        "background_color": "#111827",
        "text_color": "#ffffff",
    },
    schema=(
        F("text", FieldKind.TEXT, "Announcement Text", placeholder="Free shipping..."),
        F("link", FieldKind.TEXT, "Link", placeholder="/catalog"),
        F("background_color", FieldKind.COLOR, "Background Color"),
        F("text_color", FieldKind.COLOR, "Text Color"),
    ),
)

HERO = SectionDescriptor(
    type=SectionType.HERO,
    name="Hero Banner",
    description="Full-width hero section with background image and call-to-action",
    icon="Image",
    defaults={
        "background_image": "https://images.unsplash.com/photo-1483985988355-763728e1935b?ixlib=rb-4.0.3&auto=format&fit=crop&w=1600&q=80",
        "badge_text": "New Collection 2024",
        "title": "Redefine Your Everyday Style.",
        "subtitle": "Premium streetwear designed for comfort and durability. Discover the new drop before it sells out.",
        "button_text": "Shop Now",
        "button_link": "/catalog",
        "overlay_opacity": 60,
        "text_alignment": "left",
    },
    schema=(
        F("background_image", FieldKind.IMAGE, "Background Image", folder="hero"),
        F("badge_text", FieldKind.TEXT, "Badge Text", placeholder="e.g., New Collection 2024"),
        F("title", FieldKind.TEXTAREA, "Title", placeholder="Enter headline...", hint="Use Enter for line breaks"),
        F("subtitle", FieldKind.TEXTAREA, "Subtitle", placeholder="Enter description..."),
        F("button_text", FieldKind.TEXT, "Button Text", placeholder="Shop Now"),
        F("button_link", FieldKind.TEXT, "Button Link", placeholder="/catalog"),
        F("overlay_opacity", FieldKind.RANGE, "Image Darkness", min=0, max=100),
        F("text_alignment", FieldKind.SELECT, "Text Alignment", options=ALIGNMENT_OPTIONS),
    ),
)

FEATURED_PRODUCTS = SectionDescriptor(
    type=SectionType.FEATURED_PRODUCTS,
    name="Featured Products",
    description="Display a grid of featured or trending products",
    icon="Grid",
    defaults={
        "title": "Trending Now",
        "subtitle": "Our best-selling pieces this week.",
        "product_count": 4,
        "show_view_all": True,
        "view_all_text": "View All",
        "collection": "all",
        "layout": "grid-4",
    },
    schema=(
        F("title", FieldKind.TEXT, "Section Title", placeholder="Trending Now"),
        F("subtitle", FieldKind.TEXT, "Section Subtitle", placeholder="Optional description..."),
        F("product_count", FieldKind.NUMBER, "Number of Products", min=1, max=12),
        F("show_view_all", FieldKind.TOGGLE, 'Show "View All" Button'),
        F("view_all_text", FieldKind.TEXT, "Button Text", placeholder="View All"),
        F(
            "layout",
            FieldKind.SELECT,
            "Grid Layout",
            options=(("grid-4", "4 Columns"), ("grid-3", "3 Columns"), ("grid-2", "2 Columns")),
        ),
    ),
)

NEWSLETTER = SectionDescriptor(
    type=SectionType.NEWSLETTER,
    name="Newsletter Signup",
    description="Collect email addresses with a short call-to-action",
    icon="Mail",
    defaults={
        "title": "Join the Club",
        "subtitle": "Sign up for early access to drops and exclusive offers.",
        "placeholder": "Enter your email",
        "button_text": "Subscribe",
        "background_color": "#f9fafb",
    },
    schema=(
        F("title", FieldKind.TEXT, "Title", placeholder="Join the Club"),
        F("subtitle", FieldKind.TEXTAREA, "Subtitle"),
        F("placeholder", FieldKind.TEXT, "Input Placeholder", placeholder="Enter your email"),
        F("button_text", FieldKind.TEXT, "Button Text", placeholder="Subscribe"),
        F("background_color", FieldKind.COLOR, "Background Color"),
    ),
)

TRUST_BADGES = SectionDescriptor(
    type=SectionType.TRUST_BADGES,
    name="Trust Badges",
    description="Row of icons highlighting shipping, returns and secure payment",
    icon="ShieldCheck",
    defaults={
        "badges": [
            {"icon": "Truck", "title": "Free Shipping", "description": "On orders over R 1,500"},
            {"icon": "RefreshCw", "title": "Easy Returns", "description": "30-day return policy"},
            {"icon": "Shield", "title": "Secure Checkout", "description": "Encrypted payments"},
        ],
        "background_color": "#ffffff",
    },
    schema=(
        F(
            "badges",
            FieldKind.ARRAY,
            "Badges",
            max_items=6,
            item_schema=(
                F("icon", FieldKind.SELECT, "Icon", options=TRUST_BADGE_ICONS),
                F("title", FieldKind.TEXT, "Title"),
                F("description", FieldKind.TEXT, "Description"),
            ),
        ),
        F("background_color", FieldKind.COLOR, "Background Color"),
    ),
)

RICH_TEXT = SectionDescriptor(
    type=SectionType.RICH_TEXT,
    name="Rich Text",
    description="Free-form text block for brand stories and announcements",
    icon="Type",
    defaults={
        "title": "Our Story",
        "content": "<p>Tell your customers what makes your brand unique.</p>",
        "text_alignment": "center",
        "max_width": 720,
    },
    schema=(
        F("title", FieldKind.TEXT, "Title"),
        F("content", FieldKind.RICH_TEXT, "Content", rows=6),
        F("text_alignment", FieldKind.SELECT, "Text Alignment", options=ALIGNMENT_OPTIONS),
        F("max_width", FieldKind.NUMBER, "Max Width (px)", min=320, max=1440),
    ),
)

IMAGE_BANNER = SectionDescriptor(
    type=SectionType.IMAGE_BANNER,
    name="Image Banner",
    description="Wide promotional image with optional caption and link",
    icon="ImagePlus",
    defaults={
        "image": "",
        "title": "Summer Sale",
        "subtitle": "Up to 40% off selected styles",
        "link": "/catalog",
        "height": 400,
        "overlay_opacity": 30,
    },
    schema=(
        F("image", FieldKind.IMAGE, "Banner Image", folder="banners"),
        F("title", FieldKind.TEXT, "Title"),
        F("subtitle", FieldKind.TEXT, "Subtitle"),
        F("link", FieldKind.TEXT, "Link", placeholder="/catalog"),
        F("height", FieldKind.RANGE, "Height (px)", min=200, max=800),
        F("overlay_opacity", FieldKind.RANGE, "Image Darkness", min=0, max=100),
    ),
)

CATALOG_HEADER = SectionDescriptor(
    type=SectionType.CATALOG_HEADER,
    name="Catalog Header",
    description="Title, description and filters shown above the product grid",
    icon="LayoutGrid",
    page_types=(PageType.CATALOG,),
    defaults={
        "title": "Shop All",
        "subtitle": "Browse our full collection.",
        "show_search": True,
        "show_filters": True,
        "background_color": "#ffffff",
    },
    schema=(
        F("title", FieldKind.TEXT, "Title", placeholder="Shop All"),
        F("subtitle", FieldKind.TEXT, "Subtitle"),
        F("show_search", FieldKind.TOGGLE, "Show Search"),
        F("show_filters", FieldKind.TOGGLE, "Show Filters"),
        F("background_color", FieldKind.COLOR, "Background Color"),
    ),
)

PRODUCT_TRUST = SectionDescriptor(
    type=SectionType.PRODUCT_TRUST,
    name="Product Trust",
    description="Delivery, returns and payment reassurance under the buy button",
    icon="BadgeCheck",
    page_types=(PageType.PRODUCT,),
    defaults={
        "items": [
            {"icon": "Truck", "text": "Free delivery on orders over R 1,500"},
            {"icon": "RefreshCw", "text": "30-day hassle-free returns"},
            {"icon": "Shield", "text": "Secure payment"},
        ],
        "layout": "list",
        "accent_color": "#000000",
    },
    schema=(
        F(
            "items",
            FieldKind.ARRAY,
            "Trust Items",
            max_items=5,
            item_schema=(
                F("icon", FieldKind.SELECT, "Icon", options=TRUST_BADGE_ICONS),
                F("text", FieldKind.TEXT, "Text"),
            ),
        ),
        F("layout", FieldKind.SELECT, "Layout", options=(("list", "List"), ("inline", "Inline"))),
        F("accent_color", FieldKind.COLOR, "Accent Color"),
    ),
)

RELATED_PRODUCTS = SectionDescriptor(
    type=SectionType.RELATED_PRODUCTS,
    name="Related Products",
    description="Products from the same collection shown below the product",
    icon="Layers",
    page_types=(PageType.PRODUCT,),
    defaults={
        "title": "You May Also Like",
        "product_count": 4,
        "source": "same_category",
    },
    schema=(
        F("title", FieldKind.TEXT, "Section Title", placeholder="You May Also Like"),
        F("product_count", FieldKind.NUMBER, "Number of Products", min=1, max=8),
        F(
            "source",
            FieldKind.SELECT,
            "Source",
            options=(("same_category", "Same Category"), ("newest", "Newest"), ("random", "Random")),
        ),
    ),
)

PRODUCT_TABS = SectionDescriptor(
    type=SectionType.PRODUCT_TABS,
    name="Product Tabs",
    description="Display product details in an accordion-style tabbed interface",
    icon="AlignLeft",
    page_types=(PageType.PRODUCT,),
    defaults={
        "title": "Product Details",
        "subtitle": "",
        "tabs": [
            {
                "label": "Product Specifications",
                "icon": "Package",
                "content": "<p><strong>Material:</strong> Premium cotton blend</p><p><strong>Weight:</strong> 500g</p>",
            },
            {
                "label": "Shipping & Returns",
                "icon": "Truck",
                "content": "<p><strong>Free Standard Shipping</strong> on orders over R 1,500</p><p><strong>30-Day Returns</strong> on all items in original condition</p>",
            },
            {
                "label": "Care Instructions",
                "icon": "Sparkles",
                "content": "<ul><li>Machine wash cold with like colors</li><li>Do not bleach</li></ul>",
            },
        ],
        "style": "modern",
        "allow_multiple_open": False,
        "default_open_index": 0,
        "background_color": "#ffffff",
        "accent_color": "#000000",
        "text_color": "#111827",
        "border_color": "#E5E7EB",
        "show_icons": True,
    },
    schema=(
        F("title", FieldKind.TEXT, "Section Title", placeholder="Product Details"),
        F("subtitle", FieldKind.TEXT, "Section Subtitle", placeholder="Everything you need to know"),
        F(
            "tabs",
            FieldKind.ARRAY,
            "Tabs",
            max_items=8,
            item_schema=(
                F("label", FieldKind.TEXT, "Tab Label", placeholder="Shipping & Returns"),
                F(
                    "icon",
                    FieldKind.SELECT,
                    "Icon",
                    options=(
                        ("Package", "Package"),
                        ("Truck", "Truck/Shipping"),
                        ("Sparkles", "Sparkles/Care"),
                        ("Shield", "Shield/Warranty"),
                        ("Info", "Info"),
                    ),
                ),
                F("content", FieldKind.RICH_TEXT, "Content", rows=5),
            ),
        ),
        F(
            "style",
            FieldKind.SELECT,
            "Style",
            options=(
                ("modern", "Modern (Cards with shadow)"),
                ("minimal", "Minimal (Simple lines)"),
                ("bordered", "Bordered (Outlined)"),
            ),
        ),
        F("allow_multiple_open", FieldKind.TOGGLE, "Allow Multiple Tabs Open"),
        F("default_open_index", FieldKind.NUMBER, "Initially Open Tab", min=-1, max=7),
        F("background_color", FieldKind.COLOR, "Background Color"),
        F("accent_color", FieldKind.COLOR, "Accent Color"),
        F("text_color", FieldKind.COLOR, "Text Color"),
        F("border_color", FieldKind.COLOR, "Border Color"),
        F("show_icons", FieldKind.TOGGLE, "Show Icons"),
    ),
)

FOOTER = SectionDescriptor(
    type=SectionType.FOOTER,
    name="Footer",
    description="Store footer with contact details and social links",
    icon="PanelBottom",
    location=SectionLocation.FOOTER,
    defaults={
        "about_text": "",
        "email": "",
        "phone": "",
        "social_links": [],
        "show_payment_icons": True,
        "background_color": "#111827",
        "text_color": "#ffffff",
    },
    schema=(
        F("about_text", FieldKind.TEXTAREA, "About Text"),
        F("email", FieldKind.TEXT, "Contact Email"),
        F("phone", FieldKind.TEXT, "Contact Phone"),
        F(
            "social_links",
            FieldKind.ARRAY,
            "Social Links",
            max_items=6,
            item_schema=(
                F(
                    "platform",
                    FieldKind.SELECT,
                    "Platform",
                    options=(
                        ("instagram", "Instagram"),
                        ("facebook", "Facebook"),
                        ("tiktok", "TikTok"),
                        ("x", "X"),
                    ),
                ),
                F("url", FieldKind.TEXT, "URL"),
            ),
        ),
        F("show_payment_icons", FieldKind.TOGGLE, "Show Payment Icons"),
        F("background_color", FieldKind.COLOR, "Background Color"),
        F("text_color", FieldKind.COLOR, "Text Color"),
    ),
)


BUILT_IN_DESCRIPTORS = (
    ANNOUNCEMENT_BAR,
    HERO,
    FEATURED_PRODUCTS,
    NEWSLETTER,
    TRUST_BADGES,
    RICH_TEXT,
    IMAGE_BANNER,
    CATALOG_HEADER,
    PRODUCT_TRUST,
    RELATED_PRODUCTS,
    PRODUCT_TABS,
    FOOTER,
)

DEFAULT_PAGE_SECTIONS = {
    PageType.HOME: (
        SectionType.HERO,
        SectionType.FEATURED_PRODUCTS,
        SectionType.NEWSLETTER,
        SectionType.TRUST_BADGES,
    ),
    PageType.CATALOG: (
        SectionType.CATALOG_HEADER,
        SectionType.NEWSLETTER,
    ),
    PageType.PRODUCT: (
        SectionType.PRODUCT_TRUST,
        SectionType.RELATED_PRODUCTS,
    ),
}


def build_default_registry() -> SectionTypeRegistry:
    registry = SectionTypeRegistry()
    for descriptor in BUILT_IN_DESCRIPTORS:
        registry.register(descriptor.type, descriptor)

    missing = [kind.value for kind in SectionType if registry.lookup(kind) is None]
    if missing:
        raise RuntimeError(f"Section kinds without a descriptor: {missing}")
    return registry
