"""Application-wide constants and defaults."""
from __future__ import annotations

APP_NAME = "Gnawa Tours"

DIFFICULTIES: tuple[str, ...] = ("easy", "moderate", "challenging", "expert")
LAYOUT_TYPES: tuple[str, ...] = ("text-left", "text-right", "centered", "full-bleed", "grid")
CARD_ICONS: tuple[str, ...] = ("compass", "shield", "star", "heart")
DEFAULT_CARD_ICON = "compass"
BOOKING_STATUSES: tuple[str, ...] = ("new", "contacted", "confirmed", "cancelled")

MIN_GROUP_SIZE = 1
MAX_GROUP_SIZE = 20
DEFAULT_ORIGIN_COUNTRY = "INTL"
DZD_COUNTRY = "DZ"

MIN_RATING = 1
MAX_RATING = 5

GALLERY_INTERVAL_MS = 6500
TESTIMONIAL_INTERVAL_MS = 8000

ALLOWED_UPLOAD_PREFIXES: tuple[str, ...] = ("image/", "audio/")
# Served inline from the media mount, so scriptable types are refused.
BLOCKED_UPLOAD_TYPES: frozenset[str] = frozenset({"image/svg+xml"})
UPLOAD_CHUNK_BYTES = 64 * 1024

COUNTRY_HEADER_KEYS: tuple[str, ...] = (
    "x-vercel-ip-country",
    "cf-ipcountry",
    "x-country",
    "x-country-code",
    "x-geo-country",
    "x-geo-country-code",
    "x-appengine-country",
)
ALPHA3_TO_ALPHA2: dict[str, str] = {"DZA": "DZ"}

DEFAULT_SITE_SETTINGS: dict[str, object] = {
    "site_name": APP_NAME,
    "contact_email": "",
    "contact_phone": "",
    "address": "",
    "showcase_images": [],
    "ambient_music_enabled": False,
    "ambient_music_tracks": [],
}

DEFAULT_HERO: dict[str, object] = {
    "headline": "Discover the Algerian Sahara",
    "subheadline": (
        "Journey through ancient landscapes where towering sandstone arches meet "
        "endless golden dunes"
    ),
    "cta_text": "Begin Your Adventure",
    "background_image": "https://images.pexels.com/photos/3889843/pexels-photo-3889843.jpeg?w=1920&q=80",
    "overlay_opacity": 0.45,
}

DEFAULT_PROGRAMS: list[dict[str, object]] = [
    {
        "id": 1,
        "title": "Tadrart Rouge Expedition",
        "slug": "tadrart-rouge-expedition",
        "description": (
            "Immerse yourself in the breathtaking red rock formations of Tadrart Rouge, "
            "one of the most spectacular landscapes on Earth."
        ),
        "duration": "5 days / 4 nights",
        "start_date": "2026-10-05",
        "end_date": "2026-10-09",
        "price_eur": 1200,
        "price_dzd": 180000,
        "difficulty": "moderate",
        "highlights": [
            "Red sandstone arches of Tadrart",
            "Prehistoric Tassili rock art",
            "Sunset camel trek across Erg Admer",
            "Traditional Tuareg camp experience",
            "Star-gazing in zero light pollution",
        ],
        "itinerary": [
            {"day": 1, "title": "Arrival in Djanet", "description": "Arrive at Djanet airport, transfer to hotel."},
            {"day": 2, "title": "Into the Tadrart", "description": "Depart by 4x4 into the heart of Tadrart Rouge."},
            {"day": 3, "title": "Rock Art & Dunes", "description": "Morning visit to prehistoric rock paintings."},
            {"day": 4, "title": "Deep Desert", "description": "Full day exploring remote valleys."},
            {"day": 5, "title": "Return to Djanet", "description": "Morning drive back to Djanet."},
        ],
        "gallery_urls": [],
        "cover_image": "https://images.pexels.com/photos/4553618/pexels-photo-4553618.jpeg?w=1920&q=80",
        "display_order": 1,
        "is_published": True,
    },
    {
        "id": 2,
        "title": "Ihrir Desert Oasis Adventure",
        "slug": "ihrir-desert-oasis",
        "description": (
            "Discover the hidden gem of Ihrir, a stunning desert oasis nestled within "
            "the rugged Tassili n'Ajjer plateau."
        ),
        "duration": "4 days / 3 nights",
        "start_date": "2026-11-14",
        "end_date": "2026-11-17",
        "price_eur": 950,
        "price_dzd": 145000,
        "difficulty": "moderate",
        "highlights": [
            "Ihrir permanent desert lakes",
            "Tassili n'Ajjer UNESCO World Heritage",
            "Canyon hiking adventures",
            "Desert wildlife spotting",
            "Authentic nomadic cuisine",
        ],
        "itinerary": [
            {"day": 1, "title": "Djanet to Illizi", "description": "Scenic drive through the Tassili plateau."},
            {"day": 2, "title": "Journey to Ihrir", "description": "4x4 expedition to the remarkable Ihrir oasis."},
            {"day": 3, "title": "Oasis Exploration", "description": "Full day exploring rock formations and pools."},
            {"day": 4, "title": "Return Journey", "description": "Morning departure back to Djanet."},
        ],
        "gallery_urls": [],
        "cover_image": "https://images.pexels.com/photos/1703314/pexels-photo-1703314.jpeg?w=1920&q=80",
        "display_order": 2,
        "is_published": True,
    },
]

DEFAULT_SECTIONS: list[dict[str, object]] = [
    {
        "id": 1,
        "section_key": "our-story",
        "title": "Our Story",
        "nav_title": "Our Story",
        "subtitle": "Born from a passion for the Sahara",
        "content": {
            "text": (
                "Gnawa Tours was founded by seasoned Saharan guides who grew up in the "
                "shadows of the Tassili mountains. With over two decades of experience "
                "leading expeditions across the Algerian desert, we offer authentic, safe, "
                "and unforgettable journeys into one of the last true wildernesses on Earth."
            ),
            "image": "https://images.pexels.com/photos/4577791/pexels-photo-4577791.jpeg?w=1200&q=80",
        },
        "layout_type": "centered",
        "background_image": None,
        "is_visible": True,
        "display_order": 1,
    },
    {
        "id": 2,
        "section_key": "why-choose-us",
        "title": "Why Choose Us",
        "nav_title": "Why Us",
        "subtitle": "What makes Gnawa Tours different",
        "content": {
            "cards": [
                {"icon": "compass", "title": "Expert Local Guides", "description": "Our Tuareg guides have lived in the Sahara their entire lives."},
                {"icon": "shield", "title": "Safety First", "description": "Satellite communication, first aid, and maintained vehicles on every expedition."},
                {"icon": "star", "title": "Small Groups", "description": "Intimate groups of at most 8 travelers."},
                {"icon": "heart", "title": "Sustainable Travel", "description": "Leave-no-trace principles and direct investment in local communities."},
            ]
        },
        "layout_type": "grid",
        "background_image": None,
        "is_visible": True,
        "display_order": 2,
    },
    {
        "id": 3,
        "section_key": "the-desert",
        "title": "The Desert Awaits",
        "nav_title": "The Desert",
        "subtitle": "A glimpse into the extraordinary",
        "content": {
            "images": [
                "https://images.pexels.com/photos/1001435/pexels-photo-1001435.jpeg?w=800&q=80",
                "https://images.pexels.com/photos/1146708/pexels-photo-1146708.jpeg?w=800&q=80",
                "https://images.pexels.com/photos/847402/pexels-photo-847402.jpeg?w=800&q=80",
            ],
            "text": (
                "From the towering sandstone forests of Tadrart to the crystalline lakes of "
                "Ihrir, the Algerian Sahara is a world of contrasts and wonder."
            ),
        },
        "layout_type": "full-bleed",
        "background_image": "https://images.pexels.com/photos/3876407/pexels-photo-3876407.jpeg?w=1920&q=80",
        "is_visible": True,
        "display_order": 3,
    },
    {
        "id": 4,
        "section_key": "testimonials",
        "title": "What Travelers Say",
        "nav_title": "Testimonials",
        "subtitle": "Stories from the dunes",
        "content": {
            "quotes": [
                {"name": "Marie Laurent", "location": "Paris, France", "text": "The most extraordinary travel experience of my life.", "rating": 5},
                {"name": "Thomas Müller", "location": "Berlin, Germany", "text": "The Tadrart Rouge landscape is like being on another planet.", "rating": 5},
                {"name": "Sarah Chen", "location": "London, UK", "text": "The desert has a way of resetting your soul.", "rating": 5},
            ]
        },
        "layout_type": "text-left",
        "background_image": None,
        "is_visible": True,
        "display_order": 4,
    },
]
