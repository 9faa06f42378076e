"""Canned HTML responses and contact details."""

import html
from dataclasses import dataclass
from types import MappingProxyType

from .models import Intent

BUSINESS_NAME = "RED CAT PICTURES"


@dataclass(frozen=True)
class ContactInfo:
    """Studio contact details embedded in canned responses."""

    phone: str
    email: str
    website: str
    address: str
    hours: str


CONTACT = ContactInfo(
    phone="+91 8910489578",
    email="contact@redcatpictures.com",
    website="https://redcatpictures.com",
    address="17, Netaji Subhash Road, Beltala, Harinavi",
    hours="Mon-Fri: 9AM-10PM | Sat-Sun: 9AM-8PM",
)


def link(href: str, label: str) -> str:
    """Anchor tag in the widget's link style."""
    return f'<a href="{href}" target="_blank" style="color: #60a5fa;">{label}</a>'


def render_text(text: str) -> str:
    """Escape plain text for the widget, keeping line breaks."""
    escaped = html.escape(text.strip())
    return escaped.replace("\r\n", "\n").replace("\n", "<br>")


FALLBACK_TEMPLATES: MappingProxyType = MappingProxyType(
    {
        Intent.PRICING_INQUIRY: (
            "Our photography packages are customized for your needs! 💰<br><br>"
            f"📞 Call <strong>{CONTACT.phone}</strong> for a detailed quote<br>"
            f"🌐 {link(CONTACT.website + '/#pricing', 'View pricing page')}"
        ),
        Intent.BOOKING_INTENT: (
            "We'd love to capture your moments! 📸<br><br>"
            "To book or check availability:<br>"
            f"📞 <strong>{CONTACT.phone}</strong><br>"
            f"📧 <strong>{CONTACT.email}</strong><br>"
            f"🌐 {link(CONTACT.website, 'Book online')}"
        ),
        Intent.SERVICE_INQUIRY: (
            f"{BUSINESS_NAME} specializes in:<br>"
            "• Wedding & Event Photography<br>"
            "• Food Photography<br>"
            "• Commercial Shoots<br>"
            "• Video Production<br><br>"
            f"{link(CONTACT.website + '/#services', 'View all services')}"
        ),
        Intent.CONTACT_REQUEST: (
            f"📞 <strong>{CONTACT.phone}</strong><br>"
            f"📧 <strong>{CONTACT.email}</strong><br>"
            f"🌐 {link(CONTACT.website, 'redcatpictures.com')}<br>"
            f"📍 {CONTACT.address}<br><br>"
            f"⏰ {CONTACT.hours}"
        ),
        Intent.ABOUT_INQUIRY: (
            f"{BUSINESS_NAME} is a creative photo studio delivering professional, "
            "memorable photography for every client! 📸<br><br>"
            f"{link(CONTACT.website + '/about', 'Meet our team')}"
        ),
        Intent.PORTFOLIO_REQUEST: (
            "Check out our stunning work! 🎨<br><br>"
            f"📸 {link(CONTACT.website + '/#featuredphotos', 'Featured Photos')}<br>"
            f"🍽️ {link(CONTACT.website + '/photo', 'Food Gallery')}<br>"
            f"🎥 {link(CONTACT.website + '/#video-gallery', 'Video Portfolio')}"
        ),
        Intent.GENERAL_INQUIRY: (
            f"Hi! I'm here to help with {BUSINESS_NAME}! 👋<br><br>"
            "I can assist with:<br>"
            "• Services & Pricing<br>"
            "• Booking & Availability<br>"
            "• Portfolio & Samples<br>"
            "• Contact Info<br><br>"
            "What would you like to know?"
        ),
    }
)

KNOWLEDGE_BASE_SUFFIX = (
    f"<br><br>Need more info? Call <strong>{CONTACT.phone}</strong> or "
    f"{link(CONTACT.website, 'visit our website')}"
)

ERROR_TEMPLATE = (
    "I'm having technical difficulties right now. 🔧<br><br>"
    "Please contact us directly:<br>"
    f"📞 <strong>{CONTACT.phone}</strong><br>"
    f"📧 <strong>{CONTACT.email}</strong><br>"
    f"🌐 {link(CONTACT.website, 'Visit website')}<br><br>"
    "We respond within minutes during business hours!"
)


def fallback_template(intent: Intent) -> str:
    """Canned response for an intent, defaulting to the general greeting."""
    return FALLBACK_TEMPLATES.get(intent, FALLBACK_TEMPLATES[Intent.GENERAL_INQUIRY])
