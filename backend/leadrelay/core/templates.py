"""Lead Message Templates — render the sales-team notification for a captured lead.

Invariants:
    - Every '{whatsapp_number}' occurrence is replaced; other braces are left untouched
    - A blank phone number is rejected (InvalidInputError), never rendered
"""

from leadrelay.core.errors import InvalidInputError

PHONE_PLACEHOLDER = "{whatsapp_number}"

DEFAULT_LEAD_TEMPLATE = """🚗 *Paint Protection Film Quote Request*

Thank you for your interest in our premium PPF services!

Your phone number: {whatsapp_number}

Our team of certified PPF specialists will contact you within 5 minutes with:
• Professional vehicle assessment
• Custom PPF package options
• Competitive pricing
• Flexible scheduling

We look forward to protecting your vehicle! 🛡️

---
*EasyAuto Dubai - PPF Specialists*"""


def render_lead_message(template: str, whatsapp_number: str) -> str:
    """Substitute the visitor's number into the template.

    str.replace rather than str.format: admin-edited templates may contain
    other braces (emoji art, JSON snippets) that must pass through verbatim.
    """
    number = (whatsapp_number or "").strip()
    if not number:
        raise InvalidInputError("'whatsapp_number' must not be empty", field="whatsapp_number")
    return template.replace(PHONE_PLACEHOLDER, number)
