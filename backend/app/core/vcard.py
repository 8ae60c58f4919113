"""vCard Rendering — pure contact -> vCard 3.0 text.

Invariants:
    - Output is exactly six CRLF-terminated lines: BEGIN, VERSION, FN, TEL, EMAIL, END
    - Field values are interpolated verbatim (no escaping, no folding)
    - Entry filename is "<id>.vcf"
"""

from typing import Protocol

VCARD_VERSION = "3.0"
VCARD_EXTENSION = ".vcf"


class VCardSource(Protocol):
    """Anything with the contact fields a vCard needs."""
    id: str
    name: str
    phone: str
    email: str


def render_vcard(contact: VCardSource) -> str:
    lines = [
        "BEGIN:VCARD",
        f"VERSION:{VCARD_VERSION}",
        f"FN:{contact.name}",
        f"TEL:{contact.phone}",
        f"EMAIL:{contact.email}",
        "END:VCARD",
    ]
    return "\r\n".join(lines) + "\r\n"


def vcard_filename(contact: VCardSource) -> str:
    return f"{contact.id}{VCARD_EXTENSION}"
