"""Contact form and the client that delivers it."""

from termsite.contact.client import ContactClient, ContactError
from termsite.contact.form import FIELDS, ContactForm

__all__ = ["FIELDS", "ContactClient", "ContactError", "ContactForm"]
