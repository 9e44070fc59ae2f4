"""EmailAddress value object and the normalisation used for lookups."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

# local@domain.tld; no whitespace, one @, dot-separated labels on both sides
EMAIL_PATTERN = re.compile(r"^[^@\s.]+(\.[^@\s.]+)*@[^@\s.]+(\.[^@\s.]+)+$")


def normalize_email(value: str | None) -> str:
    return (value or "").strip().lower()


@storefront.value_object
class EmailAddress:
    """A lower-cased, structurally valid email address.

    Users are looked up by email, so ``parse`` is the way to build one from
    raw input: it trims and lower-cases before validating.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def address_must_be_well_formed(self):
        if self.address is not None and not EMAIL_PATTERN.match(self.address):
            raise ValidationError({"email": [f"Invalid email address: {self.address!r}"]})

    @classmethod
    def parse(cls, raw: str | None) -> "EmailAddress":
        return cls(address=normalize_email(raw))
