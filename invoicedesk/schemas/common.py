from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BeforeValidator

from ..services.amounts import to_decimal

# Largest magnitudes the quantity (12,3) and unit price (12,4) columns hold.
QUANTITY_LIMIT = Decimal("1e9")
PRICE_LIMIT = Decimal("1e8")


def strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def strip_optional(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def below(limit: Decimal):
    def check(value: Decimal) -> Decimal:
        if abs(value) >= limit:
            raise ValueError(f"must be between -{limit:f} and {limit:f}")
        return value

    return AfterValidator(check)


# Blank or unparsable numeric form fields are read as zero.
LenientDecimal = Annotated[Decimal, BeforeValidator(to_decimal)]
Quantity = Annotated[LenientDecimal, below(QUANTITY_LIMIT)]
UnitPrice = Annotated[LenientDecimal, below(PRICE_LIMIT)]
RequiredStr = Annotated[str, AfterValidator(strip_required)]
OptionalStr = Annotated[str | None, AfterValidator(strip_optional)]
