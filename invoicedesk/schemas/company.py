from pydantic import BaseModel, field_validator

from ..models import CompanyTypeEnum
from .common import OptionalStr, RequiredStr, strip_required


class CompanyCreate(BaseModel):
    code: str
    name: RequiredStr
    type: CompanyTypeEnum
    vat_code: OptionalStr = None
    address: OptionalStr = None
    email: OptionalStr = None
    phone: OptionalStr = None

    @field_validator("code")
    @classmethod
    def _code(cls, value: str) -> str:
        return strip_required(value).upper()


class CompanyRead(BaseModel):
    id: int
    code: str
    name: str
    type: CompanyTypeEnum
    vat_code: str | None
    address: str | None
    email: str | None
    phone: str | None

    model_config = {"from_attributes": True}
