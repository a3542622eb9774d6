from pydantic import BaseModel

from .common import OptionalStr, RequiredStr


class CategoryCreate(BaseModel):
    name: RequiredStr
    parent_id: int | None = None
    description: OptionalStr = None


class CategoryUpdate(CategoryCreate):
    pass


class CategoryRead(BaseModel):
    id: int
    name: str
    parent_id: int | None
    description: str | None

    model_config = {"from_attributes": True}


class CategoryNodeRead(CategoryRead):
    children: list["CategoryNodeRead"] = []


class CategoryOption(CategoryRead):
    depth: int
