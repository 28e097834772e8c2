from typing import List, Optional

from pydantic import BaseModel, Field


class PersonIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    age: Optional[int] = Field(default=None, ge=0)
    favorite_foods: List[str] = Field(default_factory=list)

    def to_document(self) -> dict:
        # unset age is left out of the stored document rather than stored as null
        return self.model_dump(exclude_none=True)


class PersonOut(BaseModel):
    id: str
    name: str
    age: Optional[int] = None
    favorite_foods: List[str] = Field(default_factory=list)


class PersonPatch(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    age: Optional[int] = Field(default=None, ge=0, strict=True)
    favorite_foods: Optional[List[str]] = None


def person_from_doc(doc: dict) -> PersonOut:
    d = dict(doc)
    d["id"] = str(d.pop("_id"))
    d.setdefault("favorite_foods", [])
    return PersonOut(**d)
