from pydantic import BaseModel, ConfigDict, Field


class BookIn(BaseModel):
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    price: float = Field(..., gt=0, allow_inf_nan=False)


class BookPatch(BaseModel):
    model_config = ConfigDict(extra="ignore")
    title: str | None = Field(None, min_length=1)
    author: str | None = Field(None, min_length=1)
    price: float | None = Field(None, gt=0, allow_inf_nan=False)


class BookOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    title: str
    author: str
    price: float
