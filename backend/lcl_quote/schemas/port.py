from pydantic import BaseModel


class PortOut(BaseModel):
    model_config = {"from_attributes": True}

    name: str
    country: str
    code: str


class PortSearchResponse(BaseModel):
    query: str
    results: list[PortOut]
