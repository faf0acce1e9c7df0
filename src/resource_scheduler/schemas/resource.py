from pydantic import BaseModel, ConfigDict


class ResourceBase(BaseModel):
    name: str
    email: str | None = None
    department: str | None = None
    active: bool = True


class ResourceCreate(ResourceBase):
    pass


class ResourceRead(ResourceBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class ResourceUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    department: str | None = None
    active: bool | None = None
