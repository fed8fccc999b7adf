from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AdminLoginPayload(BaseModel):
    slug: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)


class AdminUserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    tenant_id: int = Field(alias="tenantId")
    email: str
    name: str
    role: str
    active: bool
