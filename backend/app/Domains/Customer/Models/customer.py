from typing import Literal, Optional

from pydantic import BaseModel

UserRole = Literal["customer", "barber", "admin"]


class Customer(BaseModel):
    id: Optional[int] = None
    name: str
    real_name: Optional[str] = ""
    phone: str
    email: Optional[str] = ""
    avatar: Optional[str] = None
    vouchers: Optional[int] = 0
    role: UserRole = "customer"
    password_hash: Optional[str] = None


class CustomerPublic(BaseModel):
    id: int
    name: str
    real_name: Optional[str] = ""
    phone: str
    email: Optional[str] = ""
    avatar: Optional[str] = None
    vouchers: Optional[int] = 0
    role: UserRole = "customer"

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerPublic":
        return cls(**customer.model_dump(exclude={"password_hash"}))


class RegisterData(BaseModel):
    nickname: str = ""
    real_name: Optional[str] = ""
    phone: str = ""
    email: Optional[str] = ""
    password: str = ""
    confirm_password: str = ""
    avatar: Optional[str] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    real_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None


class PasswordChange(BaseModel):
    new_password: str = ""
    confirm_password: str = ""


class LoginCredentials(BaseModel):
    phone: str
    password: str
