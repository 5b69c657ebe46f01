"""Checkout form data: billing details, shipping info and payment choice."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class PaymentMethod(str, Enum):
    E_MONEY = "e-money"
    CASH = "cash"


class BillingDetails(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(pattern=_EMAIL_PATTERN, max_length=254)
    phone: str = Field(min_length=1, max_length=50)


class ShippingInfo(BaseModel):
    address: str = Field(min_length=1, max_length=255)
    zip_code: str = Field(min_length=1, max_length=20)
    city: str = Field(min_length=1, max_length=100)
    country: str = Field(min_length=1, max_length=100)


class PaymentDetails(BaseModel):
    method: PaymentMethod
    e_money_number: str | None = Field(default=None, pattern=r"^\d{9}$")
    e_money_pin: str | None = Field(default=None, pattern=r"^\d{4}$")

    @model_validator(mode="after")
    def e_money_needs_credentials(self):
        if self.method == PaymentMethod.E_MONEY and not (self.e_money_number and self.e_money_pin):
            raise ValueError("e-Money number and PIN are required for e-Money payments")
        return self


class CheckoutForm(BaseModel):
    billing: BillingDetails
    shipping: ShippingInfo
    payment: PaymentDetails
    submission_id: str | None = Field(default=None, max_length=100)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "billing": {"name": "Alexei Ward", "email": "alexei@mail.com", "phone": "+1 202-555-0136"},
                    "shipping": {
                        "address": "1137 Williams Avenue",
                        "zip_code": "10001",
                        "city": "New York",
                        "country": "United States",
                    },
                    "payment": {"method": "e-money", "e_money_number": "238521993", "e_money_pin": "6891"},
                }
            ]
        }
    }
