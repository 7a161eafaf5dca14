# provide dataclass models

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Rating:
    rate: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class Product:
    """A catalog record, read-only on our side."""

    id: int
    title: str
    price: float
    image: str
    category: str
    description: str
    rating: Rating

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Product:
        """Build a Product from the catalog's JSON shape.

        Raises KeyError / TypeError / ValueError when the payload is not a product.
        """
        rating = data.get("rating") or {}
        return cls(
            id=int(data["id"]),
            title=str(data["title"]),
            price=float(data["price"]),
            image=str(data.get("image", "")),
            category=str(data.get("category", "")),
            description=str(data.get("description", "")),
            rating=Rating(
                rate=float(rating.get("rate", 0)), count=int(rating.get("count", 0))
            ),
        )


@dataclass(frozen=True)
class CartLineItem:
    id: int
    title: str
    price: float  # unit price captured when the product was first added
    image: str
    quantity: int

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class UserAccount:
    """
    Registry record. The password is kept in plaintext: this is a demo
    login, not an authentication scheme.
    """

    id: int
    name: str
    email: str
    password: str
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> UserAccount:
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            email=str(data["email"]),
            password=str(data["password"]),
            created_at=str(data.get("createdAt", "")),
        )


@dataclass(frozen=True)
class SessionUser:
    id: int
    name: str
    email: str

    @classmethod
    def from_account(cls, account: UserAccount) -> SessionUser:
        return cls(id=account.id, name=account.name, email=account.email)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SessionUser:
        return cls(id=int(data["id"]), name=str(data["name"]), email=str(data["email"]))


@dataclass(frozen=True)
class AuthResult:
    success: bool
    message: str
