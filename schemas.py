"""
Request schemas for the GauShala Fresh content API

Each collection has a `*Create` model (full record, defaults applied) and,
where it can be edited, an `*Update` model whose fields are all optional.
Only the fields a caller actually sends are merged into the stored record;
nested values (variants, images, benefits, socialLinks) are replaced as a
whole rather than deep-merged.

On the wire every field is camelCase (`isPublished`, `sortOrder`, ...).
Unknown fields are rejected. Server-managed fields (`id`, timestamps and the
enriched `category`) are dropped silently so an admin client can send back a
record it previously fetched.
"""

import re
from typing import ClassVar, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel

from database import new_id

SERVER_FIELDS = ("id", "createdAt", "updatedAt", "category")

StockStatus = Literal["in_stock", "out_of_stock", "limited"]
InquiryStatus = Literal["new", "replied", "archived"]


def slugify(text: str) -> str:
    return re.sub(r"\s+", "-", text.strip().lower())


class Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    # Fields a caller may explicitly set to null; every other sent field needs a value.
    nullable: ClassVar[tuple] = ()

    @model_validator(mode="before")
    @classmethod
    def _drop_server_fields(cls, data):
        if isinstance(data, dict):
            data = {k: v for k, v in data.items() if k not in SERVER_FIELDS or k in cls.model_fields}
        return data

    @model_validator(mode="after")
    def _reject_nulls(self):
        nulls = sorted(
            to_camel(name) for name in self.model_fields_set
            if name not in self.nullable and getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"Fields may not be null: {', '.join(nulls)}")
        return self

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)

    def to_patch(self) -> dict:
        """Only the fields the caller sent, by wire name."""
        if not self.model_fields_set:
            return {}
        return self.model_dump(by_alias=True, include=self.model_fields_set)


# ------------ Auth ------------
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


# ------------ Category ------------
class CategoryCreate(Schema):
    nullable: ClassVar[tuple] = ("slug",)

    name: str = Field(..., min_length=1)
    slug: Optional[str] = None
    sort_order: int = 0

    @model_validator(mode="after")
    def _default_slug(self):
        if not self.slug:
            self.slug = slugify(self.name)
        return self


# ------------ Products ------------
class Variant(Schema):
    id: str = Field(default_factory=new_id)
    size: str = ""
    price: float = Field(0, ge=0)
    unit: str = ""
    stock_status: StockStatus = "in_stock"


class ProductCreate(Schema):
    nullable: ClassVar[tuple] = ("slug", "category_id")

    name: str = Field(..., min_length=1)
    slug: Optional[str] = None
    tagline: str = ""
    category_id: Optional[str] = None
    short_description: str = ""
    long_description: str = ""
    variants: List[Variant] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    amazon_link: str = ""
    benefits: List[str] = Field(default_factory=list)
    is_featured: bool = False
    is_published: bool = False
    stock_status: StockStatus = "in_stock"
    rating: float = Field(0, ge=0, le=5)
    review_count: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _default_slug(self):
        if not self.slug:
            self.slug = slugify(self.name)
        return self


class ProductUpdate(Schema):
    nullable: ClassVar[tuple] = ("category_id",)

    name: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = None
    tagline: Optional[str] = None
    category_id: Optional[str] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    variants: Optional[List[Variant]] = None
    images: Optional[List[str]] = None
    amazon_link: Optional[str] = None
    benefits: Optional[List[str]] = None
    is_featured: Optional[bool] = None
    is_published: Optional[bool] = None
    stock_status: Optional[StockStatus] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)


# ------------ Testimonials ------------
class TestimonialCreate(Schema):
    name: str = Field(..., min_length=1)
    location: str = ""
    image: str = ""
    quote: str = Field(..., min_length=1)
    product: str = ""
    rating: int = Field(5, ge=1, le=5)
    is_featured: bool = False
    is_published: bool = True


class TestimonialUpdate(Schema):
    name: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None
    image: Optional[str] = None
    quote: Optional[str] = Field(None, min_length=1)
    product: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    is_featured: Optional[bool] = None
    is_published: Optional[bool] = None


# ------------ Banners ------------
class BannerCreate(Schema):
    title: str = Field(..., min_length=1)
    subtitle: str = ""
    background_image: str = ""
    cta_text: str = ""
    cta_link: str = ""
    page: str = "home"
    sort_order: int = 0
    is_active: bool = True


class BannerUpdate(Schema):
    title: Optional[str] = Field(None, min_length=1)
    subtitle: Optional[str] = None
    background_image: Optional[str] = None
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None
    page: Optional[str] = None
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None


# ------------ FAQs ------------
class FAQCreate(Schema):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    category: str = "general"
    sort_order: int = 0
    is_published: bool = True


class FAQUpdate(Schema):
    question: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    sort_order: Optional[int] = None
    is_published: Optional[bool] = None


# ------------ Inquiries ------------
class InquiryCreate(Schema):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = ""
    subject: str = ""
    message: str = Field(..., min_length=1)
    inquiry_type: str = "general"


class InquiryUpdate(Schema):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    inquiry_type: Optional[str] = None
    status: Optional[InquiryStatus] = None


# ------------ Settings ------------
class SocialLinks(Schema):
    facebook: str = ""
    instagram: str = ""
    youtube: str = ""
    twitter: str = ""


class Settings(Schema):
    site_name: str = ""
    tagline: str = ""
    phone: str = ""
    phone2: str = ""
    email: str = ""
    address: str = ""
    whatsapp_number: str = ""
    amazon_store_url: str = ""
    fssai: str = ""
    social_links: SocialLinks = Field(default_factory=SocialLinks)
