"""
Artwork schemas for request/response validation
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

REQUIRED_ON_UPDATE = ("title", "year", "medium", "original_dimensions")

class PrintOption(BaseModel):
    """Print size with its price"""
    size: str = Field(..., min_length=1, max_length=50)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)

def _check_unique_sizes(options: Optional[List[PrintOption]]):
    if options:
        sizes = [option.size for option in options]
        if len(sizes) != len(set(sizes)):
            raise ValueError("Print sizes must be unique")
    return options

class ArtworkBase(BaseModel):
    """Base schema for artworks"""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=10000)
    year: int = Field(..., ge=1000, le=2100)
    medium: str = Field(..., min_length=1, max_length=200)
    original_dimensions: str = Field(..., min_length=1, max_length=100)
    original_price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    original_available: bool = False
    original_sold: bool = False
    prints_available: bool = False
    print_options: List[PrintOption] = []
    images: List[str] = []

class ArtworkCreate(ArtworkBase):
    """Schema for creating artwork"""

    @field_validator("print_options")
    @classmethod
    def unique_sizes(cls, v):
        return _check_unique_sizes(v)

class ArtworkUpdate(BaseModel):
    """Schema for partial artwork update"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=10000)
    year: Optional[int] = Field(None, ge=1000, le=2100)
    medium: Optional[str] = Field(None, min_length=1, max_length=200)
    original_dimensions: Optional[str] = Field(None, min_length=1, max_length=100)
    original_price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    original_available: Optional[bool] = None
    original_sold: Optional[bool] = None
    prints_available: Optional[bool] = None
    print_options: Optional[List[PrintOption]] = None
    images: Optional[List[str]] = None

    @field_validator("print_options")
    @classmethod
    def unique_sizes(cls, v):
        return _check_unique_sizes(v)

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for field in REQUIRED_ON_UPDATE:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

class ArtworkResponse(ArtworkBase):
    """Schema for artwork response"""
    id: int
    slug: str
    display_order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ArtworkSummary(BaseModel):
    """Artwork fields shown alongside order items"""
    id: int
    title: str
    slug: str
    images: List[str] = []
    is_deleted: bool = False

    class Config:
        from_attributes = True

class ArtworkReorderRequest(BaseModel):
    """Full or partial catalog order, first id shown first"""
    artwork_ids: List[int] = Field(..., min_length=1)

class ArtworkReorderResponse(BaseModel):
    items: List[ArtworkResponse]
