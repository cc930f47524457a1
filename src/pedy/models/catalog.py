"""Catalog models authored by an establishment."""

from decimal import Decimal
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, model_validator


GroupType = Literal['single', 'multiple', 'flavor']
PriceRule = Literal['sum', 'average', 'highest']


class Addition(BaseModel):
    """Flat-priced optional add-on for a product."""
    
    id: str
    name: str
    price: Decimal = Field(default=Decimal('0'), ge=0)


class Option(BaseModel):
    """A choice within an option group."""
    
    id: str
    name: str
    price: Decimal = Field(default=Decimal('0'), ge=0)
    is_available: bool = True
    is_default: bool = False  # informational only


class OptionGroup(BaseModel):
    """A named set of related choices attached to a product."""
    
    id: str
    name: str
    type: GroupType = 'single'
    is_required: bool = False
    min_selections: int = Field(default=0, ge=0)
    max_selections: int = Field(default=1, ge=1)
    price_rule: Optional[str] = None  # only meaningful for flavor groups
    options: List[Option] = Field(default_factory=list)
    
    @property
    def effective_max_selections(self) -> int:
        """Selection ceiling; single groups never hold more than one option."""
        if self.type == 'single':
            return 1
        return self.max_selections
    
    @property
    def available_options(self) -> List[Option]:
        return [option for option in self.options if option.is_available]
    
    def find_option(self, option_id: str) -> Optional[Option]:
        for option in self.options:
            if option.id == option_id:
                return option
        return None


class Product(BaseModel):
    """A sellable menu item."""
    
    id: str
    name: str
    description: Optional[str] = None
    base_price: Decimal = Field(gt=0)
    is_promotional: bool = False
    original_price: Optional[Decimal] = Field(default=None, ge=0)
    promotional_price: Optional[Decimal] = Field(default=None, ge=0)
    unit_type: str = 'unidade'  # display label, e.g. 'unidade', 'kg', 'fatia'
    max_quantity_per_order: Optional[int] = Field(default=None, ge=1)
    available: bool = True
    allows_observations: bool = True
    additions: List[Addition] = Field(default_factory=list)
    option_groups: List[OptionGroup] = Field(default_factory=list)
    
    @model_validator(mode='after')
    def _check_promotion(self):
        if self.is_promotional and self.promotional_price is None:
            raise ValueError('promotional_price is required when is_promotional is set')
        return self
    
    @property
    def effective_price(self) -> Decimal:
        """Price charged per unit before additions and options."""
        if self.is_promotional and self.promotional_price is not None:
            return self.promotional_price
        return self.base_price
    
    def find_addition(self, addition_id: str) -> Optional[Addition]:
        for addition in self.additions:
            if addition.id == addition_id:
                return addition
        return None
    
    def find_option_group(self, group_id: str) -> Optional[OptionGroup]:
        for group in self.option_groups:
            if group.id == group_id:
                return group
        return None
