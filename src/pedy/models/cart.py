"""Cart-time models: option selections and cart lines."""

import logging
from decimal import Decimal
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field, field_validator

from .catalog import Addition, PriceRule, Product
from ..utils.key_utils import generate_cart_line_key

logger = logging.getLogger(__name__)

PRICE_RULES = ('sum', 'average', 'highest')


class SelectedOption(BaseModel):
    """Snapshot of a chosen option taken at selection time."""
    
    id: str
    name: str
    price: Decimal = Field(default=Decimal('0'), ge=0)


class _GroupSelection(BaseModel):
    group_id: str
    group_name: str
    selected_options: List[SelectedOption] = Field(default_factory=list)
    
    @property
    def prices(self) -> List[Decimal]:
        return [option.price for option in self.selected_options]


class SingleSelection(_GroupSelection):
    """Selection for a single-choice group."""
    
    group_type: Literal['single'] = 'single'


class MultipleSelection(_GroupSelection):
    """Selection for a multiple-choice group."""
    
    group_type: Literal['multiple'] = 'multiple'


class FlavorSelection(_GroupSelection):
    """Selection for a pizza-style flavor group.
    
    Only flavor selections carry a price rule. ``has_auto_pricing`` records
    whether the selling establishment was entitled to rule-based pricing
    when the selection was made; ``None`` means unknown.
    """
    
    group_type: Literal['flavor'] = 'flavor'
    price_rule: Optional[PriceRule] = None
    has_auto_pricing: Optional[bool] = None
    
    @field_validator('price_rule', mode='before')
    @classmethod
    def _normalize_price_rule(cls, value):
        if value is None:
            return None
        rule = str(value).strip().lower()
        if rule not in PRICE_RULES:
            logger.debug("Unknown price rule %r, falling back to sum", value)
            return None
        return rule


SelectedOptionGroup = Annotated[
    Union[SingleSelection, MultipleSelection, FlavorSelection],
    Field(discriminator='group_type'),
]


class CartLine(BaseModel):
    """One product entry in a customer's in-progress order."""
    
    product: Product
    quantity: int = Field(default=1, ge=1)
    selected_additions: List[Addition] = Field(default_factory=list)
    selected_option_groups: List[SelectedOptionGroup] = Field(default_factory=list)
    observations: Optional[str] = None
    
    @field_validator('observations', mode='before')
    @classmethod
    def _blank_observations(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value
    
    @property
    def key(self) -> str:
        """Identity used to merge equal lines in a cart."""
        return generate_cart_line_key(
            self.product.id,
            [addition.id for addition in self.selected_additions],
            {
                group.group_id: [option.id for option in group.selected_options]
                for group in self.selected_option_groups
            },
            self.observations
        )


class GroupValidation(BaseModel):
    """Whether a group's selection satisfies its required/minimum rules."""
    
    valid: bool = True
    message: Optional[str] = None
