"""Option selection rules for product customization."""

import logging
from typing import Dict, Iterable, Optional

from ..models.catalog import Option, OptionGroup, Product
from ..models.cart import (
    FlavorSelection,
    GroupValidation,
    MultipleSelection,
    SelectedOption,
    SelectedOptionGroup,
    SingleSelection,
)

logger = logging.getLogger(__name__)


class SelectionService:
    """Builds and validates option-group selections."""
    
    @staticmethod
    def snapshot_group(
        group: OptionGroup,
        options: Iterable[Option] = (),
        has_auto_pricing: Optional[bool] = None
    ) -> SelectedOptionGroup:
        """Snapshot chosen options into the selection type matching the group."""
        selected = [SelectedOption(id=o.id, name=o.name, price=o.price) for o in options]
        common = dict(group_id=group.id, group_name=group.name, selected_options=selected)
        
        if group.type == 'flavor':
            return FlavorSelection(
                **common,
                price_rule=group.price_rule,
                has_auto_pricing=has_auto_pricing
            )
        if group.type == 'multiple':
            return MultipleSelection(**common)
        return SingleSelection(**common)
    
    @staticmethod
    def toggle_option(
        group: OptionGroup,
        selection: Optional[SelectedOptionGroup],
        option_id: str,
        has_auto_pricing: Optional[bool] = None
    ) -> SelectedOptionGroup:
        """Apply a customer's click on an option and return the new selection.
        
        Single groups replace the current choice. Multiple and flavor groups
        remove an already-selected option, or add it while below the group's
        ``max_selections``; clicks past the limit leave the selection as is.
        Unknown or unavailable options are ignored.
        """
        if selection is None:
            selection = SelectionService.snapshot_group(group, has_auto_pricing=has_auto_pricing)
        
        option = group.find_option(option_id)
        if option is None or not option.is_available:
            logger.debug("Ignoring unavailable option %s in group %s", option_id, group.id)
            return selection
        
        chosen = SelectedOption(id=option.id, name=option.name, price=option.price)
        
        if group.type == 'single':
            return selection.model_copy(update={'selected_options': [chosen]})
        
        current = list(selection.selected_options)
        if any(o.id == option.id for o in current):
            remaining = [o for o in current if o.id != option.id]
            return selection.model_copy(update={'selected_options': remaining})
        
        if len(current) >= group.effective_max_selections:
            logger.debug("Group %s already has %d selections", group.id, len(current))
            return selection
        
        return selection.model_copy(update={'selected_options': current + [chosen]})
    
    @staticmethod
    def validate_group(group: OptionGroup, selection: Optional[SelectedOptionGroup]) -> GroupValidation:
        count = len(selection.selected_options) if selection else 0
        
        if group.is_required and count == 0:
            return GroupValidation(valid=False, message='Obrigatório')
        
        if group.min_selections > 0 and count < group.min_selections:
            return GroupValidation(valid=False, message=f'Selecione pelo menos {group.min_selections}')
        
        return GroupValidation(valid=True)
    
    @staticmethod
    def validate_product(
        product: Product,
        selections: Iterable[SelectedOptionGroup]
    ) -> Dict[str, GroupValidation]:
        """Validate every option group of a product; returns only failures."""
        by_group = {selection.group_id: selection for selection in selections}
        failures = {}
        for group in product.option_groups:
            result = SelectionService.validate_group(group, by_group.get(group.id))
            if not result.valid:
                failures[group.id] = result
        return failures
