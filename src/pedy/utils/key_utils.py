"""Key utilities for cart line identity."""

import uuid
from typing import Dict, Iterable, Optional


# Namespace for cart line keys (using DNS namespace as base)
CART_LINE_KEY_NAMESPACE = uuid.UUID('6ba7b811-9dad-11d1-80b4-00c04fd430c8')


def generate_cart_line_key(
    product_id: str,
    addition_ids: Iterable[str],
    option_ids_by_group: Optional[Dict[str, Iterable[str]]] = None,
    observations: Optional[str] = None
) -> str:
    """
    Generate a deterministic key for a cart line.
    
    Two lines with the same product, the same additions, the same options
    in each group and the same observations get the same key, so adding
    the second one to a cart bumps the quantity of the first instead of
    appending a duplicate. Selection order does not matter.
    
    Args:
        product_id: Product ID (required)
        addition_ids: IDs of the selected additions
        option_ids_by_group: Selected option IDs keyed by option group ID
        observations: Free-text notes for the kitchen
    
    Returns:
        String representation of UUID
    
    Example:
        >>> generate_cart_line_key("p1", ["bacon", "cheddar"])
        ...  # same key as generate_cart_line_key("p1", ["cheddar", "bacon"])
    """
    additions = ','.join(sorted(addition_ids))
    
    groups = []
    for group_id in sorted(option_ids_by_group or {}):
        option_ids = ','.join(sorted(option_ids_by_group[group_id]))
        groups.append(f"{group_id}={option_ids}")
    
    # Normalize observations (strip whitespace)
    notes = (observations or '').strip()
    
    content = f"{product_id}:{additions}:{';'.join(groups)}:{notes}"
    
    return str(uuid.uuid5(CART_LINE_KEY_NAMESPACE, content))
