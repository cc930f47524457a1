"""JSON processing utilities."""

import json
import os
from decimal import Decimal
from typing import Dict, Any
import aiofiles
from pydantic import ValidationError

from ..exceptions import SnapshotError
from ..models.establishment import MenuSnapshot
from ..models.request import CartRequest, CheckoutQuote


class JSONProcessor:
    """JSON processor for menu snapshots, cart requests and quotes."""
    
    async def load_json(self, json_file_path: str, parse_float=None) -> Dict[str, Any]:
        """Load a JSON object from a file."""
        if not os.path.exists(json_file_path):
            raise FileNotFoundError(f"JSON file not found: {json_file_path}")
        
        async with aiofiles.open(json_file_path, 'r', encoding='utf-8') as file:
            content = await file.read()
        
        try:
            return json.loads(content, parse_float=parse_float)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Invalid JSON in {json_file_path}: {e}") from e
    
    async def load_snapshot(self, json_file_path: str) -> MenuSnapshot:
        """Load and validate a menu snapshot.
        
        Decimal fields may be given as JSON numbers or strings; numbers are
        parsed from their text so 0.1 stays 0.1.
        """
        data = await self.load_json(json_file_path, parse_float=Decimal)
        return MenuSnapshot.model_validate(data)
    
    async def load_cart_request(self, json_file_path: str) -> CartRequest:
        """Load and validate a cart request."""
        data = await self.load_json(json_file_path)
        return CartRequest.model_validate(data)
    
    async def validate_snapshot_json(self, json_file_path: str) -> bool:
        """Validate that a JSON file contains a valid menu snapshot."""
        try:
            await self.load_snapshot(json_file_path)
            return True
        except (OSError, SnapshotError, ValidationError):
            return False
    
    async def save_quote_json(self, quote: CheckoutQuote, output_path: str) -> str:
        """Save a checkout quote to a JSON file.
        
        Args:
            quote: CheckoutQuote to serialize
            output_path: Destination file; parent directories are created
        
        Returns:
            Path to the saved JSON file
        """
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        
        quote_dict = quote.model_dump(mode='json')
        
        async with aiofiles.open(output_path, 'w', encoding='utf-8') as file:
            await file.write(json.dumps(quote_dict, indent=2, ensure_ascii=False))
        
        return output_path
    
    async def get_all_json_files(self, directory: str) -> list[str]:
        """Get all JSON files in a directory."""
        if not os.path.exists(directory):
            raise FileNotFoundError(f"Directory not found: {directory}")
        
        json_files = []
        for filename in os.listdir(directory):
            if filename.endswith('.json'):
                json_files.append(os.path.join(directory, filename))
        
        return sorted(json_files)
