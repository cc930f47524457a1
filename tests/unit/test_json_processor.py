"""Tests for JSON processor."""

import sys
import os
import json
from pathlib import Path
from datetime import datetime, timezone
from decimal import Decimal
import pytest

# Add src to path
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT / 'src'))

from pedy.exceptions import SnapshotError
from pedy.services.checkout_service import CheckoutService
from pedy.utils.json_processor import JSONProcessor


@pytest.mark.asyncio
async def test_load_snapshot(snapshot_path):
    """Test loading a menu snapshot."""
    processor = JSONProcessor()
    snapshot = await processor.load_snapshot(snapshot_path)
    
    assert snapshot.establishment.name == "Pizzaria Bella"
    assert len(snapshot.products) == 2
    # JSON numbers are read as exact decimals
    assert snapshot.find_product("refri").base_price == Decimal("0.1")
    assert snapshot.find_coupon("dez").min_order_value == Decimal("50")


@pytest.mark.asyncio
async def test_load_cart_request(cart_path):
    """Test loading a cart request."""
    request = await JSONProcessor().load_cart_request(cart_path)
    
    assert request.items[0].product_id == "pizza-grande"
    assert request.items[0].options == {"sabores": ["calabresa", "portuguesa"]}
    assert request.delivery.neighborhood == "Bairro Novo"


@pytest.mark.asyncio
async def test_load_missing_file(tmp_path):
    """Test that missing files raise FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        await JSONProcessor().load_json(str(tmp_path / "missing.json"))


@pytest.mark.asyncio
async def test_invalid_json_raises_snapshot_error(tmp_path):
    """Test that malformed JSON is reported as a snapshot error."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    
    with pytest.raises(SnapshotError):
        await JSONProcessor().load_snapshot(str(path))


@pytest.mark.asyncio
async def test_validate_snapshot_json(snapshot_path, tmp_path):
    """Test snapshot validation."""
    processor = JSONProcessor()
    assert await processor.validate_snapshot_json(snapshot_path) is True
    
    invalid = tmp_path / "invalid.json"
    invalid.write_text(json.dumps({"products": []}), encoding="utf-8")
    assert await processor.validate_snapshot_json(str(invalid)) is False


@pytest.mark.asyncio
async def test_save_quote_json(snapshot_path, cart_path, tmp_path):
    """Test saving a checkout quote."""
    processor = JSONProcessor()
    snapshot = await processor.load_snapshot(snapshot_path)
    request = await processor.load_cart_request(cart_path)
    quote = CheckoutService.quote(snapshot, request, now=datetime(2026, 10, 17, tzinfo=timezone.utc))
    
    output_path = await processor.save_quote_json(quote, str(tmp_path / "out" / "quote.json"))
    
    assert os.path.exists(output_path)
    with open(output_path, encoding="utf-8") as f:
        saved = json.load(f)
    assert Decimal(saved["totals"]["grand_total"]) == Decimal("74.4")
    assert saved["can_submit"] is True


@pytest.mark.asyncio
async def test_get_all_json_files(tmp_path):
    """Test getting all JSON files from a directory."""
    processor = JSONProcessor()
    
    (tmp_path / "test1.json").write_text(json.dumps({"test": 1}))
    (tmp_path / "test2.json").write_text(json.dumps({"test": 2}))
    (tmp_path / "notes.txt").write_text("ignored")
    
    json_files = await processor.get_all_json_files(str(tmp_path))
    
    assert len(json_files) == 2
    assert any("test1.json" in f for f in json_files)
    assert any("test2.json" in f for f in json_files)
