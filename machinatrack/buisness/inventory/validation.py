from typing import Any, Dict

from machinatrack.buisness.core.validation import PayloadValidator


def _validate_stock_item(payload: Any, partial: bool, message: str) -> Dict[str, Any]:
    validator = PayloadValidator(payload, partial=partial)
    validator.string('name', required=True, max_length=200)
    validator.string('type', required=True, max_length=100)
    validator.string('material', max_length=100)
    validator.string('size', max_length=100)
    validator.integer('quantity', required=True, minimum=0)
    validator.integer('minQuantity', required=True, minimum=0)
    validator.string('location', required=True, max_length=200)
    validator.number('toolLifeHours', minimum=0)
    validator.number('remainingToolLifeHours', minimum=0)
    validator.date('lastUsedDate')
    validator.date('endOfLifeDate')
    validator.string('supplier', max_length=200)
    validator.number('costPerUnit', minimum=0)
    validator.string('imageUrl', max_length=500)
    validator.string('notes')
    return validator.result(message)


def validate_consumable(payload: Any, partial: bool = False) -> Dict[str, Any]:
    return _validate_stock_item(payload, partial, "Invalid consumable data")


def validate_cutting_tool(payload: Any, partial: bool = False) -> Dict[str, Any]:
    return _validate_stock_item(payload, partial, "Invalid cutting tool data")


def validate_quantity(payload: Any) -> int:
    validator = PayloadValidator(payload)
    validator.integer('quantity', required=True, minimum=0)
    return validator.result("Invalid quantity")['quantity']
