"""
Tests for prompt building.
"""

import json

from askcart.core.reasoning import HistoryEntry
from askcart.core.reasoning.prompts import (
    build_chat_prompt,
    build_comparison_prompt,
    build_query_analysis_prompt,
    build_system_prompt,
    format_conversation_history,
    format_price,
    format_product_context,
    price_as_number,
)
from askcart.db.models import Product


class TestFormatPrice:
    def test_cents(self):
        assert format_price(199900) == "$1999.00"
        assert format_price(1299) == "$12.99"
        assert format_price(5) == "$0.05"
        assert format_price(0) == "$0.00"

    def test_json_number(self):
        assert price_as_number(199900) == 1999
        assert price_as_number(1299) == 12.99
        assert price_as_number(5) == 0.05
        assert isinstance(price_as_number(2500), int)


class TestProductContext:
    def test_lines(self):
        products = [
            Product(name="MacBook Pro", price=199900, description="14-inch laptop"),
            Product(name="Gift Card", price=2500, description=None),
        ]

        text = format_product_context(products)

        assert text.splitlines() == [
            "- MacBook Pro: $1999.00 - 14-inch laptop",
            "- Gift Card: $25.00",
        ]

    def test_empty_catalog(self):
        assert format_product_context([]) == "No products available."

    def test_system_prompt_carries_persona_and_catalog(self):
        prompt = build_system_prompt("AskCart AI", [Product(name="Budget Laptop", price=64900)])
        assert "You are AskCart AI" in prompt
        assert "- Budget Laptop: $649.00" in prompt


class TestChatPrompt:
    def test_history_in_order(self):
        history = [
            HistoryEntry(role="user", content="Hi"),
            HistoryEntry(role="assistant", content="Hello! How can I help?"),
        ]

        prompt = build_chat_prompt("I need a laptop", history)

        assert "user: Hi\nassistant: Hello! How can I help?" in prompt
        assert "Current user message: I need a laptop" in prompt

    def test_first_turn(self):
        assert format_conversation_history([]) == "This is the start of the conversation."
        assert "This is the start of the conversation." in build_chat_prompt("Hi", [])


class TestComparisonPrompt:
    def test_products_as_records(self):
        products = [
            Product(name="A", price=1999, description="first", specifications={"ram": "8GB"}),
            Product(name="B", price=2500, description="second", specifications=None),
        ]

        prompt = build_comparison_prompt(products)
        start, end = prompt.index("["), prompt.rindex("]") + 1
        records = json.loads(prompt[start:end])

        assert records[0] == {
            "name": "A",
            "price": 19.99,
            "description": "first",
            "specifications": {"ram": "8GB"},
        }
        assert records[1]["price"] == 25


def test_query_analysis_prompt_quotes_query():
    prompt = build_query_analysis_prompt("laptop under $1500")
    assert 'Query: "laptop under $1500"' in prompt
    assert '"priceRange"' in prompt
