"""
Prompts for the shopping assistant.
Every call carries the full context; the model keeps no state between calls.
"""

import json
from typing import Iterable, Protocol


class ProductLike(Protocol):
    name: str
    price: int
    description: str | None


class TurnLike(Protocol):
    role: str
    content: str


SYSTEM_PROMPT = """You are {assistant_name}, a helpful e-commerce shopping assistant. Your role is to:
1. Help customers find products that match their needs
2. Provide detailed product information and comparisons
3. Answer questions about shipping, returns, and policies
4. Offer personalized recommendations based on customer preferences

Available products in the catalog:
{catalog}

Guidelines:
- Be friendly, helpful, and conversational
- Always recommend specific products when relevant, using their exact catalog names
- Provide clear reasoning for your recommendations
- Keep responses concise but informative
- If asked about products not in catalog, politely explain limitations"""

CHAT_PROMPT_TEMPLATE = """Conversation history:
{history}

Current user message: {message}

Respond with helpful information and product recommendations if relevant."""

COMPARISON_PROMPT_TEMPLATE = """Compare these products and provide a helpful comparison for a customer:

{products}

Provide a clear, concise comparison highlighting:
- Key differences in features and specifications
- Price value analysis
- Which product might be better for different use cases
- Pros and cons of each option

Format the response in a customer-friendly way."""

QUERY_ANALYSIS_PROMPT = """Analyze this product search query and extract structured information:
Query: "{query}"

Return a JSON response with:
- category: product category if mentioned
- priceRange: {{"min", "max"}} if price mentioned (in dollars)
- features: array of specific features or requirements mentioned
- intent: one of "search", "compare", "support", "general"

Example: "laptop under $1500 for gaming" -> {{"category":"laptop","priceRange":{{"min":0,"max":1500}},"features":["gaming"],"intent":"search"}}"""


def format_price(minor_units: int) -> str:
    """Format integer cents as dollars without going through float."""
    sign = "-" if minor_units < 0 else ""
    major, minor = divmod(abs(minor_units), 100)
    return f"{sign}${major}.{minor:02d}"


def price_as_number(minor_units: int) -> int | float:
    """Major-unit price as a JSON number: 199900 -> 1999, 1299 -> 12.99."""
    major, minor = divmod(abs(minor_units), 100)
    sign = -1 if minor_units < 0 else 1
    if minor == 0:
        return sign * major
    return sign * float(f"{major}.{minor:02d}")


def format_product_context(products: Iterable[ProductLike]) -> str:
    """Format product list for context."""
    lines = []
    for p in products:
        line = f"- {p.name}: {format_price(p.price)}"
        if p.description:
            line += f" - {p.description}"
        lines.append(line)

    if not lines:
        return "No products available."
    return "\n".join(lines)


def format_conversation_history(history: Iterable[TurnLike]) -> str:
    lines = [f"{turn.role}: {turn.content}" for turn in history]
    if not lines:
        return "This is the start of the conversation."
    return "\n".join(lines)


def build_system_prompt(assistant_name: str, products: Iterable[ProductLike]) -> str:
    return SYSTEM_PROMPT.format(
        assistant_name=assistant_name,
        catalog=format_product_context(products),
    )


def build_chat_prompt(message: str, history: Iterable[TurnLike]) -> str:
    return CHAT_PROMPT_TEMPLATE.format(
        history=format_conversation_history(history),
        message=message,
    )


def build_comparison_prompt(products: Iterable) -> str:
    """Build comparison prompt from structured product records."""
    records = [
        {
            "name": p.name,
            "price": price_as_number(p.price),
            "description": p.description,
            "specifications": p.specifications,
        }
        for p in products
    ]
    return COMPARISON_PROMPT_TEMPLATE.format(
        products=json.dumps(records, indent=2, ensure_ascii=False)
    )


def build_query_analysis_prompt(query: str) -> str:
    return QUERY_ANALYSIS_PROMPT.format(query=query)
