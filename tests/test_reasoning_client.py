"""
Tests for ReasoningClient against a scripted LLM.
"""

import json

import pytest

from askcart.core.errors import InvalidArgument, ReasoningUnavailable
from askcart.core.reasoning import HistoryEntry, Intent, NameMatchExtractor, ReasoningClient
from askcart.db.models import Product
from tests.fakes import FakeLLM, run

PRODUCTS = [
    Product(id="p1", name="MacBook Pro", price=199900, description="Laptop"),
    Product(id="p2", name="iPhone 15 Pro", price=99900, description="Phone"),
    Product(id="p3", name="Budget Laptop", price=64900, description="Laptop"),
]


class TestGenerateReply:
    def test_reply_with_recommendations(self):
        llm = FakeLLM(reply="Under $1000 I'd pick the Budget Laptop.")
        client = ReasoningClient(llm, timeout=1)

        reply = run(client.generate_reply("I need a laptop under $1000", [], PRODUCTS))

        assert reply.content == "Under $1000 I'd pick the Budget Laptop."
        assert [p.id for p in reply.recommendations] == ["p3"]
        assert reply.intent == Intent.SEARCH

    def test_prompt_carries_context(self):
        llm = FakeLLM()
        client = ReasoningClient(llm, timeout=1, assistant_name="Shopper")
        history = [HistoryEntry(role="user", content="Hi"), HistoryEntry(role="assistant", content="Hello")]

        run(client.generate_reply("Any phones?", history, PRODUCTS))

        [call] = llm.calls
        assert "You are Shopper" in call["system_prompt"]
        assert "- iPhone 15 Pro: $999.00 - Phone" in call["system_prompt"]
        assert "user: Hi\nassistant: Hello" in call["prompt"]
        assert "Current user message: Any phones?" in call["prompt"]

    def test_recommendation_cap(self):
        llm = FakeLLM(reply="MacBook Pro, iPhone 15 Pro or Budget Laptop")
        client = ReasoningClient(llm, timeout=1, extractor=NameMatchExtractor(limit=2))

        reply = run(client.generate_reply("Hello", [], PRODUCTS))

        assert len(reply.recommendations) == 2
        assert reply.intent == Intent.GENERAL

    def test_provider_failure(self):
        client = ReasoningClient(FakeLLM(error=RuntimeError("quota exceeded")), timeout=1)

        with pytest.raises(ReasoningUnavailable):
            run(client.generate_reply("Hi", [], PRODUCTS))

    def test_timeout(self):
        client = ReasoningClient(FakeLLM(delay=1.0), timeout=0.05)

        with pytest.raises(ReasoningUnavailable, match="too long"):
            run(client.generate_reply("Hi", [], PRODUCTS))

    def test_empty_output(self):
        client = ReasoningClient(FakeLLM(reply="   "), timeout=1)

        with pytest.raises(ReasoningUnavailable):
            run(client.generate_reply("Hi", [], PRODUCTS))


class TestCompareProducts:
    def test_needs_two_products(self):
        llm = FakeLLM()
        client = ReasoningClient(llm, timeout=1)

        with pytest.raises(InvalidArgument):
            run(client.compare_products(PRODUCTS[:1]))
        assert llm.calls == []

    def test_comparison(self):
        llm = FakeLLM(reply="The MacBook Pro is faster; the Budget Laptop is cheaper.")
        client = ReasoningClient(llm, timeout=1)

        text = run(client.compare_products([PRODUCTS[0], PRODUCTS[2]]))

        assert text.startswith("The MacBook Pro")
        assert '"price": 1999,' in llm.calls[0]["prompt"]

    def test_failure(self):
        client = ReasoningClient(FakeLLM(error=ConnectionError("down")), timeout=1)

        with pytest.raises(ReasoningUnavailable):
            run(client.compare_products(PRODUCTS[:2]))


class TestAnalyzeQuery:
    def test_parses_model_json(self):
        payload = {
            "category": "laptop",
            "priceRange": {"min": 0, "max": 1500},
            "features": ["gaming"],
            "intent": "search",
        }
        llm = FakeLLM(reply=f"Sure! {json.dumps(payload)}")
        client = ReasoningClient(llm, timeout=1)

        analysis = run(client.analyze_query("laptop under $1500 for gaming"))

        assert analysis.intent == Intent.SEARCH
        assert analysis.category == "laptop"
        assert analysis.price_range == {"min": 0, "max": 1500}
        assert analysis.features == ["gaming"]
        assert llm.calls[0]["json_mode"] is True

    def test_falls_back_on_failure(self):
        client = ReasoningClient(FakeLLM(error=RuntimeError("boom")), timeout=1)

        analysis = run(client.analyze_query("compare phones"))

        assert analysis.intent == Intent.COMPARE
        assert analysis.features == []
        assert analysis.category is None

    def test_falls_back_on_garbage(self):
        client = ReasoningClient(FakeLLM(reply="no idea"), timeout=1)

        analysis = run(client.analyze_query("what is your shipping policy"))

        assert analysis.intent == Intent.SUPPORT
        assert analysis.price_range is None
