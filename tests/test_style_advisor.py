import pytest

from doc_advisor.style import advisor
from doc_advisor.style.advisor import StyleGuideAdvisor


def test_every_category_has_layer_naming_validation_and_transactions():
    conventions = advisor.load_conventions()
    for category in advisor.list_categories():
        entry = conventions[category]
        assert entry["layer"]
        assert entry["naming"]
        assert entry["validation"]
        assert entry["transactions"]
    assert "generic" not in advisor.list_categories()


@pytest.mark.parametrize(
    "description, category",
    [
        ("OrderRepository", "outbound_port"),
        ("SqlAlchemy repository implementation", "outbound_adapter"),
        ("OrderController", "inbound_adapter"),
        ("Money value object", "value_object"),
        ("PlaceOrderCommand", "dto"),
        ("use case interface for placing orders", "inbound_port"),
        ("OrderPlaced domain event", "domain_event"),
    ],
)
def test_detect_category(description, category):
    assert advisor.detect_category(description) == category


def test_advise_by_category_key():
    advice = advisor.advise("use_case")
    assert advice.recognized is True
    assert advice.category == "use_case"
    assert "application" in advice.layer
    assert "transaction boundary" in advice.transactions.lower()


def test_unrecognized_category_returns_generic_guidance():
    advice = StyleGuideAdvisor().advise("banana smoothie")
    assert advice.recognized is False
    assert advice.category == "generic"
    assert advice.naming


def test_render_advice_markdown():
    text = advisor.render_advice(advisor.advise("entity"))
    assert text.startswith("## Domain entity")
    assert "**Layer:** domain" in text
    assert "```python" in text
    generic = advisor.render_advice(advisor.advise(""))
    assert "(generic guidance)" in generic
