import pytest

from llm_prices import normalize


class TestPerMillion:
    def test_string_per_token_price(self):
        assert normalize.per_million("0.000002") == pytest.approx(2.0)

    def test_numeric_per_token_price(self):
        assert normalize.per_million(0.0000005) == pytest.approx(0.5)

    def test_zero_is_free_not_unknown(self):
        assert normalize.per_million("0") == 0
        assert normalize.per_million(0) == 0

    @pytest.mark.parametrize("value", [None, "", "  ", "n/a", "-1", -0.5, True])
    def test_unknown_prices_are_none(self, value):
        assert normalize.per_million(value) is None

    def test_price_already_per_million_is_unscaled(self):
        assert normalize.price(0.88) == pytest.approx(0.88)
        assert normalize.price(None) is None


class TestContextLength:
    def test_first_non_null_field_wins(self):
        entry = {"max_model_len": None, "context_length": 8192}
        assert normalize.context_length(entry, "max_model_len", "context_length") == 8192

    def test_field_order_is_respected(self):
        entry = {"max_model_len": 4096, "context_length": 8192}
        assert normalize.context_length(entry, "max_model_len", "context_length") == 4096

    def test_missing_everywhere(self):
        assert normalize.context_length({}, "context_length") is None

    def test_non_numeric_is_skipped(self):
        entry = {"context_window": "lots", "context_length": "32768"}
        assert normalize.context_length(entry, "context_window", "context_length") == 32768


def test_description_defaults_to_empty():
    assert normalize.description({}) == ""
    assert normalize.description({"description": None}) == ""
    assert normalize.description({"description": "fast"}) == "fast"
