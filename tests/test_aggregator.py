import logging

import pytest

from llm_prices.aggregator import ModelAggregator
from llm_prices.config import (
    GROQ_MODELS_URL,
    OPENROUTER_MODELS_URL,
    REPLICATE_MODELS_URL,
    TOGETHER_MODELS_URL,
    Credentials,
)
from llm_prices.providers.together import TogetherProvider
from llm_prices.table import apply_view, is_free

ALL_KEYS = Credentials(
    openrouter_api_key="or",
    together_api_key="tg",
    groq_api_key="gq",
    replicate_api_token="r8",
    hf_token="hf",
)


def _routes():
    return {
        OPENROUTER_MODELS_URL: (200, {"data": [{"id": "acme/alpha", "pricing": {}}]}),
        TOGETHER_MODELS_URL: (200, [{"id": "acme/beta"}]),
        GROQ_MODELS_URL: (200, {"data": [{"id": "gamma"}]}),
        REPLICATE_MODELS_URL: (200, {"results": [{"owner": "acme", "name": "delta"}]}),
    }


@pytest.mark.asyncio
async def test_no_credentials_yields_empty_list(upstream):
    fake = upstream(_routes())
    models = await ModelAggregator(Credentials(), transport=fake.transport).collect()
    assert models == []
    assert fake.calls == []


@pytest.mark.asyncio
async def test_providers_are_queried_in_fixed_order(upstream):
    fake = upstream(_routes())
    models = await ModelAggregator(ALL_KEYS, transport=fake.transport).collect()

    assert [m.provider for m in models] == [
        "OpenRouter",
        "Together AI",
        "Groq",
        "Replicate",
        "Hugging Face",
        "Hugging Face",
        "Hugging Face",
    ]
    assert fake.calls[:4] == [
        OPENROUTER_MODELS_URL,
        TOGETHER_MODELS_URL,
        GROQ_MODELS_URL,
        REPLICATE_MODELS_URL,
    ]


@pytest.mark.asyncio
async def test_failing_provider_does_not_affect_others(upstream, refuse):
    routes = _routes()
    routes[OPENROUTER_MODELS_URL] = (503, "maintenance")
    routes[GROQ_MODELS_URL] = refuse
    fake = upstream(routes)

    creds = Credentials(openrouter_api_key="or", together_api_key="tg", groq_api_key="gq",
                        replicate_api_token="r8")
    models = await ModelAggregator(creds, transport=fake.transport).collect()

    assert [(m.provider, m.model) for m in models] == [
        ("Together AI", "acme/beta"),
        ("Replicate", "acme/delta"),
    ]


@pytest.mark.asyncio
async def test_unexpected_provider_bug_is_contained(upstream, monkeypatch, caplog):
    def broken(self, entry):
        raise RuntimeError("mapping bug")

    monkeypatch.setattr(TogetherProvider, "to_record", broken)
    fake = upstream(_routes())
    creds = Credentials(together_api_key="tg", groq_api_key="gq")

    with caplog.at_level(logging.ERROR):
        models = await ModelAggregator(creds, transport=fake.transport).collect()

    assert [m.model for m in models] == ["gamma"]
    assert "Unexpected error fetching Together AI" in caplog.text


@pytest.mark.asyncio
async def test_hugging_face_curated_list(upstream):
    fake = upstream({})
    with_token = await ModelAggregator(Credentials(hf_token="hf"), transport=fake.transport).collect()
    assert [m.model for m in with_token] == [
        "meta-llama/Llama-3.3-70B-Instruct",
        "mistralai/Mistral-7B-Instruct-v0.2",
        "gpt2",
    ]
    # Every likes lookup 404'd; the records survive with null likes.
    assert all(m.hf_likes is None for m in with_token)


@pytest.mark.asyncio
async def test_per_token_prices_end_to_end(upstream):
    fake = upstream({
        OPENROUTER_MODELS_URL: (200, {"data": [
            {"id": "acme/paid", "pricing": {"prompt": "0.000002", "completion": "0.000002"}},
            {"id": "acme/free", "pricing": {"prompt": "0", "completion": "0"}},
        ]}),
    })
    models = await ModelAggregator(
        Credentials(openrouter_api_key="or"), transport=fake.transport
    ).collect()

    paid, free = models
    assert paid.prompt_price == pytest.approx(2.0)
    assert paid.completion_price == pytest.approx(2.0)
    assert free.prompt_price == 0 and free.completion_price == 0
    assert not is_free(paid)
    assert is_free(free)
    assert apply_view(models, free_only=True) == [free]


@pytest.mark.asyncio
async def test_prices_are_null_zero_or_non_negative(upstream):
    fake = upstream({
        OPENROUTER_MODELS_URL: (200, {"data": [
            {"id": "openrouter/auto", "pricing": {"prompt": "-1", "completion": "-1"}},
            {"id": "acme/x", "pricing": {"prompt": "0.0000015"}},
        ]}),
        GROQ_MODELS_URL: (200, {"data": [{"id": "llama-3.1-8b-instant"}]}),
    })
    models = await ModelAggregator(
        Credentials(openrouter_api_key="or", groq_api_key="gq"), transport=fake.transport
    ).collect()

    for m in models:
        for value in (m.prompt_price, m.completion_price):
            assert value is None or value >= 0
    assert models[0].prompt_price is None
    assert models[1].prompt_price == pytest.approx(1.5)
    assert models[1].completion_price is None
