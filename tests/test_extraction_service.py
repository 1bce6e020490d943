import asyncio

import pytest

from product_extractor.core.errors import ExhaustedRetriesError, ParseError, TransientNetworkError
from product_extractor.prompts.prompt import SAMPLE_DESCRIPTION

from conftest import SPEEDSTER, make_service


def test_espresso_machine_scenario(speedster_json):
    service = make_service(["```json\n" + speedster_json + "\n```"])
    result = asyncio.run(service.extract(SAMPLE_DESCRIPTION))
    assert result.name == "Kees Van Der Westen Speedster"
    assert result.price == 14499
    assert len(result.features) > 0


def test_user_message_is_the_description(speedster_json):
    service = make_service([speedster_json])
    asyncio.run(service.extract(SAMPLE_DESCRIPTION))
    packet = service.model_client.provider.packets[0]
    assert [m.role for m in packet.messages] == ["system", "user"]
    assert packet.messages[1].content == SAMPLE_DESCRIPTION


def test_transient_failures_then_success(speedster_json):
    service = make_service(
        [TransientNetworkError("reset"), TransientNetworkError("reset"), speedster_json],
        max_retries=2,
    )
    assert asyncio.run(service.extract("anything")).model_dump() == SPEEDSTER


def test_every_attempt_failing_surfaces_exhausted_retries():
    service = make_service([TransientNetworkError("down", status_code=502)], max_retries=2)
    with pytest.raises(ExhaustedRetriesError):
        asyncio.run(service.extract("anything"))


def test_partial_result_is_a_failure():
    service = make_service(['{"name": "Speedster", "features": ["lever"]}'])
    with pytest.raises(ParseError):
        asyncio.run(service.extract("anything"))


def test_concurrent_extractions_are_independent(speedster_json):
    service = make_service([speedster_json])

    async def run_many():
        return await asyncio.gather(*(service.extract(f"product {i}") for i in range(5)))

    results = asyncio.run(run_many())
    assert all(r.model_dump() == SPEEDSTER for r in results)
    sent = sorted(p.messages[1].content for p in service.model_client.provider.packets)
    assert sent == [f"product {i}" for i in range(5)]
