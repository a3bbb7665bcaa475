import httpx
import pytest

from pay402.engine.exceptions import InterceptorError, RequestFailedError
from pay402.engine.interceptors import InterceptorChain, is_payment_required
from pay402.schemas.requests import RequestConfig


def make_failure(status_code: int = 402) -> RequestFailedError:
    return RequestFailedError(
        f"Request failed with status code {status_code}",
        config=RequestConfig(method="GET", url="/resource"),
        response=httpx.Response(status_code),
    )


@pytest.mark.asyncio
async def test_higher_priority_runs_first_then_most_recent():
    chain = InterceptorChain()
    order = []

    def recorder(label):
        async def on_rejected(error):
            order.append(label)
            raise error
        return on_rejected

    chain.use(on_rejected=recorder("first-registered"))
    chain.use(on_rejected=recorder("high-priority"), priority=10)
    chain.use(on_rejected=recorder("last-registered"))

    failure = make_failure()
    with pytest.raises(RequestFailedError) as exc_info:
        await chain.run(failure)

    assert exc_info.value is failure
    assert order == ["high-priority", "last-registered", "first-registered"]


@pytest.mark.asyncio
async def test_resolved_failure_skips_remaining_rejected_handlers():
    chain = InterceptorChain()
    seen = []

    async def fallback(error):
        seen.append(error)
        raise error

    async def resolver(error):
        return httpx.Response(200, json={"ok": True})

    async def tag(response):
        response.headers["x-seen"] = "1"
        return response

    chain.use(on_fulfilled=tag, priority=-1)
    chain.use(on_rejected=fallback)
    chain.use(on_rejected=resolver)

    response = await chain.run(make_failure())

    assert response.status_code == 200
    assert response.headers["x-seen"] == "1"
    assert seen == []


@pytest.mark.asyncio
async def test_new_error_replaces_failure_for_later_handlers():
    chain = InterceptorChain()
    seen = []

    async def later(error):
        seen.append(error)
        raise error

    async def replace(error):
        raise ValueError("payer declined")

    chain.use(on_rejected=later)
    chain.use(on_rejected=replace)

    with pytest.raises(ValueError, match="payer declined"):
        await chain.run(make_failure())
    assert isinstance(seen[0], ValueError)


@pytest.mark.asyncio
async def test_predicate_filters_rejected_handler():
    chain = InterceptorChain()
    calls = []

    async def on_rejected(error):
        calls.append(error)
        raise error

    chain.use(on_rejected=on_rejected, predicate=is_payment_required)

    with pytest.raises(RequestFailedError):
        await chain.run(make_failure(500))
    assert calls == []

    with pytest.raises(RequestFailedError):
        await chain.run(make_failure(402))
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_eject_removes_interceptor():
    chain = InterceptorChain()

    async def resolver(error):
        return httpx.Response(200)

    handle = chain.use(on_rejected=resolver)
    chain.eject(handle)

    assert len(chain) == 0
    with pytest.raises(RequestFailedError):
        await chain.run(make_failure())


@pytest.mark.asyncio
async def test_response_passes_through_empty_chain():
    response = httpx.Response(204)

    assert await InterceptorChain().run(response) is response


def test_registration_requires_coroutine_handlers():
    chain = InterceptorChain()

    with pytest.raises(InterceptorError):
        chain.use()

    with pytest.raises(InterceptorError):
        chain.use(on_rejected=lambda error: None)


def test_is_payment_required():
    assert is_payment_required(make_failure(402))
    assert not is_payment_required(make_failure(401))
    assert not is_payment_required(ValueError("nope"))
    assert not is_payment_required(
        RequestFailedError("transport", config=RequestConfig(method="GET", url="/"))
    )
