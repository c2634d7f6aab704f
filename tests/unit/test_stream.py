# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import gc
import json

import pytest

from simplenet import SimpleNetworkClient, StaticEndpoint
from simplenet.errors import HTTPError, HTTPErrorKind, RequestError, RequestErrorKind
from simplenet.http.adapters import StubTransport
from simplenet.http.models import HttpResponse
from simplenet.stream import RequestStream

BASE = "https://api.x.test"


class Recorder:
    def __init__(self):
        self.events = []

    def on_value(self, value):
        self.events.append(("value", value))

    def on_error(self, error):
        self.events.append(("error", error))

    def on_complete(self):
        self.events.append(("complete", None))


def _ok(payload) -> HttpResponse:
    return HttpResponse(status_code=200, content=json.dumps(payload).encode())


@pytest.mark.anyio
async def test_stream_is_cold_until_subscribed():
    stub = StubTransport({f"{BASE}/items": _ok([1, 2])})
    client = SimpleNetworkClient(stub)

    stream = client.request_stream(StaticEndpoint(base_url=BASE, path="/items"), list[int])
    await asyncio.sleep(0)
    assert stub.requests == []

    recorder = Recorder()
    subscription = stream.subscribe(recorder.on_value, recorder.on_error, recorder.on_complete)
    await subscription.wait()

    assert recorder.events == [("value", [1, 2]), ("complete", None)]
    assert len(stub.requests) == 1
    assert subscription.done is True


@pytest.mark.anyio
async def test_each_subscription_performs_a_fresh_call():
    stub = StubTransport({f"{BASE}/items": _ok([1])})
    client = SimpleNetworkClient(stub)
    stream = client.request_stream(StaticEndpoint(base_url=BASE, path="/items"), list[int])

    first, second = Recorder(), Recorder()
    subs = [stream.subscribe(first.on_value, first.on_error), stream.subscribe(second.on_value, second.on_error)]
    for sub in subs:
        await sub.wait()

    assert first.events == [("value", [1])]
    assert second.events == [("value", [1])]
    assert len(stub.requests) == 2
    assert await stream.first() == [1]
    assert len(stub.requests) == 3


@pytest.mark.anyio
async def test_errors_become_a_single_failure_signal():
    stub = StubTransport({f"{BASE}/missing": HttpResponse(status_code=404)})
    client = SimpleNetworkClient(stub)

    recorder = Recorder()
    sub = client.request_stream(StaticEndpoint(base_url=BASE, path="/missing"), dict).subscribe(
        recorder.on_value, recorder.on_error, recorder.on_complete
    )
    await sub.wait()

    assert len(recorder.events) == 1
    kind, error = recorder.events[0]
    assert kind == "error"
    assert isinstance(error, HTTPError)
    assert error.kind is HTTPErrorKind.NOT_FOUND


@pytest.mark.anyio
async def test_error_without_handler_surfaces_from_wait():
    stub = StubTransport({f"{BASE}/missing": HttpResponse(status_code=500)})
    client = SimpleNetworkClient(stub)
    sub = client.request_raw_stream(StaticEndpoint(base_url=BASE, path="/missing")).subscribe(lambda _: None)
    with pytest.raises(HTTPError):
        await sub.wait()


@pytest.mark.anyio
async def test_raw_stream_emits_passthrough_values():
    stub = StubTransport({f"{BASE}/posts/1": HttpResponse(status_code=204, content=b"garbage")})
    client = SimpleNetworkClient(stub)
    endpoint = StaticEndpoint(base_url=BASE, path="/posts/1", method="DELETE")

    recorder = Recorder()
    await client.request_raw_stream(endpoint).subscribe(recorder.on_value, recorder.on_error, recorder.on_complete).wait()
    assert recorder.events == [("value", None), ("complete", None)]

    values = [value async for value in client.request_raw_stream(endpoint, bytes)]
    assert values == [b"garbage"]


@pytest.mark.anyio
async def test_async_iteration_raises_errors():
    stub = StubTransport({f"{BASE}/flag": _ok(True)})
    client = SimpleNetworkClient(stub)
    with pytest.raises(RequestError) as exc:
        async for _ in client.request_raw_stream(StaticEndpoint(base_url=BASE, path="/flag"), dict):
            pass
    assert exc.value.kind is RequestErrorKind.MISMATCH_ERROR_IN_RETURN_TYPE


@pytest.mark.anyio
async def test_cancel_before_completion_delivers_nothing_and_cancels_transport():
    stub = StubTransport({f"{BASE}/slow": _ok({"a": 1})}, gate=asyncio.Event())
    client = SimpleNetworkClient(stub)
    stream = client.request_stream(StaticEndpoint(base_url=BASE, path="/slow"), dict)

    cancelled, survivor = Recorder(), Recorder()
    doomed = stream.subscribe(cancelled.on_value, cancelled.on_error, cancelled.on_complete)
    other = stream.subscribe(survivor.on_value, survivor.on_error, survivor.on_complete)
    while stub.in_flight < 2:
        await asyncio.sleep(0)

    doomed.cancel()
    await doomed.wait()
    assert doomed.cancelled is True
    assert stub.cancelled == 1
    assert stub.in_flight == 1

    stub.gate.set()
    await other.wait()

    assert cancelled.events == []
    assert survivor.events == [("value", {"a": 1}), ("complete", None)]


@pytest.mark.anyio
async def test_subscription_after_client_closed_fails_with_unknown():
    stub = StubTransport({f"{BASE}/items": _ok([])})
    client = SimpleNetworkClient(stub)
    stream = client.request_stream(StaticEndpoint(base_url=BASE, path="/items"), list)
    await client.aclose()

    recorder = Recorder()
    await stream.subscribe(recorder.on_value, recorder.on_error).wait()

    assert len(recorder.events) == 1
    assert recorder.events[0][0] == "error"
    assert recorder.events[0][1].kind is RequestErrorKind.UNKNOWN
    assert stub.requests == []


@pytest.mark.anyio
async def test_discarded_subscription_still_delivers():
    release = asyncio.Event()
    delivered = asyncio.Event()
    recorder = Recorder()

    async def factory():
        await release.wait()
        return "done"

    def on_value(value):
        recorder.on_value(value)
        delivered.set()

    RequestStream(factory).subscribe(on_value, recorder.on_error)
    await asyncio.sleep(0)
    gc.collect()
    release.set()
    await asyncio.wait_for(delivered.wait(), timeout=1)

    assert recorder.events == [("value", "done")]


@pytest.mark.anyio
async def test_request_stream_over_plain_coroutine_factory():
    calls = []

    async def factory():
        calls.append(1)
        return len(calls)

    stream = RequestStream(factory)
    assert [v async for v in stream] == [1]
    assert [v async for v in stream] == [2]
    assert await stream.first() == 3
