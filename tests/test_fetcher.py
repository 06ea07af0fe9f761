# File: tests/test_fetcher.py
from __future__ import annotations

import pytest
from aiohttp import ClientSession, web

from lawtree.crawler.fetcher import Fetcher
from lawtree.errors import PermanentError, RateLimitedError, TransientError, UnparseableError


def scripted(*responses):
    """Handler replaying *responses* in order, repeating the last one."""
    queue = list(responses)

    async def handler(_):
        step = queue.pop(0) if len(queue) > 1 else queue[0]
        status, headers = step if isinstance(step, tuple) else (step, {})
        if status == 200:
            return web.Response(text="<h1>Done</h1>", content_type="text/html")
        return web.Response(status=status, headers=headers)

    return handler


async def fetch(config, clock, url):
    async with ClientSession() as session:
        fetcher = Fetcher(session, config, sleep=clock.sleep, clock=clock)
        return await fetcher.fetch(url)


@pytest.mark.asyncio()
async def test_success_returns_parsed_document(basic_config, fake_clock, fake_site):
    await fake_site.start({"/ok": "<html><body><h1>Title 1</h1></body></html>"})
    doc = await fetch(basic_config, fake_clock, fake_site.url("/ok"))
    assert doc.find("h1").get_text() == "Title 1"
    assert fake_clock.sleeps == []


@pytest.mark.asyncio()
@pytest.mark.parametrize("status", [400, 403, 404])
async def test_client_error_is_not_retried(basic_config, fake_clock, fake_site, status):
    await fake_site.start({"/bad": scripted(status)})
    with pytest.raises(PermanentError) as info:
        await fetch(basic_config, fake_clock, fake_site.url("/bad"))
    assert info.value.status == status
    assert fake_site.hits["/bad"] == 1
    assert fake_clock.sleeps == []


@pytest.mark.asyncio()
async def test_retry_on_server_error(basic_config, fake_clock, fake_site):
    await fake_site.start({"/flaky": scripted(500, 502, 200)})
    doc = await fetch(basic_config, fake_clock, fake_site.url("/flaky"))
    assert doc.find("h1").get_text() == "Done"
    assert fake_site.hits["/flaky"] == 3
    assert fake_clock.sleeps == [0.5, 1.0]


@pytest.mark.asyncio()
async def test_retry_after_replaces_delay_and_resets_backoff(basic_config, fake_clock, fake_site):
    await fake_site.start(
        {"/limited": scripted(500, 500, (429, {"Retry-After": "5"}), 503, 200)}
    )
    await fetch(basic_config, fake_clock, fake_site.url("/limited"))
    assert fake_site.hits["/limited"] == 5
    # 5 s from the header, then the schedule starts over at the initial interval
    assert fake_clock.sleeps == [0.5, 1.0, 5.0, 0.5]


@pytest.mark.asyncio()
async def test_rate_limit_without_header_uses_backoff(basic_config, fake_clock, fake_site):
    await fake_site.start({"/limited": scripted((429, {"Retry-After": "later"}), 200)})
    await fetch(basic_config, fake_clock, fake_site.url("/limited"))
    assert fake_clock.sleeps == [0.5]


@pytest.mark.asyncio()
async def test_retry_after_beyond_budget_raises_rate_limited(basic_config, fake_clock, fake_site):
    await fake_site.start({"/limited": scripted((429, {"Retry-After": "100"}))})
    with pytest.raises(RateLimitedError) as info:
        await fetch(basic_config, fake_clock, fake_site.url("/limited"))
    assert info.value.retry_after == 100.0
    assert fake_site.hits["/limited"] == 1


@pytest.mark.asyncio()
async def test_retries_exhausted(basic_config, fake_clock, fake_site):
    await fake_site.start({"/down": scripted(503)})
    with pytest.raises(TransientError):
        await fetch(basic_config, fake_clock, fake_site.url("/down"))
    # 0.5 + 1 + 2 + 4 * 6 = 27.5 s slept; one more 4 s delay would exceed 30 s
    assert fake_clock.sleeps == [0.5, 1.0, 2.0] + [4.0] * 6
    assert fake_site.hits["/down"] == 10


@pytest.mark.asyncio()
async def test_connection_error_is_transient(basic_config, fake_clock, unused_tcp_port):
    with pytest.raises(TransientError):
        await fetch(basic_config, fake_clock, f"http://127.0.0.1:{unused_tcp_port}/nowhere")
    assert len(fake_clock.sleeps) == 9


@pytest.mark.asyncio()
async def test_undecodable_body_is_not_retried(basic_config, fake_clock, fake_site):
    async def garbage(_):
        return web.Response(body=b"<h1>\xff\xfe\xfa</h1>", content_type="text/html", charset="utf-8")

    await fake_site.start({"/garbage": garbage})
    with pytest.raises(UnparseableError):
        await fetch(basic_config, fake_clock, fake_site.url("/garbage"))
    assert fake_site.hits["/garbage"] == 1
    assert fake_clock.sleeps == []


@pytest.mark.asyncio()
@pytest.mark.parametrize("url", ["mailto:clerk@example.com", "javascript:void(0)", "ftp://example.com/x"])
async def test_non_http_url_fails_without_request(basic_config, fake_clock, url):
    with pytest.raises(PermanentError) as info:
        await fetch(basic_config, fake_clock, url)
    assert info.value.status is None
    assert info.value.url == url
    assert fake_clock.sleeps == []
