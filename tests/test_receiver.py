from __future__ import annotations

import asyncio
import logging

import pytest

from tmi_client.errors.internal import TransportReadError, TransportWriteError
from tmi_client.irc.models import DecodedMessage
from tmi_client.irc.receiver import MessageStream, ReceiveLoop, split_lines
from tests.fixtures.fake_transport import FakeTransport


def _make_loop(transport: FakeTransport, replies: list[str] | None = None):
    sent = [] if replies is None else replies

    async def reply(line: str) -> None:
        sent.append(line)

    stream = MessageStream()
    return ReceiveLoop(transport, reply, stream, nick="bot"), stream, sent


async def _drain(stream: MessageStream):
    return [message async for message in stream]


def test_split_lines_handles_merged_frames():
    chunk = ":a!a@a PRIVMSG #r :one\r\n:b!b@b PRIVMSG #r :two\r\n"
    assert split_lines(chunk) == [":a!a@a PRIVMSG #r :one", ":b!b@b PRIVMSG #r :two"]


def test_split_lines_drops_blank_lines_and_bare_newlines():
    assert split_lines("PING :x\n\r\n:tmi.twitch.tv 001 bot :hi\r\n") == [
        "PING :x",
        ":tmi.twitch.tv 001 bot :hi",
    ]
    assert split_lines("\r\n") == []


@pytest.mark.asyncio
async def test_ping_is_answered_and_not_forwarded():
    transport = FakeTransport()
    loop, stream, sent = _make_loop(transport)
    transport.feed("PING :tmi.twitch.tv\r\n")
    transport.feed_eof()

    await loop.run()

    assert sent == ["PONG :tmi.twitch.tv"]
    assert await _drain(stream) == []


@pytest.mark.asyncio
async def test_pong_echoes_argument_verbatim():
    transport = FakeTransport()
    loop, stream, sent = _make_loop(transport)
    transport.feed("PING tmi.twitch.tv PING extra\r\n")
    transport.feed_eof()

    await loop.run()

    assert sent == ["PONG tmi.twitch.tv PING extra"]


@pytest.mark.asyncio
async def test_lowercase_ping_is_treated_as_message():
    transport = FakeTransport()
    loop, stream, sent = _make_loop(transport)
    transport.feed(":tmi.twitch.tv ping :x\r\n")
    transport.feed_eof()

    await loop.run()

    assert sent == []
    messages = await _drain(stream)
    assert [m.command for m in messages] == ["ping"]


@pytest.mark.asyncio
async def test_lines_in_one_read_are_enqueued_in_order():
    transport = FakeTransport()
    loop, stream, sent = _make_loop(transport)
    transport.feed(
        ":a!a@a PRIVMSG #r :one\r\nPING :tmi.twitch.tv\r\n:b!b@b PRIVMSG #r :two\r\n",
        ":c!c@c PRIVMSG #r :three\r\n",
    )
    transport.feed_eof()

    await loop.run()

    messages = await _drain(stream)
    assert [m.params for m in messages] == ["one", "two", "three"]
    assert [m.sender for m in messages] == ["a", "b", "c"]
    assert sent == ["PONG :tmi.twitch.tv"]


@pytest.mark.asyncio
async def test_malformed_line_is_skipped(caplog):
    caplog.set_level(logging.WARNING)
    transport = FakeTransport()
    loop, stream, _ = _make_loop(transport)
    transport.feed("@broken :a!a@a PRIVMSG #r :x\r\n:a!a@a PRIVMSG #r :ok\r\n")
    transport.feed_eof()

    await loop.run()

    messages = await _drain(stream)
    assert [m.params for m in messages] == ["ok"]
    assert any("malformed" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_clean_close_ends_stream_without_error():
    transport = FakeTransport()
    loop, stream, _ = _make_loop(transport)
    transport.feed_eof()

    await loop.run()

    assert stream.closed
    assert stream.error is None
    assert await stream.get() is None
    # Reads after the end keep returning None
    assert await stream.get() is None


@pytest.mark.asyncio
async def test_read_failure_ends_stream_with_error():
    transport = FakeTransport()
    loop, stream, _ = _make_loop(transport)
    transport.feed(":a!a@a PRIVMSG #r :before\r\n")
    transport.feed_error(ConnectionResetError("reset by peer"))

    await loop.run()

    messages = await _drain(stream)
    assert [m.params for m in messages] == ["before"]
    assert isinstance(stream.error, TransportReadError)
    assert isinstance(stream.error.__cause__, ConnectionResetError)


@pytest.mark.asyncio
async def test_failed_pong_does_not_stop_loop():
    transport = FakeTransport()
    stream = MessageStream()

    async def reply(line: str) -> None:
        raise TransportWriteError("write failed")

    loop = ReceiveLoop(transport, reply, stream)
    transport.feed("PING :x\r\n", ":a!a@a PRIVMSG #r :after\r\n")
    transport.feed_eof()

    await loop.run()

    messages = await _drain(stream)
    assert [m.params for m in messages] == ["after"]
    assert stream.error is None


@pytest.mark.asyncio
async def test_consumer_receives_while_loop_runs():
    transport = FakeTransport()
    loop, stream, _ = _make_loop(transport)
    task = asyncio.create_task(loop.run())

    transport.feed(":a!a@a PRIVMSG #r :first\r\n")
    first = await asyncio.wait_for(stream.get(), timeout=1)
    assert first is not None and first.params == "first"
    assert not task.done()

    transport.feed_eof()
    await asyncio.wait_for(task, timeout=1)
    assert await stream.get() is None


@pytest.mark.asyncio
async def test_put_after_close_is_rejected():
    stream = MessageStream()
    await stream.close()
    with pytest.raises(RuntimeError):
        await stream.put(DecodedMessage(sender="a", command="B"))


@pytest.mark.asyncio
async def test_close_on_full_stream_does_not_block():
    stream = MessageStream(maxsize=1)
    await stream.put(DecodedMessage(sender="a", command="PRIVMSG", params="one"))

    await asyncio.wait_for(stream.close(), timeout=1)

    assert [m.params for m in await _drain(stream)] == ["one"]
    assert await stream.get() is None
