"""Tests for the stderr reader thread."""

import io
import os
import time

from sipp_runner.runner.stream_reader import StderrReader


def pipe_with(data: bytes, close: bool = True):
    read_fd, write_fd = os.pipe()
    os.write(write_fd, data)
    if close:
        os.close(write_fd)
    return os.fdopen(read_fd, "rb"), write_fd


def test_collects_full_stream():
    stream, _ = pipe_with(b"Some error\nmore\n")
    reader = StderrReader(stream)
    reader.start()

    assert reader.collect() == "Some error\nmore\n"
    assert not reader.is_alive()


def test_empty_stream():
    stream, _ = pipe_with(b"")
    reader = StderrReader(stream)
    reader.start()

    assert reader.collect() == ""


def test_relays_exact_content():
    stream, _ = pipe_with(b"Some error\n")
    relay = io.StringIO()
    reader = StderrReader(stream, relay=relay, chunk_size=3)
    reader.start()

    assert reader.collect() == "Some error\n"
    assert relay.getvalue() == "Some error\n"


def test_relay_handles_split_multibyte_characters():
    stream, _ = pipe_with("café ✓\n".encode("utf-8"))
    relay = io.StringIO()
    reader = StderrReader(stream, relay=relay, chunk_size=1)
    reader.start()

    assert reader.collect() == "café ✓\n"
    assert relay.getvalue() == "café ✓\n"


def test_closes_stream():
    stream, _ = pipe_with(b"x")
    reader = StderrReader(stream)
    reader.start()
    reader.collect()

    assert stream.closed


def test_collect_gives_up_on_pipe_left_open():
    stream, write_fd = pipe_with(b"partial\n", close=False)
    try:
        reader = StderrReader(stream)
        reader.start()

        started = time.monotonic()
        text = reader.collect(timeout=0.2)
        elapsed = time.monotonic() - started
    finally:
        os.close(write_fd)

    assert text == "partial\n"
    assert elapsed < 1
    assert not reader.is_alive()
