"""Background reader for the SIPp standard error pipe."""

import codecs
import logging
import os
import queue
import select
import threading
from typing import BinaryIO, Optional, TextIO

log = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4096
POLL_INTERVAL = 0.05


class StderrReader(threading.Thread):
    """Drains a child's stderr pipe while the main thread waits for exit.

    Chunks are handed to the main thread through a queue. When a relay
    stream is given, every chunk is also written to it as soon as it is
    read.
    """

    def __init__(
        self,
        stream: BinaryIO,
        relay: Optional[TextIO] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """Initialize the reader.

        Args:
            stream: Binary pipe connected to the child's stderr.
            relay: Text stream receiving a live copy (None = capture only).
            chunk_size: Maximum bytes per read.
        """
        super().__init__(name="sipp-stderr-reader", daemon=True)
        self._stream = stream
        self._relay = relay
        self._chunk_size = chunk_size
        self._chunks: queue.Queue[Optional[bytes]] = queue.Queue()
        self._cancelled = threading.Event()

    def run(self) -> None:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        fd = self._stream.fileno()
        try:
            while not self._cancelled.is_set():
                ready, _, _ = select.select([fd], [], [], POLL_INTERVAL)
                if not ready:
                    continue
                chunk = os.read(fd, self._chunk_size)
                if not chunk:
                    break
                self._chunks.put(chunk)
                if self._relay is not None:
                    self._write_relay(decoder.decode(chunk))
            if self._relay is not None:
                self._write_relay(decoder.decode(b"", final=True))
        finally:
            self._stream.close()
            self._chunks.put(None)

    def _write_relay(self, text: str) -> None:
        if text:
            self._relay.write(text)
            self._relay.flush()

    def cancel(self) -> None:
        """Stop reading at the next poll, even if the pipe is still open."""
        self._cancelled.set()

    def collect(self, timeout: Optional[float] = None) -> str:
        """Return everything read once the stream ends.

        Args:
            timeout: Seconds to wait for end of stream before giving up on
                the rest of it (None = wait indefinitely). Processes that
                inherited the pipe can keep it open after the child exits.

        Returns:
            Decoded stderr text captured so far.
        """
        self.join(timeout)
        if self.is_alive():
            log.debug("stderr still open after %ss, stopped reading", timeout)
            self.cancel()
            self.join()

        data = bytearray()
        while (chunk := self._chunks.get()) is not None:
            data += chunk
        return data.decode("utf-8", errors="replace")
