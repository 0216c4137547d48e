"""
Token relay from the completion service to a text/event-stream response.

Each streamed request owns one StreamRelay and moves through
IDLE -> STREAMING -> COMPLETED, or to FAILED from IDLE (nothing sent yet, the
caller answers with an error status) or from STREAMING (an in-band error frame
is sent and the stream closes).
"""
import enum
import json
import logging
from typing import AsyncIterator, Callable, Iterator, List, Optional

import anyio

from interview_coach.core.errors import UpstreamFailureError

logger = logging.getLogger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


class StreamState(str, enum.Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"


def sse_frame(payload: dict) -> str:
    """One `data: <json>` frame."""
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


class StreamRelay:
    """
    Relays tokens and hands the concatenated text to `on_complete`.
    
    Args:
        open_stream: Starts the upstream call and returns its token iterator
        on_complete: Persists the full reply once the upstream is exhausted
        error_message: Client-facing text for both failure transitions
    """

    def __init__(
        self,
        open_stream: Callable[[], Iterator[str]],
        on_complete: Callable[[str], None],
        error_message: str = "Failed to generate response",
    ):
        self._open_stream = open_stream
        self._on_complete = on_complete
        self.error_message = error_message
        self.state = StreamState.IDLE
        self._tokens: Optional[Iterator[str]] = None
        self._first: Optional[str] = None
        self._parts: List[str] = []

    def open(self) -> "StreamRelay":
        """
        Start the upstream call and wait for its first token.
        
        Raises:
            UpstreamFailureError: if the upstream fails before anything was relayed
        """
        if self.state is not StreamState.IDLE:
            raise RuntimeError(f"Cannot open relay in state {self.state.value}")
        try:
            self._tokens = iter(self._open_stream())
            self._first = next(self._tokens, None)
        except Exception as e:
            self.state = StreamState.FAILED
            logger.error(f"Upstream failed before streaming: {e}", exc_info=True)
            raise UpstreamFailureError(self.error_message) from e
        self.state = StreamState.STREAMING
        return self

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def frames(self) -> Iterator[str]:
        """Yield content frames, then exactly one `done` or `error` frame."""
        if self.state is not StreamState.STREAMING:
            raise RuntimeError(f"Cannot stream relay in state {self.state.value}")
        try:
            if self._first is not None:
                self._parts.append(self._first)
                yield sse_frame({"content": self._first})
            for token in self._tokens:
                self._parts.append(token)
                yield sse_frame({"content": token})
            self._on_complete(self.text)
        except GeneratorExit:
            # Client went away: finish the upstream call and still persist the reply
            self._drain_after_disconnect()
            raise
        except Exception as e:
            self.state = StreamState.FAILED
            logger.error(f"Upstream failed mid-stream after {len(self._parts)} tokens: {e}", exc_info=True)
            yield sse_frame({"error": self.error_message})
            return
        self.state = StreamState.COMPLETED
        yield sse_frame({"done": True})

    async def stream(self) -> AsyncIterator[str]:
        """
        Async form of frames() for StreamingResponse.
        
        Every upstream read runs in a worker thread, and so does the drain
        after a disconnect: closing the sync generator happens off the event
        loop, shielded from the cancellation that ended the response.
        """
        frames = self.frames()
        try:
            while True:
                frame = await anyio.to_thread.run_sync(next, frames, None)
                if frame is None:
                    break
                yield frame
        finally:
            with anyio.CancelScope(shield=True):
                await anyio.to_thread.run_sync(frames.close)

    def _drain_after_disconnect(self) -> None:
        try:
            for token in self._tokens:
                self._parts.append(token)
            self._on_complete(self.text)
            self.state = StreamState.COMPLETED
            logger.info("Client disconnected mid-stream; reply persisted")
        except Exception as e:
            self.state = StreamState.FAILED
            logger.error(f"Upstream failed after client disconnect: {e}", exc_info=True)
