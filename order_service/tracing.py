import logging
import time
from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator

logger = logging.getLogger(__name__)

# Called as span(name, **tags) around an outbound call.
SpanHook = Callable[..., ContextManager[None]]


@contextmanager
def log_span(name: str, **tags: str) -> Iterator[None]:
    started = time.time()
    logger.debug("Span %s started %s", name, tags)
    try:
        yield
    finally:
        elapsed_ms = int((time.time() - started) * 1000)
        logger.info("Span %s finished in %sms %s", name, elapsed_ms, tags)
