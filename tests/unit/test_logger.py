import io
import logging

from sanitizer.logging.logger import Log


class TestLog:
    def test_renders_context_as_key_values(self) -> None:
        assert Log._render("Sanitized document", {"pages": 3, "pages_failed": 0}) == (
            "Sanitized document pages=3 pages_failed=0"
        )

    def test_message_without_context_is_unchanged(self) -> None:
        assert Log._render("Started", {}) == "Started"

    def test_configure_writes_to_given_stream(self) -> None:
        logger = logging.getLogger("sanitizer")
        previous_handlers = list(logger.handlers)
        previous_level = logger.level
        logger.handlers.clear()
        stream = io.StringIO()
        try:
            Log.configure("debug", stream=stream)
            Log.warning("Ignoring invalid custom terms", ignored=2)
            assert "[WARNING] sanitizer: Ignoring invalid custom terms ignored=2" in stream.getvalue()
        finally:
            logger.handlers[:] = previous_handlers
            logger.setLevel(previous_level)

    def test_configure_attaches_single_handler(self) -> None:
        logger = logging.getLogger("sanitizer")
        previous_handlers = list(logger.handlers)
        logger.handlers.clear()
        try:
            Log.configure("INFO", stream=io.StringIO())
            Log.configure("INFO", stream=io.StringIO())
            assert len(logger.handlers) == 1
        finally:
            logger.handlers[:] = previous_handlers
