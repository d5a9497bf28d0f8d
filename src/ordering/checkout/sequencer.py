"""Order sequencer — formats counter values as human-readable order ids."""

import structlog

from ordering.checkout.counter import OrderCounter, get_order_counter
from ordering.config import order_id_prefix, order_id_width
from ordering.errors import SequencerUnavailableError

logger = structlog.get_logger(__name__)


def format_order_id(value: int, prefix: str | None = None, width: int | None = None) -> str:
    """``ORD-001`` style id. Values wider than ``width`` are never truncated."""
    prefix = order_id_prefix() if prefix is None else prefix
    width = order_id_width() if width is None else width
    return f"{prefix}{value:0{width}d}"


class OrderSequencer:
    def __init__(self, counter: OrderCounter | None = None, prefix: str | None = None, width: int | None = None):
        self._counter = counter
        self.prefix = prefix
        self.width = width

    def next(self) -> str:
        """Allocate the next order id.

        Raises:
            SequencerUnavailableError: The counter could not be reached or
                advanced. Nothing has been allocated in that case.
        """
        try:
            counter = self._counter or get_order_counter()
            value = counter.increment()
        except SequencerUnavailableError:
            raise
        except Exception as exc:
            logger.error("sequencer.unavailable", error=str(exc), exc_info=True)
            raise SequencerUnavailableError(str(exc)) from exc

        return format_order_id(value, self.prefix, self.width)
