"""
Concert retrieval and reshaping for the concerts API.

Raw records come out of a ConcertGateway, get checked for completeness and
(for direct lookups) for having already happened, and are turned into the
ClientConcert values the endpoint returns. The raw start time and ticket
counts never leave this module.
"""
import logging
import time
from datetime import datetime, tzinfo
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from .dynamo import ConcertGateway
from .errors import DecodeError, InPastError, InvalidDataError, NotFoundError
from .models import ClientConcert, RawConcertRecord

logger = logging.getLogger(__name__)

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_epoch(epoch_seconds: int, tz: Optional[tzinfo] = None) -> Tuple[str, str]:
    """
    Render epoch seconds as display strings, e.g. ("Mon 2 Jan 2006", "7:00 PM").
    Uses the process local zone when tz is None.
    """
    moment = datetime.fromtimestamp(epoch_seconds, tz)
    date_str = f"{WEEKDAYS[moment.weekday()]} {moment.day} {MONTHS[moment.month - 1]} {moment.year}"
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    time_str = f"{hour}:{moment.minute:02d} {meridiem}"
    return date_str, time_str


def validate_completeness(record: RawConcertRecord) -> bool:
    """True if every field a client needs is present and sensible."""
    return bool(
        record.id
        and record.description
        and record.imageURL
        and record.dateTime is not None and record.dateTime > 0
        and record.totalTickets is not None and record.totalTickets > 0
        and record.ticketsSold is not None
        and record.fullPrice > 0
        and record.concessionPrice > 0
    )


def is_in_past(date_time: int, now_epoch: int) -> bool:
    # A concert starting exactly now is still on sale
    return date_time < now_epoch


def available_tickets(total_tickets: int, tickets_sold: int) -> int:
    return total_tickets - tickets_sold


def decode_record(item: Dict[str, Any]) -> RawConcertRecord:
    """Map a parsed table item onto a RawConcertRecord, raising DecodeError on mismatch."""
    try:
        return RawConcertRecord.model_validate(item)
    except ValidationError as e:
        concert_id = item.get('ID', item.get('id', '<unknown>')) if isinstance(item, dict) else '<unknown>'
        logger.error("Issue decoding concert %s: %s", concert_id, e)
        raise DecodeError(f"Unable to decode concert {concert_id}") from e


def ensure_valid(record: RawConcertRecord) -> None:
    """Raise InvalidDataError unless the record is complete and not oversold."""
    if not validate_completeness(record):
        logger.warning("Concert %s failed the completeness check", record.id or '<no id>')
        raise InvalidDataError(record.id)
    if record.ticketsSold > record.totalTickets:
        logger.warning(
            "Concert %s has sold %d of %d tickets",
            record.id, record.ticketsSold, record.totalTickets
        )
        raise InvalidDataError(record.id, "more tickets sold than exist")


def to_client_concert(record: RawConcertRecord, tz: Optional[tzinfo] = None) -> ClientConcert:
    """Build the client view of a record that has already passed ensure_valid."""
    try:
        date_str, time_str = format_epoch(record.dateTime, tz)
    except (OverflowError, OSError, ValueError) as e:
        raise DecodeError(f"Concert {record.id} has an unrepresentable start time") from e

    return ClientConcert(
        id=record.id,
        description=record.description,
        imageURL=record.imageURL,
        date=date_str,
        time=time_str,
        availableTickets=available_tickets(record.totalTickets, record.ticketsSold),
        fullPrice=record.fullPrice,
        concessionPrice=record.concessionPrice,
    )


class ConcertTransformer:
    """Reads concerts through a gateway and returns them in client form.

    Stateless between calls; the clock is sampled once per operation.
    """

    def __init__(self, gateway: ConcertGateway, tz: Optional[tzinfo] = None,
                 clock: Callable[[], float] = time.time):
        self._gateway = gateway
        self._tz = tz
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock())

    def fetch_one(self, concert_id: str) -> ClientConcert:
        """
        Return a single upcoming concert.

        Raises:
            NotFoundError: no record exists for concert_id.
            DecodeError: the stored record has the wrong shape.
            InvalidDataError: the record is incomplete or oversold.
            InPastError: the concert has already started.
            StorageUnavailableError: the read itself failed.
        """
        if not concert_id:
            raise NotFoundError(concert_id)

        item = self._gateway.get_by_id(concert_id)
        if item is None:
            raise NotFoundError(concert_id)

        record = decode_record(item)
        ensure_valid(record)

        if is_in_past(record.dateTime, self._now()):
            logger.info("Concert %s is in the past", concert_id)
            raise InPastError(concert_id)

        return to_client_concert(record, self._tz)

    def fetch_all(self) -> List[ClientConcert]:
        """
        Return every upcoming concert in scan order.

        All records are decoded, then all are validated, before any is
        transformed; one bad record fails the whole listing.
        """
        items = self._gateway.scan_future_from(self._now())
        records = [decode_record(item) for item in items]
        for record in records:
            ensure_valid(record)

        logger.info("Returning %d upcoming concerts", len(records))
        return [to_client_concert(record, self._tz) for record in records]
