"""
Flat-File Storage Implementation

DESIGN DECISION: All profiles live in one line-oriented, pipe-delimited
UTF-8 text file:

    USER|<username>|<password>
    NEXT_ID|<integer>
    BUDGETS|<cat1>:<amount1>,<cat2>:<amount2>,
    TRANS|<id>|<date>|<category>|<description>|<amount>|<type>
    ENDUSER

repeated per user. <type> is the single character I or E.

TRADEOFFS:
- Human readable and trivially diffable
- Whole file is rewritten on every save (fine for personal use)
- Delimiters are reserved; input parsing refuses them upstream

Decoding is tolerant: a malformed record is dropped (and logged) rather
than making the whole file unreadable.
"""

import os
import tempfile
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional, Union

import structlog
from pydantic import BaseModel, ValidationError

from finance_tracker.config import get_settings
from finance_tracker.errors import StorageError
from finance_tracker.models.finance import Transaction, TransactionType, UserProfile
from finance_tracker.services.storage.interface import UserStorageInterface


USER_PREFIX = "USER|"
NEXT_ID_PREFIX = "NEXT_ID|"
BUDGETS_PREFIX = "BUDGETS|"
TRANS_PREFIX = "TRANS|"
END_USER = "ENDUSER"

# "TRANS", id, date, category, description, amount, type
TRANS_FIELD_COUNT = 7


logger = structlog.get_logger(__name__)


class DroppedRecord(BaseModel):
    """A stored line (or budget entry) that could not be decoded."""

    line_number: int
    reason: str


class FlatFileCodec:
    """
    Encodes the full user set to text and decodes it back.

    Stateless; one instance can be shared.
    """

    def encode(self, users: list[UserProfile]) -> str:
        """Serialize every profile. Budgets are written sorted by category."""
        lines = []
        for user in users:
            lines.append(f"{USER_PREFIX}{user.username}|{user.password}")
            lines.append(f"{NEXT_ID_PREFIX}{user.next_transaction_id}")
            budgets = "".join(
                f"{category}:{self._format_decimal(user.budget_per_category[category])},"
                for category in sorted(user.budget_per_category)
            )
            lines.append(f"{BUDGETS_PREFIX}{budgets}")
            for t in user.transactions:
                lines.append("|".join([
                    "TRANS",
                    str(t.id),
                    t.date,
                    t.category,
                    t.description,
                    self._format_decimal(t.amount),
                    t.type.value,
                ]))
            lines.append(END_USER)
        return "".join(line + "\n" for line in lines)

    def decode(self, text: str) -> list[UserProfile]:
        """Parse stored text, dropping malformed records."""
        users, _ = self.decode_with_issues(text)
        return users

    def decode_with_issues(self, text: str) -> tuple[list[UserProfile], list[DroppedRecord]]:
        """
        Parse stored text and also report what was dropped.

        State machine: USER opens a record, ENDUSER closes it. NEXT_ID,
        BUDGETS and TRANS lines outside an open record are ignored.
        """
        users: list[UserProfile] = []
        dropped: list[DroppedRecord] = []
        current: Optional[UserProfile] = None

        def drop(line_number: int, reason: str) -> None:
            dropped.append(DroppedRecord(line_number=line_number, reason=reason))
            logger.warning("storage_record_dropped", line_number=line_number, reason=reason)

        for line_number, raw_line in enumerate(text.split("\n"), start=1):
            line = raw_line.rstrip("\r")
            if not line:
                continue

            if line.startswith(USER_PREFIX):
                current = None
                parts = line.split("|")
                username = parts[1]
                password = parts[2] if len(parts) > 2 else ""
                if not username:
                    drop(line_number, "USER record without a username")
                    continue
                if any(u.username == username for u in users):
                    drop(line_number, f"duplicate username {username!r}")
                    continue
                current = UserProfile(username=username, password=password)
                users.append(current)

            elif line == END_USER:
                current = None

            elif current is None:
                # NEXT_ID/BUDGETS/TRANS outside an open record, or unknown
                continue

            elif line.startswith(NEXT_ID_PREFIX):
                value = line[len(NEXT_ID_PREFIX):].strip()
                try:
                    next_id = int(value)
                except ValueError:
                    drop(line_number, f"NEXT_ID is not an integer: {value!r}")
                    continue
                if next_id < 1:
                    drop(line_number, f"NEXT_ID must be positive: {next_id}")
                    continue
                current.next_transaction_id = next_id

            elif line.startswith(BUDGETS_PREFIX):
                self._decode_budgets(current, line[len(BUDGETS_PREFIX):], line_number, drop)

            elif line.startswith(TRANS_PREFIX):
                transaction, reason = self._decode_transaction(line)
                if transaction is None:
                    drop(line_number, reason)
                elif any(t.id == transaction.id for t in current.transactions):
                    drop(line_number, f"duplicate transaction id {transaction.id}")
                else:
                    current.transactions.append(transaction)

        # Never reissue a stored id, even if NEXT_ID was stale
        for user in users:
            if user.next_transaction_id <= user.max_transaction_id:
                user.next_transaction_id = user.max_transaction_id + 1

        return users, dropped

    def decode_bytes_with_issues(
        self,
        data: bytes,
        encoding: str = "utf-8",
    ) -> tuple[list[UserProfile], list[DroppedRecord]]:
        """
        Decode raw file contents one line at a time, then parse.

        A line that is not valid in `encoding` is dropped on its own;
        the rest of the file still loads. Lines are split on b"\\n", so
        `encoding` must be ASCII-compatible (UTF-8, Latin-1, cp1252).
        """
        lines = []
        undecodable: list[DroppedRecord] = []
        for line_number, raw_line in enumerate(data.split(b"\n"), start=1):
            try:
                lines.append(raw_line.decode(encoding))
            except UnicodeDecodeError as e:
                # Keep numbering aligned; an empty line is skipped by the parser
                lines.append("")
                reason = f"line is not valid {encoding}: {e.reason}"
                undecodable.append(DroppedRecord(line_number=line_number, reason=reason))
                logger.warning("storage_record_dropped", line_number=line_number, reason=reason)

        users, dropped = self.decode_with_issues("\n".join(lines))
        return users, sorted(undecodable + dropped, key=lambda record: record.line_number)

    def _decode_budgets(self, user: UserProfile, payload: str, line_number: int, drop) -> None:
        for entry in payload.split(","):
            if not entry:
                continue
            category, separator, amount_text = entry.rpartition(":")
            if not separator:
                continue
            amount = self._parse_decimal(amount_text)
            if amount is None:
                drop(line_number, f"budget amount for {category!r} is invalid: {amount_text!r}")
                continue
            user.budget_per_category[category] = amount

    def _decode_transaction(self, line: str) -> tuple[Optional[Transaction], str]:
        parts = line.split("|")
        if len(parts) != TRANS_FIELD_COUNT:
            return None, f"TRANS record has {len(parts)} fields, expected {TRANS_FIELD_COUNT}"

        _, id_text, date, category, description, amount_text, type_text = parts

        try:
            transaction_id = int(id_text)
        except ValueError:
            return None, f"transaction id is not an integer: {id_text!r}"

        amount = self._parse_decimal(amount_text)
        if amount is None:
            return None, f"transaction amount is invalid: {amount_text!r}"

        try:
            transaction_type = TransactionType(type_text[:1])
        except ValueError:
            return None, f"transaction type is not I or E: {type_text!r}"

        try:
            transaction = Transaction(
                id=transaction_id,
                date=date,
                category=category,
                description=description,
                amount=amount,
                type=transaction_type,
            )
        except ValidationError as e:
            return None, f"transaction failed validation: {e.error_count()} errors"

        return transaction, ""

    @staticmethod
    def _parse_decimal(text: str) -> Optional[Decimal]:
        try:
            value = Decimal(text.strip())
        except InvalidOperation:
            return None
        if not value.is_finite() or value < 0:
            return None
        return value

    @staticmethod
    def _format_decimal(value: Decimal) -> str:
        # Plain notation; str() could produce "1E+2"
        return format(value, "f")


class FlatFileUserStorage(UserStorageInterface):
    """
    Stores all profiles in a single text file.

    Saves write a temporary file next to the target and atomically
    replace it, so a crash mid-write leaves the previous file intact.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        encoding: Optional[str] = None,
        codec: Optional[FlatFileCodec] = None,
    ):
        settings = get_settings().storage
        self._path = Path(path) if path is not None else settings.data_file
        self._encoding = encoding or settings.encoding
        self._codec = codec or FlatFileCodec()
        self.last_dropped: list[DroppedRecord] = []

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def load_users(self) -> list[UserProfile]:
        """
        Load all profiles; a missing file means no users yet.

        Undecodable or malformed lines are dropped and listed in
        `last_dropped`; only an unreadable file raises.
        """
        try:
            data = self._path.read_bytes()
        except FileNotFoundError:
            logger.info("storage_file_missing", path=str(self._path))
            self.last_dropped = []
            return []
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}")

        try:
            users, self.last_dropped = self._codec.decode_bytes_with_issues(data, self._encoding)
        except LookupError:
            raise StorageError(f"Unknown storage encoding: {self._encoding}")
        return users

    def save_users(self, users: list[UserProfile]) -> None:
        """Rewrite the file with the full user set."""
        text = self._codec.encode(users)
        directory = self._path.parent

        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding=self._encoding,
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
                newline="",
            ) as handle:
                tmp_name = handle.name
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except (OSError, UnicodeError) as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to save users to {self._path}: {e}")
