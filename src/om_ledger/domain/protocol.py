"""Ledger Protocol — transaction lookup by hash."""
from typing import Protocol

from src.om_ledger.domain.models import TransactionInfo


class LedgerProtocol(Protocol):
    async def lookup_transaction(self, tx_id: str) -> TransactionInfo: ...
