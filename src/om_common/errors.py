"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Request validation
  2xxx: Match / trade lookup and state
  3xxx: Settlement verification
  8xxx: External services (trading platform, blockchain explorer)
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Validation ---

class InvalidRequestError(AppError):
    """Malformed input, rejected before any shared state is touched."""


class InvalidOfferError(InvalidRequestError):
    def __init__(self, detail: str) -> None:
        super().__init__(1001, f"Invalid offer: {detail}", 422)


class MissingParameterError(InvalidRequestError):
    def __init__(self, name: str) -> None:
        super().__init__(1002, f"'{name}' parameter is missing", 400)


# --- 2xxx: Match / trade ---

class MatchNotFoundError(AppError):
    def __init__(self, submitter_id: str) -> None:
        super().__init__(2001, f"No matched counterparty for {submitter_id}", 404)


class TradeNotFoundError(AppError):
    def __init__(self, submitter_id: str) -> None:
        super().__init__(2002, f"Trade not found for {submitter_id}", 404)


class JournalNotFoundError(AppError):
    def __init__(self, match_id: str) -> None:
        super().__init__(2003, f"Settlement journal not found: {match_id}", 404)


class TradeAlreadySettledError(AppError):
    def __init__(self, trade_id: str) -> None:
        super().__init__(2004, f"Trade {trade_id} is already settled", 409)


class JournalNotResumableError(AppError):
    def __init__(self, match_id: str, status: str) -> None:
        super().__init__(2005, f"Match {match_id} in status {status} cannot be resumed", 409)


class SettlementInProgressError(AppError):
    def __init__(self, trade_id: str) -> None:
        super().__init__(2006, f"Payment of trade {trade_id} is already being settled", 409)


# --- 3xxx: Settlement ---

class SettlementRejectedError(AppError):
    """The claimed payment transaction failed verification."""


class TransactionIncompleteError(SettlementRejectedError):
    def __init__(self, tx_id: str) -> None:
        super().__init__(3001, f"Transaction {tx_id} did not complete successfully", 422)


class AddressMismatchError(SettlementRejectedError):
    def __init__(self, role: str, expected: str, actual: str) -> None:
        super().__init__(
            3002,
            f"Transaction {role} address is incorrect: expected {expected}, got {actual}",
            422,
        )


class TransactionAlreadyUsedError(SettlementRejectedError):
    def __init__(self, tx_id: str) -> None:
        super().__init__(3003, f"Transaction {tx_id} was already used for settlement", 409)


# --- 8xxx: External services ---

class ExternalServiceError(AppError):
    """Transport failure, non-success status or malformed response."""


class PlatformGatewayError(ExternalServiceError):
    def __init__(self, operation: str, detail: str, status: int | None = None) -> None:
        self.operation = operation
        self.status = status
        prefix = f"status = {status}, " if status is not None else ""
        super().__init__(8001, f"Trading platform {operation} failure: {prefix}{detail}", 502)


class LedgerError(ExternalServiceError):
    def __init__(self, detail: str, status: int | None = None) -> None:
        self.status = status
        prefix = f"status = {status}, " if status is not None else ""
        super().__init__(8002, f"Blockchain explorer failure: {prefix}{detail}", 502)


# --- 9xxx: System ---

class InternalStateError(AppError):
    """An expected binding or trade is missing; an earlier step's result was lost."""

    def __init__(self, detail: str) -> None:
        super().__init__(9003, f"Internal state error: {detail}", 500)
