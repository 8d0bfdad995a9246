"""Custom exception hierarchy for bank-ledger."""


class BankLedgerError(Exception):
    """Base exception for all bank-ledger errors."""


class InvalidArgumentError(BankLedgerError, ValueError):
    """Raised when caller-supplied input is missing or malformed."""


class EntityNotFoundError(BankLedgerError):
    """Raised when a referenced entity does not exist."""


class AccountNotFoundError(EntityNotFoundError):
    """Raised when no account matches the given account number."""


class AuthenticationError(BankLedgerError):
    """Raised when a PIN or holder name does not match the account."""


class InvalidAccountStateError(BankLedgerError):
    """Raised when an account is in an invalid state for the operation."""


class InsufficientFundsError(InvalidAccountStateError):
    """Raised when the balance does not cover the requested amount."""


class NonZeroBalanceError(InvalidAccountStateError):
    """Raised when deleting an account that still holds funds."""


class ConfigurationError(BankLedgerError):
    """Raised when configuration is invalid or missing."""


class StorageError(BankLedgerError):
    """Raised when reading or writing the data files fails."""


class StorageDirectoryNotFoundError(StorageError):
    """Raised when the data directory does not exist or cannot be created."""


class StoragePermissionError(StorageError):
    """Raised when access to the data files is denied."""


class MalformedDataError(BankLedgerError):
    """Raised when a data file exists but cannot be parsed."""
