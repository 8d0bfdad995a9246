"""Interactive command-line menu for the bank ledger.

Usage::

    bank-ledger --data-dir data --log-level WARNING
"""

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Callable

from bank_ledger.config import BankConfig
from bank_ledger.exceptions import BankLedgerError, InvalidArgumentError
from bank_ledger.logging import setup_logging
from bank_ledger.models.money import to_decimal
from bank_ledger.store import Bank

logger = logging.getLogger(__name__)

MENU = """
--- CLI Banking Application ---
1. Create New Account
2. Edit Account Name
3. Delete Account
4. Deposit Funds
5. Withdraw Funds
6. Transfer Funds
7. View Account Details
8. Exit"""

EXIT_CHOICE = "8"


def _prompt(message: str) -> str:
    return input(message).strip()


def _prompt_required(message: str, label: str) -> str | None:
    """Prompt once; print an error and return None on blank input."""
    value = _prompt(message)
    if not value:
        print(f"Error: {label} cannot be empty.")
        return None
    return value


def _prompt_amount(message: str) -> Decimal | None:
    raw = _prompt(message)
    try:
        amount = to_decimal(raw)
    except InvalidArgumentError:
        amount = None
    if amount is None or amount <= 0:
        print("Error: Please enter a valid positive amount.")
        return None
    return amount


def create_account(bank: Bank) -> None:
    print("\n--- Create New Account ---")
    name = _prompt_required("Enter account holder name: ", "Name")
    if name is None:
        return
    pin = _prompt_required(f"Enter a {bank.min_pin_length}-digit PIN: ", "PIN")
    if pin is None:
        return

    try:
        account_number = bank.create_account(name, pin)
    except BankLedgerError as e:
        print(f"Error creating account: {e}")
        return

    if account_number is not None:
        print(f"Account created successfully! Account Number: {account_number}")
    else:
        print(
            "Failed to create account. Please ensure PIN is at least "
            f"{bank.min_pin_length} digits."
        )


def edit_account_name(bank: Bank) -> None:
    print("\n--- Edit Account Name ---")
    account_number = _prompt_required("Enter account number: ", "Account number")
    if account_number is None:
        return
    pin = _prompt_required("Enter PIN: ", "PIN")
    if pin is None:
        return
    new_name = _prompt_required("Enter new name: ", "New name")
    if new_name is None:
        return

    try:
        bank.edit_account(account_number, pin, new_name)
    except BankLedgerError as e:
        print(f"Error updating account: {e}")
        return
    print("Account name updated successfully!")


def delete_account(bank: Bank) -> None:
    print("\n--- Delete Account ---")
    account_number = _prompt_required("Enter account number: ", "Account number")
    if account_number is None:
        return
    name = _prompt_required("Enter account holder name: ", "Name")
    if name is None:
        return
    pin = _prompt_required("Enter PIN: ", "PIN")
    if pin is None:
        return

    try:
        account = bank.get_account_details(account_number, pin)
        if account is None:
            print("Account not found or incorrect PIN.")
            return

        if account.balance != 0:
            print(
                "Cannot delete account with non-zero balance. "
                f"Current balance: ${account.balance:.2f}"
            )
            print("Please withdraw all funds before deleting the account.")
            return

        confirmation = _prompt(
            f"Are you sure you want to delete the account for {account.name}? (y/N): "
        )
        if confirmation.lower() not in ("y", "yes"):
            print("Account deletion cancelled.")
            return

        bank.delete_account(account_number, name, pin)
    except BankLedgerError as e:
        print(f"Error deleting account: {e}")
        return
    print("Account deleted successfully!")


def deposit_funds(bank: Bank) -> None:
    print("\n--- Deposit Funds ---")
    account_number = _prompt_required("Enter account number: ", "Account number")
    if account_number is None:
        return
    amount = _prompt_amount("Enter amount to deposit: $")
    if amount is None:
        return

    try:
        bank.deposit_funds(account_number, amount)
    except BankLedgerError as e:
        print(f"Error depositing funds: {e}")
        return
    print(f"Successfully deposited ${amount:.2f}!")


def withdraw_funds(bank: Bank) -> None:
    print("\n--- Withdraw Funds ---")
    account_number = _prompt_required("Enter account number: ", "Account number")
    if account_number is None:
        return
    pin = _prompt_required("Enter PIN: ", "PIN")
    if pin is None:
        return
    amount = _prompt_amount("Enter amount to withdraw: $")
    if amount is None:
        return

    try:
        bank.withdraw_funds(account_number, pin, amount)
    except BankLedgerError as e:
        print(f"Error withdrawing funds: {e}")
        return
    print(f"Successfully withdrew ${amount:.2f}!")


def transfer_funds(bank: Bank) -> None:
    print("\n--- Transfer Funds ---")
    sender = _prompt_required("Enter sender account number: ", "Sender account number")
    if sender is None:
        return
    pin = _prompt_required("Enter sender PIN: ", "PIN")
    if pin is None:
        return
    receiver = _prompt_required("Enter receiver account number: ", "Receiver account number")
    if receiver is None:
        return
    if sender == receiver:
        print("Error: Cannot transfer to the same account.")
        return
    amount = _prompt_amount("Enter amount to transfer: $")
    if amount is None:
        return

    try:
        bank.transfer_funds(sender, pin, receiver, amount)
    except BankLedgerError as e:
        print(f"Error transferring funds: {e}")
        return
    print(f"Successfully transferred ${amount:.2f} from {sender} to {receiver}!")


def view_account_details(bank: Bank) -> None:
    print("\n--- View Account Details ---")
    account_number = _prompt_required("Enter account number: ", "Account number")
    if account_number is None:
        return
    pin = _prompt_required("Enter PIN: ", "PIN")
    if pin is None:
        return

    try:
        account = bank.get_account_details(account_number, pin)
    except BankLedgerError as e:
        print(f"Error retrieving account details: {e}")
        return

    if account is None:
        print("Account not found or incorrect PIN.")
        return
    print("\n--- Account Details ---")
    print(f"Account Number: {account.account_number}")
    print(f"Account Holder: {account.name}")
    print(f"Current Balance: ${account.balance:.2f}")


ACTIONS: dict[str, Callable[[Bank], None]] = {
    "1": create_account,
    "2": edit_account_name,
    "3": delete_account,
    "4": deposit_funds,
    "5": withdraw_funds,
    "6": transfer_funds,
    "7": view_account_details,
}


def save(bank: Bank) -> None:
    """Persist the bank, reporting failures instead of raising them."""
    try:
        bank.save_data()
    except BankLedgerError as e:
        logger.error("Save failed: %s", e)
        print(f"Error saving data: {e}")


def run_menu(bank: Bank) -> None:
    """Show the menu until the user exits, saving after every choice."""
    while True:
        print(MENU)
        try:
            choice = _prompt("Enter your choice: ")
        except EOFError:
            choice = EXIT_CHOICE

        if choice != EXIT_CHOICE:
            action = ACTIONS.get(choice)
            if action is None:
                print("Invalid choice. Please try again.")
            else:
                try:
                    action(bank)
                except EOFError:
                    choice = EXIT_CHOICE

        save(bank)
        if choice == EXIT_CHOICE:
            break

    print("Application exiting. Goodbye!")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Interactive in-memory bank ledger")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding accounts.json and transactions.json (default: $BANK_DATA_DIR or data)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for account number generation",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: $LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["standard", "json"],
        default=None,
        help="Log format (default: $LOG_FORMAT or standard)",
    )
    args = parser.parse_args(argv)

    try:
        config = BankConfig.from_env()
    except BankLedgerError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.data_dir is not None:
        config.storage.data_dir = args.data_dir
    if args.seed is not None:
        config.seed = args.seed
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_format is not None:
        config.log_format = args.log_format

    setup_logging(config.log_level, config.log_format)

    try:
        Path(config.storage.data_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Unable to create data directory {config.storage.data_dir}: {e}", file=sys.stderr)
        return 1

    bank = Bank.from_config(config)
    try:
        bank.load_data()
        print("Bank data loaded successfully.")
    except BankLedgerError as e:
        print(f"Error loading bank data: {e}")
        print("Starting with an empty bank data.")

    run_menu(bank)
    return 0


if __name__ == "__main__":
    sys.exit(main())
