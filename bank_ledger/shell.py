"""
Interactive Menu Shell

A numbered text menu over a LedgerStore. Each choice prompts for the
operation's inputs, calls the store, and prints the outcome message.

Input is read through a prompt_toolkit PromptSession; tests hand in a
session wired to a pipe or any object with a compatible prompt() method.
"""

from typing import Callable, Optional

import typer
from prompt_toolkit import PromptSession

from bank_ledger.models.outcome import OperationResult
from bank_ledger.store import LedgerStore


MENU = "\n".join([
    "",
    "--- Banking System Menu ---",
    "1. Create Account",
    "2. Deposit",
    "3. Withdraw",
    "4. Check Balance",
    "5. Display All Accounts",
    "6. Display All Transactions",
    "7. Transfer Money",
    "8. Delete Account",
    "9. Exit",
])

EXIT_CHOICE = 9


class InvalidInput(ValueError):
    """Operator typed something that is not the expected kind of value."""
    pass


class LedgerShell:
    """Menu loop driving a LedgerStore."""

    def __init__(
        self,
        store: LedgerStore,
        session: Optional[PromptSession] = None,
        echo: Callable[[str], None] = typer.echo,
    ):
        self._store = store
        self._session = session
        self._echo = echo
        self._actions: dict[int, Callable[[], None]] = {
            1: self.create_account,
            2: self.deposit,
            3: self.withdraw,
            4: self.check_balance,
            5: self.display_accounts,
            6: self.display_transactions,
            7: self.transfer,
            8: self.delete_account,
        }

    def run(self) -> int:
        """Show the menu until the operator exits. Returns an exit code."""
        if self._session is None:
            self._session = PromptSession()

        self._warn_about_load_errors()

        while True:
            self._echo(MENU)
            try:
                raw_choice = self._ask("Enter your choice: ")
            except (EOFError, KeyboardInterrupt):
                break

            try:
                choice = int(raw_choice)
            except ValueError:
                self._echo("Invalid choice. Please try again.")
                continue

            if choice == EXIT_CHOICE:
                break

            action = self._actions.get(choice)
            if action is None:
                self._echo("Invalid choice. Please try again.")
                continue

            try:
                action()
            except InvalidInput as e:
                self._echo(str(e))
            except (EOFError, KeyboardInterrupt):
                break

        self._shutdown()
        return 0

    # ------------------------------------------------------------------ #
    # Menu actions
    # ------------------------------------------------------------------ #
    def create_account(self) -> None:
        holder_name = self._ask("Enter Account Holder Name: ")
        account_type = self._ask("Enter Account Type (Saving/Current): ")
        initial_deposit = self._ask_amount("Enter Initial Deposit Amount: ")
        self._report(self._store.create_account(holder_name, account_type, initial_deposit))

    def deposit(self) -> None:
        account_id = self._ask_account_id("Enter Account Number: ")
        amount = self._ask_amount("Enter Deposit Amount: ")
        self._report(self._store.deposit(account_id, amount))

    def withdraw(self) -> None:
        account_id = self._ask_account_id("Enter Account Number: ")
        amount = self._ask_amount("Enter Withdrawal Amount: ")
        self._report(self._store.withdraw(account_id, amount))

    def check_balance(self) -> None:
        account_id = self._ask_account_id("Enter Account Number: ")
        balance = self._store.check_balance(account_id)
        if balance is None:
            self._echo(f"Account {account_id} not found.")
        else:
            self._echo(f"Current Balance: {balance}")

    def display_accounts(self) -> None:
        accounts = self._store.list_accounts()
        if not accounts:
            self._echo("No accounts found.")
        for account in accounts:
            self._echo(account.describe())

    def display_transactions(self) -> None:
        transactions = self._store.list_transactions()
        if not transactions:
            self._echo("No transactions recorded.")
        for transaction in transactions:
            self._echo(transaction.describe())

    def transfer(self) -> None:
        from_account_id = self._ask_account_id("Enter Your Account Number: ")
        to_account_id = self._ask_account_id("Enter Recipient's Account Number: ")
        amount = self._ask_amount("Enter Transfer Amount: ")
        self._report(self._store.transfer(from_account_id, to_account_id, amount))

    def delete_account(self) -> None:
        account_id = self._ask_account_id("Enter Account Number to delete: ")
        self._report(self._store.delete_account(account_id))

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _ask(self, message: str) -> str:
        return self._session.prompt(message).strip()

    def _ask_account_id(self, message: str) -> int:
        raw = self._ask(message)
        try:
            return int(raw)
        except ValueError:
            raise InvalidInput(f"Invalid account number: {raw!r}.")

    def _ask_amount(self, message: str) -> float:
        raw = self._ask(message)
        try:
            return float(raw)
        except ValueError:
            raise InvalidInput(f"Invalid amount: {raw!r}.")

    def _report(self, result: OperationResult) -> None:
        self._echo(result.message)

    def _warn_about_load_errors(self) -> None:
        for error in self._store.load_errors:
            self._echo(f"WARNING: {error}")
        if self._store.load_errors:
            self._echo(
                "WARNING: the next change will overwrite the file that failed to load."
            )

    def _shutdown(self) -> None:
        if self._store.has_unsaved_changes and not self._store.save():
            unsaved = ", ".join(self._store.unsaved_collections)
            self._echo(f"WARNING: unsaved changes to {unsaved} will be lost.")
        self._echo("Exiting...")
