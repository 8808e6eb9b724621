"""
Tests for the interactive menu

Most tests drive the shell with a scripted session that answers prompts
from a list; one test runs a real prompt_toolkit session over a pipe.
"""

import contextlib

import pytest
from prompt_toolkit import PromptSession
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from bank_ledger.services.storage import InMemoryStorage
from bank_ledger.shell import MENU, LedgerShell
from bank_ledger.store import LedgerStore


class ScriptedSession:
    """Answers prompts in order; runs out like a closed stdin."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def prompt(self, message):
        self.prompts.append(message)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@contextlib.contextmanager
def pipe_session():
    with create_pipe_input() as pipe:
        yield pipe, PromptSession(input=pipe, output=DummyOutput())


@pytest.fixture
def run_shell(store):
    """Run the menu over `store` with scripted answers; returns printed lines."""

    def _run(*answers, ledger=None):
        output = []
        session = ScriptedSession(answers)
        shell = LedgerShell(ledger or store, session=session, echo=output.append)
        assert shell.run() == 0
        return [line for line in output if line != MENU]

    return _run


class TestMenuLoop:
    """Tests for menu dispatch."""

    def test_exit_choice(self, run_shell):
        assert run_shell("9") == ["Exiting..."]

    def test_end_of_input_exits(self, run_shell):
        """Test that a closed input ends the session cleanly."""
        assert run_shell() == ["Exiting..."]

    @pytest.mark.parametrize("choice", ["0", "10", "abc", ""])
    def test_invalid_choice(self, run_shell, choice):
        assert run_shell(choice, "9") == ["Invalid choice. Please try again.", "Exiting..."]

    def test_menu_shown_each_round(self, store):
        output = []
        LedgerShell(store, session=ScriptedSession(["5", "9"]), echo=output.append).run()
        assert output.count(MENU) == 2

    def test_interrupt_during_action_exits(self, store):
        """Test that Ctrl-C inside a prompt ends the session."""

        class InterruptingSession(ScriptedSession):
            def prompt(self, message):
                if message == "Enter Deposit Amount: ":
                    raise KeyboardInterrupt
                return super().prompt(message)

        output = []
        shell = LedgerShell(store, session=InterruptingSession(["2", "1001"]), echo=output.append)
        assert shell.run() == 0
        assert output[-1] == "Exiting..."


class TestMenuActions:
    """Tests for each menu choice."""

    def test_create_account(self, run_shell, store):
        lines = run_shell("1", "Asha", "Saving", "100", "9")
        assert lines[0] == "Account created successfully. Account Number: 1001"
        assert store.check_balance(1001) == 100.0

    def test_create_account_invalid_type(self, run_shell, store):
        lines = run_shell("1", "Asha", "checking", "100", "9")
        assert lines[0].startswith("Invalid account type.")
        assert store.list_accounts() == []

    def test_non_numeric_amount(self, run_shell, store):
        """Test that unparsable amounts are reported without calling the store."""
        lines = run_shell("1", "Asha", "saving", "lots", "9")
        assert lines[0] == "Invalid amount: 'lots'."
        assert store.list_accounts() == []

    def test_deposit_and_withdraw(self, run_shell, store):
        store.create_account("Asha", "saving", 100)
        lines = run_shell("2", "1001", "50", "3", "1001", "30", "4", "1001", "9")
        assert lines[:3] == [
            "50.0 deposited successfully.",
            "30.0 withdrawn successfully.",
            "Current Balance: 120.0",
        ]

    def test_non_numeric_account_number(self, run_shell):
        lines = run_shell("2", "first", "9")
        assert lines[0] == "Invalid account number: 'first'."

    def test_check_balance_missing_account(self, run_shell):
        assert run_shell("4", "4242", "9")[0] == "Account 4242 not found."

    def test_display_accounts(self, run_shell, store):
        assert run_shell("5", "9")[0] == "No accounts found."
        store.create_account("Asha", "saving", 100)
        store.create_account("Ravi", "current", 5)
        lines = run_shell("5", "9")
        assert lines[:2] == [
            "Account Number: 1001, Holder Name: Asha, Type: saving, Balance: 100.0",
            "Account Number: 1002, Holder Name: Ravi, Type: current, Balance: 5.0",
        ]

    def test_display_transactions(self, run_shell, store):
        assert run_shell("6", "9")[0] == "No transactions recorded."
        store.create_account("Asha", "saving", 100)
        store.deposit(1001, 5)
        [line, _] = run_shell("6", "9")
        assert line.startswith("Transaction Date/Time: ")
        assert line.endswith("From Account: 0, To Account: 1001, Amount: 5.0")

    def test_transfer(self, run_shell, store):
        store.create_account("Asha", "saving", 100)
        store.create_account("Ravi", "current", 5)
        assert run_shell("7", "1001", "1002", "40", "9")[0] == "Transfer Successful."
        assert store.check_balance(1002) == 45.0

    def test_transfer_to_missing_account_is_reported(self, run_shell, store):
        store.create_account("Asha", "saving", 100)
        message = run_shell("7", "1001", "4242", "40", "9")[0]
        assert message.startswith("Transfer failed.")
        assert "has not been restored" in message

    def test_delete_account(self, run_shell, store):
        store.create_account("Asha", "saving", 100)
        assert run_shell("8", "1001", "9")[0] == "Account deleted successfully."
        assert run_shell("8", "1001", "9")[0] == "Account 1001 not found."

    def test_prompts_in_order(self, store):
        session = ScriptedSession(["7", "1001", "1002", "1", "9"])
        LedgerShell(store, session=session, echo=lambda line: None).run()
        assert session.prompts == [
            "Enter your choice: ",
            "Enter Your Account Number: ",
            "Enter Recipient's Account Number: ",
            "Enter Transfer Amount: ",
            "Enter your choice: ",
        ]


class TestStartupAndShutdown:
    """Tests for load warnings and the exit save."""

    def test_load_errors_are_shown(self, run_shell, audit_logger):
        storage = InMemoryStorage(account_lines=["not an account"])
        ledger = LedgerStore(storage, storage, audit_logger, account_id_floor=1000)
        ledger.load()

        lines = run_shell("9", ledger=ledger)

        assert lines[0].startswith("WARNING: Error loading accounts:")
        assert lines[1] == "WARNING: the next change will overwrite the file that failed to load."

    def test_unsaved_changes_saved_on_exit(self, run_shell, store, memory_storage):
        memory_storage.fail_writes = True
        store.create_account("Asha", "saving", 100)
        memory_storage.fail_writes = False

        assert run_shell("9") == ["Exiting..."]
        assert memory_storage.account_lines == ["1001,Asha,saving,100.0"]
        assert not store.has_unsaved_changes

    def test_unsaved_changes_lost_warning(self, run_shell, store, memory_storage):
        memory_storage.fail_writes = True
        store.create_account("Asha", "saving", 100)

        assert run_shell("9") == [
            "WARNING: unsaved changes to accounts, transactions will be lost.",
            "Exiting...",
        ]


class TestPromptToolkitSession:
    """Runs the shell on a real PromptSession."""

    def test_exit_through_pipe(self, store):
        output = []
        with pipe_session() as (pipe, session):
            pipe.send_text("9\r")
            assert LedgerShell(store, session=session, echo=output.append).run() == 0
        assert output[-1] == "Exiting..."
