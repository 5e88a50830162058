"""Text command front end for the ATM service."""

import logging
import shlex
from typing import Iterable, TextIO

from src.models.exceptions import BankError
from src.models.transaction import format_money
from src.services.atm_service import AtmService

logger = logging.getLogger(__name__)

USAGE = {
    'register': 'register <card> <pin> <name> <balance>',
    'balance': 'balance <card> <pin>',
    'deposit': 'deposit <card> <pin> <amount>',
    'withdraw': 'withdraw <card> <pin> <amount>',
    'ledger': 'ledger <path> <card> <pin>',
    'help': 'help',
    'quit': 'quit',
}

QUIT_COMMANDS = ('quit', 'exit')


class AtmConsole:
    """Dispatches one line of text per command to an AtmService."""

    def __init__(self, atm: AtmService):
        self.atm = atm
        self._commands = {
            'register': (self.register, 4),
            'balance': (self.balance, 2),
            'deposit': (self.deposit, 3),
            'withdraw': (self.withdraw, 3),
            'ledger': (self.ledger, 3),
            'help': (self.help, 0),
        }

    def register(self, card, pin, name, balance):
        self.atm.register_account(int(card), int(pin), name, balance)
        return f'Account registered for {name}.'

    def balance(self, card, pin):
        return 'Balance: ' + format_money(self.atm.check_balance(int(card), int(pin)))

    def deposit(self, card, pin, amount):
        return self.atm.deposit_cash(int(card), int(pin), amount).describe()

    def withdraw(self, card, pin, amount):
        return self.atm.withdraw_cash(int(card), int(pin), amount).describe()

    def ledger(self, path, card, pin):
        self.atm.print_ledger(path, int(card), int(pin))
        return f'Ledger written to {path}.'

    def help(self):
        return '\n'.join(USAGE.values())

    def handle(self, line: str) -> str:
        """Run a single command line and return the reply text."""
        try:
            words = shlex.split(line)
        except ValueError as err:
            return f'Error: could not parse command ({err})'
        if not words:
            return ''

        name, args = words[0].lower(), words[1:]
        if name not in self._commands:
            return f'Unknown command: {name}. Type help for a list of commands.'
        command, arity = self._commands[name]
        if len(args) != arity:
            return 'Usage: ' + USAGE[name]

        try:
            return command(*args)
        except (BankError, OSError) as err:
            return f'Error: {err}'
        except ValueError:
            # int() rejected a card number or PIN
            return 'Usage: ' + USAGE[name]

    def run(self, lines: Iterable[str], out: TextIO, prompt: str = '') -> None:
        """Handle lines until the input ends or a quit command arrives."""
        out.write(prompt)
        for line in lines:
            if line.strip().lower() in QUIT_COMMANDS:
                break
            reply = self.handle(line)
            if reply:
                out.write(reply + '\n')
            out.write(prompt)
        logger.info('Console session ended')
