import logging
import sys

from config.settings import Settings
from src.console.atm_console import AtmConsole
from src.services.atm_service import AtmService


def main():
    settings = Settings.load()

    logger = logging.getLogger('src')
    logger.setLevel(settings.log_level)
    handler = logging.FileHandler(filename=settings.log_path, encoding='utf-8', mode='a')
    handler.setFormatter(logging.Formatter('%(asctime)s:%(levelname)s:%(name)s: %(message)s'))
    logger.addHandler(handler)

    atm = AtmService(
        ledger_encoding=settings.ledger_encoding,
        max_amount=settings.max_amount,
    )
    try:
        AtmConsole(atm).run(sys.stdin, sys.stdout, prompt=settings.prompt)
    finally:
        atm.close()


if __name__ == '__main__':
    main()
