from bank_ledger.cli import main

main()
