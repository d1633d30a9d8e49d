from bonpad.cli.main import main

main()
