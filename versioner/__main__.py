from versioner.cli.app import main

main()
