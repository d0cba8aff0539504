from schemakit.cli.main import main

main()
