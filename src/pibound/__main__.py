from pibound.cli import main

main()
