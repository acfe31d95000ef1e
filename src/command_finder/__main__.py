from command_finder.cli import main

main()
