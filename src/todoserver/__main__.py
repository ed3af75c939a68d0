from todoserver.cli import main

main()
