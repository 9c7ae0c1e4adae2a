from repomedic.cli import main

main()
