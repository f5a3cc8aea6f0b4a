from spring_scaffold.cli import main

main()
