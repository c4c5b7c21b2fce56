from symchain.cli import main

main()
