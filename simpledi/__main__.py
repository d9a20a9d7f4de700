from simpledi.cli import main

main()
