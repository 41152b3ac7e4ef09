from renamatic.main import main

main()
