from typquest.main import main

main()
