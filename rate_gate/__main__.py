from rate_gate.main import main

main()
