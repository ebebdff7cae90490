from shipwright.cli.app import main

main()
