from sheetcfg.cli import main

main()
