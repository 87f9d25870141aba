from coders_dungeon.cli import main

main()
