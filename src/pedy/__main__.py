"""Main entry point for pedy package."""

from pedy.cli.commands import main

if __name__ == '__main__':
    main()
