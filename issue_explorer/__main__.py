"""Entry point for running issue-explorer as a module: python -m issue_explorer."""

from issue_explorer.cli import main

if __name__ == "__main__":
    main()
