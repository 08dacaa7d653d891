"""
Main entry point for the Cornell note generator
"""
from cornell.cli.app import main


if __name__ == "__main__":
    main()
