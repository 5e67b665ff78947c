#!/usr/bin/env python3
"""
Main execution module for the Copybara runner
"""

from copybara_runner.cli.commands import main

if __name__ == "__main__":
    main()
