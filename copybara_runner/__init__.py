#!/usr/bin/env python3
"""
Copybara configuration generator and container runner
"""

__version__ = "0.1.0"

from copybara_runner.core.config import CopybaraConfig, load_config
from copybara_runner.core.exit_codes import EXIT_CODES, classify_exit_code
from copybara_runner.core.runner import CopybaraRunner
