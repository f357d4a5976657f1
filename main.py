#!/usr/bin/env python3
"""
Main script for running a simulated titration.
"""

# Overview:
# 1) Configure a session (regime, concentrations, volumes) from the CLI.
# 2) Run the timed driver to the burette capacity, or apply manual doses.
# 3) Export the curve and a theory-vs-simulation summary as CSV.
# 4) Render the titration curve as a PNG/PDF/SVG bundle.

import logging
import os
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler("titration_simulation.log", mode="w"),
    ],
)

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from titrasim.cli import main

if __name__ == "__main__":
    sys.exit(main())
