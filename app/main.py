"""
Command-line launcher for the TravelQ report

Install the package (pip install -e .), then run from the repository
root so data/travelq.csv resolves:

    python app/main.py

Prints the author banner, the first ten trips of the export and the
closing banner. Exits non-zero if the file cannot be read or a trip
in the window cannot be decoded or dated.
"""

import sys

from travelq.orchestrator import main


if __name__ == "__main__":
    sys.exit(main())
