"""
TravelQ Disclosure Report - Source Package

A batch report over the government travel-expense proactive disclosure
export (travelq.csv): decode the first rows, compute trip durations and
print one summary line per trip.

DESIGN PRINCIPLES:
1. Decode declaratively (the model is the schema)
2. Fail early, fail visibly
3. Absent amounts stay absent
4. Policy lives in the pipeline, not in the decoder
"""

__version__ = "1.0.0"
__author__ = "Morgan Bakelmun"
