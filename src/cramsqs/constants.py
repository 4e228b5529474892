"""
Fixed values shared by the resolver, the aggregator and the report.

Copyright (c) 2024 Pixelgen Technologies AB.
"""

# Substring an archive file name must contain to be picked up
CRAM_MARKER = ".cram"
# Files containing this substring hold reads that did not match any sample
UNMATCHED_MARKER = "unmatched"

DEFAULT_MAX_FILES = 100

Q20 = 20
Q30 = 30

REPORT_SUFFIX = ".sqs"
REPORT_SEPARATOR = "-" * 54
