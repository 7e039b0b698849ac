"""
Configuration settings for the rating sentiment mapper.

Centralized defaults for file names, the enrichment pipeline and logging.
CLI flags in rating_sentiment/main.py override these per run.
"""

import os

# Input / output files (relative to the working directory)
INPUT_FILE = "threads_app_reviews.csv"
OUTPUT_FILE = "output.csv"
FILE_ENCODING = "utf-8"
WRITE_RUN_METADATA = True  # <output stem>_metadata.json next to the CSV
WRITE_SUMMARY = True  # <output stem>_summary.csv label distribution

# Enrichment Pipeline
WORKER_COUNT = os.cpu_count() or 1  # One worker per available CPU
CHANNEL_CAPACITY = 1  # Reviews allowed to wait between workers and writer
WORK_DISTRIBUTION = "partition"  # "partition" (each review once) or "broadcast" (once per worker)
UNKNOWN_RATING_POLICY = "skip"  # "skip" (drop and log) or "fail" (abort run)

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "rating_sentiment.log"
