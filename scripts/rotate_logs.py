#!/usr/bin/env python
import os
import sys
import glob
from datetime import datetime
from typing import Optional

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))
from teryt.config import get_int_config

# Configuration
LOG_DIR = os.path.join(os.path.dirname(__file__), '..', 'logs')
LOG_FILE = os.path.join(LOG_DIR, 'app.log')


def rotate_logs(log_file: str = LOG_FILE, retention_days: Optional[int] = None) -> None:
    """
    Rotates the API log file and prunes rotated copies beyond the retention window.
    For hosts that rotate from cron instead of relying on the in-process handler.
    """
    if retention_days is None:
        retention_days = get_int_config("TERYT_LOG_RETENTION_DAYS")

    print("Log rotation script started.")

    if not os.path.exists(log_file):
        print(f"Log file not found at {log_file}. Nothing to rotate.")
        return

    timestamp = datetime.now().strftime('%Y-%m-%d')
    rotated_log_path = f"{log_file}.{timestamp}"

    # Running twice on the same day must not clobber the first rotation
    if os.path.exists(rotated_log_path):
        print(f"Rotated log {rotated_log_path} already exists. Skipping rotation.")
    else:
        os.rename(log_file, rotated_log_path)
        print(f"Rotated {log_file} to {rotated_log_path}")

    print(f"Cleaning up logs older than {retention_days} days.")
    log_files = glob.glob(f"{log_file}.*")

    # Newest first
    log_files.sort(key=lambda name: os.path.getmtime(name), reverse=True)

    if len(log_files) > retention_days:
        for f in log_files[retention_days:]:
            print(f"Deleting old log file: {f}")
            os.remove(f)
    else:
        print("No old logs to delete.")

    print("Log rotation script finished.")


if __name__ == "__main__":
    rotate_logs()
