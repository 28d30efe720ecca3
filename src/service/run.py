"""
Run script for the configuration service.

This script starts the FastAPI server for the configuration service. Logging
is configured by utils.common_utils.get_logger (LOG_LEVEL).
"""

from service.app import start

if __name__ == "__main__":
    # Start the API server
    print("Starting configuration service API...")
    start()
