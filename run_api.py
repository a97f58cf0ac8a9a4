#!/usr/bin/env python3

"""
Run the TERYT autocomplete API server.
"""

import uvicorn
import sys
import os

# Allow running from a source checkout without installing the package
sys.path.append(os.path.join(os.path.abspath(os.path.dirname(__file__)), "src"))

from teryt.api import create_app
from teryt.config import get_config, get_int_config


def main():
    host = get_config("TERYT_API_HOST")
    port = get_int_config("TERYT_API_PORT")

    print("Starting TERYT Autocomplete API server...")
    print("Available endpoints:")
    print("  GET  /                    - Demo page")
    print("  GET  /streets             - Search streets")
    print("  GET  /streets/gmi         - Municipalities for an exact street name")
    print("  GET  /cities              - Search localities")
    print("  GET  /health              - Health check")
    print("  GET  /api/stats           - Service statistics")
    print()
    print("Example curl commands:")
    print(f"  curl 'http://localhost:{port}/streets?q=Chopina&limit=5'")
    print(f"  curl 'http://localhost:{port}/cities?q=Krak&woj=12'")
    print()

    uvicorn.run(
        create_app(),
        host=host,
        port=port,
        log_level="info"
    )


if __name__ == "__main__":
    main()
