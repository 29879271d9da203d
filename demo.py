#!/usr/bin/env python
import argparse
import logging

from rich.logging import RichHandler

from storefront.client import CatalogClient
from storefront.connectivity import run_connectivity_check


def main():
    parser = argparse.ArgumentParser(description="Run the catalog connectivity check")
    parser.add_argument("--base-url", default="http://127.0.0.1:8085/api")
    parser.add_argument("--query", default="iPhone")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s", handlers=[RichHandler(show_path=False)])

    # Start the mock first:  uvicorn mock_api.main:app --port 8085
    with CatalogClient(base_url=args.base_url) as c:
        report = run_connectivity_check(c, args.query)

    print()
    for step in report.steps:
        mark = "✅" if step.ok else "❌"
        print(f"{mark} {step.name:<9} {step.detail}")
    print("\nAll steps passed." if report.ok else f"\nStopped at '{report.failed_step.name}'.")


if __name__ == "__main__":
    main()
