import argparse
from concurrent.futures import as_completed

from storefront.client import CatalogClient, Result
from storefront.errors import CatalogError


def on_done(name):
    def _callback(result: Result):
        # runs on the worker thread, not on the main one
        if result.ok:
            print(f"  ↳ callback: {name} delivered")
        else:
            print(f"  ↳ callback: {name} failed ({result.error})")
    return _callback


def main():
    parser = argparse.ArgumentParser(description="Fire every catalog call at once")
    parser.add_argument("--base-url", default="http://127.0.0.1:8085/api")
    args = parser.parse_args()

    with CatalogClient(base_url=args.base_url) as c:
        print("\n⚡ Dispatching all calls concurrently...")
        futures = {
            c.check_health(on_done("health")): "health",
            c.list_products(on_done("products")): "products",
            c.list_stories(on_done("stories")): "stories",
            c.list_sellers(on_done("sellers")): "sellers",
            c.search_products("iPhone", on_done("search")): "search",
        }

        # completion order is not invocation order
        for fut in as_completed(futures):
            name = futures[fut]
            try:
                value = fut.result()
            except CatalogError as e:
                print(f"❌ {name}: {e}")
                continue
            if isinstance(value, str):
                print(f"✅ {name}: {value}")
            else:
                print(f"✅ {name}: {len(value)} items")

    try:
        c.list_products()
    except CatalogError as e:
        print(f"\n🔒 After close: {e}")


if __name__ == "__main__":
    main()
