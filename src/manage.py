"""Storefront management CLI.

Usage:
    python src/manage.py serve --port 8000     # Run the API with uvicorn
    python src/manage.py catalogue             # Print the sample catalogue
    python src/manage.py catalogue --featured  # Only featured products
"""

import argparse
import sys


def serve(host, port, reload):
    """Run the FastAPI application."""
    import uvicorn

    uvicorn.run("app:app", host=host, port=port, reload=reload)


def show_catalogue(featured=False, category=None):
    """Print the sample catalogue as a table."""
    from shared.config import Settings
    from storefront import Storefront

    storefront = Storefront.create(Settings.from_env())
    if featured:
        products = storefront.catalogue.list_featured()
    elif category:
        products = storefront.catalogue.list_by_category(category)
    else:
        products = storefront.catalogue.list_all()

    if not products:
        print("No products found.")
        return

    print(f"{'ID':>4}  {'Name':<24} {'Category':<12} {'Price':>9} {'Sale':>9}")
    for product in products:
        sale = f"{product.discounted_price:.2f}" if product.discounted_price is not None else "-"
        print(f"{product.id:>4}  {product.name:<24} {product.category:<12} {product.price:>9.2f} {sale:>9}")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    catalogue_parser = subparsers.add_parser("catalogue", help="Print the sample catalogue")
    group = catalogue_parser.add_mutually_exclusive_group()
    group.add_argument("--featured", action="store_true", help="Only featured products")
    group.add_argument("--category", help="Only products in this category")

    args = parser.parse_args()

    if args.command == "serve":
        serve(args.host, args.port, args.reload)
    elif args.command == "catalogue":
        show_catalogue(featured=args.featured, category=args.category)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
